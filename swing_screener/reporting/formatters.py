"""
ASCII terminal formatters for CLI screening output.

All formatters return plain strings suitable for ``typer.echo()``.
No third-party dependencies (no ``rich``, no ``colorama``).

Number styles
-------------
    format_currency(1234.5)       -> "$1,234.50"
    format_volume(2_500_000)      -> "2.5M"
    format_market_cap(2.9e12)     -> "$2.9T"
    format_change_percent(-2.1, -1.234) -> "-1.23%"
    format_pe(None)               -> "n/a"
"""

from __future__ import annotations

from collections.abc import Sequence

from swing_screener.models.result import RankedResult, ScreenRun
from swing_screener.models.snapshot import Snapshot
from swing_screener.scoring.scorer import BASE_SCORE, ScoreComponents
from swing_screener.utils.time_utils import format_timestamp


# ── Number formatters ─────────────────────────────────────────────────────────


def format_currency(value: float) -> str:
    """US-dollar amount with thousands separators and two decimals."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_volume(value: int | float) -> str:
    """Share volume abbreviated to K / M."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(int(value))


def format_market_cap(value: float) -> str:
    """Market cap abbreviated to T / B / M; smaller values as plain currency."""
    if value >= 1e12:
        return f"${value / 1e12:.1f}T"
    if value >= 1e9:
        return f"${value / 1e9:.1f}B"
    if value >= 1e6:
        return f"${value / 1e6:.1f}M"
    return format_currency(value)


def format_change_percent(change: float, change_percent: float) -> str:
    """Percent change with an explicit ``+`` on non-negative moves."""
    prefix = "+" if change >= 0 and change_percent >= 0 else ""
    return f"{prefix}{change_percent:.2f}%"


def format_pe(pe: float | None) -> str:
    """P/E to one decimal; ``n/a`` when the provider sent none."""
    return "n/a" if pe is None else f"{pe:.1f}"


# ── Results table ─────────────────────────────────────────────────────────────


def format_results_table(
    results: Sequence[RankedResult],
    title:   str = "Swing Trading Screener",
) -> str:
    """Format ranked results as an ASCII table, one row per symbol.

    Rows appear in the order given; this function never re-sorts::

        Symbol       Price   Change  Volume  Mkt Cap    P/E   RSI    SMA 20    SMA 50  Score  Signal
        -----------------------------------------------------------------------------------------------
        AAPL       $189.50   +1.12%   52.0M    $2.9T   29.4  58.2   $184.00   $178.30    100  STRONG BUY
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {title} ({len(results)} stocks) ===")

    if not results:
        lines.append("")
        lines.append("  (no stocks matched the screening criteria)")
        return "\n".join(lines)

    header = (
        f"  {'Symbol':<8}  {'Price':>10}  {'Change':>8}  {'Volume':>7}  "
        f"{'Mkt Cap':>8}  {'P/E':>6}  {'RSI':>5}  {'SMA 20':>10}  {'SMA 50':>10}  "
        f"{'Score':>5}  {'Signal':<10}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for snapshot, result in results:
        lines.append(
            f"  {snapshot.symbol:<8}  {format_currency(snapshot.price):>10}  "
            f"{format_change_percent(snapshot.change, snapshot.change_percent):>8}  "
            f"{format_volume(snapshot.volume):>7}  "
            f"{format_market_cap(snapshot.market_cap):>8}  "
            f"{format_pe(snapshot.pe):>6}  {snapshot.rsi:>5.1f}  "
            f"{format_currency(snapshot.sma20):>10}  {format_currency(snapshot.sma50):>10}  "
            f"{result.score:>5}  {result.signal.label:<10}"
        )

    return "\n".join(lines)


def format_run_summary(run: ScreenRun) -> str:
    """One block summarising a screening pass: status, criteria, signal mix."""
    if run.criteria.is_empty:
        criteria_str = "(none)"
    else:
        criteria_str = ", ".join(f"{k}={v}" for k, v in run.criteria.to_query().items())
    counts = run.signal_counts
    counts_str = ", ".join(f"{k}: {v}" for k, v in sorted(counts.items())) or "(none)"

    lines = [
        "",
        "=== Screening Run ===",
        f"  Run:       {run.run_slug}",
        f"  Status:    {run.status}",
        f"  Provider:  {run.provider_name}",
        f"  Started:   {format_timestamp(run.started_at)}",
        f"  Criteria:  {criteria_str}",
        f"  Fetched:   {run.snapshots_fetched}",
        f"  Order:     {'score (desc)' if run.sorted_by_score else 'provider order'}",
        f"  Signals:   {counts_str}",
    ]
    if run.error_message:
        lines.append(f"  Error:     {run.error_message}")
    return "\n".join(lines)


def format_score_breakdown(
    snapshot:   Snapshot,
    components: ScoreComponents,
    reasoning:  str,
) -> str:
    """Per-rule point breakdown for a single snapshot (``score`` command)."""
    rows = [
        ("Base", BASE_SCORE),
        ("RSI", components.rsi_points),
        ("Price > SMA 20", components.sma20_points),
        ("Price > SMA 50", components.sma50_points),
        ("SMA 20 > SMA 50", components.trend_points),
        ("Volume", components.volume_points),
        ("Volatility", components.volatility_points),
    ]
    lines = ["", f"=== Score Breakdown: {snapshot.symbol} ==="]
    for label, points in rows:
        lines.append(f"  {label:<16} {points:>+5d}")
    lines.append("  " + "-" * 22)
    lines.append(f"  {'Raw total':<16} {components.raw_total:>5d}")
    lines.append(f"  {'Score':<16} {components.total:>5d}")
    lines.append("")
    lines.append(f"  {reasoning}")
    return "\n".join(lines)
