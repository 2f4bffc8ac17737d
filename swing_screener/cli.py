"""
Swing Screener — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (screening pass, single-snapshot score, config check).
  5. Report result to stdout.

Install and run::

    pip install -e .
    swing-screener --help
    swing-screener validate-config
    swing-screener screen --file data/snapshots/latest.json --min-price 10 --sort
    swing-screener screen --url https://screener.example.com/api --max-rsi 70
    swing-screener score --symbol AAPL --price 110 --rsi 45 --sma20 100 --sma50 95
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="swing-screener",
    help="Rule-based swing-trading screener — score and rank stock snapshots.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from swing_screener.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from swing_screener.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("screen")
def screen(
    snapshot_file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help=(
            "Snapshot file (.json or .csv). Defaults to "
            "config.screener.default_snapshot_file unless --url is given."
        ),
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        help="Remote screener base URL (overrides config.provider.base_url).",
    ),
    min_price: Optional[float] = typer.Option(None, "--min-price", help="Minimum price."),
    max_price: Optional[float] = typer.Option(None, "--max-price", help="Maximum price."),
    min_volume: Optional[int] = typer.Option(None, "--min-volume", help="Minimum share volume."),
    min_market_cap: Optional[float] = typer.Option(
        None, "--min-market-cap", help="Minimum market capitalization."
    ),
    max_pe: Optional[float] = typer.Option(None, "--max-pe", help="Maximum P/E ratio."),
    min_rsi: Optional[float] = typer.Option(None, "--min-rsi", help="Minimum RSI."),
    max_rsi: Optional[float] = typer.Option(None, "--max-rsi", help="Maximum RSI."),
    above_sma20: bool = typer.Option(False, "--above-sma20", help="Require price > SMA 20."),
    above_sma50: bool = typer.Option(False, "--above-sma50", help="Require price > SMA 50."),
    sort: Optional[bool] = typer.Option(
        None,
        "--sort/--no-sort",
        help="Order by score (desc). Default: config.screener.sort_by_score.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        help="Scoring threads (overrides config.screener.max_workers).",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        help="Show only the N best-scoring symbols (implies score order).",
    ),
    csv_out: Optional[str] = typer.Option(None, "--csv", help="Also write results to CSV."),
    json_out: Optional[str] = typer.Option(None, "--json", help="Also write results to JSON."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Run a screening pass: fetch snapshots, score each one, print the table.

    Rows are shown in provider order unless --sort or --top is given.
    """
    import httpx

    from swing_screener.models.criteria import FilterCriteria
    from swing_screener.pipeline.screen import ScreenStage
    from swing_screener.providers.file_provider import FileSnapshotProvider
    from swing_screener.providers.http_provider import HttpSnapshotProvider
    from swing_screener.reporting.export import export_results_csv, export_run_json
    from swing_screener.reporting.formatters import format_results_table, format_run_summary
    from swing_screener.scoring.ranker import top_n

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if workers is not None:
        if workers < 1:
            typer.echo(f"[ERROR] --workers must be >= 1, got {workers}.", err=True)
            raise typer.Exit(code=1)
        config = config.model_copy(
            update={"screener": config.screener.model_copy(update={"max_workers": workers})}
        )

    if top is not None and top < 0:
        typer.echo(f"[ERROR] --top must be >= 0, got {top}.", err=True)
        raise typer.Exit(code=1)

    try:
        criteria = FilterCriteria(
            min_price=min_price,
            max_price=max_price,
            min_volume=min_volume,
            min_market_cap=min_market_cap,
            max_pe=max_pe,
            min_rsi=min_rsi,
            max_rsi=max_rsi,
            price_above_sma20=above_sma20,
            price_above_sma50=above_sma50,
        )
    except ValueError as exc:
        typer.echo(f"[ERROR] Invalid criteria: {exc}", err=True)
        raise typer.Exit(code=1)

    base_url = url or (config.provider.base_url if snapshot_file is None else "")
    if base_url:
        provider = HttpSnapshotProvider(
            base_url,
            api_key=config.provider.api_key,
            timeout_s=config.provider.timeout_s,
        )
    else:
        provider = FileSnapshotProvider(snapshot_file or config.screener.default_snapshot_file)

    stage = ScreenStage(config=config, provider=provider)
    try:
        run = stage.run(criteria=criteria, sort=sort)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Snapshot data invalid:\n{exc}", err=True)
        raise typer.Exit(code=1)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        typer.echo(f"[ERROR] Snapshot provider request failed: {exc}", err=True)
        raise typer.Exit(code=1)

    results = run.results
    if top is not None:
        results = top_n(results, n=top)

    typer.echo(format_run_summary(run))
    typer.echo(format_results_table(results))

    if csv_out:
        path = export_results_csv(results, Path(csv_out))
        typer.echo(f"  CSV written: {path}")
    if json_out:
        path = export_run_json(run, Path(json_out), results=results)
        typer.echo(f"  JSON written: {path}")

    typer.echo("")
    typer.echo(f"[OK] Screened {len(run.results)} stocks.")


@app.command("score")
def score(
    symbol: str = typer.Option(..., "--symbol", help="Ticker symbol."),
    price: float = typer.Option(..., "--price", help="Last trade price."),
    rsi: float = typer.Option(..., "--rsi", help="RSI value (0-100)."),
    sma20: float = typer.Option(..., "--sma20", help="20-period SMA."),
    sma50: float = typer.Option(..., "--sma50", help="50-period SMA."),
    volume: int = typer.Option(0, "--volume", help="Shares traded."),
    change: float = typer.Option(0.0, "--change", help="Absolute price change."),
    change_percent: float = typer.Option(0.0, "--change-percent", help="Percent price change."),
    market_cap: float = typer.Option(0.0, "--market-cap", help="Market capitalization."),
    pe: Optional[float] = typer.Option(None, "--pe", help="P/E ratio (omit when undefined)."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Score a single snapshot and print its per-rule breakdown."""
    from swing_screener.models.snapshot import Snapshot
    from swing_screener.reporting.formatters import format_score_breakdown
    from swing_screener.scoring.scorer import build_reasoning, compute_components, evaluate

    try:
        snapshot = Snapshot(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=volume,
            market_cap=market_cap,
            pe=pe,
            rsi=rsi,
            sma20=sma20,
            sma50=sma50,
        )
    except ValueError as exc:
        typer.echo(f"[ERROR] Invalid snapshot: {exc}", err=True)
        raise typer.Exit(code=1)

    result = evaluate(snapshot)
    components = compute_components(snapshot)
    reasoning = build_reasoning(snapshot, components)

    if as_json:
        typer.echo(json.dumps(
            {**result.model_dump(mode="json"), "reasoning": reasoning}, indent=2
        ))
        return

    typer.echo(format_score_breakdown(snapshot, components, reasoning))
    typer.echo("")
    typer.echo(f"[OK] {result.symbol}: {result.score}/100 -> {result.signal.label}")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Snapshot file:    {config.screener.default_snapshot_file}")
    typer.echo(f"  Scoring workers:  {config.screener.max_workers}")
    typer.echo(f"  Sort by score:    {config.screener.sort_by_score}")
    typer.echo(f"  Provider URL:     {config.provider.base_url or '(none)'}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        dumped = config.model_dump()
        if dumped["provider"].get("api_key"):
            dumped["provider"]["api_key"] = "***"
        typer.echo(json.dumps(dumped, indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
