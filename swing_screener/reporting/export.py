"""
CSV / JSON export of ranked screening results.

One row per symbol: its 1-based position, every snapshot field (snake_case),
the score, the signal value and optionally the reasoning text. Rows keep the
order they are given in; sort before exporting if score order is wanted.

The JSON document carries the run summary alongside the rows::

    {"run": {"run_slug": "...", "status": "success", ...},
     "results": [{"rank": 1, "symbol": "AAPL", ..., "signal": "BUY"}, ...]}
"""

from __future__ import annotations

import csv
import json
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional

from swing_screener.models.result import RankedResult, ScreenRun
from swing_screener.scoring.scorer import build_reasoning, compute_components

RESULT_COLUMNS: list[str] = [
    "rank",
    "symbol",
    "price",
    "change",
    "change_percent",
    "volume",
    "market_cap",
    "pe",
    "rsi",
    "sma20",
    "sma50",
    "score",
    "signal",
    "reasoning",
]


def results_to_records(
    results:           Sequence[RankedResult],
    include_reasoning: bool = True,
) -> list[dict]:
    """Flatten ``(Snapshot, ScoreResult)`` pairs into export rows."""
    records: list[dict] = []
    for position, (snapshot, result) in enumerate(results, start=1):
        row = {"rank": position, **snapshot.model_dump()}
        row["score"] = result.score
        row["signal"] = result.signal.value
        if include_reasoning:
            row["reasoning"] = build_reasoning(snapshot, compute_components(snapshot))
        records.append(row)
    return records


def export_results_csv(
    results:           Sequence[RankedResult],
    path:              Path,
    include_reasoning: bool = True,
) -> Path:
    """Write ranked results to ``path`` with ``RESULT_COLUMNS`` as the header.

    An empty result set still produces the header row, so downstream
    loaders see a well-formed (zero-row) table. A missing P/E is written
    as ``n/a``.
    """
    columns = RESULT_COLUMNS if include_reasoning else RESULT_COLUMNS[:-1]
    rows = results_to_records(results, include_reasoning)
    for row in rows:
        if row["pe"] is None:
            row["pe"] = "n/a"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)
    return path


def export_run_json(
    run:     ScreenRun,
    path:    Path,
    results: Optional[Sequence[RankedResult]] = None,
) -> Path:
    """Write the run summary plus its rows to ``path`` as indented JSON.

    Non-finite floats (a NaN ``rsi``, for instance) are written as ``null``
    and a missing P/E stays ``null``.

    Args:
        run:     Completed screening pass.
        path:    Destination (parent directories are created).
        results: Rows to include; defaults to ``run.results`` (e.g. pass a
                 ``top_n`` slice to export only the shown rows).
    """
    rows = run.results if results is None else results
    document = _json_safe({"run": run.summary(), "results": results_to_records(rows)})
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2, allow_nan=False), encoding="utf-8")
    return path


def _json_safe(value: Any) -> Any:
    """Replace NaN and infinities with ``None`` so the document is strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value
