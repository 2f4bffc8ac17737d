"""
File-backed snapshot provider.

Reads snapshot records from a local ``.json`` or ``.csv`` file, validates
them, applies the request's ``FilterCriteria`` and returns the survivors in
file order.

JSON layout — either a bare array or the ``{"_meta": ..., "data": [...]}``
envelope used for saved provider responses::

    [
      {"symbol": "AAPL", "price": 189.5, "change": 2.1, "changePercent": 1.12,
       "volume": 52000000, "marketCap": 2.9e12, "pe": 29.4, "rsi": 58.2,
       "sma20": 184.0, "sma50": 178.3}
    ]

CSV layout — header row; camelCase or snake_case column names. A leading
UTF-8 BOM (Excel "CSV UTF-8") is accepted.
Required columns:
  symbol, price, volume, rsi, sma20, sma50
Optional columns (empty or ``n/a`` cell → model default; ``pe`` defaults to None):
  change, changePercent, marketCap, pe
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from swing_screener.models.criteria import FilterCriteria
from swing_screener.models.snapshot import Snapshot
from swing_screener.providers.base import SnapshotProvider

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = frozenset({"symbol", "price", "volume", "rsi", "sma20", "sma50"})

_MAX_ERRORS_SHOWN = 10
_MISSING_CELLS = frozenset({"", "n/a"})


class FileSnapshotProvider(SnapshotProvider):
    """Serve snapshots from a JSON or CSV file on disk.

    The file is re-read on every ``fetch()`` so edits are picked up between
    runs.

    Attributes:
        path: Location of the snapshot file.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def fetch(self, criteria: FilterCriteria) -> list[Snapshot]:
        snapshots = load_snapshots(self.path)
        matched = [s for s in snapshots if matches_criteria(s, criteria)]
        logger.info(
            "Loaded %d snapshots from %s; %d match criteria %s",
            len(snapshots), self.path.name, len(matched), criteria.to_query(),
        )
        return matched


def load_snapshots(path: Path) -> list[Snapshot]:
    """Parse a ``.json`` or ``.csv`` snapshot file into validated records.

    All rows are validated before any are returned. If **any** row fails,
    a single :class:`ValueError` is raised listing the first 10 failures.

    Args:
        path: Path to the snapshot file.

    Returns:
        List of :class:`Snapshot` in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On an unsupported extension, a malformed file, missing
            CSV columns, or any row failing validation.
    """
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _read_json_rows(path)
    elif suffix == ".csv":
        rows = _read_csv_rows(path)
    else:
        raise ValueError(
            f"Unsupported snapshot file type '{suffix}' (expected .json or .csv): {path}"
        )

    if not rows:
        logger.warning("Snapshot file contains no records: %s", path)
        return []

    snapshots: list[Snapshot] = []
    errors: list[tuple[int, str]] = []

    for i, row in enumerate(rows, start=1):
        try:
            snapshots.append(Snapshot.model_validate(row))
        except (ValueError, ValidationError) as exc:
            errors.append((i, str(exc)))

    if errors:
        detail = "\n".join(f"  Record {n}: {msg}" for n, msg in errors[:_MAX_ERRORS_SHOWN])
        suffix_msg = (
            f"\n  … and {len(errors) - _MAX_ERRORS_SHOWN} more"
            if len(errors) > _MAX_ERRORS_SHOWN else ""
        )
        raise ValueError(
            f"{len(errors)} record(s) failed validation in {path.name}:\n{detail}{suffix_msg}"
        )

    return snapshots


def matches_criteria(snapshot: Snapshot, criteria: FilterCriteria) -> bool:
    """True if ``snapshot`` satisfies every constraint set in ``criteria``.

    Bounds are inclusive. Unset constraints always pass. A snapshot without a
    P/E never satisfies ``max_pe``.
    """
    if criteria.min_price is not None and snapshot.price < criteria.min_price:
        return False
    if criteria.max_price is not None and snapshot.price > criteria.max_price:
        return False
    if criteria.min_volume is not None and snapshot.volume < criteria.min_volume:
        return False
    if criteria.min_market_cap is not None and snapshot.market_cap < criteria.min_market_cap:
        return False
    if criteria.max_pe is not None and (snapshot.pe is None or snapshot.pe > criteria.max_pe):
        return False
    if criteria.min_rsi is not None and snapshot.rsi < criteria.min_rsi:
        return False
    if criteria.max_rsi is not None and snapshot.rsi > criteria.max_rsi:
        return False
    if criteria.price_above_sma20 and not snapshot.price > snapshot.sma20:
        return False
    if criteria.price_above_sma50 and not snapshot.price > snapshot.sma50:
        return False
    return True


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json_rows(path: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in snapshot file {path}: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("data", payload.get("results"))
    if not isinstance(payload, list):
        raise ValueError(
            f"Snapshot JSON must be an array or an object with a 'data' array: {path}"
        )
    return payload


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    # utf-8-sig drops the BOM that spreadsheet exports put before the header.
    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {name.strip() for name in reader.fieldnames}
        missing = REQUIRED_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        # Empty and "n/a" cells fall back to the model defaults.
        return [
            {
                k.strip(): v.strip()
                for k, v in row.items()
                if k and v is not None and v.strip().lower() not in _MISSING_CELLS
            }
            for row in reader
        ]
