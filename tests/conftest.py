"""
Shared pytest fixtures for the swing screener test suite.

Provides:
  - ``make_snapshot``: factory for ``Snapshot`` objects with neutral defaults
    (score 50 + whatever the overrides add).
  - ``sample_snapshots``: a small mixed batch covering every signal.
  - ``snapshot_json_file`` / ``snapshot_csv_file``: the same batch on disk.
  - ``app_config``: default ``AppConfig`` (no TOML, no env).
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from swing_screener.config import AppConfig
from swing_screener.models.snapshot import Snapshot

# Neutral baseline: rsi > 70 (-20), price below both SMAs, sma20 < sma50,
# thin volume, flat day.  Raw total = 30.
_BASE_FIELDS: dict[str, Any] = {
    "symbol": "TEST",
    "price": 90.0,
    "change": 0.45,
    "change_percent": 0.5,
    "volume": 100_000,
    "market_cap": 5e9,
    "pe": 18.0,
    "rsi": 75.0,
    "sma20": 95.0,
    "sma50": 100.0,
}

SAMPLE_RECORDS: list[dict[str, Any]] = [
    # 130 -> 100 STRONG_BUY
    {"symbol": "MOMO", "price": 110.0, "change": 3.72, "changePercent": 3.5,
     "volume": 2_000_000, "marketCap": 3.2e10, "pe": 24.0, "rsi": 45.0,
     "sma20": 100.0, "sma50": 95.0},
    # 30 SELL
    {"symbol": "HOTT", "price": 90.0, "change": 0.45, "changePercent": 0.5,
     "volume": 100_000, "marketCap": 8.0e8, "pe": 41.0, "rsi": 75.0,
     "sma20": 95.0, "sma50": 100.0},
    # 100 STRONG_BUY (oversold)
    {"symbol": "DIPP", "price": 50.0, "change": 0.5, "changePercent": 1.0,
     "volume": 600_000, "marketCap": 2.0e9, "pe": -3.5, "rsi": 25.0,
     "sma20": 48.0, "sma50": 52.0},
    # 60 HOLD (inside the 50-65 gap)
    {"symbol": "RANG", "price": 105.0, "change": 1.04, "changePercent": 1.0,
     "volume": 700_000, "marketCap": 1.5e11, "pe": 15.0, "rsi": 78.0,
     "sma20": 100.0, "sma50": 102.0},
    # rsi 60 (+20) only -> 70 BUY
    {"symbol": "FLAT", "price": 20.0, "change": 0.0, "changePercent": 0.0,
     "volume": 50_000, "marketCap": 4.0e8, "pe": 12.0, "rsi": 60.0,
     "sma20": 21.0, "sma50": 22.0},
    # 45 WEAK
    {"symbol": "SLOW", "price": 98.0, "change": 0.49, "changePercent": 0.5,
     "volume": 100_000, "marketCap": 6.0e9, "pe": 31.0, "rsi": 72.0,
     "sma20": 95.0, "sma50": 100.0},
]


@pytest.fixture
def make_snapshot() -> Callable[..., Snapshot]:
    """Return a factory building ``Snapshot`` objects from baseline + overrides."""

    def _make(**overrides: Any) -> Snapshot:
        fields = {**_BASE_FIELDS, **overrides}
        return Snapshot(**fields)

    return _make


@pytest.fixture
def sample_snapshots() -> list[Snapshot]:
    """The ``SAMPLE_RECORDS`` batch as validated snapshots, in file order."""
    return [Snapshot.model_validate(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def snapshot_json_file(tmp_path: Path) -> Path:
    """``SAMPLE_RECORDS`` written as a bare JSON array."""
    path = tmp_path / "snapshots.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path


@pytest.fixture
def snapshot_csv_file(tmp_path: Path) -> Path:
    """``SAMPLE_RECORDS`` written as CSV with camelCase headers."""
    path = tmp_path / "snapshots.csv"
    fieldnames = list(SAMPLE_RECORDS[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(SAMPLE_RECORDS)
    return path


@pytest.fixture
def app_config() -> AppConfig:
    """Default configuration (sequential scoring, provider order)."""
    return AppConfig()
