"""Tests for the ScoreResult and ScreenRun models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from swing_screener.models.criteria import FilterCriteria
from swing_screener.models.result import ScoreResult, ScreenRun
from swing_screener.taxonomy.signal_taxonomy import Signal


class TestScoreResult:
    def test_valid(self):
        r = ScoreResult(symbol="AAPL", score=72, signal=Signal.BUY)
        assert r.signal.label == "BUY"

    @pytest.mark.parametrize("score", [-1, 101])
    def test_out_of_range_score_rejected(self, score):
        with pytest.raises(ValidationError):
            ScoreResult(symbol="AAPL", score=score, signal=Signal.HOLD)

    def test_signal_labels(self):
        assert Signal.STRONG_BUY.label == "STRONG BUY"
        assert {s.value for s in Signal} == {"STRONG_BUY", "BUY", "HOLD", "WEAK", "SELL"}


class TestScreenRun:
    def _run(self, **kwargs) -> ScreenRun:
        return ScreenRun(
            run_slug="run-0001",
            started_at=datetime(2026, 1, 5, 14, 30, tzinfo=timezone.utc),
            **kwargs,
        )

    def test_defaults(self):
        run = self._run()
        assert run.status == "started"
        assert run.results == []
        assert run.signal_counts == {}

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            self._run(status="paused")

    def test_signal_counts(self, make_snapshot):
        a = make_snapshot(symbol="AAA")
        b = make_snapshot(symbol="BBB")
        run = self._run()
        run.results = [
            (a, ScoreResult(symbol="AAA", score=30, signal=Signal.SELL)),
            (b, ScoreResult(symbol="BBB", score=31, signal=Signal.SELL)),
        ]
        assert run.signal_counts == {"SELL": 2}

    def test_summary(self):
        run = self._run(criteria=FilterCriteria(min_price=5.0))
        summary = run.summary()
        assert summary["run_slug"] == "run-0001"
        assert summary["criteria"] == {"minPrice": 5.0}
        assert summary["finished_at"] is None
