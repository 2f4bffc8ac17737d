"""
Tests for swing_screener/scoring/ranker.py.

What we test
------------
rank():
  - Same length and symbol order as the input (provider order preserved).
  - Each pair holds the original snapshot object and its evaluate() result.
  - Threaded scoring yields exactly the sequential output.
  - Empty input -> empty list; max_workers < 1 -> ValueError.

sort_by_score():
  - Score descending; ties broken by symbol ascending.
  - Does not modify the list it was given.

top_n():
  - At most n pairs, best first; n=0 -> empty.
  - signals filter keeps only listed signals.
"""

from __future__ import annotations

import pytest

from swing_screener.scoring.ranker import rank, sort_by_score, top_n
from swing_screener.scoring.scorer import evaluate
from swing_screener.taxonomy.signal_taxonomy import Signal


class TestRank:
    def test_preserves_input_order(self, sample_snapshots):
        ranked = rank(sample_snapshots)
        assert [s.symbol for s, _ in ranked] == [s.symbol for s in sample_snapshots]

    def test_same_length(self, sample_snapshots):
        assert len(rank(sample_snapshots)) == len(sample_snapshots)

    def test_pairs_snapshot_with_its_result(self, sample_snapshots):
        for snapshot, result in rank(sample_snapshots):
            assert result == evaluate(snapshot)
            assert result.symbol == snapshot.symbol

    def test_snapshots_are_passed_through(self, sample_snapshots):
        ranked = rank(sample_snapshots)
        assert all(a is b for (a, _), b in zip(ranked, sample_snapshots))

    def test_expected_scores(self, sample_snapshots):
        scores = {s.symbol: r.score for s, r in rank(sample_snapshots)}
        assert scores == {
            "MOMO": 100, "HOTT": 30, "DIPP": 100,
            "RANG": 60, "FLAT": 70, "SLOW": 45,
        }

    def test_threaded_matches_sequential(self, make_snapshot):
        snapshots = [
            make_snapshot(symbol=f"S{i:03d}", rsi=float(i % 101), volume=i * 25_000)
            for i in range(200)
        ]
        assert rank(snapshots, max_workers=8) == rank(snapshots)

    def test_empty_input(self):
        assert rank([]) == []
        assert rank([], max_workers=4) == []

    def test_accepts_generator(self, sample_snapshots):
        ranked = rank(s for s in sample_snapshots)
        assert len(ranked) == len(sample_snapshots)

    def test_invalid_workers(self, sample_snapshots):
        with pytest.raises(ValueError):
            rank(sample_snapshots, max_workers=0)


class TestSortByScore:
    def test_descending_with_symbol_tiebreak(self, sample_snapshots):
        ordered = sort_by_score(rank(sample_snapshots))
        assert [s.symbol for s, _ in ordered] == [
            "DIPP", "MOMO", "FLAT", "RANG", "SLOW", "HOTT",
        ]

    def test_equal_scores_ordered_by_symbol(self, make_snapshot):
        snaps = [make_snapshot(symbol=sym) for sym in ("ZETA", "ALFA", "MIKE")]
        ordered = sort_by_score(rank(snaps))
        assert [s.symbol for s, _ in ordered] == ["ALFA", "MIKE", "ZETA"]

    def test_does_not_reorder_input(self, sample_snapshots):
        ranked = rank(sample_snapshots)
        before = [s.symbol for s, _ in ranked]
        sort_by_score(ranked)
        assert [s.symbol for s, _ in ranked] == before

    def test_empty(self):
        assert sort_by_score([]) == []


class TestTopN:
    def test_limits_and_orders(self, sample_snapshots):
        best = top_n(rank(sample_snapshots), n=3)
        assert [s.symbol for s, _ in best] == ["DIPP", "MOMO", "FLAT"]

    def test_zero(self, sample_snapshots):
        assert top_n(rank(sample_snapshots), n=0) == []

    def test_n_larger_than_input(self, sample_snapshots):
        assert len(top_n(rank(sample_snapshots), n=50)) == len(sample_snapshots)

    def test_signal_filter(self, sample_snapshots):
        buys = top_n(rank(sample_snapshots), n=10, signals=[Signal.BUY, Signal.HOLD])
        assert [s.symbol for s, _ in buys] == ["FLAT", "RANG"]

    def test_negative_n_rejected(self, sample_snapshots):
        with pytest.raises(ValueError):
            top_n(rank(sample_snapshots), n=-1)
