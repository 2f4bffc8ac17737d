"""
Swing ranker: applies the scorer to a batch of snapshots and orders the
results for presentation.

Usage flow
----------
1. rank(snapshots, max_workers=None)
   -> list[(Snapshot, ScoreResult)]  (same length and order as the input)

2. sort_by_score(ranked)            — optional, explicit
   -> list[(Snapshot, ScoreResult)]  (score desc, symbol asc)

3. top_n(ranked, n, signals=None)   — optional, explicit
   -> first n of sort_by_score(), optionally filtered by signal

``rank()`` never re-orders: presentation order is whatever order the
snapshot provider returned. Sorting is a separate, named step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from swing_screener.models.result import RankedResult
from swing_screener.models.snapshot import Snapshot
from swing_screener.scoring.scorer import evaluate
from swing_screener.taxonomy.signal_taxonomy import Signal

logger = logging.getLogger(__name__)


def rank(
    snapshots:   Sequence[Snapshot],
    max_workers: Optional[int] = None,
) -> list[RankedResult]:
    """Score every snapshot and pair it with its result, preserving input order.

    Each snapshot is scored independently. With ``max_workers`` > 1 the
    scoring fans out over a thread pool; ``Executor.map`` yields results in
    submission order, so the output order is identical to sequential scoring.

    Args:
        snapshots:   Candidate snapshots in provider order.
        max_workers: Thread-pool size. ``None`` or 1 scores sequentially.

    Returns:
        List of ``(snapshot, result)`` pairs, same length and order as input.
        Empty input -> empty list.

    Raises:
        ValueError: If ``max_workers`` is less than 1.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}.")

    items = list(snapshots)
    if not items:
        return []

    if max_workers is None or max_workers == 1 or len(items) == 1:
        results = [evaluate(s) for s in items]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(evaluate, items))

    logger.debug("Scored %d snapshots (max_workers=%s)", len(items), max_workers)
    return list(zip(items, results))


def sort_by_score(ranked: Iterable[RankedResult]) -> list[RankedResult]:
    """Return ``ranked`` ordered by score descending, then symbol ascending.

    The sort is stable, so pairs that tie on both keys keep their relative
    input order.
    """
    return sorted(ranked, key=lambda pair: (-pair[1].score, pair[1].symbol))


def top_n(
    ranked:  Iterable[RankedResult],
    n:       int = 10,
    signals: Optional[Iterable[Signal]] = None,
) -> list[RankedResult]:
    """Return the ``n`` best-scoring pairs.

    Args:
        ranked:  Output of ``rank()``.
        n:       Maximum number of pairs returned. ``0`` -> empty list.
        signals: Optional filter; only keep pairs whose signal is listed,
                 e.g. ``[Signal.STRONG_BUY, Signal.BUY]``.

    Returns:
        At most ``n`` pairs in ``sort_by_score()`` order.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}.")
    pairs = list(ranked)
    if signals is not None:
        wanted = set(signals)
        pairs = [pair for pair in pairs if pair[1].signal in wanted]
    return sort_by_score(pairs)[:n]
