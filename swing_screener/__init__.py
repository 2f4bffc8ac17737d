"""
swing_screener — rule-based swing-trading screener.

Scores per-symbol market snapshots into a bounded 0-100 score plus a discrete
trading signal, and ranks a screened candidate list for presentation.

Core entry points::

    from swing_screener.scoring.scorer import evaluate
    from swing_screener.scoring.ranker import rank, sort_by_score
"""

__version__ = "0.1.0"
