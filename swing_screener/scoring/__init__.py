"""
Scoring engine: converts market snapshots into swing-trading scores.

Modules
-------
scorer : ScoreComponents dataclass + compute_components() + determine_signal()
         + evaluate() + build_reasoning() — pure functions, no I/O.
ranker : rank() + sort_by_score() + top_n() — batch application and ordering.
"""
