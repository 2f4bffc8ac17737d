"""
Scoring output models.

``ScoreResult`` is the frozen output of the scoring engine for one snapshot.
It carries the originating ``symbol`` only as a display back-reference.

``ScreenRun`` is the mutable record of one screening pass (fetch → score →
rank). It lives for the duration of the pass and is never persisted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from swing_screener.models.criteria import FilterCriteria
from swing_screener.models.snapshot import Snapshot
from swing_screener.taxonomy.signal_taxonomy import Signal

VALID_RUN_STATUSES = frozenset({"started", "success", "failed"})


class ScoreResult(BaseModel):
    """Swing score and signal for one snapshot.

    Attributes:
        symbol: Symbol of the scored snapshot (display only).
        score: Clamped integer score in [0, 100].
        signal: Discrete signal derived from ``score``.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    score: int
    signal: Signal

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"score must be in [0, 100], got {v}.")
        return v


RankedResult = tuple[Snapshot, ScoreResult]


class ScreenRun(BaseModel):
    """Record of a single screening pass.

    Mutable: ``status``, counts, ``results``, ``error_message`` and
    ``finished_at`` are filled in as the pass progresses.

    Attributes:
        run_slug: UUID4 string identifying this pass (for log correlation).
        status: ``"started"``, ``"success"`` or ``"failed"``.
        criteria: Filter criteria sent to the provider.
        provider_name: Class name of the provider used.
        sorted_by_score: Whether ``results`` were re-ordered by score.
        snapshots_fetched: Number of snapshots the provider returned.
        results: ``(Snapshot, ScoreResult)`` pairs in presentation order.
        error_message: Error description if ``status == "failed"``.
        started_at: UTC datetime when the pass began.
        finished_at: UTC datetime when the pass completed or failed.
    """

    model_config = ConfigDict(frozen=False)

    run_slug: str
    status: str = "started"
    criteria: FilterCriteria = FilterCriteria()
    provider_name: str = ""
    sorted_by_score: bool = False
    snapshots_fetched: int = 0
    results: list[RankedResult] = []
    error_message: Optional[str] = None
    started_at: datetime
    finished_at: Optional[datetime] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in VALID_RUN_STATUSES:
            raise ValueError(
                f"Unknown status '{v}'. Must be one of {sorted(VALID_RUN_STATUSES)}."
            )
        return v

    @property
    def signal_counts(self) -> dict[str, int]:
        """Number of results per signal, e.g. ``{"BUY": 3, "HOLD": 1}``."""
        counts: dict[str, int] = {}
        for _, result in self.results:
            counts[result.signal.value] = counts.get(result.signal.value, 0) + 1
        return counts

    def summary(self) -> dict[str, Any]:
        """Flat dict of run metadata (no per-symbol rows) for logs and exports."""
        return {
            "run_slug": self.run_slug,
            "status": self.status,
            "provider": self.provider_name,
            "criteria": self.criteria.to_query(),
            "sorted_by_score": self.sorted_by_score,
            "snapshots_fetched": self.snapshots_fetched,
            "results": len(self.results),
            "signal_counts": self.signal_counts,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "error_message": self.error_message,
        }
