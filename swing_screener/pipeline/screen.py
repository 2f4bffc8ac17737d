"""
ScreenStage — one screening pass: fetch snapshots, score, rank.

Flow
----
  1. Create a ``ScreenRun`` record (uuid4 ``run_slug``) and log the start.
  2. Fetch the candidate batch from the ``SnapshotProvider``, the single
     blocking I/O call of the pass.
  3. ``rank()`` every snapshot (sequential, or a thread pool sized by
     ``config.screener.max_workers``).
  4. Re-order with ``sort_by_score()`` only when asked to; the default keeps
     provider order.
  5. Mark the run ``success`` and return it with its results.

Provider and scoring exceptions are recorded on the run (``status='failed'``),
logged, and re-raised unchanged. Nothing is persisted, so an abandoned or
failed pass has nothing to roll back.

Usage::

    stage = ScreenStage(config=app_config, provider=FileSnapshotProvider(path))
    run = stage.run(criteria=FilterCriteria(min_price=10), sort=True)
    for snapshot, result in run.results:
        ...
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from swing_screener.config import AppConfig
from swing_screener.models.criteria import FilterCriteria
from swing_screener.models.result import ScreenRun
from swing_screener.providers.base import SnapshotProvider
from swing_screener.scoring.ranker import rank, sort_by_score
from swing_screener.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class ScreenStage:
    """Run screening passes against one provider.

    Attributes:
        config:   Application configuration.
        provider: Source of candidate snapshots.
        last_run: Record of the most recent pass (including a failed one).
    """

    stage_name = "screen"

    def __init__(self, config: AppConfig, provider: SnapshotProvider) -> None:
        self.config = config
        self.provider = provider
        self.last_run: Optional[ScreenRun] = None

    def run(
        self,
        criteria: Optional[FilterCriteria] = None,
        sort: Optional[bool] = None,
    ) -> ScreenRun:
        """Execute one screening pass.

        Args:
            criteria: Filter criteria for the provider. ``None`` → no constraints.
            sort:     Re-order results by score. ``None`` → use
                      ``config.screener.sort_by_score``.

        Returns:
            ``ScreenRun`` with ``status='success'`` and populated ``results``.

        Raises:
            Exception: Re-raises any provider or scoring exception after
                recording ``status='failed'`` on the run.
        """
        criteria = criteria or FilterCriteria()
        do_sort = self.config.screener.sort_by_score if sort is None else sort

        run = ScreenRun(
            run_slug=str(uuid4()),
            criteria=criteria,
            provider_name=self.provider.name,
            started_at=utcnow(),
        )
        self.last_run = run
        log_extra = {"run_slug": run.run_slug}
        logger.info(
            "Stage [%s] starting | provider=%s | run_slug=%s",
            self.stage_name, run.provider_name, run.run_slug,
            extra=log_extra,
        )

        try:
            snapshots = self.provider.fetch(criteria)
            run.snapshots_fetched = len(snapshots)

            ranked = rank(snapshots, max_workers=self.config.screener.max_workers)
            if do_sort:
                ranked = sort_by_score(ranked)

            run.results = ranked
            run.sorted_by_score = do_sort
            run.status = "success"
            run.finished_at = utcnow()

        except Exception as exc:
            run.status = "failed"
            run.error_message = str(exc)
            run.finished_at = utcnow()
            logger.error(
                "Stage [%s] FAILED: %s | run_slug=%s",
                self.stage_name, exc, run.run_slug,
                extra=log_extra,
            )
            raise

        logger.info(
            "Stage [%s] completed | snapshots=%d | signals=%s | run_slug=%s",
            self.stage_name, run.snapshots_fetched, run.signal_counts, run.run_slug,
            extra=log_extra,
        )
        return run
