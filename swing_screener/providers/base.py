"""
Abstract interface for snapshot providers.

A provider turns a ``FilterCriteria`` request into a finite list of
``Snapshot`` records. It is the only place a screening run waits on external
latency. The scoring core trusts the returned list and does not re-check it
against the criteria.

Failure contract: providers raise their native errors (``FileNotFoundError``,
``ValueError`` for malformed records, ``httpx.HTTPError`` for HTTP failures).
No retries happen here or in the core. An empty list is a valid answer.

Usage::

    class MyProvider(SnapshotProvider):
        def fetch(self, criteria: FilterCriteria) -> list[Snapshot]:
            return [...]
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from swing_screener.models.criteria import FilterCriteria
from swing_screener.models.snapshot import Snapshot


class SnapshotProvider(ABC):
    """Source of candidate snapshots for a screening run."""

    @abstractmethod
    def fetch(self, criteria: FilterCriteria) -> list[Snapshot]:
        """Return snapshots matching ``criteria``, in provider order.

        Args:
            criteria: Screening constraints; unset fields mean no constraint.

        Returns:
            List of validated ``Snapshot`` records (possibly empty).
        """
        ...

    @property
    def name(self) -> str:
        """Short identifier used in logs and run records."""
        return self.__class__.__name__
