"""
Domain models — frozen pydantic records passed between screener layers.

Modules:
  snapshot — ``Snapshot``: one symbol's point-in-time market readout.
  criteria — ``FilterCriteria``: screening constraints sent to providers.
  result   — ``ScoreResult`` and the ``ScreenRun`` run record.
"""
