"""
swing_screener.reporting — presentation of ranked screening results.

Nothing here feeds back into scoring; it only formats and writes results.

Modules:
  formatters — currency / volume / market-cap strings and the ASCII results table.
  export     — CSV/JSON flat-file export helpers.
"""
