"""
Trading signal taxonomy.

``Signal`` is the discrete recommendation derived from a clamped swing score.
The set is closed: every score maps to exactly one member.

This module has NO imports from any other ``swing_screener`` package.
"""

from enum import StrEnum


class Signal(StrEnum):
    """Discrete swing-trading recommendation."""

    STRONG_BUY = "STRONG_BUY"
    """Score >= 80."""

    BUY = "BUY"
    """Score >= 65."""

    HOLD = "HOLD"
    """Default when no threshold matches, including scores in (50, 65)."""

    WEAK = "WEAK"
    """Score in (35, 50]."""

    SELL = "SELL"
    """Score <= 35."""

    @property
    def label(self) -> str:
        """Display text, e.g. ``"STRONG BUY"``."""
        return self.value.replace("_", " ")
