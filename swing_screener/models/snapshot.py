"""
Market snapshot model — one symbol's point-in-time readout.

``Snapshot`` is what a ``SnapshotProvider`` returns and what the scoring
engine consumes. It is frozen (immutable) after construction: the scorer
reads it and never mutates it.

Providers send camelCase keys (``changePercent``, ``marketCap``); both the
wire names and the snake_case field names are accepted.

``rsi`` is not range-checked; the scorer accepts any float, NaN included.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Snapshot(BaseModel):
    """Point-in-time market and technical-indicator readout for one symbol.

    Attributes:
        symbol: Ticker, non-empty, surrounding whitespace stripped; case is
            kept as the provider sent it.
        price: Last trade price; must be positive.
        change: Absolute change vs. the prior reference close.
        change_percent: Percentage change vs. the prior reference close.
            Must carry the same sign as ``change`` (zero on either side is
            accepted).
        volume: Shares traded; non-negative.
        market_cap: Market capitalization; non-negative.
        pe: Price-to-earnings ratio. May be negative, or ``None`` when the
            provider has no ratio (loss-making companies); used as-is.
        rsi: Relative-strength index, expected in [0, 100] (not validated).
        sma20: 20-period simple moving average; positive.
        sma50: 50-period simple moving average; positive.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str
    price: float
    change: float = 0.0
    change_percent: float = Field(default=0.0, alias="changePercent")
    volume: int
    market_cap: float = Field(default=0.0, alias="marketCap")
    pe: Optional[float] = None
    rsi: float
    sma20: float
    sma50: float

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("symbol must be a non-empty string.")
        return v

    @field_validator("price", "sma20", "sma50")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if not v > 0:
            raise ValueError(f"Price and moving averages must be positive, got {v}.")
        return v

    @field_validator("volume")
    @classmethod
    def validate_volume(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"volume must be non-negative, got {v}.")
        return v

    @field_validator("market_cap")
    @classmethod
    def validate_market_cap(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"market_cap must be non-negative, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_change_sign(self) -> "Snapshot":
        if self.change * self.change_percent < 0:
            raise ValueError(
                f"change ({self.change}) and change_percent ({self.change_percent}) "
                "must have the same sign."
            )
        return self
