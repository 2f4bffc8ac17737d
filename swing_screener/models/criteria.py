"""
Screening filter criteria.

``FilterCriteria`` is an immutable value object: one instance per screening
request, passed to a ``SnapshotProvider``. Every field is optional and an
unset field means "no constraint". The scoring core never reads it; it trusts
whatever candidate list the provider returns.

Wire format (``to_query()``) uses the camelCase keys of the upstream screener
service, omitting unset constraints::

    {"minPrice": 10.0, "maxRSI": 70.0, "priceAboveSMA20": true}
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FilterCriteria(BaseModel):
    """Screening constraints for one snapshot request.

    Attributes:
        min_price: Lowest acceptable price.
        max_price: Highest acceptable price.
        min_volume: Lowest acceptable share volume.
        min_market_cap: Lowest acceptable market capitalization.
        max_pe: Highest acceptable P/E ratio.
        min_rsi: Lowest acceptable RSI.
        max_rsi: Highest acceptable RSI.
        price_above_sma20: Only symbols trading above their 20-period SMA.
        price_above_sma50: Only symbols trading above their 50-period SMA.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    min_price: Optional[float] = Field(default=None, alias="minPrice")
    max_price: Optional[float] = Field(default=None, alias="maxPrice")
    min_volume: Optional[int] = Field(default=None, alias="minVolume")
    min_market_cap: Optional[float] = Field(default=None, alias="minMarketCap")
    max_pe: Optional[float] = Field(default=None, alias="maxPE")
    min_rsi: Optional[float] = Field(default=None, alias="minRSI")
    max_rsi: Optional[float] = Field(default=None, alias="maxRSI")
    price_above_sma20: bool = Field(default=False, alias="priceAboveSMA20")
    price_above_sma50: bool = Field(default=False, alias="priceAboveSMA50")

    @model_validator(mode="after")
    def validate_ranges(self) -> "FilterCriteria":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError(
                f"min_price ({self.min_price}) must be <= max_price ({self.max_price})."
            )
        if (
            self.min_rsi is not None
            and self.max_rsi is not None
            and self.min_rsi > self.max_rsi
        ):
            raise ValueError(
                f"min_rsi ({self.min_rsi}) must be <= max_rsi ({self.max_rsi})."
            )
        return self

    @property
    def is_empty(self) -> bool:
        """True when no constraint is set."""
        return not self.to_query()

    def to_query(self) -> dict[str, Any]:
        """Return the camelCase wire dict with unset constraints omitted.

        Boolean flags are only included when ``True``.
        """
        raw = self.model_dump(by_alias=True, exclude_none=True)
        return {k: v for k, v in raw.items() if v is not False}
