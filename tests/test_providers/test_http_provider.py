"""
Tests for swing_screener/providers/http_provider.py.

Uses ``httpx.MockTransport``; no network access.
"""

from __future__ import annotations

import json

import httpx
import pytest

from swing_screener.models.criteria import FilterCriteria
from swing_screener.providers.http_provider import HttpSnapshotProvider

_RECORD = {
    "symbol": "NVDA", "price": 120.0, "change": 3.0, "changePercent": 2.56,
    "volume": 310_000_000, "marketCap": 2.9e12, "pe": 65.0, "rsi": 61.0,
    "sma20": 115.0, "sma50": 110.0,
}


def _provider(handler, **kwargs) -> HttpSnapshotProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpSnapshotProvider("https://screener.test/api/", client=client, **kwargs)


class TestHttpSnapshotProvider:
    def test_posts_criteria_and_parses_array(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[_RECORD])

        snaps = _provider(handler).fetch(FilterCriteria(min_price=10.0, price_above_sma50=True))

        assert seen["url"] == "https://screener.test/api/screener"
        assert seen["body"] == {"minPrice": 10.0, "priceAboveSMA50": True}
        assert seen["auth"] is None
        assert [s.symbol for s in snaps] == ["NVDA"]
        assert snaps[0].change_percent == pytest.approx(2.56)

    def test_wrapped_results(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"results": [_RECORD, {**_RECORD, "symbol": "AMD"}]})

        snaps = _provider(handler).fetch(FilterCriteria())
        assert [s.symbol for s in snaps] == ["NVDA", "AMD"]

    def test_null_pe_accepted(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[_RECORD, {**_RECORD, "symbol": "RIVN", "pe": None}])

        snaps = _provider(handler).fetch(FilterCriteria())
        assert [s.pe for s in snaps] == [65.0, None]

    def test_bearer_token_sent(self):
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[])

        assert _provider(handler, api_key="secret").fetch(FilterCriteria()) == []
        assert seen["auth"] == "Bearer secret"

    def test_http_error_propagates_unchanged(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"error": "down"})

        with pytest.raises(httpx.HTTPStatusError):
            _provider(handler).fetch(FilterCriteria())

    def test_transport_error_propagates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(httpx.ConnectError):
            _provider(handler).fetch(FilterCriteria())

    def test_unexpected_body_shape(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "ok"})

        with pytest.raises(ValueError):
            _provider(handler).fetch(FilterCriteria())

    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            HttpSnapshotProvider("")
