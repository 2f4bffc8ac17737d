"""
HTTP snapshot provider — queries a remote screener service.

Endpoint::

    POST {base_url}/screener
    Content-Type: application/json
    Authorization: Bearer <SWING_SCREENER_API_KEY>   (only when a key is set)

    {"minPrice": 10, "maxRSI": 70, "priceAboveSMA20": true}

The response is a JSON array of snapshot records (camelCase keys), or an
object wrapping it under ``"results"`` or ``"data"``.

Errors are not translated: ``httpx.HTTPStatusError`` on non-2xx responses and
``httpx.TransportError`` on connection problems reach the caller unchanged.
Filtering is the service's job; the response is returned as received.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from swing_screener.models.criteria import FilterCriteria
from swing_screener.models.snapshot import Snapshot
from swing_screener.providers.base import SnapshotProvider

logger = logging.getLogger(__name__)


class HttpSnapshotProvider(SnapshotProvider):
    """Fetch snapshots from a remote screener endpoint.

    Usage::

        provider = HttpSnapshotProvider("https://screener.example.com/api",
                                        api_key=os.environ.get("SWING_SCREENER_API_KEY"))
        snapshots = provider.fetch(FilterCriteria(min_price=10))

    Attributes:
        base_url:  Service root, without the ``/screener`` path.
        api_key:   Optional bearer token.
        timeout_s: Request timeout in seconds.
    """

    ENDPOINT = "/screener"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout_s: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialise the provider.

        Args:
            base_url:  Service root URL. Must be non-empty.
            api_key:   Bearer token; ``None`` sends no Authorization header.
            timeout_s: Request timeout in seconds.
            client:    Pre-built ``httpx.Client`` (e.g. with a mock transport).
                       When omitted, a short-lived client is created per fetch.
        """
        if not base_url:
            raise ValueError(
                "HttpSnapshotProvider requires a base_url "
                "(set [provider].base_url or SWING_SCREENER_PROVIDER_URL)."
            )
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s
        self._client = client

    def fetch(self, criteria: FilterCriteria) -> list[Snapshot]:
        url = f"{self.base_url}{self.ENDPOINT}"
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        if self._client is not None:
            resp = self._client.post(
                url, json=criteria.to_query(), headers=headers, timeout=self.timeout_s
            )
        else:
            with httpx.Client() as client:
                resp = client.post(
                    url, json=criteria.to_query(), headers=headers, timeout=self.timeout_s
                )
        resp.raise_for_status()

        snapshots = self._parse_response(resp.json())
        logger.info("Fetched %d snapshots from %s", len(snapshots), url)
        return snapshots

    # ── Response parser ────────────────────────────────────────────────────────

    def _parse_response(self, data: Any) -> list[Snapshot]:
        """Turn the decoded JSON body into ``Snapshot`` records.

        Raises:
            ValueError: If the body is not a list (or a wrapped list).
            pydantic.ValidationError: If a record violates the snapshot contract.
        """
        if isinstance(data, dict):
            data = data.get("results", data.get("data"))
        if not isinstance(data, list):
            raise ValueError(
                "Screener response must be a JSON array or an object with a "
                "'results' array."
            )
        return [Snapshot.model_validate(record) for record in data]
