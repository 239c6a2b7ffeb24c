"""Quote sources: the structural interface plus fixture and HTTP backends."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import aiohttp

from ridewise._constants import DEFAULT_FIXTURE_LATENCY, DEFAULT_QUOTE_TIMEOUT, FIXTURE_QUOTES, QUOTES_ENDPOINT
from ridewise.exceptions import RideWiseQuoteSourceError
from ridewise.models.quote import Quote

_logger = logging.getLogger(__name__)

RawQuote = Quote | Mapping[str, Any]


class QuoteSource(Protocol):
    """Structural quote source interface used by the aggregator.

    Implementations resolve to a (possibly empty) batch or raise.
    """

    async def get_quotes(self, origin: str, destination: str, vehicle_type: str) -> Sequence[RawQuote]:
        ...


class FixtureQuoteSource:
    """Serves a fixed batch after a short delay, regardless of route."""

    def __init__(
        self,
        quotes: Sequence[RawQuote] = FIXTURE_QUOTES,
        *,
        latency: float = DEFAULT_FIXTURE_LATENCY,
    ) -> None:
        self._quotes = tuple(quotes)
        self._latency = latency

    async def get_quotes(self, origin: str, destination: str, vehicle_type: str) -> Sequence[RawQuote]:
        if self._latency > 0:
            await asyncio.sleep(self._latency)
        return list(self._quotes)


class HttpQuoteSource:
    """Fetches quotes from a fare service over HTTP.

    Expects ``GET {base_url}/quotes?from=&to=&vehicleType=`` to answer
    with a JSON array of quotes, or an object carrying them under
    ``"quotes"``.
    """

    def __init__(
        self,
        base_url: str,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float = DEFAULT_QUOTE_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_quotes(self, origin: str, destination: str, vehicle_type: str) -> Sequence[RawQuote]:
        endpoint = QUOTES_ENDPOINT
        url = f"{self._base_url}{endpoint}"
        params = {"from": origin, "to": destination, "vehicleType": str(vehicle_type)}

        _logger.debug("GET %s vehicleType=%s", url, params["vehicleType"])

        try:
            async with self._http.get(url, params=params, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise RideWiseQuoteSourceError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except RideWiseQuoteSourceError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RideWiseQuoteSourceError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RideWiseQuoteSourceError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if isinstance(body, dict):
            body = body.get("quotes")
        if not isinstance(body, list) or not all(isinstance(item, dict) for item in body):
            raise RideWiseQuoteSourceError(
                f"Unexpected quote payload shape from {endpoint}",
                endpoint=endpoint,
            )
        return body
