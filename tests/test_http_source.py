from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from ridewise.aggregator import QuoteAggregator
from ridewise.exceptions import RideWiseQuoteSourceError
from ridewise.sources import HttpQuoteSource


class _FakeResponse:
    def __init__(self, status: int, text: str) -> None:
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, status: int = 200, text: str = "[]", error: Exception | None = None) -> None:
        self.status = status
        self.text = text
        self.error = error
        self.requests: list[tuple[str, dict[str, str]]] = []

    def get(self, url: str, *, params: dict[str, str], timeout: aiohttp.ClientTimeout) -> _FakeResponse:
        self.requests.append((url, params))
        if self.error is not None:
            raise self.error
        return _FakeResponse(self.status, self.text)


def _source(session: _FakeSession) -> HttpQuoteSource:
    return HttpQuoteSource("https://fares.example.com/", session, timeout=1.0)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_fetches_quote_array_with_route_params() -> None:
    payload = [{"providerId": "Uber", "fare": 59, "etaMinutes": 5}]
    session = _FakeSession(text=json.dumps(payload))

    quotes = await _source(session).get_quotes("12 A St", "5 B Ave", "car")

    assert quotes == payload
    assert session.requests == [
        ("https://fares.example.com/quotes", {"from": "12 A St", "to": "5 B Ave", "vehicleType": "car"})
    ]


@pytest.mark.asyncio
async def test_accepts_wrapped_quote_list() -> None:
    session = _FakeSession(text=json.dumps({"quotes": [{"providerId": "Ola", "fare": 49, "etaMinutes": 7}]}))

    quotes = await _source(session).get_quotes("a", "b", "auto")

    assert [q["providerId"] for q in quotes] == ["Ola"]


@pytest.mark.asyncio
async def test_non_200_raises_with_status() -> None:
    session = _FakeSession(status=502, text="bad gateway")

    with pytest.raises(RideWiseQuoteSourceError) as exc_info:
        await _source(session).get_quotes("a", "b", "car")

    assert exc_info.value.status_code == 502
    assert exc_info.value.endpoint == "/quotes"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["not json", '{"offers": []}', "[1, 2]"])
async def test_bad_payload_raises(body: str) -> None:
    with pytest.raises(RideWiseQuoteSourceError):
        await _source(_FakeSession(text=body)).get_quotes("a", "b", "car")


@pytest.mark.asyncio
async def test_client_errors_are_wrapped() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("refused"))

    with pytest.raises(RideWiseQuoteSourceError) as exc_info:
        await _source(session).get_quotes("a", "b", "car")

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_http_failure_becomes_empty_ranked_batch() -> None:
    batch = await QuoteAggregator(_source(_FakeSession(status=500, text="oops"))).fetch_ranked("a", "b", "car")

    assert batch.is_empty
    assert batch.error is not None
