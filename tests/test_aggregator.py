from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

import pytest

from ridewise.aggregator import QuoteAggregator, rank_quotes
from ridewise.exceptions import RideWiseQuoteSourceError
from ridewise.models.quote import Quote, VehicleType
from ridewise.sources import FixtureQuoteSource


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


class _StaticSource:
    def __init__(self, quotes: Sequence[Any]) -> None:
        self.quotes = quotes
        self.calls: list[tuple[str, str, str]] = []

    async def get_quotes(self, origin: str, destination: str, vehicle_type: str) -> Sequence[Any]:
        self.calls.append((origin, destination, vehicle_type))
        return self.quotes


class _FailingSource:
    async def get_quotes(self, origin: str, destination: str, vehicle_type: str) -> Sequence[Any]:
        raise RideWiseQuoteSourceError("HTTP 503 from /quotes", status_code=503, endpoint="/quotes")


@pytest.mark.asyncio
async def test_reference_batch_ranked_cheapest_first() -> None:
    source = _StaticSource(
        [
            {"providerId": "Uber", "fare": 59, "etaMinutes": 5},
            {"providerId": "Ola", "fare": 49, "etaMinutes": 7},
            {"providerId": "Rapido", "fare": 39, "etaMinutes": 4},
        ]
    )
    batch = await QuoteAggregator(source, clock=_dt).fetch_ranked("12 A St", "5 B Ave", VehicleType.CAR)

    assert [(q.provider_id, q.fare, q.is_cheapest) for q in batch.quotes] == [
        ("Rapido", 39, True),
        ("Ola", 49, False),
        ("Uber", 59, False),
    ]
    assert batch.quotes[0].eta_minutes == 4
    assert batch.updated_at == _dt()
    assert batch.error is None
    assert source.calls == [("12 A St", "5 B Ave", "car")]


@pytest.mark.asyncio
async def test_fixture_source_shape_is_accepted() -> None:
    batch = await QuoteAggregator(FixtureQuoteSource(latency=0)).fetch_ranked("a", "b", "bike")

    assert [q.provider_id for q in batch.quotes] == ["Rapido", "Ola", "Uber"]
    assert batch.cheapest[0].provider_id == "Rapido"
    assert batch.updated_at.tzinfo is not None


def test_all_minimum_fare_ties_marked_and_source_order_kept() -> None:
    quotes = [
        Quote(provider_id="A", fare=50, eta_minutes=3),
        Quote(provider_id="B", fare=40, eta_minutes=9),
        Quote(provider_id="C", fare=40, eta_minutes=2),
        Quote(provider_id="D", fare=45, eta_minutes=1),
    ]

    ranked = rank_quotes(quotes)

    assert [q.provider_id for q in ranked] == ["B", "C", "D", "A"]
    assert [q.is_cheapest for q in ranked] == [True, True, False, False]


def test_rank_quotes_empty() -> None:
    assert rank_quotes([]) == ()


@pytest.mark.asyncio
async def test_source_objects_are_not_mutated() -> None:
    raw = [{"provider": "Uber", "fare": 59, "eta": 5}, {"provider": "Ola", "fare": 49, "eta": 7}]
    snapshot = [dict(item) for item in raw]
    quote_obj = Quote(provider_id="Rapido", fare=39, eta_minutes=4)

    batch = await QuoteAggregator(_StaticSource([*raw, quote_obj])).fetch_ranked("a", "b", "auto")

    assert raw == snapshot
    assert not hasattr(quote_obj, "is_cheapest")
    assert batch.quotes[0] is not quote_obj


@pytest.mark.asyncio
async def test_failed_source_collapses_to_empty_batch() -> None:
    batch = await QuoteAggregator(_FailingSource(), clock=_dt).fetch_ranked("a", "b", "car")

    assert batch.is_empty
    assert batch.quotes == ()
    assert batch.updated_at == _dt()
    assert batch.error is not None and "503" in batch.error


@pytest.mark.asyncio
async def test_empty_batch_is_a_result_not_an_error() -> None:
    batch = await QuoteAggregator(_StaticSource([]), clock=_dt).fetch_ranked("", "", "car")

    assert batch.is_empty
    assert batch.error is None


@pytest.mark.asyncio
async def test_malformed_batch_collapses_to_empty() -> None:
    batch = await QuoteAggregator(_StaticSource([{"fare": "cheap"}])).fetch_ranked("a", "b", "car")

    assert batch.is_empty
    assert batch.error is not None


@pytest.mark.asyncio
async def test_timestamp_taken_after_source_resolves() -> None:
    events: list[str] = []

    class _RecordingSource:
        async def get_quotes(self, origin: str, destination: str, vehicle_type: str) -> Sequence[Any]:
            events.append("source")
            return [{"provider": "Ola", "fare": 49, "eta": 7}]

    def _clock() -> datetime:
        events.append("clock")
        return _dt()

    await QuoteAggregator(_RecordingSource(), clock=_clock).fetch_ranked("a", "b", "car")

    assert events == ["source", "clock"]
