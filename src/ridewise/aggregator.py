"""Quote aggregation and ranking."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from pydantic import ValidationError

from ridewise.models.quote import Quote, QuoteBatch, RankedQuote
from ridewise.sources import QuoteSource, RawQuote

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def rank_quotes(quotes: Iterable[Quote]) -> tuple[RankedQuote, ...]:
    """Sort by fare ascending and flag every quote at the minimum fare.

    The sort is stable, so quotes with equal fares keep source order.
    """
    ordered = sorted(quotes, key=lambda quote: quote.fare)
    if not ordered:
        return ()
    min_fare = ordered[0].fare
    return tuple(
        RankedQuote(
            provider_id=quote.provider_id,
            fare=quote.fare,
            eta_minutes=quote.eta_minutes,
            is_cheapest=quote.fare == min_fare,
        )
        for quote in ordered
    )


def _copy_quote(raw: RawQuote) -> Quote:
    if isinstance(raw, Quote):
        return raw.model_copy()
    return Quote.model_validate(dict(raw))


class QuoteAggregator:
    """Turns a raw provider batch into a ranked, timestamped result.

    Inputs are passed to the source untouched; validating them is the
    presentation layer's job.  The aggregator never raises for a failed
    or empty batch: both yield an empty :class:`QuoteBatch`.
    """

    def __init__(
        self,
        source: QuoteSource,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._clock = clock

    async def fetch_ranked(self, origin: str, destination: str, vehicle_type: str) -> QuoteBatch:
        try:
            raw_batch = await self._source.get_quotes(origin, destination, vehicle_type)
            quotes = [_copy_quote(raw) for raw in raw_batch or ()]
        except (ValidationError, TypeError, ValueError) as exc:
            _logger.warning("Quote source returned a malformed batch: %s", exc)
            return QuoteBatch(updated_at=self._clock(), error=f"malformed batch: {exc}")
        except Exception as exc:
            _logger.warning("Quote source failed: %r", exc, exc_info=True)
            return QuoteBatch(updated_at=self._clock(), error=repr(exc))

        ranked = rank_quotes(quotes)
        _logger.debug("Ranked %d quotes for vehicle type %s", len(ranked), vehicle_type)
        return QuoteBatch(quotes=ranked, updated_at=self._clock())
