"""Fare quote models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import AliasChoices, Field, field_validator

from ridewise.models._base import RideWiseBaseModel


class VehicleType(StrEnum):
    """Ride categories a user can compare fares for."""

    BIKE = "bike"
    AUTO = "auto"
    CAR = "car"
    XL = "xl"
    PARCEL = "parcel"

    @property
    def label(self) -> str:
        return _VEHICLE_LABELS[self]


_VEHICLE_LABELS: dict[VehicleType, str] = {
    VehicleType.BIKE: "Bike",
    VehicleType.AUTO: "Auto",
    VehicleType.CAR: "Car",
    VehicleType.XL: "Car XL",
    VehicleType.PARCEL: "Parcel",
}


class Quote(RideWiseBaseModel):
    """A single provider's fare/ETA offer.

    Accepts both the service wire shape (``providerId``/``etaMinutes``)
    and the short shape used by the fixture batch (``provider``/``eta``).
    """

    provider_id: str = Field(
        validation_alias=AliasChoices("providerId", "provider_id", "provider"),
        serialization_alias="providerId",
    )
    fare: float
    eta_minutes: float = Field(
        validation_alias=AliasChoices("etaMinutes", "eta_minutes", "eta"),
        serialization_alias="etaMinutes",
    )


class RankedQuote(Quote):
    """A quote annotated with whether it is the cheapest in its batch."""

    is_cheapest: bool = False


class QuoteBatch(RideWiseBaseModel):
    """Ranked quotes plus the moment the batch was assembled.

    An empty batch is a complete result ("no offers available"); ``error``
    holds a diagnostic when the quote source failed softly.
    """

    quotes: tuple[RankedQuote, ...] = ()
    updated_at: datetime
    error: str | None = None

    @field_validator("updated_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def is_empty(self) -> bool:
        return not self.quotes

    @property
    def cheapest(self) -> tuple[RankedQuote, ...]:
        """All quotes sharing the minimum fare."""
        return tuple(quote for quote in self.quotes if quote.is_cheapest)
