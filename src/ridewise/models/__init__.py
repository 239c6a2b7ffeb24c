"""Data models for ridewise."""

from ridewise.models._base import RideWiseBaseModel
from ridewise.models.provider import LaunchOutcome, ProviderLinkConfig
from ridewise.models.quote import Quote, QuoteBatch, RankedQuote, VehicleType
from ridewise.models.route import SavedRoute

__all__ = [
    "LaunchOutcome",
    "ProviderLinkConfig",
    "Quote",
    "QuoteBatch",
    "RankedQuote",
    "RideWiseBaseModel",
    "SavedRoute",
    "VehicleType",
]
