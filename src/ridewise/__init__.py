"""ridewise - Async fare comparison, deep-link hand-off and saved routes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ridewise")
except PackageNotFoundError:
    __version__ = "0+local"
from ridewise.aggregator import QuoteAggregator, rank_quotes
from ridewise.client import RequestGeneration, RideWiseClient
from ridewise.config import RideWiseConfig
from ridewise.deeplink import BrowserLauncher, DeepLinkResolver, UriLauncher
from ridewise.exceptions import (
    RideWiseCollaboratorError,
    RideWiseConfigError,
    RideWiseError,
    RideWiseLaunchError,
    RideWisePersistenceError,
    RideWiseQuoteSourceError,
    RouteValidationError,
)
from ridewise.models import (
    LaunchOutcome,
    ProviderLinkConfig,
    Quote,
    QuoteBatch,
    RankedQuote,
    SavedRoute,
    VehicleType,
)
from ridewise.registry import ProviderRegistry, default_registry
from ridewise.sources import FixtureQuoteSource, HttpQuoteSource, QuoteSource
from ridewise.state import RouteStore
from ridewise.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "__version__",
    "BrowserLauncher",
    "DeepLinkResolver",
    "FixtureQuoteSource",
    "HttpQuoteSource",
    "JsonFileStorage",
    "KeyValueStorage",
    "LaunchOutcome",
    "MemoryStorage",
    "ProviderLinkConfig",
    "ProviderRegistry",
    "Quote",
    "QuoteAggregator",
    "QuoteBatch",
    "QuoteSource",
    "RankedQuote",
    "RequestGeneration",
    "RideWiseClient",
    "RideWiseCollaboratorError",
    "RideWiseConfig",
    "RideWiseConfigError",
    "RideWiseError",
    "RideWiseLaunchError",
    "RideWisePersistenceError",
    "RideWiseQuoteSourceError",
    "RouteStore",
    "RouteValidationError",
    "SavedRoute",
    "UriLauncher",
    "VehicleType",
    "default_registry",
    "rank_quotes",
]
