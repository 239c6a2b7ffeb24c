"""High-level async client composing quotes, deep links and saved routes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from ridewise.aggregator import QuoteAggregator
from ridewise.config import RideWiseConfig
from ridewise.deeplink import BrowserLauncher, DeepLinkResolver, UriLauncher
from ridewise.exceptions import RideWiseConfigError, RideWiseError
from ridewise.models.provider import LaunchOutcome
from ridewise.models.quote import QuoteBatch
from ridewise.models.route import SavedRoute
from ridewise.registry import ProviderRegistry
from ridewise.sources import FixtureQuoteSource, HttpQuoteSource, QuoteSource
from ridewise.state.store import RouteStore
from ridewise.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

_logger = logging.getLogger(__name__)


class RequestGeneration:
    """Generation counter used to discard results nobody waits for anymore.

    ``begin()`` hands out a token; a result is only delivered while its
    token is still the latest one and the owner has not been disposed.
    """

    def __init__(self) -> None:
        self._current = 0
        self._disposed = False

    def begin(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return not self._disposed and token == self._current

    def invalidate(self) -> None:
        self._current += 1

    def dispose(self) -> None:
        self._disposed = True

    @property
    def disposed(self) -> bool:
        return self._disposed


class RideWiseClient:
    """Async entry point for a presentation layer.

    Usage::

        async with RideWiseClient(config, launcher=launcher) as client:
            batch = await client.compare_fares("12 A St", "5 B Ave", VehicleType.CAR)
            await client.open_provider(batch.quotes[0].provider_id)
    """

    def __init__(
        self,
        config: RideWiseConfig | None = None,
        *,
        quote_source: QuoteSource | None = None,
        launcher: UriLauncher | None = None,
        storage: KeyValueStorage | None = None,
        registry: ProviderRegistry | None = None,
        session: aiohttp.ClientSession | None = None,
        on_routes_changed: Callable[[tuple[SavedRoute, ...]], None] | None = None,
    ) -> None:
        self._config = config if config is not None else RideWiseConfig()
        self._external_session = session is not None
        self._http_session = session
        self._quote_source = quote_source
        self._launcher = launcher
        self._registry = registry
        self._storage = storage
        self._on_routes_changed = on_routes_changed
        self._aggregator: QuoteAggregator | None = None
        self._resolver: DeepLinkResolver | None = None
        self._routes: RouteStore | None = None
        self._quote_requests = RequestGeneration()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RideWiseClient:
        config = self._config
        self._quote_requests = RequestGeneration()

        source = self._quote_source
        if source is None:
            if config.quote_source_url:
                if self._http_session is None:
                    self._http_session = aiohttp.ClientSession()
                source = HttpQuoteSource(config.quote_source_url, self._http_session, timeout=config.quote_timeout)
            else:
                source = FixtureQuoteSource(latency=config.fixture_latency)
        self._aggregator = QuoteAggregator(source)

        launcher = self._launcher
        if launcher is None:
            if not config.browser_fallback:
                await self._close_http()
                raise RideWiseConfigError("No URI launcher injected and browser_fallback is disabled")
            launcher = BrowserLauncher()
        self._resolver = DeepLinkResolver(launcher, self._registry)

        storage = self._storage
        if storage is None:
            storage = JsonFileStorage(config.storage_path) if config.storage_path else MemoryStorage()
        self._routes = RouteStore(storage, key=config.storage_key, on_change=self._on_routes_changed)
        try:
            await self._routes.load()
        except BaseException:
            await self._close_http()
            raise
        if self._routes.load_warning:
            _logger.warning("Saved routes were reset: %s", self._routes.load_warning)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self._quote_requests.dispose()
        await self._close_http()
        self._aggregator = None
        self._resolver = None

    async def _close_http(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_aggregator(self) -> QuoteAggregator:
        if self._aggregator is None:
            raise RideWiseError("Client not initialized. Use 'async with RideWiseClient(...) as client:'")
        return self._aggregator

    def _require_resolver(self) -> DeepLinkResolver:
        if self._resolver is None:
            raise RideWiseError("Client not initialized. Use 'async with RideWiseClient(...) as client:'")
        return self._resolver

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def routes(self) -> RouteStore:
        """The saved-route store (loaded on entry)."""
        if self._routes is None:
            raise RideWiseError("Client not initialized. Use 'async with RideWiseClient(...) as client:'")
        return self._routes

    async def compare_fares(self, origin: str, destination: str, vehicle_type: str) -> QuoteBatch | None:
        """Fetch and rank quotes for a route.

        Returns ``None`` when the result went stale: a newer comparison was
        started, ``cancel_pending()`` was called, or the client closed
        while this one was in flight.
        """
        aggregator = self._require_aggregator()
        token = self._quote_requests.begin()
        batch = await aggregator.fetch_ranked(origin, destination, vehicle_type)
        if not self._quote_requests.is_current(token):
            _logger.debug("Discarding stale quote batch (request %d)", token)
            return None
        return batch

    def cancel_pending(self) -> None:
        """Mark any in-flight comparison as abandoned."""
        self._quote_requests.invalidate()

    async def open_provider(self, provider_id: str) -> LaunchOutcome:
        """Hand off to the provider's app, or its store listing."""
        return await self._require_resolver().resolve_and_launch(provider_id)
