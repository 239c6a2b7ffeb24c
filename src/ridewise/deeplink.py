"""Deep-link resolution: native app when installed, store listing otherwise."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from typing import Protocol
from urllib.parse import urlsplit

from ridewise.exceptions import RideWiseLaunchError
from ridewise.models.provider import LaunchOutcome, ProviderLinkConfig
from ridewise.registry import ProviderRegistry, default_registry

_logger = logging.getLogger(__name__)


class UriLauncher(Protocol):
    """Device capability to check and open URIs."""

    async def can_open(self, uri: str) -> bool:
        ...

    async def open(self, uri: str) -> None:
        ...


class BrowserLauncher:
    """Opens URIs in the system web browser.

    Only ``http``/``https`` URIs are reported as openable, so native app
    schemes always fall back to the store page.
    """

    _SCHEMES = frozenset({"http", "https"})

    async def can_open(self, uri: str) -> bool:
        return urlsplit(uri).scheme.lower() in self._SCHEMES

    async def open(self, uri: str) -> None:
        opened = await asyncio.to_thread(webbrowser.open_new_tab, uri)
        if not opened:
            raise RideWiseLaunchError(f"No browser could open {uri}", uri=uri)


class DeepLinkResolver:
    """Resolves a provider id to a launch and performs exactly one open.

    There is no retry and no check that the opened app actually came up.
    """

    def __init__(self, launcher: UriLauncher, registry: ProviderRegistry | None = None) -> None:
        self._launcher = launcher
        self._registry = registry if registry is not None else default_registry()

    def resolve(self, provider_id: str) -> ProviderLinkConfig | None:
        return self._registry.get(provider_id)

    async def resolve_and_launch(self, provider_id: str) -> LaunchOutcome:
        link = self.resolve(provider_id)
        if link is None:
            _logger.debug("No deep link registered for provider %r", provider_id)
            return LaunchOutcome.NO_SUCH_PROVIDER

        if await self._call_can_open(link.native_scheme_uri):
            await self._call_open(link.native_scheme_uri)
            return LaunchOutcome.LAUNCHED_NATIVE

        await self._call_open(link.store_fallback_uri)
        return LaunchOutcome.LAUNCHED_FALLBACK

    async def _call_can_open(self, uri: str) -> bool:
        try:
            return bool(await self._launcher.can_open(uri))
        except RideWiseLaunchError:
            raise
        except Exception as exc:
            raise RideWiseLaunchError(f"Could not check whether {uri} can be opened: {exc!r}", uri=uri) from exc

    async def _call_open(self, uri: str) -> None:
        _logger.debug("Opening %s", uri)
        try:
            await self._launcher.open(uri)
        except RideWiseLaunchError:
            raise
        except Exception as exc:
            raise RideWiseLaunchError(f"Opening {uri} failed: {exc!r}", uri=uri) from exc
