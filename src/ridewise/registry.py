"""Immutable provider deep-link table."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ridewise._constants import PROVIDER_LINKS
from ridewise.models.provider import ProviderLinkConfig


def normalize_provider_id(provider_id: str) -> str:
    """Registry keys are case-insensitive and ignore surrounding whitespace."""
    return provider_id.strip().lower()


class ProviderRegistry:
    """Read-only mapping from provider id to its link configuration.

    Built once and freely shared; there is no way to add or replace
    entries after construction.
    """

    __slots__ = ("_links",)

    def __init__(self, links: Mapping[str, tuple[str, str]] | None = None) -> None:
        source = PROVIDER_LINKS if links is None else links
        table: dict[str, ProviderLinkConfig] = {}
        for provider_id, (native_scheme_uri, store_fallback_uri) in source.items():
            key = normalize_provider_id(provider_id)
            if not key:
                raise ValueError("provider id must be non-empty")
            if key in table:
                raise ValueError(f"duplicate provider id {provider_id!r}")
            table[key] = ProviderLinkConfig(
                provider_id=key,
                native_scheme_uri=native_scheme_uri,
                store_fallback_uri=store_fallback_uri,
            )
        self._links: Mapping[str, ProviderLinkConfig] = MappingProxyType(table)

    def get(self, provider_id: str) -> ProviderLinkConfig | None:
        return self._links.get(normalize_provider_id(provider_id))

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and self.get(provider_id) is not None

    def __iter__(self) -> Iterator[ProviderLinkConfig]:
        return iter(self._links.values())

    def __len__(self) -> int:
        return len(self._links)

    @property
    def provider_ids(self) -> tuple[str, ...]:
        return tuple(self._links)


_DEFAULT_REGISTRY = ProviderRegistry()


def default_registry() -> ProviderRegistry:
    """Uber, Ola and Rapido with their Google Play listings."""
    return _DEFAULT_REGISTRY
