"""Provider deep-link models."""

from __future__ import annotations

from enum import StrEnum

from ridewise.models._base import RideWiseBaseModel


class ProviderLinkConfig(RideWiseBaseModel):
    """Where to send the user for a provider.

    Parameters
    ----------
    provider_id : str
        Lower-case registry key (e.g. ``"uber"``).
    native_scheme_uri : str
        URI handled by the provider's installed app.
    store_fallback_uri : str
        App-store listing opened when the app is not installed.
    """

    provider_id: str
    native_scheme_uri: str
    store_fallback_uri: str


class LaunchOutcome(StrEnum):
    LAUNCHED_NATIVE = "launched_native"
    LAUNCHED_FALLBACK = "launched_fallback"
    NO_SUCH_PROVIDER = "no_such_provider"
