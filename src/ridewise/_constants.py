"""Internal constants shared across the library."""

from __future__ import annotations

from typing import Any

ROUTES_STORAGE_KEY = "ridewise_saved_routes"
QUOTES_ENDPOINT = "/quotes"
DEFAULT_QUOTE_TIMEOUT: float = 10.0
DEFAULT_FIXTURE_LATENCY: float = 0.6

# ------------------------------------------------------------------
# Provider deep links  (provider id → native scheme, store listing)
# ------------------------------------------------------------------

PROVIDER_LINKS: dict[str, tuple[str, str]] = {
    "uber": ("uber://", "https://play.google.com/store/apps/details?id=com.ubercab"),
    "ola": ("ola://", "https://play.google.com/store/apps/details?id=com.olacabs.customer"),
    "rapido": ("rapido://", "https://play.google.com/store/apps/details?id=com.rapido.passenger"),
}

# ------------------------------------------------------------------
# Fixture quote batch served when no quote service is configured
# ------------------------------------------------------------------

FIXTURE_QUOTES: tuple[dict[str, Any], ...] = (
    {"provider": "Uber", "fare": 59, "eta": 5},
    {"provider": "Ola", "fare": 49, "eta": 7},
    {"provider": "Rapido", "fare": 39, "eta": 4},
)
