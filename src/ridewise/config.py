"""Client configuration for ridewise."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from ridewise._constants import DEFAULT_FIXTURE_LATENCY, DEFAULT_QUOTE_TIMEOUT, ROUTES_STORAGE_KEY
from ridewise.exceptions import RideWiseConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise RideWiseConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RideWiseConfig:
    """Client configuration.

    Parameters
    ----------
    storage_key : str
        Key under which the saved-route collection is persisted.
    storage_path : str or None
        JSON file used for durable key-value storage.  ``None`` keeps
        saved routes in memory for the lifetime of the client.
    quote_source_url : str or None
        Base URL of a fare quote service.  ``None`` serves the built-in
        fixture batch instead.
    quote_timeout : float
        Total timeout in seconds for one quote request.
    fixture_latency : float
        Artificial delay in seconds before the fixture batch resolves.
    browser_fallback : bool
        Open URIs through the system browser when no launcher is
        injected into the client.
    """

    storage_key: str = ROUTES_STORAGE_KEY
    storage_path: str | None = None
    quote_source_url: str | None = None
    quote_timeout: float = DEFAULT_QUOTE_TIMEOUT
    fixture_latency: float = DEFAULT_FIXTURE_LATENCY
    browser_fallback: bool = True

    def __post_init__(self) -> None:
        if not self.storage_key.strip():
            raise RideWiseConfigError("storage_key must be non-empty")
        if self.quote_timeout <= 0:
            raise RideWiseConfigError(f"quote_timeout must be positive, got {self.quote_timeout}")
        if self.fixture_latency < 0:
            raise RideWiseConfigError(f"fixture_latency must not be negative, got {self.fixture_latency}")

    @classmethod
    def from_env(cls, **overrides: Any) -> RideWiseConfig:
        """Create configuration from ``RIDEWISE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Returns
        -------
        RideWiseConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "RIDEWISE_STORAGE_KEY": "storage_key",
            "RIDEWISE_STORAGE_PATH": "storage_path",
            "RIDEWISE_QUOTE_SOURCE_URL": "quote_source_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        timeout_env = env.get("RIDEWISE_QUOTE_TIMEOUT")
        if timeout_env is not None and "quote_timeout" not in overrides:
            config_kwargs["quote_timeout"] = _env_float("RIDEWISE_QUOTE_TIMEOUT", timeout_env)

        latency_env = env.get("RIDEWISE_FIXTURE_LATENCY")
        if latency_env is not None and "fixture_latency" not in overrides:
            config_kwargs["fixture_latency"] = _env_float("RIDEWISE_FIXTURE_LATENCY", latency_env)

        if "browser_fallback" not in overrides:
            config_kwargs["browser_fallback"] = _env_bool(env.get("RIDEWISE_BROWSER_FALLBACK"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
