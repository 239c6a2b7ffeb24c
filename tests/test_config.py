from __future__ import annotations

import pytest

from ridewise.config import RideWiseConfig
from ridewise.exceptions import RideWiseConfigError


def test_defaults() -> None:
    config = RideWiseConfig()

    assert config.storage_key == "ridewise_saved_routes"
    assert config.storage_path is None
    assert config.quote_source_url is None
    assert config.fixture_latency == 0.6
    assert config.browser_fallback is True


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIDEWISE_STORAGE_PATH", "/tmp/ridewise.json")
    monkeypatch.setenv("RIDEWISE_QUOTE_SOURCE_URL", "https://fares.example.com")
    monkeypatch.setenv("RIDEWISE_QUOTE_TIMEOUT", "2.5")
    monkeypatch.setenv("RIDEWISE_BROWSER_FALLBACK", "off")

    config = RideWiseConfig.from_env()

    assert config.storage_path == "/tmp/ridewise.json"
    assert config.quote_source_url == "https://fares.example.com"
    assert config.quote_timeout == 2.5
    assert config.browser_fallback is False


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIDEWISE_FIXTURE_LATENCY", "3")
    monkeypatch.setenv("RIDEWISE_STORAGE_KEY", "from-env")

    config = RideWiseConfig.from_env(fixture_latency=0.0, storage_key="explicit")

    assert config.fixture_latency == 0.0
    assert config.storage_key == "explicit"


def test_bad_numeric_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIDEWISE_QUOTE_TIMEOUT", "soon")

    with pytest.raises(RideWiseConfigError):
        RideWiseConfig.from_env()


def test_invalid_values_rejected() -> None:
    with pytest.raises(RideWiseConfigError):
        RideWiseConfig(quote_timeout=0)
    with pytest.raises(RideWiseConfigError):
        RideWiseConfig(storage_key="  ")
