"""Tests for environment settings and the default factory wiring."""

from __future__ import annotations

import logging

import pytest

from tenancy.config import Settings, configure_logging
from tenancy.exceptions import ConfigurationError
from tenancy.factory import create_default_quote_service, create_pricing_client
from tenancy.services.booking_quote import BookingQuoteService
from tenancy.services.pricing_client import PricingApiClient

_ENV_VARS = (
    "TENANCY_API_URL",
    "TENANCY_API_TIMEOUT",
    "TENANCY_API_TOKEN",
    "TENANCY_CURRENCY",
    "TENANCY_CORS_ORIGINS",
    "TENANCY_LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettingsFromEnv:
    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = Settings.from_env()

        assert settings.api_url == "http://localhost:8000/api"
        assert settings.api_timeout == 30.0
        assert settings.api_token is None
        assert settings.currency == "KES"
        assert settings.cors_origins == ["http://localhost:3000"]
        assert settings.log_level == "INFO"

    def test_overrides(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("TENANCY_API_URL", "https://rentals.example.com/api/")
        clean_env.setenv("TENANCY_API_TIMEOUT", "12.5")
        clean_env.setenv("TENANCY_API_TOKEN", "abc123")
        clean_env.setenv("TENANCY_CURRENCY", "usd")
        clean_env.setenv("TENANCY_CORS_ORIGINS", "https://a.example, https://b.example")
        clean_env.setenv("TENANCY_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.api_url == "https://rentals.example.com/api"
        assert settings.api_timeout == 12.5
        assert settings.api_token == "abc123"
        assert settings.currency == "USD"
        assert settings.cors_origins == ["https://a.example", "https://b.example"]
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_bad_timeout(self, clean_env: pytest.MonkeyPatch, raw: str) -> None:
        clean_env.setenv("TENANCY_API_TIMEOUT", raw)
        with pytest.raises(ConfigurationError, match="TENANCY_API_TIMEOUT"):
            Settings.from_env()


class TestConfigureLogging:
    def test_sets_level(self) -> None:
        configure_logging("warning")
        assert logging.getLogger("tenancy").level == logging.WARNING

    def test_unknown_level(self) -> None:
        with pytest.raises(ConfigurationError):
            configure_logging("chatty")


class TestFactory:
    def test_client_carries_credentials(self) -> None:
        client = create_pricing_client(Settings(api_token="tok", api_timeout=7.0))
        assert isinstance(client, PricingApiClient)
        assert client._credentials is not None
        assert client._credentials.token == "tok"
        assert client._timeout == 7.0

    def test_client_without_token(self) -> None:
        client = create_pricing_client(Settings())
        assert client._credentials is None

    def test_default_quote_service(self, clean_env: pytest.MonkeyPatch) -> None:
        assert isinstance(create_default_quote_service(), BookingQuoteService)
