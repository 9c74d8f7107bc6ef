"""Factory functions for creating pre-configured quote services."""

from __future__ import annotations

from tenancy.config import Settings
from tenancy.services.booking_quote import BookingQuoteService
from tenancy.services.pricing_client import Credentials, PricingApiClient


def create_pricing_client(settings: Settings | None = None) -> PricingApiClient:
    """Create a PricingApiClient for the configured REST API."""
    settings = settings or Settings.from_env()
    credentials = Credentials(settings.api_token) if settings.api_token else None
    return PricingApiClient(
        base_url=settings.api_url,
        credentials=credentials,
        timeout=settings.api_timeout,
    )


def create_default_quote_service(settings: Settings | None = None) -> BookingQuoteService:
    """Create a BookingQuoteService wired to the configured pricing API.

    This is the recommended way to get quotes in typical usage::

        from tenancy import create_default_quote_service

        service = create_default_quote_service()
        quote = service.quote(12, "2024-01-16", 6, "monthly")
    """
    return BookingQuoteService(create_pricing_client(settings))
