"""Services that talk to the pricing API and assemble booking quotes."""

from tenancy.services.booking_quote import BookingQuoteService, BookingQuoteSession
from tenancy.services.pricing_client import Credentials, PricingApiClient

__all__ = [
    "BookingQuoteService",
    "BookingQuoteSession",
    "Credentials",
    "PricingApiClient",
]
