"""Tenancy rental cost calculator and booking quotes.

Usage::

    from tenancy import calculate_rental_costs

    result = calculate_rental_costs(
        15000, 15000, 1000, "2024-01-16", 6, "monthly", 500
    )
    result.costs.total_move_in_cost  # 23741.94
"""

from tenancy.calculator import (
    booking_end_date,
    calculate_prorated_rent,
    calculate_rental_costs,
    days_in_month,
    estimate_move_in_cost,
    get_next_payment_date,
)
from tenancy.exceptions import (
    AuthenticationRequiredError,
    ComputationOverflowError,
    InvalidArgumentError,
    PricingApiError,
    TenancyError,
)
from tenancy.factory import create_default_quote_service
from tenancy.models.enums import DurationType, PaymentPlan, QuoteStatus
from tenancy.models.pricing import ComprehensivePricing
from tenancy.models.quote import BookingQuote
from tenancy.models.rental import (
    ProratedRent,
    RentalCostBreakdown,
    RentalCostResult,
    RentalCosts,
)
from tenancy.services.booking_quote import BookingQuoteService, BookingQuoteSession
from tenancy.services.pricing_client import Credentials, PricingApiClient

__all__ = [
    "AuthenticationRequiredError",
    "BookingQuote",
    "BookingQuoteService",
    "BookingQuoteSession",
    "ComprehensivePricing",
    "ComputationOverflowError",
    "Credentials",
    "DurationType",
    "InvalidArgumentError",
    "PaymentPlan",
    "PricingApiClient",
    "PricingApiError",
    "ProratedRent",
    "QuoteStatus",
    "RentalCostBreakdown",
    "RentalCostResult",
    "RentalCosts",
    "TenancyError",
    "booking_end_date",
    "calculate_prorated_rent",
    "calculate_rental_costs",
    "create_default_quote_service",
    "days_in_month",
    "estimate_move_in_cost",
    "get_next_payment_date",
]
