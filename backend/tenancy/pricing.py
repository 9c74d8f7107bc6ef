"""Helpers over the pricing API's comprehensive pricing response.

Every helper accepts ``None`` for "pricing not loaded yet" and returns a
neutral value instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.formatting import DEFAULT_CURRENCY, format_currency
from tenancy.models.pricing import ComprehensivePricing, MoveInBreakdown


@dataclass(frozen=True)
class RentalInputs:
    """Calculator inputs derived from a comprehensive pricing response."""

    monthly_rent: float
    deposit: float
    one_time_fees: float
    monthly_service_charges: float


def get_move_in_cost(pricing: ComprehensivePricing | None) -> float:
    if pricing is None:
        return 0.0
    return pricing.move_in_cost


def get_monthly_total(pricing: ComprehensivePricing | None) -> float:
    """Monthly rent plus recurring service charges."""
    if pricing is None:
        return 0.0
    return pricing.monthly_rent + pricing.recurring_monthly_total


def get_booking_total(pricing: ComprehensivePricing | None) -> float:
    """Total payable over the whole booking period."""
    if pricing is None:
        return 0.0
    return pricing.total_payable


def format_move_in_breakdown(
    pricing: ComprehensivePricing | None,
    currency: str = DEFAULT_CURRENCY,
) -> MoveInBreakdown | None:
    if pricing is None:
        return None
    return MoveInBreakdown(
        first_month_rent=format_currency(pricing.monthly_rent, currency),
        security_deposit=format_currency(pricing.refundable_deposits, currency),
        registration_fee=format_currency(
            pricing.one_time_total - pricing.refundable_deposits, currency
        ),
        cleaning_fee=format_currency(pricing.recurring_monthly_total, currency),
        total=format_currency(pricing.move_in_cost, currency),
    )


def rental_inputs_from_pricing(
    pricing: ComprehensivePricing,
    fallback_rent: float | None = None,
) -> RentalInputs:
    """Split comprehensive pricing into the calculator's charge components.

    The API's ``one_time_total`` includes refundable deposits, so the
    non-refundable fees are the difference (never below zero). When the API
    reports no monthly rent, ``fallback_rent`` (typically the room's listed
    price) is used instead.
    """
    monthly_rent = pricing.monthly_rent or fallback_rent or 0.0
    deposit = pricing.refundable_deposits
    one_time_fees = max(pricing.one_time_total - deposit, 0.0)
    return RentalInputs(
        monthly_rent=monthly_rent,
        deposit=deposit,
        one_time_fees=one_time_fees,
        monthly_service_charges=pricing.recurring_monthly_total,
    )
