"""Domain models for the tenancy package."""

from tenancy.models.enums import DurationType, PaymentPlan, QuoteStatus
from tenancy.models.pricing import (
    AvailableCharges,
    ChargeLine,
    ComprehensivePricing,
    Installment,
    InstallmentPlan,
    MoveInBreakdown,
    PricingCalculation,
    PricingCalculationBreakdown,
    PricingSummary,
)
from tenancy.models.quote import BookingQuote
from tenancy.models.rental import (
    ProratedRent,
    RentalCostBreakdown,
    RentalCostRequest,
    RentalCostResult,
    RentalCosts,
)

__all__ = [
    "AvailableCharges",
    "BookingQuote",
    "ChargeLine",
    "ComprehensivePricing",
    "DurationType",
    "Installment",
    "InstallmentPlan",
    "MoveInBreakdown",
    "PaymentPlan",
    "PricingCalculation",
    "PricingCalculationBreakdown",
    "PricingSummary",
    "ProratedRent",
    "QuoteStatus",
    "RentalCostBreakdown",
    "RentalCostRequest",
    "RentalCostResult",
    "RentalCosts",
]
