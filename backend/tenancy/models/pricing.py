"""Models for responses of the property-management pricing API."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChargeLine(BaseModel):
    """A single named charge (registration fee, cleaning, utilities, ...)."""

    model_config = ConfigDict(extra="ignore")

    name: str
    amount: float = Field(ge=0)
    refundable: bool = False
    description: str | None = None


class ComprehensivePricing(BaseModel):
    """Full pricing for a room selection as computed by the pricing service.

    The booking flow trusts these figures as given; the rental cost
    calculator only reads ``monthly_rent``, ``refundable_deposits``,
    ``one_time_total`` and ``recurring_monthly_total``.
    """

    model_config = ConfigDict(extra="ignore")

    base_room_charges: float = 0.0
    discount_applied: float = 0.0
    discount_percentage: float = 0.0
    room_charges_after_discount: float = 0.0
    vat_amount: float = 0.0
    vat_rate: float = 0.0
    room_charges_with_vat: float = 0.0
    price_per_bed_per_month: float = 0.0
    price_per_bed_per_month_with_vat: float = 0.0
    number_of_beds: int = 1
    number_of_months: int = 1
    duration_type: str = "monthly"
    monthly_rent: float = 0.0
    monthly_rent_before_vat: float = 0.0
    monthly_rent_vat: float = 0.0
    one_time_charges: dict[str, ChargeLine] = Field(default_factory=dict)
    one_time_total: float = 0.0
    refundable_deposits: float = 0.0
    recurring_charges: dict[str, ChargeLine] = Field(default_factory=dict)
    recurring_monthly_total: float = 0.0
    recurring_total: float = 0.0
    subtotal: float = 0.0
    total_payable: float = 0.0
    total_non_refundable: float = 0.0
    move_in_cost: float = 0.0

    @field_validator(
        "base_room_charges",
        "discount_applied",
        "discount_percentage",
        "room_charges_after_discount",
        "vat_amount",
        "vat_rate",
        "room_charges_with_vat",
        "price_per_bed_per_month",
        "price_per_bed_per_month_with_vat",
        "monthly_rent",
        "monthly_rent_before_vat",
        "monthly_rent_vat",
        "one_time_total",
        "refundable_deposits",
        "recurring_monthly_total",
        "recurring_total",
        "subtotal",
        "total_payable",
        "total_non_refundable",
        "move_in_cost",
        mode="before",
    )
    @classmethod
    def null_amount_is_zero(cls, value: Any) -> Any:
        # The pricing service sends null for amounts it has not computed.
        return 0.0 if value is None else value


class AvailableCharges(BaseModel):
    """Optional charges a tenant can pick, with the service's defaults."""

    model_config = ConfigDict(extra="ignore")

    one_time: dict[str, ChargeLine] = Field(default_factory=dict)
    recurring: dict[str, ChargeLine] = Field(default_factory=dict)
    default_one_time: list[str] = Field(default_factory=list)
    default_recurring: list[str] = Field(default_factory=list)


class PricingSummary(BaseModel):
    """Headline figures shown on a room card."""

    model_config = ConfigDict(extra="ignore")

    price_per_bed_per_month: float
    monthly_rent: float
    security_deposit: float
    registration_fee: float
    cleaning_fee_monthly: float
    estimated_move_in_cost: float


class PricingCalculationBreakdown(BaseModel):
    monthly_rent: float
    total_rent: float
    deposit: float
    service_fee: float
    discount: float


class PricingCalculation(BaseModel):
    """Server-side booking price for a room and stay length."""

    model_config = ConfigDict(extra="ignore")

    base_rent: float
    duration_months: int
    deposit_amount: float
    service_fee: float
    discount_amount: float
    subtotal: float
    total_amount: float
    breakdown: PricingCalculationBreakdown


class Installment(BaseModel):
    installment_number: int
    amount: float
    due_date: date


class InstallmentPlan(BaseModel):
    """Server-side split of a booking total into dated installments."""

    model_config = ConfigDict(extra="ignore")

    total_amount: float
    deposit_amount: float
    remaining_amount: float
    number_of_installments: int
    installment_amount: float
    installments: list[Installment] = Field(default_factory=list)


class MoveInBreakdown(BaseModel):
    """Formatted move-in cost lines for display."""

    first_month_rent: str
    security_deposit: str
    registration_fee: str
    cleaning_fee: str
    total: str
