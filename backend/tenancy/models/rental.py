"""Rental cost input and output models."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, computed_field

from tenancy.models.enums import PaymentPlan


class RentalCostBreakdown(BaseModel):
    """How the first, partial month was priced."""

    days_in_month: int = Field(ge=28, le=31)
    active_days: int = Field(ge=1, le=31)
    daily_rate: float = Field(ge=0)
    prorated_first_month: float = Field(ge=0)
    remaining_months_cost: float = Field(default=0.0, ge=0)


class RentalCosts(BaseModel):
    """Charge components echoed back for display, plus the two totals."""

    monthly_rent: float = Field(ge=0)
    deposit: float = Field(ge=0)
    fees: float = Field(ge=0)
    monthly_service_charges: float = Field(ge=0)
    total_move_in_cost: float = Field(ge=0)
    next_monthly_payment: float = Field(ge=0)


class RentalCostResult(BaseModel):
    """Complete output of the rental cost calculator.

    Recomputed on every input change and never persisted.
    """

    payment_plan: PaymentPlan
    duration_months: int = Field(ge=1)
    move_in_date: date
    breakdown: RentalCostBreakdown
    costs: RentalCosts
    next_payment_date: date

    @computed_field  # type: ignore[prop-decorator]
    @property
    def next_payment_amount(self) -> float:
        """Amount due on ``next_payment_date``; zero under the upfront plan."""
        return self.costs.next_monthly_payment

    @property
    def is_prorated(self) -> bool:
        """True when the tenant moves in after the first of the month."""
        return self.breakdown.active_days < self.breakdown.days_in_month

    def to_summary_dict(self, currency: str = "KES") -> dict[str, Any]:
        """Produce a flat dict of display strings for a booking UI."""
        from tenancy.formatting import format_currency, format_payment_date

        def money(amount: float) -> str:
            return format_currency(amount, currency)

        summary: dict[str, Any] = {
            "payment_plan": self.payment_plan.value,
            "monthly_rent_formatted": money(self.costs.monthly_rent),
            "total_move_in_cost_formatted": money(self.costs.total_move_in_cost),
            "prorated_first_month_formatted": money(self.breakdown.prorated_first_month),
            "deposit_formatted": money(self.costs.deposit),
            "fees_formatted": money(self.costs.fees),
            "is_prorated": self.is_prorated,
            "move_in_date_formatted": format_payment_date(self.move_in_date),
        }
        if self.is_prorated:
            summary["proration_note"] = (
                f"{self.breakdown.active_days} days at "
                f"{money(self.breakdown.daily_rate)}/day = "
                f"{money(self.breakdown.prorated_first_month)}"
            )
        if self.breakdown.remaining_months_cost > 0:
            summary["remaining_months_cost_formatted"] = money(
                self.breakdown.remaining_months_cost
            )
        if self.payment_plan is PaymentPlan.MONTHLY and self.costs.next_monthly_payment > 0:
            summary["next_payment_formatted"] = money(self.costs.next_monthly_payment)
            summary["next_payment_date_formatted"] = format_payment_date(
                self.next_payment_date
            )
        return summary


class ProratedRent(BaseModel):
    """Prorated rent for the partial month containing a move-in date."""

    prorated_amount: float = Field(ge=0)
    active_days: int = Field(ge=1, le=31)
    days_in_month: int = Field(ge=28, le=31)


class RentalCostRequest(BaseModel):
    """Request body for the rental cost endpoint.

    Constraints are enforced by the calculator so that bad values produce
    the same "unable to calculate pricing" response as any other failure.
    """

    monthly_rent: float
    deposit: float = 0.0
    one_time_fees: float = 0.0
    move_in_date: str
    duration_months: int
    payment_plan: str = PaymentPlan.MONTHLY.value
    monthly_service_charges: float = 0.0
