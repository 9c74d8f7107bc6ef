"""Booking quote model combining API pricing and the local calculation."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from tenancy.models.enums import PaymentPlan, QuoteStatus
from tenancy.models.pricing import ComprehensivePricing
from tenancy.models.rental import RentalCostResult


class BookingQuote(BaseModel):
    """What a booking page shows for the current room selection.

    ``status`` separates "nothing to show yet" (``not_loaded``) from
    "pricing could not be calculated" (``unavailable``). In the latter case
    ``error`` holds a user-facing message.
    """

    status: QuoteStatus
    room_id: int
    move_in_date: date | None = None
    duration_months: int | None = None
    payment_plan: PaymentPlan = PaymentPlan.MONTHLY
    pricing: ComprehensivePricing | None = None
    result: RentalCostResult | None = None
    error: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.status is QuoteStatus.READY and self.result is not None
