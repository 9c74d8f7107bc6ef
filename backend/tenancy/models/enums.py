"""Enums for the tenancy domain models."""

from __future__ import annotations

from enum import StrEnum


class PaymentPlan(StrEnum):
    """Billing cadence selected for a booking."""

    MONTHLY = "monthly"
    UPFRONT = "upfront"


class DurationType(StrEnum):
    """Duration bucket the pricing API uses to pick discounts and charges."""

    MONTHLY = "monthly"
    SEMESTER = "semester"
    YEARLY = "yearly"

    @classmethod
    def from_months(cls, months: int) -> DurationType:
        """Map a stay length in months onto the pricing API's duration bucket.

        One month and anything under four months bill as monthly, four to
        eleven months as a semester, and twelve or more as yearly.
        """
        if months >= 12:
            return cls.YEARLY
        if months >= 4:
            return cls.SEMESTER
        return cls.MONTHLY


class QuoteStatus(StrEnum):
    """Lifecycle state of a booking quote."""

    NOT_LOADED = "not_loaded"
    READY = "ready"
    UNAVAILABLE = "unavailable"
