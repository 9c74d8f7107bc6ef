"""Rental cost calculator for bookings that start part-way through a month.

The calculator turns a monthly rent, a refundable deposit, one-time fees and
recurring service charges into the amounts a tenant pays at signing and on
the next billing cycle:

1. **Month length**: the true number of days in the move-in month
   (February honours leap years).
2. **Active days**: move-in day through month end, both inclusive.
3. **Proration**: ``monthly_rent * active_days / days_in_month``, so a
   move-in on the 1st is charged exactly one month's rent.
4. **Payment plan**: ``monthly`` collects the prorated month plus deposit
   and fees now and full rent plus service charges on the 1st of the next
   month; ``upfront`` also collects the remaining ``duration - 1`` months of
   rent now and bills nothing further.

All arithmetic runs on ``Decimal`` and every monetary output is rounded
half-up to two decimals.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from tenancy.exceptions import ComputationOverflowError, InvalidArgumentError
from tenancy.models.enums import PaymentPlan
from tenancy.models.rental import (
    ProratedRent,
    RentalCostBreakdown,
    RentalCostResult,
    RentalCosts,
)

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
_ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Rounding and validation
# ---------------------------------------------------------------------------


def round_currency(value: Decimal | float | int) -> Decimal:
    """Round a monetary value half-up to two decimal places."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        msg = f"Cannot round non-finite amount {value!r}"
        raise ComputationOverflowError(msg)
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        msg = f"Amount {value!r} is too large to round to cents"
        raise ComputationOverflowError(msg) from None


def _to_amount(name: str, value: object) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        msg = f"{name} must be a number, got {value!r}"
        raise InvalidArgumentError(msg)
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        msg = f"{name} must be a finite number, got {value!r}"
        raise InvalidArgumentError(msg)
    if amount < 0:
        msg = f"{name} must not be negative, got {value!r}"
        raise InvalidArgumentError(msg)
    return amount


def parse_duration_months(value: object) -> int:
    """Validate a stay length: a whole number of months, at least one."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"duration_months must be a whole number of months, got {value!r}"
        raise InvalidArgumentError(msg)
    if value < 1:
        msg = f"duration_months must be at least 1, got {value}"
        raise InvalidArgumentError(msg)
    return value


def parse_payment_plan(value: object) -> PaymentPlan:
    """Resolve a plan name such as ``" Upfront "`` to a PaymentPlan."""
    if isinstance(value, str):
        value = value.strip().lower()
    try:
        return PaymentPlan(value)
    except ValueError:
        allowed = ", ".join(p.value for p in PaymentPlan)
        msg = f"payment_plan must be one of {allowed}, got {value!r}"
        raise InvalidArgumentError(msg) from None


def _checked(name: str, value: Decimal) -> Decimal:
    if not value.is_finite() or value < 0:
        msg = f"{name} evaluated to {value}, expected a finite non-negative amount"
        raise ComputationOverflowError(msg)
    return value


def parse_move_in_date(value: date | str) -> date:
    """Parse an ISO date (``2024-01-16``) or ISO datetime string into a date.

    ``datetime`` values are truncated to their date; ``date`` values pass
    through unchanged.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        msg = f"move_in_date must be an ISO date string, got {value!r}"
        raise InvalidArgumentError(msg)

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        msg = f"move_in_date is not a valid calendar date: {value!r}"
        raise InvalidArgumentError(msg) from None


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year``."""
    return calendar.monthrange(year, month)[1]


def get_next_payment_date(move_in_date: date | str) -> date:
    """First day of the month after the move-in month."""
    moved_in = parse_move_in_date(move_in_date)
    if moved_in.month == 12:
        return date(moved_in.year + 1, 1, 1)
    return date(moved_in.year, moved_in.month + 1, 1)


def booking_end_date(move_in_date: date | str, duration_months: int) -> date:
    """Return the move-in date shifted forward by ``duration_months``.

    The day is clamped to the length of the target month, so a stay starting
    on 31 January for one month ends on the last day of February.
    """
    moved_in = parse_move_in_date(move_in_date)
    months = parse_duration_months(duration_months)
    month_index = moved_in.month - 1 + months
    year = moved_in.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moved_in.day, days_in_month(year, month))
    return date(year, month, day)


# ---------------------------------------------------------------------------
# Calculations
# ---------------------------------------------------------------------------


def calculate_prorated_rent(monthly_rent: float, move_in_date: date | str) -> ProratedRent:
    """Rent owed for the partial month containing ``move_in_date``."""
    rent = _to_amount("monthly_rent", monthly_rent)
    moved_in = parse_move_in_date(move_in_date)
    month_days = days_in_month(moved_in.year, moved_in.month)
    active_days = month_days - moved_in.day + 1
    prorated = _checked("prorated_amount", round_currency(rent * active_days / month_days))
    return ProratedRent(
        prorated_amount=float(prorated),
        active_days=active_days,
        days_in_month=month_days,
    )


def calculate_rental_costs(
    monthly_rent: float,
    deposit: float,
    one_time_fees: float,
    move_in_date: date | str,
    duration_months: int,
    payment_plan: PaymentPlan | str = PaymentPlan.MONTHLY,
    monthly_service_charges: float = 0.0,
) -> RentalCostResult:
    """Compute the move-in cost and next recurring payment for a booking.

    Args:
        monthly_rent: Standard monthly rent.
        deposit: Refundable security deposit, collected at move-in.
        one_time_fees: Non-refundable fees collected at move-in.
        move_in_date: First billed day, as a ``date`` or ISO string.
        duration_months: Length of the agreement in whole months.
        payment_plan: ``"monthly"`` or ``"upfront"``.
        monthly_service_charges: Recurring charges billed with rent.

    Returns:
        A RentalCostResult with the proration breakdown and plan totals.

    Raises:
        InvalidArgumentError: If any input violates its constraint.
        ComputationOverflowError: If a computed amount is not finite.
    """
    rent = _to_amount("monthly_rent", monthly_rent)
    deposit_amount = round_currency(_to_amount("deposit", deposit))
    fees = round_currency(_to_amount("one_time_fees", one_time_fees))
    service = round_currency(_to_amount("monthly_service_charges", monthly_service_charges))
    moved_in = parse_move_in_date(move_in_date)
    months = parse_duration_months(duration_months)
    plan = parse_payment_plan(payment_plan)

    month_days = days_in_month(moved_in.year, moved_in.month)
    if month_days <= 0:
        msg = f"Month {moved_in:%Y-%m} has no days"
        raise ComputationOverflowError(msg)
    active_days = month_days - moved_in.day + 1

    daily_rate = _checked("daily_rate", rent / month_days)
    prorated = _checked(
        "prorated_first_month",
        round_currency(rent * active_days / month_days),
    )

    if plan is PaymentPlan.UPFRONT:
        remaining = _checked("remaining_months_cost", round_currency(rent * (months - 1)))
        next_payment = _ZERO
    else:
        remaining = _ZERO
        next_payment = _checked("next_monthly_payment", round_currency(rent) + service)

    total = _checked("total_move_in_cost", prorated + deposit_amount + fees + remaining)

    logger.debug(
        "Rental costs for %s (%d/%d days, %s plan, %d months): move-in %s",
        moved_in.isoformat(),
        active_days,
        month_days,
        plan.value,
        months,
        total,
    )

    return RentalCostResult(
        payment_plan=plan,
        duration_months=months,
        move_in_date=moved_in,
        breakdown=RentalCostBreakdown(
            days_in_month=month_days,
            active_days=active_days,
            daily_rate=float(round_currency(daily_rate)),
            prorated_first_month=float(prorated),
            remaining_months_cost=float(remaining),
        ),
        costs=RentalCosts(
            monthly_rent=float(round_currency(rent)),
            deposit=float(deposit_amount),
            fees=float(fees),
            monthly_service_charges=float(service),
            total_move_in_cost=float(total),
            next_monthly_payment=float(next_payment),
        ),
        next_payment_date=get_next_payment_date(moved_in),
    )


def estimate_move_in_cost(
    monthly_rent: float,
    security_deposit_percentage: float = 100,
    registration_fee: float = 1000,
    cleaning_fee: float = 300,
) -> float:
    """Rough move-in cost from room data when the pricing API is unavailable.

    First month's rent plus a deposit of ``security_deposit_percentage`` of
    rent, plus registration and cleaning fees.
    """
    rent = _to_amount("monthly_rent", monthly_rent)
    pct = _to_amount("security_deposit_percentage", security_deposit_percentage)
    registration = _to_amount("registration_fee", registration_fee)
    cleaning = _to_amount("cleaning_fee", cleaning_fee)
    deposit = rent * pct / 100
    return float(round_currency(rent + deposit + registration + cleaning))
