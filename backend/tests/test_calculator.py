"""Tests for the rental cost calculator — proration, plans and validation."""

from __future__ import annotations

import math
from datetime import date
from decimal import Decimal

import pytest

from tenancy.calculator import (
    booking_end_date,
    calculate_prorated_rent,
    calculate_rental_costs,
    days_in_month,
    estimate_move_in_cost,
    get_next_payment_date,
    parse_move_in_date,
    round_currency,
)
from tenancy.exceptions import (
    ComputationOverflowError,
    InvalidArgumentError,
    TenancyError,
)
from tenancy.models.enums import PaymentPlan
from tenancy.models.rental import RentalCostResult

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _monetary_fields(result: RentalCostResult) -> list[float]:
    return [
        result.breakdown.daily_rate,
        result.breakdown.prorated_first_month,
        result.breakdown.remaining_months_cost,
        result.costs.monthly_rent,
        result.costs.deposit,
        result.costs.fees,
        result.costs.monthly_service_charges,
        result.costs.total_move_in_cost,
        result.costs.next_monthly_payment,
    ]


# ---------------------------------------------------------------------------
# Worked scenarios
# ---------------------------------------------------------------------------


class TestMonthlyPlanMidMonth:
    """15,000/month, moving in on 16 January 2024 on the monthly plan."""

    @pytest.fixture()
    def result(self) -> RentalCostResult:
        return calculate_rental_costs(
            monthly_rent=15000,
            deposit=15000,
            one_time_fees=1000,
            move_in_date="2024-01-16",
            duration_months=6,
            payment_plan="monthly",
            monthly_service_charges=500,
        )

    def test_proration_breakdown(self, result: RentalCostResult) -> None:
        assert result.breakdown.days_in_month == 31
        assert result.breakdown.active_days == 16
        assert result.breakdown.daily_rate == pytest.approx(483.87)
        assert result.breakdown.prorated_first_month == pytest.approx(7741.94)
        assert result.breakdown.remaining_months_cost == 0.0

    def test_move_in_cost_is_prorated_rent_deposit_and_fees(
        self, result: RentalCostResult
    ) -> None:
        assert result.costs.total_move_in_cost == pytest.approx(23741.94)

    def test_next_payment_is_full_rent_plus_service_charges(
        self, result: RentalCostResult
    ) -> None:
        assert result.costs.next_monthly_payment == 15500.0
        assert result.next_payment_amount == 15500.0
        assert result.next_payment_date == date(2024, 2, 1)

    def test_inputs_are_echoed(self, result: RentalCostResult) -> None:
        assert result.costs.monthly_rent == 15000.0
        assert result.costs.deposit == 15000.0
        assert result.costs.fees == 1000.0
        assert result.costs.monthly_service_charges == 500.0
        assert result.payment_plan is PaymentPlan.MONTHLY
        assert result.duration_months == 6
        assert result.move_in_date == date(2024, 1, 16)
        assert result.is_prorated is True

    def test_serializes_next_payment_fields(self, result: RentalCostResult) -> None:
        data = result.model_dump(mode="json")
        assert data["next_payment_date"] == "2024-02-01"
        assert data["next_payment_amount"] == 15500.0


class TestUpfrontPlan:
    def test_first_of_month_upfront(self) -> None:
        result = calculate_rental_costs(
            monthly_rent=10000,
            deposit=10000,
            one_time_fees=0,
            move_in_date="2024-03-01",
            duration_months=3,
            payment_plan="upfront",
        )

        assert result.breakdown.prorated_first_month == 10000.0
        assert result.breakdown.remaining_months_cost == 20000.0
        assert result.costs.total_move_in_cost == 40000.0
        assert result.costs.next_monthly_payment == 0.0
        assert result.is_prorated is False

    def test_single_month_upfront_has_no_remaining_months(self) -> None:
        result = calculate_rental_costs(
            monthly_rent=12000,
            deposit=12000,
            one_time_fees=500,
            move_in_date="2024-04-11",
            duration_months=1,
            payment_plan=PaymentPlan.UPFRONT,
        )

        assert result.breakdown.days_in_month == 30
        assert result.breakdown.active_days == 20
        assert result.breakdown.prorated_first_month == 8000.0
        assert result.breakdown.remaining_months_cost == 0.0
        assert result.costs.total_move_in_cost == 8000.0 + 12000.0 + 500.0

    def test_upfront_never_bills_service_charges_again(self) -> None:
        result = calculate_rental_costs(
            10000, 10000, 1000, "2024-05-10", 6, "upfront", monthly_service_charges=800
        )

        assert result.costs.next_monthly_payment == 0.0
        assert result.next_payment_amount == 0.0
        assert result.costs.monthly_service_charges == 800.0

    def test_plan_name_is_case_insensitive(self) -> None:
        result = calculate_rental_costs(10000, 0, 0, "2024-05-01", 2, " Upfront ")
        assert result.payment_plan is PaymentPlan.UPFRONT


# ---------------------------------------------------------------------------
# Calendar edge cases
# ---------------------------------------------------------------------------


class TestCalendarEdges:
    def test_leap_year_february(self) -> None:
        result = calculate_rental_costs(29000, 0, 0, "2024-02-15", 3)
        assert result.breakdown.days_in_month == 29
        assert result.breakdown.active_days == 15
        assert result.breakdown.prorated_first_month == 15000.0

    def test_non_leap_year_february(self) -> None:
        result = calculate_rental_costs(28000, 0, 0, "2023-02-15", 3)
        assert result.breakdown.days_in_month == 28
        assert result.breakdown.active_days == 14
        assert result.breakdown.prorated_first_month == 14000.0

    def test_last_day_of_month_charges_one_day(self) -> None:
        result = calculate_rental_costs(15000, 15000, 0, "2024-01-31", 6)
        assert result.breakdown.active_days == 1
        assert result.breakdown.prorated_first_month == pytest.approx(483.87)
        assert result.next_payment_date == date(2024, 2, 1)

    def test_december_move_in_rolls_over_year(self) -> None:
        result = calculate_rental_costs(9000, 0, 0, "2024-12-15", 2)
        assert result.next_payment_date == date(2025, 1, 1)

    def test_accepts_date_object(self) -> None:
        result = calculate_rental_costs(9000, 0, 0, date(2024, 6, 1), 2)
        assert result.breakdown.prorated_first_month == 9000.0

    def test_accepts_iso_datetime_string(self) -> None:
        result = calculate_rental_costs(9000, 0, 0, "2024-06-16T10:30:00", 2)
        assert result.move_in_date == date(2024, 6, 16)
        assert result.breakdown.active_days == 15


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    @pytest.mark.parametrize("rent", [0, 1, 999.99, 12345.67, 15000, 250000])
    @pytest.mark.parametrize(
        "move_in", ["2023-02-01", "2024-02-01", "2024-04-01", "2024-07-01", "2024-12-01"]
    )
    def test_first_of_month_charges_full_rent(self, rent: float, move_in: str) -> None:
        result = calculate_rental_costs(rent, 0, 0, move_in, 3)
        assert result.breakdown.active_days == result.breakdown.days_in_month
        assert result.breakdown.prorated_first_month == pytest.approx(rent, abs=0.005)

    @pytest.mark.parametrize("year_month", [(2024, 1), (2024, 2), (2023, 2), (2024, 9)])
    def test_proration_grows_with_active_days(self, year_month: tuple[int, int]) -> None:
        year, month = year_month
        rent = 17500.0
        month_days = days_in_month(year, month)
        # Later move-in day means fewer active days.
        amounts = [
            calculate_rental_costs(rent, 0, 0, date(year, month, day), 1)
            .breakdown.prorated_first_month
            for day in range(month_days, 0, -1)
        ]
        assert amounts == sorted(amounts)
        assert amounts[-1] == pytest.approx(rent)

    @pytest.mark.parametrize("duration", [2, 3, 6, 12, 24])
    @pytest.mark.parametrize("move_in", ["2024-01-16", "2024-02-29", "2024-11-01"])
    def test_upfront_collects_at_least_monthly(self, duration: int, move_in: str) -> None:
        args = (14000, 14000, 1500, move_in, duration)
        monthly = calculate_rental_costs(*args, "monthly", 600)
        upfront = calculate_rental_costs(*args, "upfront", 600)
        assert upfront.costs.total_move_in_cost >= monthly.costs.total_move_in_cost

    @pytest.mark.parametrize("plan", ["monthly", "upfront"])
    @pytest.mark.parametrize("rent", [0, 0.01, 7333.33, 15000])
    @pytest.mark.parametrize("day", [1, 2, 15, 28])
    def test_all_monetary_outputs_non_negative(self, plan: str, rent: float, day: int) -> None:
        result = calculate_rental_costs(rent, 0, 0, date(2024, 2, day), 4, plan, 0)
        assert all(value >= 0 for value in _monetary_fields(result))

    @pytest.mark.parametrize("day", [1, 10, 20, 31])
    def test_monthly_move_in_excludes_later_rent(self, day: int) -> None:
        result = calculate_rental_costs(15000, 5000, 700, date(2024, 3, day), 12, "monthly", 400)
        expected = result.breakdown.prorated_first_month + 5000 + 700
        assert result.costs.total_move_in_cost == pytest.approx(expected)

    def test_repeated_calls_are_identical(self) -> None:
        first = calculate_rental_costs(15000, 15000, 1000, "2024-01-16", 6, "monthly", 500)
        second = calculate_rental_costs(15000, 15000, 1000, "2024-01-16", 6, "monthly", 500)
        assert first == second


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestInvalidInputs:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"monthly_rent": -1},
            {"deposit": -0.01},
            {"one_time_fees": -50},
            {"monthly_service_charges": -5},
            {"monthly_rent": math.nan},
            {"monthly_rent": math.inf},
            {"deposit": "1000"},
            {"monthly_rent": None},
            {"monthly_rent": True},
            {"duration_months": 0},
            {"duration_months": -3},
            {"duration_months": 2.5},
            {"duration_months": True},
            {"payment_plan": "biweekly"},
            {"payment_plan": None},
            {"move_in_date": "2024-02-30"},
            {"move_in_date": "not a date"},
            {"move_in_date": ""},
            {"move_in_date": 20240116},
        ],
    )
    def test_rejects_invalid_argument(self, kwargs: dict[str, object]) -> None:
        params: dict[str, object] = {
            "monthly_rent": 15000,
            "deposit": 15000,
            "one_time_fees": 1000,
            "move_in_date": "2024-01-16",
            "duration_months": 6,
            "payment_plan": "monthly",
            "monthly_service_charges": 500,
        }
        params.update(kwargs)
        with pytest.raises(InvalidArgumentError):
            calculate_rental_costs(**params)  # type: ignore[arg-type]

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="monthly_rent must not be negative"):
            calculate_rental_costs(-1, 0, 0, "2024-01-16", 6)

    def test_huge_rent_is_overflow_not_raw_decimal_error(self) -> None:
        with pytest.raises(ComputationOverflowError):
            calculate_rental_costs(1e26, 0, 0, "2024-01-16", 2)

    def test_error_hierarchy(self) -> None:
        assert issubclass(InvalidArgumentError, TenancyError)
        assert issubclass(ComputationOverflowError, TenancyError)
        assert issubclass(ComputationOverflowError, ArithmeticError)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestRoundCurrency:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (2.675, Decimal("2.68")),
            (0.125, Decimal("0.13")),
            (0.124, Decimal("0.12")),
            (Decimal("7741.935"), Decimal("7741.94")),
            (100, Decimal("100.00")),
        ],
    )
    def test_rounds_half_up(self, value: float | Decimal, expected: Decimal) -> None:
        assert round_currency(value) == expected

    def test_non_finite_raises_overflow(self) -> None:
        with pytest.raises(ComputationOverflowError):
            round_currency(Decimal("Infinity"))

    def test_too_large_for_cents_raises_overflow(self) -> None:
        with pytest.raises(ComputationOverflowError, match="too large"):
            round_currency(Decimal("1e26"))

    def test_largest_roundable_amount(self) -> None:
        assert round_currency(Decimal("1e25")) == Decimal("1e25")


class TestCalendarHelpers:
    @pytest.mark.parametrize(
        ("year", "month", "expected"),
        [(2024, 1, 31), (2024, 2, 29), (2023, 2, 28), (1900, 2, 28), (2000, 2, 29), (2024, 4, 30)],
    )
    def test_days_in_month(self, year: int, month: int, expected: int) -> None:
        assert days_in_month(year, month) == expected

    def test_next_payment_date(self) -> None:
        assert get_next_payment_date("2024-01-16") == date(2024, 2, 1)
        assert get_next_payment_date(date(2023, 12, 31)) == date(2024, 1, 1)

    def test_booking_end_date_keeps_day(self) -> None:
        assert booking_end_date("2024-01-16", 6) == date(2024, 7, 16)

    def test_booking_end_date_clamps_to_month_end(self) -> None:
        assert booking_end_date("2024-01-31", 1) == date(2024, 2, 29)
        assert booking_end_date("2023-01-31", 1) == date(2023, 2, 28)

    def test_booking_end_date_crosses_years(self) -> None:
        assert booking_end_date("2024-11-15", 14) == date(2026, 1, 15)

    def test_booking_end_date_rejects_zero_months(self) -> None:
        with pytest.raises(InvalidArgumentError):
            booking_end_date("2024-01-16", 0)

    def test_parse_move_in_date_rejects_garbage(self) -> None:
        with pytest.raises(InvalidArgumentError, match="not a valid calendar date"):
            parse_move_in_date("16/01/2024")


class TestProratedRent:
    def test_mid_month(self) -> None:
        prorated = calculate_prorated_rent(15000, "2024-01-16")
        assert prorated.prorated_amount == pytest.approx(7741.94)
        assert prorated.active_days == 16
        assert prorated.days_in_month == 31

    def test_first_of_month(self) -> None:
        prorated = calculate_prorated_rent(12000, "2024-09-01")
        assert prorated.prorated_amount == 12000.0
        assert prorated.active_days == prorated.days_in_month == 30

    def test_negative_rent_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            calculate_prorated_rent(-10, "2024-09-01")


class TestEstimateMoveInCost:
    def test_defaults(self) -> None:
        # rent + 100% deposit + 1000 registration + 300 cleaning
        assert estimate_move_in_cost(10000) == 21300.0

    def test_custom_deposit_percentage(self) -> None:
        assert estimate_move_in_cost(10000, 50, 0, 0) == 15000.0

    def test_rejects_negative(self) -> None:
        with pytest.raises(InvalidArgumentError):
            estimate_move_in_cost(10000, registration_fee=-1)
