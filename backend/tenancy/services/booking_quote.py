"""Booking quote service — fetches comprehensive pricing and runs the calculator."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from tenancy.calculator import (
    calculate_rental_costs,
    parse_duration_months,
    parse_move_in_date,
    parse_payment_plan,
)
from tenancy.exceptions import InvalidArgumentError, PricingApiError, TenancyError
from tenancy.models.enums import DurationType, PaymentPlan, QuoteStatus
from tenancy.models.quote import BookingQuote
from tenancy.pricing import rental_inputs_from_pricing

if TYPE_CHECKING:
    from tenancy.models.pricing import ComprehensivePricing
    from tenancy.services.pricing_client import PricingApiClient

logger = logging.getLogger(__name__)

UNAVAILABLE_PREFIX = "Unable to calculate pricing"


class BookingQuoteService:
    """Combines the pricing API and the local rental cost calculator.

    Failures never disappear: an API or calculation error yields a quote with
    status ``unavailable`` and a message, while missing selections yield
    ``not_loaded``.
    """

    def __init__(self, client: PricingApiClient) -> None:
        self._client = client

    def fetch_pricing(self, room_id: int, duration_months: int) -> ComprehensivePricing:
        """Load comprehensive pricing for a single bed and the given stay length."""
        return self._client.calculate_comprehensive_pricing(
            room_id,
            beds=1,
            duration_type=DurationType.from_months(duration_months),
            custom_months=duration_months,
        )

    def quote(
        self,
        room_id: int,
        move_in_date: date | str | None,
        duration_months: int | None,
        payment_plan: PaymentPlan | str = PaymentPlan.MONTHLY,
        fallback_rent: float | None = None,
    ) -> BookingQuote:
        """Fetch pricing for the selection and compute its rental costs.

        The selection is validated before the pricing API is called.
        """
        if move_in_date is None or duration_months is None:
            return self._not_loaded(room_id, payment_plan)

        moved_in: date | None = None
        try:
            moved_in = parse_move_in_date(move_in_date)
            months = parse_duration_months(duration_months)
            parse_payment_plan(payment_plan)
        except InvalidArgumentError as exc:
            logger.warning("Invalid booking selection for room %s: %s", room_id, exc)
            return self.unavailable_quote(
                room_id, moved_in, duration_months, payment_plan, None, exc
            )

        try:
            pricing = self.fetch_pricing(room_id, months)
        except PricingApiError as exc:
            logger.exception("Pricing API error for room %s", room_id)
            return self.unavailable_quote(room_id, moved_in, months, payment_plan, None, exc)

        return self.quote_with_pricing(
            room_id,
            pricing,
            moved_in,
            months,
            payment_plan,
            fallback_rent=fallback_rent,
        )

    def quote_with_pricing(
        self,
        room_id: int,
        pricing: ComprehensivePricing | None,
        move_in_date: date | str | None,
        duration_months: int | None,
        payment_plan: PaymentPlan | str = PaymentPlan.MONTHLY,
        fallback_rent: float | None = None,
    ) -> BookingQuote:
        """Compute a quote from already-loaded pricing (no API call)."""
        if pricing is None or move_in_date is None or duration_months is None:
            return self._not_loaded(room_id, payment_plan)

        moved_in: date | None = None
        try:
            moved_in = parse_move_in_date(move_in_date)
            inputs = rental_inputs_from_pricing(pricing, fallback_rent=fallback_rent)
            result = calculate_rental_costs(
                inputs.monthly_rent,
                inputs.deposit,
                inputs.one_time_fees,
                moved_in,
                duration_months,
                payment_plan,
                inputs.monthly_service_charges,
            )
        except TenancyError as exc:
            logger.exception("Rental cost calculation failed for room %s", room_id)
            return self.unavailable_quote(
                room_id, moved_in, duration_months, payment_plan, pricing, exc
            )

        return BookingQuote(
            status=QuoteStatus.READY,
            room_id=room_id,
            move_in_date=result.move_in_date,
            duration_months=result.duration_months,
            payment_plan=result.payment_plan,
            pricing=pricing,
            result=result,
        )

    # ------------------------------------------------------------------
    # Quote builders
    # ------------------------------------------------------------------

    @staticmethod
    def _plan_or_default(payment_plan: PaymentPlan | str) -> PaymentPlan:
        try:
            return PaymentPlan(payment_plan)
        except ValueError:
            return PaymentPlan.MONTHLY

    def _not_loaded(self, room_id: int, payment_plan: PaymentPlan | str) -> BookingQuote:
        return BookingQuote(
            status=QuoteStatus.NOT_LOADED,
            room_id=room_id,
            payment_plan=self._plan_or_default(payment_plan),
        )

    def unavailable_quote(
        self,
        room_id: int,
        move_in_date: date | None,
        duration_months: int | None,
        payment_plan: PaymentPlan | str,
        pricing: ComprehensivePricing | None,
        exc: Exception,
    ) -> BookingQuote:
        return BookingQuote(
            status=QuoteStatus.UNAVAILABLE,
            room_id=room_id,
            move_in_date=move_in_date,
            duration_months=duration_months if isinstance(duration_months, int) else None,
            payment_plan=self._plan_or_default(payment_plan),
            pricing=pricing,
            error=f"{UNAVAILABLE_PREFIX}: {exc}",
        )


class BookingQuoteSession:
    """Tracks one booking form's selection and recomputes on every change.

    Pricing is refetched only when the stay length changes; a new move-in
    date or payment plan just reruns the calculator against the cached
    pricing. Each update replaces the previous quote.
    """

    def __init__(
        self,
        service: BookingQuoteService,
        room_id: int,
        fallback_rent: float | None = None,
    ) -> None:
        self._service = service
        self.room_id = room_id
        self.fallback_rent = fallback_rent
        self.move_in_date: date | str | None = None
        self.duration_months: int | None = None
        self.payment_plan: PaymentPlan | str = PaymentPlan.MONTHLY
        self._pricing: ComprehensivePricing | None = None
        self._pricing_months: int | None = None
        self._pricing_error: PricingApiError | None = None
        self.quote = BookingQuote(status=QuoteStatus.NOT_LOADED, room_id=room_id)

    @property
    def pricing(self) -> ComprehensivePricing | None:
        return self._pricing

    def update(
        self,
        *,
        move_in_date: date | str | None = None,
        duration_months: int | None = None,
        payment_plan: PaymentPlan | str | None = None,
    ) -> BookingQuote:
        """Apply changed fields and return the recomputed quote."""
        if move_in_date is not None:
            self.move_in_date = move_in_date
        if duration_months is not None:
            self.duration_months = duration_months
        if payment_plan is not None:
            self.payment_plan = payment_plan

        if self.duration_months is not None:
            try:
                months = parse_duration_months(self.duration_months)
            except InvalidArgumentError as exc:
                self.quote = self._service.unavailable_quote(
                    self.room_id,
                    self._selected_date(),
                    self.duration_months,
                    self.payment_plan,
                    None,
                    exc,
                )
                return self.quote
            if months != self._pricing_months:
                self._refresh_pricing(months)

        if self._pricing_error is not None:
            self.quote = self._service.unavailable_quote(
                self.room_id,
                self._selected_date(),
                self.duration_months,
                self.payment_plan,
                None,
                self._pricing_error,
            )
        else:
            self.quote = self._service.quote_with_pricing(
                self.room_id,
                self._pricing,
                self.move_in_date,
                self.duration_months,
                self.payment_plan,
                fallback_rent=self.fallback_rent,
            )
        return self.quote

    def _selected_date(self) -> date | None:
        if self.move_in_date is None:
            return None
        try:
            return parse_move_in_date(self.move_in_date)
        except InvalidArgumentError:
            return None

    def _refresh_pricing(self, duration_months: int) -> None:
        try:
            self._pricing = self._service.fetch_pricing(self.room_id, duration_months)
        except PricingApiError as exc:
            logger.exception("Pricing API error for room %s", self.room_id)
            self._pricing = None
            self._pricing_months = None
            self._pricing_error = exc
            return
        self._pricing_months = duration_months
        self._pricing_error = None
