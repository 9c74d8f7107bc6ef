"""FastAPI application — create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from tenancy.config import Settings, configure_logging, load_env_files

load_env_files()

from tenancy.calculator import calculate_rental_costs, estimate_move_in_cost
from tenancy.exceptions import ComputationOverflowError, InvalidArgumentError
from tenancy.formatting import format_currency
from tenancy.models.rental import RentalCostRequest  # noqa: TCH001 (FastAPI resolves at runtime)
from tenancy.services.booking_quote import UNAVAILABLE_PREFIX

if TYPE_CHECKING:
    from tenancy.services.booking_quote import BookingQuoteService

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def create_app(
    *,
    quote_service: BookingQuoteService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    quote_service
        Optional pre-built quote service for dependency injection (e.g.
        tests). If not provided, one is created from the settings on the
        first quote request.
    settings
        Optional settings; read from the environment when omitted.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Tenancy", version=API_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject mocks
    app.state.quote_service = quote_service
    app.state.settings = settings

    def _get_quote_service() -> BookingQuoteService:
        svc: BookingQuoteService | None = app.state.quote_service
        if svc is not None:
            return svc
        from tenancy.factory import create_default_quote_service

        svc = create_default_quote_service(settings)
        app.state.quote_service = svc
        return svc

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": API_VERSION}

    # ------------------------------------------------------------------
    # POST /api/rental-costs
    # ------------------------------------------------------------------

    @app.post("/api/rental-costs")
    def rental_costs(request: RentalCostRequest) -> dict[str, Any]:
        try:
            result = calculate_rental_costs(
                request.monthly_rent,
                request.deposit,
                request.one_time_fees,
                request.move_in_date,
                request.duration_months,
                request.payment_plan,
                request.monthly_service_charges,
            )
        except InvalidArgumentError as exc:
            logger.info("Rejected rental cost request: %s", exc)
            raise HTTPException(
                status_code=422, detail=f"{UNAVAILABLE_PREFIX}: {exc}"
            ) from exc
        except ComputationOverflowError as exc:
            logger.exception("Rental cost computation overflowed")
            raise HTTPException(
                status_code=500, detail=f"{UNAVAILABLE_PREFIX}: {exc}"
            ) from exc

        return {
            "result": result.model_dump(mode="json"),
            "summary": result.to_summary_dict(settings.currency),
        }

    # ------------------------------------------------------------------
    # GET /api/rooms/{room_id}/quote
    # ------------------------------------------------------------------

    @app.get("/api/rooms/{room_id}/quote")
    def room_quote(
        room_id: int,
        move_in_date: str | None = None,
        duration_months: int | None = None,
        payment_plan: str = "monthly",
        fallback_rent: float | None = None,
    ) -> dict[str, Any]:
        service = _get_quote_service()
        quote = service.quote(
            room_id,
            move_in_date,
            duration_months,
            payment_plan,
            fallback_rent=fallback_rent,
        )
        payload = quote.model_dump(mode="json")
        payload["is_ready"] = quote.is_ready
        if quote.result is not None:
            payload["summary"] = quote.result.to_summary_dict(settings.currency)
        return payload

    # ------------------------------------------------------------------
    # GET /api/estimate-move-in
    # ------------------------------------------------------------------

    @app.get("/api/estimate-move-in")
    def estimate_move_in(
        monthly_rent: float,
        security_deposit_percentage: float = 100,
        registration_fee: float = 1000,
        cleaning_fee: float = 300,
    ) -> dict[str, Any]:
        try:
            amount = estimate_move_in_cost(
                monthly_rent,
                security_deposit_percentage,
                registration_fee,
                cleaning_fee,
            )
        except InvalidArgumentError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except ComputationOverflowError as exc:
            logger.exception("Move-in estimate overflowed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {
            "estimated_move_in_cost": amount,
            "formatted": format_currency(amount, settings.currency),
        }

    return app
