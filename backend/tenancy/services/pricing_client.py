"""Client for the property-management REST API's pricing endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from tenancy.exceptions import AuthenticationRequiredError, PricingApiError
from tenancy.models.enums import DurationType
from tenancy.models.pricing import (
    AvailableCharges,
    ComprehensivePricing,
    InstallmentPlan,
    PricingCalculation,
    PricingSummary,
)

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


@dataclass(frozen=True)
class Credentials:
    """Bearer token for the REST API, passed explicitly to the client."""

    token: str

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class PricingApiClient:
    """Thin wrapper over ``requests`` for the pricing API.

    Every response is expected in the ``{"data": ..., "message": ...,
    "success": ...}`` envelope; ``data`` is validated into the pricing models.
    """

    def __init__(
        self,
        base_url: str,
        credentials: Credentials | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._timeout = timeout
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # Pricing endpoints
    # ------------------------------------------------------------------

    def calculate_comprehensive_pricing(
        self,
        room_id: int,
        beds: int = 1,
        duration_type: DurationType = DurationType.MONTHLY,
        custom_months: int | None = None,
        one_time_charges: list[str] | None = None,
        recurring_charges: list[str] | None = None,
    ) -> ComprehensivePricing:
        payload: dict[str, Any] = {
            "beds": beds,
            "duration_type": DurationType(duration_type).value,
        }
        if custom_months is not None:
            payload["custom_months"] = custom_months
        if one_time_charges is not None:
            payload["one_time_charges"] = one_time_charges
        if recurring_charges is not None:
            payload["recurring_charges"] = recurring_charges
        data = self._request("POST", f"/pricing/room/{room_id}/comprehensive", json=payload)
        return self._parse(ComprehensivePricing, data)

    def get_available_charges(self) -> AvailableCharges:
        data = self._request("GET", "/pricing/charges")
        return self._parse(AvailableCharges, data)

    def calculate_booking_price(
        self,
        room_id: int,
        check_in_date: date,
        duration_months: int,
        number_of_occupants: int | None = None,
    ) -> PricingCalculation:
        payload: dict[str, Any] = {
            "room_id": room_id,
            "check_in_date": check_in_date.isoformat(),
            "duration_months": duration_months,
        }
        if number_of_occupants is not None:
            payload["number_of_occupants"] = number_of_occupants
        data = self._request("POST", "/pricing/calculate", json=payload)
        return self._parse(PricingCalculation, data)

    def get_room_pricing_breakdown(self, room_id: int) -> dict[str, Any]:
        return self._request("GET", f"/pricing/room/{room_id}/breakdown")

    def get_room_pricing_summary(self, room_id: int) -> PricingSummary:
        """Headline figures for a room card, including the estimated move-in cost."""
        data = self._request("GET", f"/pricing/room/{room_id}/summary")
        return self._parse(PricingSummary, data)

    def calculate_installments(
        self,
        total_amount: float,
        deposit_amount: float,
        number_of_installments: int,
        start_date: date,
    ) -> InstallmentPlan:
        payload = {
            "total_amount": total_amount,
            "deposit_amount": deposit_amount,
            "number_of_installments": number_of_installments,
            "start_date": start_date.isoformat(),
        }
        data = self._request("POST", "/pricing/installments", json=payload)
        return self._parse(InstallmentPlan, data)

    def get_pricing_factors(self) -> dict[str, Any]:
        return self._request("GET", "/pricing/factors")

    def suggest_room_price(
        self,
        room_type: str,
        apartment_id: int,
        floor: int | None = None,
        has_private_bathroom: bool | None = None,
        is_furnished: bool | None = None,
    ) -> float:
        payload: dict[str, Any] = {"room_type": room_type, "apartment_id": apartment_id}
        optional = {
            "floor": floor,
            "has_private_bathroom": has_private_bathroom,
            "is_furnished": is_furnished,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        data = self._request("POST", "/pricing/suggest", json=payload)
        try:
            return float(data["suggested_price"])
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Malformed suggested price payload: {data!r}"
            raise PricingApiError(msg) from exc

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        headers = {"Accept": "application/json"}
        if self._credentials is not None:
            headers.update(self._credentials.authorization_header())

        try:
            response = self._session.request(
                method, url, headers=headers, timeout=self._timeout, **kwargs
            )
        except requests.Timeout as exc:
            logger.warning("Pricing API timeout: %s %s", method, url)
            raise PricingApiError("Request timeout", status=408) from exc
        except requests.ConnectionError as exc:
            logger.warning("Pricing API unreachable: %s %s", method, url)
            raise PricingApiError(
                "Network error - unable to reach server", status=0
            ) from exc
        except requests.RequestException as exc:
            logger.warning("Pricing API request failed: %s %s: %s", method, url, exc)
            raise PricingApiError(f"Request failed: {exc}", status=0) from exc

        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: requests.Response) -> Any:
        content_type = response.headers.get("Content-Type", "")
        is_json = "application/json" in content_type

        if not response.ok:
            message = "An error occurred"
            errors: dict[str, list[str]] | None = None
            if is_json:
                try:
                    body = response.json()
                except ValueError:
                    body = {}
                if isinstance(body, dict):
                    message = body.get("message") or message
                    errors = body.get("errors")
            elif response.text:
                message = response.text

            logger.warning("Pricing API returned %d: %s", response.status_code, message)
            error_cls = (
                AuthenticationRequiredError if response.status_code == 401 else PricingApiError
            )
            raise error_cls(message, status=response.status_code, errors=errors)

        if not is_json:
            msg = f"Expected a JSON response, got {content_type or 'no content type'}"
            raise PricingApiError(msg, status=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            msg = "Pricing API returned invalid JSON"
            raise PricingApiError(msg, status=response.status_code) from exc

        if isinstance(body, dict) and "data" in body:
            if body.get("success") is False:
                raise PricingApiError(
                    body.get("message") or "Pricing request was not successful",
                    status=response.status_code,
                )
            return body["data"]
        return body

    @staticmethod
    def _parse(model: type[_ModelT], data: Any) -> _ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            msg = f"Malformed {model.__name__} payload from pricing API"
            raise PricingApiError(msg) from exc
