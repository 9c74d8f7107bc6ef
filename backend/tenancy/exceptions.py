"""Custom exception hierarchy for the tenancy package."""

from __future__ import annotations


class TenancyError(Exception):
    """Base exception for all tenancy errors."""


class InvalidArgumentError(TenancyError, ValueError):
    """Raised when a calculator input violates its constraint."""


class ComputationOverflowError(TenancyError, ArithmeticError):
    """Raised when a computed monetary value is not a finite, non-negative number."""


class ConfigurationError(TenancyError):
    """Raised when environment configuration cannot be parsed."""


class PricingApiError(TenancyError):
    """Raised when the property-management pricing API call fails.

    ``status`` is the HTTP status code, 408 for a timeout and 0 when the
    server could not be reached. ``errors`` carries field-level validation
    messages when the API returned them.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.errors = errors or {}


class AuthenticationRequiredError(PricingApiError):
    """Raised when the pricing API rejects the credentials (HTTP 401)."""
