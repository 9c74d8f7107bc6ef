"""Environment-driven settings for the tenancy service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from tenancy.exceptions import ConfigurationError

_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent

DEFAULT_API_URL = "http://localhost:8000/api"
DEFAULT_API_TIMEOUT = 30.0


def load_env_files() -> None:
    """Load ``.env`` from the project root, then from ``backend/``."""
    load_dotenv(_PROJECT_ROOT / ".env")
    load_dotenv(_BACKEND_DIR / ".env")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        msg = f"{name} must be a number, got {raw!r}"
        raise ConfigurationError(msg) from None
    if value <= 0:
        msg = f"{name} must be positive, got {raw!r}"
        raise ConfigurationError(msg)
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    ``api_url`` points at the property-management REST API that serves
    comprehensive pricing. ``api_token`` is optional; when set it is sent as
    a bearer token.
    """

    api_url: str = DEFAULT_API_URL
    api_timeout: float = DEFAULT_API_TIMEOUT
    api_token: str | None = None
    currency: str = "KES"
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        origins = os.environ.get("TENANCY_CORS_ORIGINS", "http://localhost:3000")
        return cls(
            api_url=os.environ.get("TENANCY_API_URL", DEFAULT_API_URL).rstrip("/"),
            api_timeout=_float_env("TENANCY_API_TIMEOUT", DEFAULT_API_TIMEOUT),
            api_token=os.environ.get("TENANCY_API_TOKEN") or None,
            currency=os.environ.get("TENANCY_CURRENCY", "KES").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.environ.get("TENANCY_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Attach a basic stream handler to the ``tenancy`` logger tree."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        msg = f"Unknown log level {level!r}"
        raise ConfigurationError(msg)
    logger = logging.getLogger("tenancy")
    logger.setLevel(numeric)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
