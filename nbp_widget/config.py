"""Configuration helpers for the NBP endpoint and runtime settings."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)


def _load_env_file() -> None:
    """Load variables from a local ``.env`` file when available."""

    env_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env")
    if not os.path.exists(env_path):
        LOGGER.debug("No .env file found at %s", env_path)
        return

    load_dotenv(env_path)
    LOGGER.info("Loaded environment variables from %s", env_path)


def _read_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def _read_optional_float(name: str) -> Optional[float]:
    """Return ``name`` as a float, or ``None`` when unset or unparsable."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-numeric %s=%r", name, raw)
        return None


_load_env_file()


class Config:
    """Central access point for runtime configuration."""

    # NBP API ------------------------------------------------------------------
    NBP_API_BASE_URL: str = os.getenv(
        "NBP_API_BASE_URL", "https://api.nbp.pl/api/exchangerates/tables"
    ).rstrip("/")
    NBP_TABLE: str = os.getenv("NBP_TABLE", "A")
    # None leaves the request without a timeout, matching requests' default.
    NBP_REQUEST_TIMEOUT: Optional[float] = _read_optional_float("NBP_REQUEST_TIMEOUT")

    # Widget behaviour -----------------------------------------------------------
    COPY_BADGE_MS: int = int(os.getenv("COPY_BADGE_MS", "1500"))
    DISCARD_STALE_RESPONSES: bool = _read_bool("NBP_DISCARD_STALE_RESPONSES")

    # Local server -------------------------------------------------------------
    DEBUG: bool = _read_bool("DEBUG")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "5000"))

    @classmethod
    def table_url(cls, date: str) -> str:
        """Return the JSON endpoint for table ``NBP_TABLE`` published on ``date``."""

        return f"{cls.NBP_API_BASE_URL}/{cls.NBP_TABLE}/{date}/?format=json"

    @classmethod
    def validate(cls) -> bool:
        """Validate that the active configuration is usable."""

        valid = True
        if cls.COPY_BADGE_MS <= 0:
            LOGGER.warning("COPY_BADGE_MS must be positive, got %s", cls.COPY_BADGE_MS)
            valid = False
        if cls.NBP_REQUEST_TIMEOUT is not None and cls.NBP_REQUEST_TIMEOUT <= 0:
            LOGGER.warning("NBP_REQUEST_TIMEOUT must be positive, got %s", cls.NBP_REQUEST_TIMEOUT)
            valid = False
        if not cls.NBP_API_BASE_URL.startswith(("http://", "https://")):
            LOGGER.warning("NBP_API_BASE_URL is not an HTTP URL: %s", cls.NBP_API_BASE_URL)
            valid = False
        return valid


if not Config.validate():  # pragma: no cover - depends on the environment
    LOGGER.warning("Configuration validation failed - check your environment")
