"""Service layer for fetching rate tables and holding widget state."""

from .rate_board import RateBoard
from .rate_service import (
    GENERIC_FETCH_ERROR,
    NO_RATES_MESSAGE,
    NoRatesForDateError,
    RateService,
    RateServiceError,
)

__all__ = [
    "GENERIC_FETCH_ERROR",
    "NO_RATES_MESSAGE",
    "NoRatesForDateError",
    "RateBoard",
    "RateService",
    "RateServiceError",
]
