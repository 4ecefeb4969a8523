"""Application service responsible for exchange rate table retrieval."""

from __future__ import annotations

from typing import Optional
import logging

from ..client import NbpClient, NbpClientError, NbpHttpError
from ..models import ExchangeRateTable

logger = logging.getLogger(__name__)

NO_RATES_MESSAGE = "Brak kursów dla wybranej daty, weekend albo święta. Wybierz inną datę."
GENERIC_FETCH_ERROR = "Failed to fetch rates"


class RateServiceError(RuntimeError):
    """Raised when an unrecoverable error occurs while fetching rates."""


class NoRatesForDateError(RateServiceError):
    """Raised when NBP has no table for the requested date (weekend or holiday)."""

    def __init__(self, date: str, status_code: Optional[int] = None) -> None:
        super().__init__(NO_RATES_MESSAGE)
        self.date = date
        self.status_code = status_code


class RateService:
    """Facade that turns NBP responses into :class:`ExchangeRateTable` objects."""

    def __init__(self, client: Optional[NbpClient] = None) -> None:
        self._client = client or NbpClient()

    def get_table(self, date: str) -> ExchangeRateTable:
        """Return the table "A" published on ``date``.

        Raises:
            NoRatesForDateError: the API answered with a non-success status.
            RateServiceError: the request failed or the body was unusable.
        """

        logger.info("Fetching exchange rates for %s", date)
        try:
            payload = self._client.get_table_json(date)
        except NbpHttpError as exc:
            logger.warning("No rates published for %s (HTTP %s)", date, exc.status_code)
            raise NoRatesForDateError(date, exc.status_code) from exc
        except NbpClientError as exc:
            raise RateServiceError(str(exc) or GENERIC_FETCH_ERROR) from exc

        table = self._parse(payload, date)
        logger.info(
            "Loaded table %s (%s) with %d rates", table.no, table.effective_date, len(table.rates)
        )
        return table

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _parse(payload, date: str) -> ExchangeRateTable:
        if not isinstance(payload, list) or not payload:
            raise RateServiceError(f"Unexpected response format for {date}")

        # The API wraps a single table in an array.
        try:
            return ExchangeRateTable.from_payload(payload[0])
        except ValueError as exc:
            raise RateServiceError(str(exc) or GENERIC_FETCH_ERROR) from exc
