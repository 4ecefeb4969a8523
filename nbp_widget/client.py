"""
HTTP client for the NBP exchange rate tables API
"""
import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from .config import Config

logger = logging.getLogger(__name__)


class NbpClientError(RuntimeError):
    """Raised when the NBP API cannot be reached or returns unusable data."""


class NbpHttpError(NbpClientError):
    """Raised when the NBP API answers with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"NBP API returned HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class NbpClient:
    """Client for the daily exchange rate tables published by NBP"""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.timeout = timeout if timeout is not None else Config.NBP_REQUEST_TIMEOUT

    def build_url(self, date: str) -> str:
        """
        Build the table endpoint URL for a date

        Args:
            date: Date in ISO format (YYYY-MM-DD)

        Returns:
            str: Absolute URL of the JSON table endpoint
        """
        return Config.table_url(quote(date, safe="-"))

    def get_table_json(self, date: str) -> List[Any]:
        """
        Download the raw JSON table list for a date

        Args:
            date: Date in ISO format (YYYY-MM-DD)

        Returns:
            list: Decoded JSON array as returned by the API

        Raises:
            NbpHttpError: if the API answers with a non-success status
            NbpClientError: if the request fails or the body is not JSON
        """
        url = self.build_url(date)
        logger.info(f"Fetching NBP table: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error contacting NBP API: {e}")
            raise NbpClientError(str(e)) from e

        if not response.ok:
            logger.warning(f"NBP API returned HTTP {response.status_code} for {date}")
            raise NbpHttpError(response.status_code, url)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"NBP API returned invalid JSON for {date}: {e}")
            raise NbpClientError(str(e)) from e

        logger.info(f"Successfully downloaded NBP table for {date}")
        return data
