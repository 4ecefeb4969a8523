"""State container behind the exchange rate widget."""

from __future__ import annotations

from datetime import datetime, timezone
from functools import partial
from typing import Any, Callable, Dict, List, Optional
import logging
import threading

from ..config import Config
from ..formatting import format_rate, is_priority, sort_rates
from ..models import ExchangeRateTable
from .rate_service import GENERIC_FETCH_ERROR, RateService, RateServiceError

logger = logging.getLogger(__name__)


def today_iso() -> str:
    """Return today's UTC calendar date as ``YYYY-MM-DD``."""

    return datetime.now(timezone.utc).date().isoformat()


class RateBoard:
    """Owns the selected date, the loaded table, the loading/error flags and the copy badge.

    Failures never escape :meth:`fetch_rates`; they are stored as ``error``.
    The previously loaded table is kept when a later fetch fails, and
    overlapping fetches resolve in completion order unless ``discard_stale``
    is enabled.
    """

    def __init__(
        self,
        service: Optional[RateService] = None,
        clipboard: Optional[Callable[[str], None]] = None,
        timer_factory: Callable[..., Any] = threading.Timer,
        copy_badge_ms: Optional[int] = None,
        discard_stale: Optional[bool] = None,
        date: Optional[str] = None,
    ) -> None:
        self._service = service or RateService()
        self._clipboard = clipboard
        self._timer_factory = timer_factory
        self.copy_badge_ms = copy_badge_ms if copy_badge_ms is not None else Config.COPY_BADGE_MS
        self._discard_stale = (
            discard_stale if discard_stale is not None else Config.DISCARD_STALE_RESPONSES
        )

        self.date: str = date or today_iso()
        self.table: Optional[ExchangeRateTable] = None
        self.loading = False
        self.error: Optional[str] = None
        self.copied_rate: Optional[str] = None

        self._lock = threading.Lock()
        self._request_seq = 0
        self._copy_timer = None
        self._copy_generation = 0

    # ------------------------------------------------------------------
    # Date selection and fetching
    # ------------------------------------------------------------------
    def select_date(self, date: str) -> None:
        """Store ``date`` as the selected date and fetch its table."""

        with self._lock:
            self.date = date.strip()
            selected = self.date
        self.fetch_rates(selected)

    def fetch_rates(self, date: str) -> None:
        with self._lock:
            self._request_seq += 1
            seq = self._request_seq
            self.loading = True
            self.error = None

        try:
            table = self._service.get_table(date)
        except RateServiceError as exc:
            logger.warning("Could not load rates for %s: %s", date, exc)
            self._store_error(seq, str(exc) or GENERIC_FETCH_ERROR)
        except Exception as exc:
            logger.error("Unexpected error loading rates for %s", date, exc_info=True)
            self._store_error(seq, str(exc) or GENERIC_FETCH_ERROR)
        else:
            with self._lock:
                if self._is_stale(seq):
                    logger.info("Discarding superseded response for %s", date)
                else:
                    self.table = table
        finally:
            with self._lock:
                if not self._is_stale(seq):
                    self.loading = False

    def _store_error(self, seq: int, message: str) -> None:
        with self._lock:
            if self._is_stale(seq):
                logger.info("Discarding superseded error: %s", message)
                return
            self.error = message

    def _is_stale(self, seq: int) -> bool:
        return self._discard_stale and seq != self._request_seq

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            table = self.table
            state = {
                "date": self.date,
                "loading": self.loading,
                "error": self.error,
                "copied": self.copied_rate,
                "copy_badge_ms": self.copy_badge_ms,
            }

        if table is None:
            state["table"] = None
        else:
            state["table"] = {
                "table": table.table,
                "no": table.no,
                "effectiveDate": table.effective_date,
                "rates": self._rows(table, state["copied"]),
            }
        return state

    @staticmethod
    def _rows(table: Optional[ExchangeRateTable], copied: Optional[str]) -> List[Dict[str, Any]]:
        if table is None:
            return []

        rows = []
        for rate in sort_rates(table.rates):
            formatted = format_rate(rate.mid)
            rows.append(
                {
                    **rate.to_dict(),
                    "formatted": formatted,
                    "priority": is_priority(rate.code),
                    "copied": formatted == copied,
                }
            )
        return rows

    # ------------------------------------------------------------------
    # Copy to clipboard
    # ------------------------------------------------------------------
    def copy_rate(self, mid: float) -> str:
        """Copy the formatted ``mid`` and show its badge for ``copy_badge_ms``."""

        formatted = format_rate(mid)
        if self._clipboard is not None:
            try:
                self._clipboard(formatted)
            except Exception:
                logger.warning("Clipboard write failed for %s", formatted, exc_info=True)

        with self._lock:
            self.copied_rate = formatted
            if self._copy_timer is not None:
                self._copy_timer.cancel()
            self._copy_generation += 1
            timer = self._timer_factory(
                self.copy_badge_ms / 1000.0, partial(self._clear_copied, self._copy_generation)
            )
            timer.daemon = True
            timer.start()
            self._copy_timer = timer

        logger.debug("Copied rate %s", formatted)
        return formatted

    def _clear_copied(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled after it started firing must not clear a newer badge.
            if generation != self._copy_generation:
                return
            self.copied_rate = None
            self._copy_timer = None
