"""Display ordering and number formatting for rate tables."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from .models import Rate

PRIORITY_CURRENCIES = ("EUR", "USD", "GBP", "CHF")

_FOUR_PLACES = Decimal("0.0001")


def is_priority(code: str) -> bool:
    return code in PRIORITY_CURRENCIES


def sort_rates(rates: Iterable[Rate]) -> List[Rate]:
    """Return ``rates`` with priority currencies first, in their fixed order.

    Every other currency keeps its original relative position; ``sorted`` is
    stable, so they all share the same key.
    """

    trailing = len(PRIORITY_CURRENCIES)

    def _key(rate: Rate) -> int:
        if rate.code in PRIORITY_CURRENCIES:
            return PRIORITY_CURRENCIES.index(rate.code)
        return trailing

    return sorted(rates, key=_key)


def format_rate(mid: float) -> str:
    """Render ``mid`` with four decimals and a decimal comma, e.g. ``4,2137``.

    Rounds the exact binary value half-up, which is what ``toFixed(4)`` does
    for the non-negative values NBP publishes.
    """

    quantized = Decimal(mid).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP)
    return f"{quantized:f}".replace(".", ",")
