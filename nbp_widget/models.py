"""Data structures for NBP exchange rate tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Rate:
    """Mid-market rate for one foreign currency, in PLN per unit."""

    currency: str
    code: str
    mid: float

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Rate":
        try:
            currency = payload["currency"]
            code = payload["code"]
            raw_mid = payload["mid"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed rate entry: {payload!r}") from exc

        if isinstance(raw_mid, bool) or not isinstance(raw_mid, (int, float)):
            raise ValueError(f"Rate for {code} has a non-numeric mid: {raw_mid!r}")
        if raw_mid < 0:
            raise ValueError(f"Rate for {code} has a negative mid: {raw_mid}")

        return cls(currency=str(currency), code=str(code), mid=float(raw_mid))

    def to_dict(self) -> Dict[str, Any]:
        return {"currency": self.currency, "code": self.code, "mid": self.mid}


@dataclass
class ExchangeRateTable:
    """A dated publication containing one rate per currency."""

    table: str
    no: str
    effective_date: str
    rates: List[Rate] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ExchangeRateTable":
        """Build a table from one element of the NBP JSON response.

        Raises:
            ValueError: if a required key is missing, a rate is invalid or a
                currency code appears twice.
        """

        if not isinstance(payload, dict):
            raise ValueError(f"Expected a table object, got {type(payload).__name__}")

        missing = [key for key in ("table", "no", "effectiveDate", "rates") if key not in payload]
        if missing:
            raise ValueError(f"Table is missing keys: {', '.join(missing)}")
        if not isinstance(payload["rates"], list):
            raise ValueError("Table 'rates' must be a list")

        rates = [Rate.from_payload(entry) for entry in payload["rates"]]

        seen = set()
        for rate in rates:
            if rate.code in seen:
                raise ValueError(f"Duplicate currency code in table: {rate.code}")
            seen.add(rate.code)

        return cls(
            table=str(payload["table"]),
            no=str(payload["no"]),
            effective_date=str(payload["effectiveDate"]),
            rates=rates,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": self.table,
            "no": self.no,
            "effectiveDate": self.effective_date,
            "rates": [rate.to_dict() for rate in self.rates],
        }
