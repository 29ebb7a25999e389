"""
Currency pair and exchange rate value objects.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Union

from deelrate.domain.result import Error, Result


@dataclass(frozen=True)
class CurrencyPair:
    """
    Base/quote pair (e.g. BTC/USDT).

    Attributes:
        base: Base currency code
        quote: Quote currency code
    """
    base: str
    quote: str

    def to_asset_pair(self) -> str:
        """Render as BASE/QUOTE."""
        return f"{self.base}/{self.quote}"

    @property
    def cache_key(self) -> str:
        return f"ExchangeRate_{self.base}_{self.quote}"

    def __str__(self) -> str:
        return self.to_asset_pair()


@dataclass(frozen=True)
class ExchangeRate:
    """
    Point-in-time rate for a currency pair.

    Attributes:
        pair: Currency pair
        rate: Units of quote per one unit of base, always positive
        timestamp: When the provider observed the rate
    """
    pair: CurrencyPair
    rate: Decimal
    timestamp: datetime

    @classmethod
    def create(
        cls,
        pair: CurrencyPair,
        rate: Union[int, float, str, Decimal],
        timestamp: datetime,
    ) -> Result[ExchangeRate]:
        """Create a rate; fails with a Conflict unless rate is a finite number > 0."""
        try:
            value = rate if isinstance(rate, Decimal) else Decimal(str(rate))
        except (InvalidOperation, ValueError):
            value = None
        if value is None or isinstance(rate, bool) or not value.is_finite() or value <= 0:
            return Result.failure(
                Error.conflict("Rate.Invalid", "Rate must be greater than 0.")
            )
        return Result.success(cls(pair, value, timestamp))
