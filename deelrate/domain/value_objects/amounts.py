"""
Amount Value Objects

Crypto and fiat quantities. Both are immutable and self-validating:
an instance always holds a positive Decimal and a known currency.
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union

from deelrate.domain.result import Error, Result

Number = Union[int, float, str, Decimal]


class CryptoType(Enum):
    """Supported cryptocurrencies."""
    BTC = "BTC"
    ETH = "ETH"
    USDT = "USDT"
    USDC = "USDC"
    BUSD = "BUSD"
    BNB = "BNB"
    ADA = "ADA"
    DOGE = "DOGE"
    XRP = "XRP"
    SOL = "SOL"

    @property
    def precision(self) -> int:
        """Display precision."""
        return 8

    @classmethod
    def parse(cls, symbol: Optional[str]) -> Optional[CryptoType]:
        """Return the member for a symbol, or None when unknown."""
        if not symbol:
            return None
        try:
            return cls(symbol.strip().upper())
        except ValueError:
            return None


class FiatType(Enum):
    """Supported fiat currencies."""
    EUR = "EUR"
    USD = "USD"
    NGN = "NGN"

    @property
    def precision(self) -> int:
        """Display precision."""
        return 2

    @classmethod
    def parse(cls, symbol: Optional[str]) -> Optional[FiatType]:
        """Return the member for a symbol, or None when unknown."""
        if not symbol:
            return None
        try:
            return cls(symbol.strip().upper())
        except ValueError:
            return None


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Convert to Decimal through str; None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


@dataclass(frozen=True)
class CryptoAmount:
    """
    Immutable positive amount of a cryptocurrency.

    Attributes:
        value: Quantity (always stored as Decimal)
        currency: Cryptocurrency
    """
    value: Decimal
    currency: CryptoType

    def __post_init__(self) -> None:
        error = self._validate(self.value, self.currency)
        if error is not None:
            raise ValueError(error.description)
        object.__setattr__(self, "value", _to_decimal(self.value))

    @staticmethod
    def _validate(value: Any, currency: Any) -> Optional[Error]:
        amount = _to_decimal(value)
        if amount is None or amount <= 0:
            return Error.validation(
                "CryptoAmount.InvalidValue", "Value must be greater than 0."
            )
        if not isinstance(currency, CryptoType):
            return Error.validation(
                "CryptoAmount.MissingCurrency", "Crypto currency must be specified."
            )
        return None

    # --- Factory Methods ---

    @classmethod
    def create(cls, value: Number, currency: CryptoType) -> Result[CryptoAmount]:
        """Validate and create a CryptoAmount."""
        error = cls._validate(value, currency)
        if error is not None:
            return Result.failure(error)
        return Result.success(cls(_to_decimal(value), currency))

    # --- Comparison ---

    def matches(self, other: CryptoAmount, tolerance: Decimal) -> bool:
        """Same currency and |self - other| strictly below tolerance."""
        return (
            self.currency == other.currency
            and abs(self.value - other.value) < tolerance
        )

    def __str__(self) -> str:
        return f"{self.value:.{self.currency.precision}f} {self.currency.value}"


@dataclass(frozen=True)
class FiatAmount:
    """
    Immutable positive amount of a fiat currency.

    Attributes:
        fiat_type: Fiat currency
        amount: Quantity (always stored as Decimal)
    """
    fiat_type: FiatType
    amount: Decimal

    def __post_init__(self) -> None:
        error = self._validate(self.fiat_type, self.amount)
        if error is not None:
            raise ValueError(error.description)
        object.__setattr__(self, "amount", _to_decimal(self.amount))

    @staticmethod
    def _validate(fiat_type: Any, amount: Any) -> Optional[Error]:
        value = _to_decimal(amount)
        if value is None or value <= 0:
            return Error.validation(
                "FiatAmount.InvalidAmount", "Amount must be greater than 0."
            )
        if not isinstance(fiat_type, FiatType):
            return Error.validation(
                "FiatAmount.MissingFiatType", "Fiat type must be specified."
            )
        return None

    # --- Factory Methods ---

    @classmethod
    def create(cls, fiat_type: FiatType, amount: Number) -> Result[FiatAmount]:
        """Validate and create a FiatAmount."""
        error = cls._validate(fiat_type, amount)
        if error is not None:
            return Result.failure(error)
        return Result.success(cls(fiat_type, _to_decimal(amount)))

    # --- Comparison ---

    def matches(self, other: FiatAmount, tolerance: Decimal) -> bool:
        """Same fiat type and |self - other| strictly below tolerance."""
        return (
            self.fiat_type == other.fiat_type
            and abs(self.amount - other.amount) < tolerance
        )

    def __str__(self) -> str:
        return f"{self.amount:.{self.fiat_type.precision}f} {self.fiat_type.value}"
