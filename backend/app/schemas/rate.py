"""
Exchange rate schemas.
"""
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from deelrate.domain.value_objects.exchange_rate import CurrencyPair, ExchangeRate


class CurrencyPairSchema(BaseModel):
    """Base/quote pair"""
    base: str = Field(..., min_length=1, description="Base currency (e.g. BTC)")
    quote: str = Field(..., min_length=1, description="Quote currency (e.g. USDT)")

    def to_domain(self) -> CurrencyPair:
        return CurrencyPair(self.base.strip().upper(), self.quote.strip().upper())

    @classmethod
    def from_domain(cls, pair: CurrencyPair) -> "CurrencyPairSchema":
        return cls(base=pair.base, quote=pair.quote)


class ExchangeRateResponse(BaseModel):
    """Rate response"""
    base: str
    quote: str
    rate: Decimal = Field(..., description="Quote units per one unit of base")
    timestamp: datetime

    @classmethod
    def from_domain(cls, rate: ExchangeRate) -> "ExchangeRateResponse":
        return cls(
            base=rate.pair.base,
            quote=rate.pair.quote,
            rate=rate.rate,
            timestamp=rate.timestamp,
        )


class RateBatchRequest(BaseModel):
    """Batch rate request"""
    pairs: list[CurrencyPairSchema] = Field(default_factory=list, description="Pairs to resolve")


class RateListResponse(BaseModel):
    """Rates that resolved (failed pairs are left out)"""
    rates: list[ExchangeRateResponse]
    count: int


class CurrencyPairListResponse(BaseModel):
    """Supported pairs"""
    pairs: list[CurrencyPairSchema]
    count: int
