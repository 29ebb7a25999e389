# Application services
from deelrate.application.services.exchange_rate_service import (
    ExchangeRateService,
    RATE_CACHE_TTL,
)

__all__ = ["ExchangeRateService", "RATE_CACHE_TTL"]
