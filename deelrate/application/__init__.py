"""
Application layer: ports, DTOs, services and use cases.
"""
from deelrate.application.services.exchange_rate_service import ExchangeRateService
from deelrate.application.use_cases.exchange_order import ExchangeOrderUseCase

__all__ = ["ExchangeRateService", "ExchangeOrderUseCase"]
