# Application use cases
from deelrate.application.use_cases.exchange_order import ExchangeOrderUseCase

__all__ = ["ExchangeOrderUseCase"]
