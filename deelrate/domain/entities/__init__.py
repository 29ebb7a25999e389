"""Domain entities."""
from deelrate.domain.entities.exchange_completed import ExchangeCompleted
from deelrate.domain.entities.exchange_order import (
    ExchangeOrder,
    ExchangeOrderStatus,
    ExchangeOrderType,
    OrderTransition,
    TRANSITIONS,
)

__all__ = [
    "ExchangeCompleted",
    "ExchangeOrder",
    "ExchangeOrderStatus",
    "ExchangeOrderType",
    "OrderTransition",
    "TRANSITIONS",
]
