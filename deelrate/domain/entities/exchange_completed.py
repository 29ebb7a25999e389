"""
ExchangeCompleted - immutable record emitted when an order completes.
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from deelrate.domain.value_objects.amounts import CryptoType, FiatType

if TYPE_CHECKING:
    from deelrate.domain.entities.exchange_order import ExchangeOrderType


@dataclass(frozen=True)
class ExchangeCompleted:
    """
    Snapshot of a completed exchange.

    amount_from is always the crypto quantity and amount_to the fiat
    quantity, whatever the order direction.

    Attributes:
        order_id: Completed order
        user_id: Order owner
        order_type: Buy or sell
        crypto_type: Cryptocurrency exchanged
        fiat_type: Fiat currency exchanged
        amount_from: Crypto quantity
        amount_to: Fiat quantity
        rate: Effective rate at completion
    """
    order_id: UUID
    user_id: UUID
    order_type: ExchangeOrderType
    crypto_type: CryptoType
    fiat_type: FiatType
    amount_from: Decimal
    amount_to: Decimal
    rate: Decimal
