"""
ExchangeOrderUseCase - Caller-facing operations on exchange orders.

Loads the aggregate, applies one transition, and persists the result.
Mutations of the same order are serialized with a per-order lock so two
callers never apply transitions to stale copies.
"""
import asyncio
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Union
from uuid import UUID

from deelrate.application.ports.outbound.deposit_address_port import DepositAddressPort
from deelrate.application.ports.outbound.exchange_repository_port import ExchangeRepositoryPort
from deelrate.application.ports.outbound.time_provider_port import (
    SystemTimeAdapter,
    TimeProviderPort,
)
from deelrate.domain.entities.exchange_completed import ExchangeCompleted
from deelrate.domain.entities.exchange_order import (
    ExchangeOrder,
    ExchangeOrderType,
)
from deelrate.domain.result import Error, Result
from deelrate.domain.value_objects.amounts import (
    CryptoAmount,
    CryptoType,
    FiatAmount,
    FiatType,
)
from deelrate.domain.value_objects.destination_address import (
    AddressType,
    DestinationAddress,
)

logger = logging.getLogger(__name__)


def _order_not_found(order_id: UUID) -> Error:
    return Error.not_found("ExchangeOrder.NotFound", f"Exchange order {order_id} was not found.")


class ExchangeOrderUseCase:
    """
    Use case for driving exchange orders through their lifecycle.
    """

    def __init__(
        self,
        repository: ExchangeRepositoryPort,
        deposit_addresses: DepositAddressPort,
        time_provider: Optional[TimeProviderPort] = None,
    ):
        """
        Initialize with required ports.

        Args:
            repository: Order persistence
            deposit_addresses: System deposit address lookup
            time_provider: Clock (defaults to the system clock)
        """
        self.repository = repository
        self.deposit_addresses = deposit_addresses
        self.time_provider = time_provider or SystemTimeAdapter()
        self._locks: Dict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)

    # --- Commands ---

    async def create_order(
        self,
        user_id: Union[UUID, str],
        crypto_type: CryptoType,
        order_type: ExchangeOrderType,
        crypto_amount: Optional[CryptoAmount],
        fiat_amount: Optional[FiatAmount],
        user_destination: Optional[DestinationAddress],
        fiat_type: Optional[FiatType] = None,
    ) -> Result[ExchangeOrder]:
        """
        Create and persist a new order.

        The system deposit address is a fiat account in the settlement
        currency for Buy orders and a crypto wallet for Sell orders.

        Args:
            user_id: Owner
            crypto_type: Cryptocurrency being exchanged
            order_type: Buy or sell
            crypto_amount: Required for sell, forbidden for buy
            fiat_amount: Required for buy, forbidden for sell
            user_destination: Where the user receives funds
            fiat_type: Settlement fiat (sell defaults to USD)

        Returns:
            Result with the saved order
        """
        deposit_result = self._resolve_deposit_address(
            order_type, crypto_type, fiat_amount, fiat_type
        )
        if deposit_result is not None and deposit_result.is_failure:
            return Result.failure(deposit_result.error)
        deposit_address = deposit_result.value if deposit_result is not None else None

        result = ExchangeOrder.initiate(
            user_id=user_id,
            crypto_type=crypto_type,
            order_type=order_type,
            crypto_amount=crypto_amount,
            fiat_amount=fiat_amount,
            user_destination_address=user_destination,
            system_deposit_address=deposit_address,
            fiat_type=fiat_type,
            created_at=self.time_provider.now(),
        )
        if result.is_failure:
            logger.info(f"Order creation rejected: {result.error}")
            return result

        order = await self.repository.save(result.value)
        logger.info(
            f"Order {order.id} created: {order.order_type.value} "
            f"{order.crypto_type.value}/{order.fiat_type.value}"
        )
        return Result.success(order)

    async def mark_payment_pending(self, order_id: UUID) -> Result[ExchangeOrder]:
        """INITIATED -> PAYMENT_PENDING."""
        return await self._transition(order_id, lambda order: order.mark_payment_pending())

    async def system_confirm_payment(
        self,
        order_id: UUID,
        actual_fiat_received: Optional[FiatAmount],
        actual_crypto_received: Optional[CryptoAmount],
        rate: Union[Decimal, int, float, str],
    ) -> Result[ExchangeOrder]:
        """
        PAYMENT_PENDING -> SYSTEM_CONFIRMED_PAYMENT.

        Args:
            order_id: Order identifier
            actual_fiat_received: Fiat the platform received (buy)
            actual_crypto_received: Crypto the platform received (sell)
            rate: Quote units per one unit of crypto, strictly positive

        Returns:
            Result with the updated order
        """
        return await self._transition(
            order_id,
            lambda order: order.system_confirm_payment(
                actual_fiat_received, actual_crypto_received, rate
            ),
        )

    async def user_confirm_payment(self, order_id: UUID) -> Result[ExchangeOrder]:
        """SYSTEM_CONFIRMED_PAYMENT -> USER_CONFIRM_PAYMENT."""
        return await self._transition(order_id, lambda order: order.user_confirm_payment())

    async def complete_exchange(self, order_id: UUID) -> Result[ExchangeCompleted]:
        """
        USER_CONFIRM_PAYMENT -> COMPLETED.

        Returns:
            Result with the completion record
        """
        completed_at = self.time_provider.now()
        result = await self._transition(
            order_id, lambda order: order.complete_exchange(completed_at)
        )
        if result.is_failure:
            return Result.failure(result.error)
        return Result.success(result.value.exchange_completed)

    async def cancel(self, order_id: UUID) -> Result[ExchangeOrder]:
        """Any non-terminal status -> CANCELLED."""
        return await self._transition(order_id, lambda order: order.cancel())

    # --- Queries ---

    async def get_order(self, order_id: UUID) -> Result[ExchangeOrder]:
        order = await self.repository.get(order_id)
        if order is None:
            return Result.failure(_order_not_found(order_id))
        return Result.success(order)

    async def get_user_orders(self, user_id: UUID) -> Result[List[ExchangeOrder]]:
        return Result.success(await self.repository.get_by_user(user_id))

    # --- Private Methods ---

    async def _transition(
        self,
        order_id: UUID,
        operation: Callable[[ExchangeOrder], Result],
    ) -> Result[ExchangeOrder]:
        async with self._locks[order_id]:
            order = await self.repository.get(order_id)
            if order is None:
                return Result.failure(_order_not_found(order_id))

            previous = order.status
            result = operation(order)
            if result.is_failure:
                logger.info(f"Order {order_id} rejected in {previous.value}: {result.error}")
                return Result.failure(result.error)

            updated = await self.repository.update(order)
            if updated is None:
                return Result.failure(_order_not_found(order_id))

            logger.info(f"Order {order_id}: {previous.value} -> {updated.status.value}")
            return Result.success(updated)

    def _resolve_deposit_address(
        self,
        order_type: ExchangeOrderType,
        crypto_type: CryptoType,
        fiat_amount: Optional[FiatAmount],
        fiat_type: Optional[FiatType],
    ) -> Optional[Result[DestinationAddress]]:
        # None when the currency is unknown; initiate() reports the input error
        if order_type == ExchangeOrderType.BUY:
            settlement = fiat_amount.fiat_type if fiat_amount is not None else None
            if not isinstance(settlement, FiatType):
                return None
            return self.deposit_addresses.get_deposit_address(
                AddressType.FIAT_ACCOUNT_NUMBER, fiat_type=settlement
            )
        if order_type == ExchangeOrderType.SELL and isinstance(crypto_type, CryptoType):
            return self.deposit_addresses.get_deposit_address(
                AddressType.CRYPTO_DEPOSIT_ADDRESS, crypto_type=crypto_type
            )
        return None
