"""
PostgresExchangeRepository - PostgreSQL implementation of ExchangeRepositoryPort.

Maps ExchangeOrder aggregates to the exchange_orders table. Updates
lock the row with SELECT ... FOR UPDATE, so concurrent writers of one
order are serialized by the database.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import select, desc, delete
from sqlalchemy.ext.asyncio import AsyncSession

from deelrate.application.ports.outbound.exchange_repository_port import ExchangeRepositoryPort
from deelrate.domain.entities.exchange_completed import ExchangeCompleted
from deelrate.domain.entities.exchange_order import (
    ExchangeOrder,
    ExchangeOrderStatus,
    ExchangeOrderType,
)
from deelrate.domain.value_objects.amounts import CryptoAmount, CryptoType, FiatAmount, FiatType
from deelrate.domain.value_objects.destination_address import (
    CryptoAddress,
    DestinationAddress,
    FiatAccount,
)

# DB Models
from backend.app.models.exchange_order import ExchangeOrder as ExchangeOrderModel

logger = logging.getLogger(__name__)


def _to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert timezone-aware datetime to naive UTC datetime."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _from_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def _address_to_dict(address: DestinationAddress) -> Dict[str, Any]:
    if isinstance(address, CryptoAddress):
        return {"type": address.address_type.value, "wallet": address.wallet}
    return {
        "type": address.address_type.value,
        "account_number": address.account_number,
        "account_name": address.account_name,
        "bank_name": address.bank_name,
    }


def _address_from_dict(data: Dict[str, Any]) -> DestinationAddress:
    # Stored values were validated on the way in
    if "wallet" in data:
        return CryptoAddress(data["wallet"])
    return FiatAccount(data["account_number"], data["account_name"], data["bank_name"])


class PostgresExchangeRepository(ExchangeRepositoryPort):
    """
    PostgreSQL order repository using SQLAlchemy async sessions.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        """
        Initialize with SQLAlchemy async session factory.

        Args:
            session_factory: Callable that returns an AsyncSession
        """
        self._session_factory = session_factory

    async def save(self, order: ExchangeOrder) -> ExchangeOrder:
        async with self._session_factory() as session:
            try:
                db_order = ExchangeOrderModel(order_id=str(order.id))
                self._apply_to_model(order, db_order)
                session.add(db_order)
                await session.commit()

                logger.info(f"Exchange order saved: {order.id}")
                return order

            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to save exchange order {order.id}: {e}")
                raise

    async def get(self, order_id: UUID) -> Optional[ExchangeOrder]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ExchangeOrderModel).where(ExchangeOrderModel.order_id == str(order_id))
            )
            db_order = result.scalar_one_or_none()
            return self._map_db_order_to_domain(db_order) if db_order else None

    async def get_by_user(self, user_id: UUID) -> List[ExchangeOrder]:
        return await self._select(ExchangeOrderModel.user_id == str(user_id))

    async def get_by_status(self, status: ExchangeOrderStatus) -> List[ExchangeOrder]:
        return await self._select(ExchangeOrderModel.status == status.value)

    async def get_completed(self) -> List[ExchangeOrder]:
        return await self.get_by_status(ExchangeOrderStatus.COMPLETED)

    async def update(self, order: ExchangeOrder) -> Optional[ExchangeOrder]:
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    select(ExchangeOrderModel)
                    .where(ExchangeOrderModel.order_id == str(order.id))
                    .with_for_update()
                )
                db_order = result.scalar_one_or_none()
                if db_order is None:
                    return None

                self._apply_to_model(order, db_order)
                await session.commit()

                logger.info(f"Exchange order updated: {order.id} ({order.status.value})")
                return order

            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to update exchange order {order.id}: {e}")
                raise

    async def delete(self, order_id: UUID) -> bool:
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    delete(ExchangeOrderModel).where(ExchangeOrderModel.order_id == str(order_id))
                )
                await session.commit()
                return result.rowcount > 0

            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to delete exchange order {order_id}: {e}")
                raise

    # --- Mapping Helpers ---

    async def _select(self, condition) -> List[ExchangeOrder]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ExchangeOrderModel)
                .where(condition)
                .order_by(desc(ExchangeOrderModel.created_at))
            )
            return [self._map_db_order_to_domain(row) for row in result.scalars().all()]

    @staticmethod
    def _apply_to_model(order: ExchangeOrder, db_order: ExchangeOrderModel) -> None:
        """Copy domain state onto a DB row."""
        db_order.user_id = str(order.user_id)
        db_order.order_type = order.order_type.value
        db_order.crypto_type = order.crypto_type.value
        db_order.fiat_type = order.fiat_type.value
        db_order.status = order.status.value
        db_order.crypto_amount = order.crypto_amount.value if order.crypto_amount else None
        db_order.fiat_amount = order.fiat_amount.amount if order.fiat_amount else None
        db_order.user_destination = _address_to_dict(order.user_destination_address)
        db_order.system_deposit = _address_to_dict(order.system_deposit_address)
        db_order.completion_rate = order.exchange_completed.rate if order.exchange_completed else None
        db_order.created_at = _to_naive_utc(order.created_at)
        db_order.completed_at = _to_naive_utc(order.completed_at)

    @staticmethod
    def _map_db_order_to_domain(db_order: ExchangeOrderModel) -> ExchangeOrder:
        """Map DB row to domain ExchangeOrder."""
        order_id = UUID(db_order.order_id)
        user_id = UUID(db_order.user_id)
        order_type = ExchangeOrderType(db_order.order_type)
        crypto_type = CryptoType(db_order.crypto_type)
        fiat_type = FiatType(db_order.fiat_type)

        crypto_amount = None
        if db_order.crypto_amount is not None:
            crypto_amount = CryptoAmount(Decimal(str(db_order.crypto_amount)), crypto_type)
        fiat_amount = None
        if db_order.fiat_amount is not None:
            fiat_amount = FiatAmount(fiat_type, Decimal(str(db_order.fiat_amount)))

        exchange_completed = None
        if db_order.completion_rate is not None and crypto_amount and fiat_amount:
            exchange_completed = ExchangeCompleted(
                order_id=order_id,
                user_id=user_id,
                order_type=order_type,
                crypto_type=crypto_type,
                fiat_type=fiat_type,
                amount_from=crypto_amount.value,
                amount_to=fiat_amount.amount,
                rate=Decimal(str(db_order.completion_rate)),
            )

        return ExchangeOrder.rehydrate(
            id=order_id,
            user_id=user_id,
            order_type=order_type,
            crypto_type=crypto_type,
            fiat_type=fiat_type,
            status=ExchangeOrderStatus(db_order.status),
            user_destination_address=_address_from_dict(db_order.user_destination),
            system_deposit_address=_address_from_dict(db_order.system_deposit),
            created_at=_from_naive_utc(db_order.created_at),
            crypto_amount=crypto_amount,
            fiat_amount=fiat_amount,
            completed_at=_from_naive_utc(db_order.completed_at),
            exchange_completed=exchange_completed,
        )
