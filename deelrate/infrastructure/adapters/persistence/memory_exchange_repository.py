"""
InMemoryExchangeRepository - In-memory implementation of ExchangeRepositoryPort.

Stores deep copies so callers never share state with the store.
All data is lost when the adapter is destroyed.
"""
import asyncio
import copy
from typing import Dict, List, Optional
from uuid import UUID

from deelrate.application.ports.outbound.exchange_repository_port import ExchangeRepositoryPort
from deelrate.domain.entities.exchange_order import ExchangeOrder, ExchangeOrderStatus


class InMemoryExchangeRepository(ExchangeRepositoryPort):
    """
    In-memory order repository.

    Every operation runs under one asyncio.Lock.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._orders: Dict[UUID, ExchangeOrder] = {}
        self._lock = asyncio.Lock()

    def clear(self):
        """Clear all stored orders. Useful for test cleanup."""
        self._orders.clear()

    async def save(self, order: ExchangeOrder) -> ExchangeOrder:
        async with self._lock:
            self._orders[order.id] = copy.deepcopy(order)
        return order

    async def get(self, order_id: UUID) -> Optional[ExchangeOrder]:
        async with self._lock:
            order = self._orders.get(order_id)
            return copy.deepcopy(order) if order else None

    async def get_by_user(self, user_id: UUID) -> List[ExchangeOrder]:
        return await self._select(lambda o: o.user_id == user_id)

    async def get_by_status(self, status: ExchangeOrderStatus) -> List[ExchangeOrder]:
        return await self._select(lambda o: o.status == status)

    async def get_completed(self) -> List[ExchangeOrder]:
        return await self.get_by_status(ExchangeOrderStatus.COMPLETED)

    async def update(self, order: ExchangeOrder) -> Optional[ExchangeOrder]:
        async with self._lock:
            if order.id not in self._orders:
                return None
            self._orders[order.id] = copy.deepcopy(order)
        return order

    async def delete(self, order_id: UUID) -> bool:
        async with self._lock:
            return self._orders.pop(order_id, None) is not None

    async def _select(self, predicate) -> List[ExchangeOrder]:
        async with self._lock:
            orders = [copy.deepcopy(o) for o in self._orders.values() if predicate(o)]
        # Most recent first
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    @property
    def count(self) -> int:
        """Number of stored orders."""
        return len(self._orders)
