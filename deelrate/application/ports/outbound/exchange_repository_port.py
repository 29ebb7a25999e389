"""
ExchangeRepositoryPort - Persistence contract for exchange orders.

Implementations are the system of record once an order is saved. They
must make concurrent updates of the same order safe (row locking or an
equivalent per-id guard).
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from deelrate.domain.entities.exchange_order import ExchangeOrder, ExchangeOrderStatus


class ExchangeRepositoryPort(ABC):
    """
    Port interface for exchange order persistence.
    """

    @abstractmethod
    async def save(self, order: ExchangeOrder) -> ExchangeOrder:
        """
        Persist a new order.

        Args:
            order: Order to save

        Returns:
            The saved order
        """
        pass

    @abstractmethod
    async def get(self, order_id: UUID) -> Optional[ExchangeOrder]:
        """
        Get an order by ID.

        Args:
            order_id: Order identifier

        Returns:
            The order, or None if it does not exist
        """
        pass

    @abstractmethod
    async def get_by_user(self, user_id: UUID) -> List[ExchangeOrder]:
        """Get every order of a user, newest first."""
        pass

    @abstractmethod
    async def get_by_status(self, status: ExchangeOrderStatus) -> List[ExchangeOrder]:
        """Get every order in a status, newest first."""
        pass

    @abstractmethod
    async def get_completed(self) -> List[ExchangeOrder]:
        """Get every completed order, newest first."""
        pass

    @abstractmethod
    async def update(self, order: ExchangeOrder) -> Optional[ExchangeOrder]:
        """
        Replace a stored order.

        Args:
            order: Order carrying the new state

        Returns:
            The updated order, or None if it was never saved
        """
        pass

    @abstractmethod
    async def delete(self, order_id: UUID) -> bool:
        """
        Delete an order.

        Returns:
            True if an order was deleted
        """
        pass
