"""
RateCachePort - Interface for the time-bounded rate cache.

Entries expire after their TTL. Concurrent writers to one key are
allowed; the last write wins.
"""
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

from deelrate.domain.value_objects.exchange_rate import ExchangeRate


class RateCachePort(ABC):
    """
    Port interface for caching exchange rates.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[ExchangeRate]:
        """
        Get a cached rate.

        Args:
            key: Cache key

        Returns:
            ExchangeRate if present and not expired, else None
        """
        pass

    @abstractmethod
    async def set(self, key: str, rate: ExchangeRate, ttl: timedelta) -> None:
        """
        Store a rate with a fresh TTL.

        Args:
            key: Cache key
            rate: Rate to store
            ttl: Time-to-live
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Drop every entry."""
        pass
