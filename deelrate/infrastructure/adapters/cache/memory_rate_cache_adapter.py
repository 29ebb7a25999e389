"""
InMemoryRateCacheAdapter - In-process implementation of RateCachePort.

Entries carry an expiry time taken from the injected clock; expired
entries are dropped on read. Writers to the same key overwrite each
other (last write wins).
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from deelrate.application.ports.outbound.rate_cache_port import RateCachePort
from deelrate.application.ports.outbound.time_provider_port import (
    SystemTimeAdapter,
    TimeProviderPort,
)
from deelrate.domain.value_objects.exchange_rate import ExchangeRate

logger = logging.getLogger(__name__)


class InMemoryRateCacheAdapter(RateCachePort):
    """
    In-memory rate cache.

    Stores (rate, expires_at) tuples in a dictionary.
    """

    def __init__(self, time_provider: Optional[TimeProviderPort] = None):
        """
        Initialize empty storage.

        Args:
            time_provider: Clock used for expiry (defaults to the system clock)
        """
        self._time = time_provider or SystemTimeAdapter()
        # Dict[key, (rate, expires_at)]
        self._entries: Dict[str, Tuple[ExchangeRate, datetime]] = {}

    async def get(self, key: str) -> Optional[ExchangeRate]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        rate, expires_at = entry
        if self._time.now() >= expires_at:
            # Expired; another writer may have replaced it meanwhile
            if self._entries.get(key) is entry:
                del self._entries[key]
            return None

        return rate

    async def set(self, key: str, rate: ExchangeRate, ttl: timedelta) -> None:
        self._entries[key] = (rate, self._time.now() + ttl)
        logger.debug(f"Cached {key} for {ttl.total_seconds():.0f}s")

    async def clear(self) -> None:
        self._entries.clear()

    async def cleanup_expired(self) -> int:
        """
        Remove expired entries.

        Returns:
            Number of entries removed
        """
        now = self._time.now()
        expired = [
            key for key, (_, expires_at) in self._entries.items()
            if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    @property
    def size(self) -> int:
        """Number of stored entries, expired ones included."""
        return len(self._entries)
