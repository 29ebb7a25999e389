"""
Tests for InMemoryRateCacheAdapter.
"""
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from deelrate.domain.value_objects.exchange_rate import CurrencyPair, ExchangeRate
from deelrate.infrastructure.adapters.cache.memory_rate_cache_adapter import InMemoryRateCacheAdapter

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
TTL = timedelta(minutes=1)


def rate(value="50000") -> ExchangeRate:
    return ExchangeRate(CurrencyPair("BTC", "USDT"), Decimal(value), NOW)


class TestInMemoryRateCacheAdapter:

    @pytest.fixture
    def cache(self, fixed_clock):
        return InMemoryRateCacheAdapter(fixed_clock)

    @pytest.mark.asyncio
    async def test_get_missing_key(self, cache):
        assert await cache.get("ExchangeRate_BTC_USDT") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, cache):
        await cache.set("key", rate(), TTL)

        assert await cache.get("key") == rate()

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, cache, fixed_clock):
        # Given
        await cache.set("key", rate(), TTL)

        # When
        fixed_clock.advance(TTL)

        # Then
        assert await cache.get("key") is None
        assert cache.size == 0

    @pytest.mark.asyncio
    async def test_last_write_wins(self, cache):
        await cache.set("key", rate("1"), TTL)
        await cache.set("key", rate("2"), TTL)

        assert (await cache.get("key")).rate == Decimal("2")

    @pytest.mark.asyncio
    async def test_rewrite_refreshes_ttl(self, cache, fixed_clock):
        await cache.set("key", rate(), TTL)
        fixed_clock.advance(timedelta(seconds=50))
        await cache.set("key", rate(), TTL)
        fixed_clock.advance(timedelta(seconds=50))

        assert await cache.get("key") is not None

    @pytest.mark.asyncio
    async def test_cleanup_expired(self, cache, fixed_clock):
        await cache.set("old", rate(), timedelta(seconds=10))
        await cache.set("new", rate(), TTL)
        fixed_clock.advance(timedelta(seconds=30))

        removed = await cache.cleanup_expired()

        assert removed == 1
        assert cache.size == 1

    @pytest.mark.asyncio
    async def test_clear(self, cache):
        await cache.set("key", rate(), TTL)

        await cache.clear()

        assert cache.size == 0
