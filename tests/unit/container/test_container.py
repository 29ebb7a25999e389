"""
Tests for the dependency injection container.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from deelrate.application.ports.outbound.rate_provider_port import RateProviderPort
from deelrate.application.services.exchange_rate_service import ExchangeRateService
from deelrate.application.use_cases.exchange_order import ExchangeOrderUseCase
from deelrate.container import Container, TEST_WALLET
from deelrate.domain.value_objects.amounts import CryptoType
from deelrate.domain.value_objects.destination_address import AddressType
from deelrate.infrastructure.adapters.cache.memory_rate_cache_adapter import InMemoryRateCacheAdapter
from deelrate.infrastructure.adapters.persistence.memory_exchange_repository import (
    InMemoryExchangeRepository,
)
from deelrate.infrastructure.adapters.rate_provider.coinapi_adapter import CoinApiRateProviderAdapter


class TestContainer:

    def test_create_for_testing_uses_in_memory_adapters(self):
        container = Container.create_for_testing(rate_provider=MagicMock(spec=RateProviderPort))

        assert isinstance(container.get_rate_cache(), InMemoryRateCacheAdapter)
        assert isinstance(container.get_exchange_repository(), InMemoryExchangeRepository)
        wallet = container.get_deposit_addresses().get_deposit_address(
            AddressType.CRYPTO_DEPOSIT_ADDRESS, crypto_type=CryptoType.SOL
        )
        assert wallet.value.wallet == TEST_WALLET

    def test_services_are_cached(self):
        container = Container.create_for_testing(rate_provider=MagicMock(spec=RateProviderPort))

        service = container.get_exchange_rate_service()
        use_case = container.get_exchange_order_use_case()

        assert isinstance(service, ExchangeRateService)
        assert isinstance(use_case, ExchangeOrderUseCase)
        assert container.get_exchange_rate_service() is service
        assert container.get_exchange_order_use_case() is use_case

    def test_default_rate_provider_is_coinapi(self):
        container = Container()

        assert isinstance(container.get_rate_provider(), CoinApiRateProviderAdapter)

    @pytest.mark.asyncio
    async def test_close_releases_coinapi_client(self):
        provider = CoinApiRateProviderAdapter(api_key="k")
        provider.close = AsyncMock()
        container = Container(rate_provider=provider)

        await container.close()

        provider.close.assert_awaited_once()

