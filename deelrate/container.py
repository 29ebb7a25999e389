"""
Dependency Injection Container.

This module provides a central container for wiring dependencies
following the Dependency Inversion Principle.

Usage:
    # Production
    container = Container.create_with_database(session_factory)
    orders = container.get_exchange_order_use_case()

    # Testing
    container = Container.create_for_testing()

    # or with custom mocks
    container = Container(rate_provider=mock_provider)
"""
from typing import Callable, Optional

from deelrate.application.ports.outbound.deposit_address_port import DepositAddressPort
from deelrate.application.ports.outbound.exchange_repository_port import ExchangeRepositoryPort
from deelrate.application.ports.outbound.rate_cache_port import RateCachePort
from deelrate.application.ports.outbound.rate_provider_port import RateProviderPort
from deelrate.application.ports.outbound.time_provider_port import (
    SystemTimeAdapter,
    TimeProviderPort,
)
from deelrate.application.services.exchange_rate_service import ExchangeRateService
from deelrate.application.use_cases.exchange_order import ExchangeOrderUseCase

# Deposit addresses used by create_for_testing
TEST_WALLET = "bc1qtestdepositwallet0000000000000000"
TEST_ACCOUNT = ("0123456789", "DeelRate Ltd", "Test Bank")


class Container:
    """
    Dependency Injection Container.

    Manages the creation and wiring of application dependencies.
    Port instances and use cases are created once and reused.
    """

    def __init__(
        self,
        rate_provider: Optional[RateProviderPort] = None,
        rate_cache: Optional[RateCachePort] = None,
        exchange_repository: Optional[ExchangeRepositoryPort] = None,
        deposit_addresses: Optional[DepositAddressPort] = None,
        time_provider: Optional[TimeProviderPort] = None,
    ):
        """
        Initialize container with optional port overrides.

        Args:
            rate_provider: Rate provider implementation (uses CoinAPI if None)
            rate_cache: Rate cache implementation (uses in-memory if None)
            exchange_repository: Order repository implementation (uses in-memory if None)
            deposit_addresses: Deposit address implementation (uses settings if None)
            time_provider: Clock implementation (uses system clock if None)
        """
        self._rate_provider = rate_provider
        self._rate_cache = rate_cache
        self._exchange_repository = exchange_repository
        self._deposit_addresses = deposit_addresses
        self._time_provider = time_provider

        # Cached services
        self._exchange_rate_service: Optional[ExchangeRateService] = None
        self._exchange_order_use_case: Optional[ExchangeOrderUseCase] = None

    @classmethod
    def create_for_testing(
        cls,
        rate_provider: Optional[RateProviderPort] = None,
        time_provider: Optional[TimeProviderPort] = None,
    ) -> "Container":
        """
        Create container with in-memory adapters for testing.

        Args:
            rate_provider: Rate provider stub (CoinAPI adapter if None)
            time_provider: Clock (system clock if None)

        Returns:
            Container with test adapters
        """
        from deelrate.domain.value_objects.amounts import CryptoType, FiatType
        from deelrate.infrastructure.adapters.cache.memory_rate_cache_adapter import InMemoryRateCacheAdapter
        from deelrate.infrastructure.adapters.deposit.settings_deposit_address_adapter import (
            SettingsDepositAddressAdapter,
        )
        from deelrate.infrastructure.adapters.persistence.memory_exchange_repository import (
            InMemoryExchangeRepository,
        )

        time_provider = time_provider or SystemTimeAdapter()
        return cls(
            rate_provider=rate_provider,
            rate_cache=InMemoryRateCacheAdapter(time_provider),
            exchange_repository=InMemoryExchangeRepository(),
            deposit_addresses=SettingsDepositAddressAdapter(
                wallets={c.value: TEST_WALLET for c in CryptoType},
                accounts={f.value: TEST_ACCOUNT for f in FiatType},
            ),
            time_provider=time_provider,
        )

    @classmethod
    def create_with_database(
        cls,
        session_factory: Callable,
        rate_provider: Optional[RateProviderPort] = None,
    ) -> "Container":
        """
        Create container backed by PostgreSQL.

        Args:
            session_factory: SQLAlchemy async session factory
            rate_provider: Rate provider (CoinAPI if None)

        Returns:
            Container with the PostgreSQL order repository
        """
        from deelrate.infrastructure.adapters.persistence.postgres_exchange_repository import (
            PostgresExchangeRepository,
        )

        return cls(
            rate_provider=rate_provider,
            exchange_repository=PostgresExchangeRepository(session_factory),
        )

    # --- Port Getters ---

    def get_time_provider(self) -> TimeProviderPort:
        """Get clock implementation."""
        if self._time_provider is None:
            self._time_provider = SystemTimeAdapter()
        return self._time_provider

    def get_rate_provider(self) -> RateProviderPort:
        """Get rate provider implementation."""
        if self._rate_provider is None:
            from deelrate.infrastructure.adapters.rate_provider.coinapi_adapter import CoinApiRateProviderAdapter
            self._rate_provider = CoinApiRateProviderAdapter()
        return self._rate_provider

    def get_rate_cache(self) -> RateCachePort:
        """Get rate cache implementation."""
        if self._rate_cache is None:
            from deelrate.infrastructure.adapters.cache.memory_rate_cache_adapter import InMemoryRateCacheAdapter
            self._rate_cache = InMemoryRateCacheAdapter(self.get_time_provider())
        return self._rate_cache

    def get_exchange_repository(self) -> ExchangeRepositoryPort:
        """Get order repository implementation."""
        if self._exchange_repository is None:
            from deelrate.infrastructure.adapters.persistence.memory_exchange_repository import (
                InMemoryExchangeRepository,
            )
            self._exchange_repository = InMemoryExchangeRepository()
        return self._exchange_repository

    def get_deposit_addresses(self) -> DepositAddressPort:
        """Get deposit address implementation."""
        if self._deposit_addresses is None:
            from deelrate.infrastructure.adapters.deposit.settings_deposit_address_adapter import (
                SettingsDepositAddressAdapter,
            )
            self._deposit_addresses = SettingsDepositAddressAdapter.from_config()
        return self._deposit_addresses

    # --- Service Getters ---

    def get_exchange_rate_service(self) -> ExchangeRateService:
        """Get ExchangeRateService with wired dependencies."""
        if self._exchange_rate_service is None:
            self._exchange_rate_service = ExchangeRateService(
                provider=self.get_rate_provider(),
                cache=self.get_rate_cache(),
            )
        return self._exchange_rate_service

    def get_exchange_order_use_case(self) -> ExchangeOrderUseCase:
        """Get ExchangeOrderUseCase with wired dependencies."""
        if self._exchange_order_use_case is None:
            self._exchange_order_use_case = ExchangeOrderUseCase(
                repository=self.get_exchange_repository(),
                deposit_addresses=self.get_deposit_addresses(),
                time_provider=self.get_time_provider(),
            )
        return self._exchange_order_use_case

    async def close(self) -> None:
        """Release adapter resources (HTTP clients)."""
        from deelrate.infrastructure.adapters.rate_provider.coinapi_adapter import CoinApiRateProviderAdapter

        if isinstance(self._rate_provider, CoinApiRateProviderAdapter):
            await self._rate_provider.close()
