# Outbound ports (external system interfaces)
from deelrate.application.ports.outbound.rate_provider_port import RateProviderPort
from deelrate.application.ports.outbound.rate_cache_port import RateCachePort
from deelrate.application.ports.outbound.exchange_repository_port import ExchangeRepositoryPort
from deelrate.application.ports.outbound.deposit_address_port import DepositAddressPort
from deelrate.application.ports.outbound.time_provider_port import (
    TimeProviderPort,
    SystemTimeAdapter,
    FixedTimeAdapter,
)

__all__ = [
    "RateProviderPort",
    "RateCachePort",
    "ExchangeRepositoryPort",
    "DepositAddressPort",
    "TimeProviderPort",
    "SystemTimeAdapter",
    "FixedTimeAdapter",
]
