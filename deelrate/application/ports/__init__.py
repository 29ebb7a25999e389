"""Application ports (interfaces)."""
from deelrate.application.ports.outbound import (
    RateProviderPort,
    RateCachePort,
    ExchangeRepositoryPort,
    DepositAddressPort,
    TimeProviderPort,
)

__all__ = [
    "RateProviderPort",
    "RateCachePort",
    "ExchangeRepositoryPort",
    "DepositAddressPort",
    "TimeProviderPort",
]
