from deelrate.infrastructure.adapters.persistence.memory_exchange_repository import (
    InMemoryExchangeRepository,
)

__all__ = ["InMemoryExchangeRepository"]
