from deelrate.infrastructure.adapters.cache.memory_rate_cache_adapter import InMemoryRateCacheAdapter

__all__ = ["InMemoryRateCacheAdapter"]
