from deelrate.infrastructure.adapters.rate_provider.coinapi_adapter import CoinApiRateProviderAdapter

__all__ = ["CoinApiRateProviderAdapter"]
