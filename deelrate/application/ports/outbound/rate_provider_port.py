"""
RateProviderPort - Interface for fetching point-in-time exchange rates.

Retries, circuit breaking and timeouts belong to the adapter's transport;
the port only defines what a single fetch returns.
"""
from abc import ABC, abstractmethod
from typing import Optional

from deelrate.application.dto.rates import RateQuote


class RateProviderPort(ABC):
    """
    Port interface for an external rate source.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name used in logs and errors."""
        pass

    @abstractmethod
    async def fetch(self, base_currency: str, quote_currency: str) -> Optional[RateQuote]:
        """
        Fetch the current rate for a currency pair.

        Args:
            base_currency: Base symbol (e.g. "BTC")
            quote_currency: Quote symbol (e.g. "USDT")

        Returns:
            RateQuote, or None when the provider has no rate for the pair

        Raises:
            RateProviderError: On transport failure or an unusable response
        """
        pass
