"""
CoinApiRateProviderAdapter - CoinAPI implementation of RateProviderPort.

Calls GET /v1/exchangerate/{base}/{quote} with an X-CoinAPI-Key header.
The httpx timeout bounds every request; timeouts surface as
RateProviderError like any other transport failure.
"""
import logging
from typing import Optional

import httpx

from deelrate.application.dto.rates import RateQuote
from deelrate.application.ports.outbound.rate_provider_port import RateProviderPort
from deelrate.config.settings import RateConfig
from deelrate.exceptions import RateProviderError

logger = logging.getLogger(__name__)


class CoinApiRateProviderAdapter(RateProviderPort):
    """
    CoinAPI adapter implementing RateProviderPort.

    Pass an httpx.AsyncClient to share a connection pool (or to inject a
    mock transport); otherwise the adapter owns a lazily created client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize CoinAPI adapter.

        Args:
            api_key: CoinAPI key (uses config if not provided)
            base_url: API root (uses config if not provided)
            timeout: Request timeout in seconds (uses config if not provided)
            client: Shared HTTP client
        """
        self._api_key = api_key or RateConfig.COINAPI_API_KEY or ""
        self._base_url = (base_url or RateConfig.COINAPI_BASE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else RateConfig.COINAPI_TIMEOUT_SECONDS
        self._client = client
        self._owns_client = client is None

    @property
    def name(self) -> str:
        return "CoinAPI"

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def fetch(self, base_currency: str, quote_currency: str) -> Optional[RateQuote]:
        """Fetch one rate; None when CoinAPI has no rate for the pair."""
        pair = f"{base_currency}/{quote_currency}"
        url = f"{self._base_url}/v1/exchangerate/{base_currency}/{quote_currency}"
        headers = {
            "X-CoinAPI-Key": self._api_key,
            "Accept": RateConfig.COINAPI_ACCEPT,
        }

        try:
            response = await self.client.get(url, headers=headers, timeout=self._timeout)
            if response.status_code == 404:
                logger.info(f"CoinAPI has no rate for {pair}")
                return None
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise RateProviderError(
                self.name, pair, e.response.text[:200] or "HTTP error", e.response.status_code
            ) from e
        except httpx.TimeoutException as e:
            raise RateProviderError(self.name, pair, f"timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise RateProviderError(self.name, pair, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise RateProviderError(self.name, pair, f"invalid JSON: {e}") from e

        if not payload:
            return None
        if not isinstance(payload, dict):
            raise RateProviderError(self.name, pair, "unexpected response shape")

        try:
            return RateQuote.from_dict(payload)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise RateProviderError(self.name, pair, f"unreadable response: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
