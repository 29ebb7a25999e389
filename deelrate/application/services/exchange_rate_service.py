"""
ExchangeRateService - Cached rate lookups with batch aggregation.

Wraps a RateProviderPort with a RateCachePort (cache-aside, one minute
TTL). Batch lookups fan out one task per distinct pair and succeed when
at least one pair resolved; per-pair errors are logged and dropped.
"""
import asyncio
import logging
from datetime import timedelta
from typing import Iterable, List, Optional

from deelrate.application.ports.outbound.rate_cache_port import RateCachePort
from deelrate.application.ports.outbound.rate_provider_port import RateProviderPort
from deelrate.domain.result import Error, Result
from deelrate.domain.value_objects.amounts import CryptoType
from deelrate.domain.value_objects.exchange_rate import CurrencyPair, ExchangeRate
from deelrate.exceptions import RateProviderError

logger = logging.getLogger(__name__)

RATE_CACHE_TTL = timedelta(minutes=1)


class ExchangeRateService:
    """
    Rate cache and aggregator.

    Expected failures come back as Result errors; only exceptions raised
    by the provider adapter are caught and turned into Failure results.
    """

    def __init__(
        self,
        provider: RateProviderPort,
        cache: RateCachePort,
        cache_ttl: timedelta = RATE_CACHE_TTL,
    ):
        """
        Initialize with required ports.

        Args:
            provider: External rate source
            cache: Rate cache
            cache_ttl: Lifetime of cached rates
        """
        self.provider = provider
        self.cache = cache
        self.cache_ttl = cache_ttl

    async def get_rate(self, pair: Optional[CurrencyPair]) -> Result[ExchangeRate]:
        """
        Get the rate for one pair, from cache when fresh.

        Args:
            pair: Currency pair

        Returns:
            Result with the ExchangeRate
        """
        if pair is None:
            return Result.failure(
                Error.validation("CurrencyPair.Required", "Currency pair is required.")
            )

        cached = await self.cache.get(pair.cache_key)
        if cached is not None:
            return Result.success(cached)

        try:
            quote = await self.provider.fetch(pair.base, pair.quote)
        except RateProviderError as e:
            logger.error(f"Rate fetch failed for {pair}: {e.message}")
            return Result.failure(
                Error.failure("Api.Error", f"Failed to fetch rate for {pair}: {e.reason}")
            )
        except Exception as e:
            logger.error(f"Unexpected error fetching rate for {pair}: {e}")
            return Result.failure(
                Error.failure("Api.Error", f"Unexpected error fetching rate for {pair}: {e}")
            )

        if quote is None:
            return Result.failure(
                Error.not_found("Api.Error", f"No exchange rate found for {pair}.")
            )

        base = CryptoType.parse(quote.base_asset)
        quote_asset = CryptoType.parse(quote.quote_asset)
        if base is None or quote_asset is None:
            return Result.failure(
                Error.validation(
                    "Api.Error", f"Invalid currency type in response for {pair}."
                )
            )

        result = ExchangeRate.create(
            CurrencyPair(base.value, quote_asset.value), quote.rate, quote.timestamp
        )
        if result.is_failure:
            return result

        await self.cache.set(pair.cache_key, result.value, self.cache_ttl)
        return result

    async def get_rates(
        self, pairs: Optional[Iterable[CurrencyPair]]
    ) -> Result[List[ExchangeRate]]:
        """
        Get rates for many pairs concurrently.

        Duplicate pairs are fetched once. Cancelling the batch cancels every
        in-flight fetch; those pairs count as failed and the rates already
        fetched are still returned.

        Args:
            pairs: Currency pairs

        Returns:
            Result with every rate that resolved, in input order, or the
            first error when none did
        """
        distinct = list(dict.fromkeys(pairs or ()))
        if not distinct:
            return Result.failure(
                Error.validation(
                    "CurrencyPairs.Required", "At least one currency pair is required."
                )
            )

        tasks = [asyncio.ensure_future(self.get_rate(pair)) for pair in distinct]
        try:
            await asyncio.wait(tasks)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            await asyncio.wait(tasks)
            # The cancellation is answered with a result, not re-raised
            asyncio.current_task().uncancel()
            finished = sum(not task.cancelled() for task in tasks)
            logger.warning(f"Rate batch cancelled; {finished} of {len(tasks)} pairs finished")

        rates: List[ExchangeRate] = []
        errors: List[Error] = []
        for pair, task in zip(distinct, tasks):
            if task.cancelled():
                errors.append(
                    Error.failure("Api.Error", f"Fetching rate for {pair} was cancelled.")
                )
                continue
            error = task.exception()
            if error is not None:
                logger.error(f"Unexpected error fetching rate for {pair}: {error!r}")
                errors.append(
                    Error.failure(
                        "Api.Error",
                        f"Unexpected error fetching rate for {pair}: {error}",
                    )
                )
                continue

            outcome = task.result()
            if outcome.is_success:
                rates.append(outcome.value)
            else:
                logger.warning(f"Skipping {pair}: {outcome.error}")
                errors.append(outcome.error)

        if rates:
            return Result.success(rates)

        return Result.failure(
            errors[0] if errors
            else Error.failure("Api.Error", "Failed to retrieve any exchange rates.")
        )

    async def get_rates_by_base(self, base: CryptoType) -> Result[List[ExchangeRate]]:
        """Rates of base against every other supported crypto type."""
        pairs = [
            CurrencyPair(base.value, quote.value)
            for quote in CryptoType
            if quote != base
        ]
        return await self.get_rates(pairs)

    def get_supported_currency_pairs(self) -> Result[List[CurrencyPair]]:
        """Every ordered pair of distinct crypto types, base order first."""
        return Result.success([
            CurrencyPair(base.value, quote.value)
            for base in CryptoType
            for quote in CryptoType
            if base != quote
        ])
