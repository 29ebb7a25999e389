"""
Exchange rate API endpoints
"""
from fastapi import APIRouter, Depends

from backend.app.api.deps import get_exchange_rate_service
from backend.app.api.errors import raise_for_error
from backend.app.schemas.rate import (
    CurrencyPairListResponse,
    CurrencyPairSchema,
    ExchangeRateResponse,
    RateBatchRequest,
    RateListResponse,
)
from deelrate.application.services.exchange_rate_service import ExchangeRateService
from deelrate.domain.result import Error
from deelrate.domain.value_objects.amounts import CryptoType
from deelrate.domain.value_objects.exchange_rate import CurrencyPair

router = APIRouter()


def _rate_list(result) -> RateListResponse:
    # Partial results are a success; only total failure is an error
    if result.is_failure:
        raise_for_error(result.error, upstream=True)
    rates = [ExchangeRateResponse.from_domain(r) for r in result.value]
    return RateListResponse(rates=rates, count=len(rates))


# Static paths first: /{base}/{quote} would match them too

@router.get("/pairs", response_model=CurrencyPairListResponse)
async def get_supported_pairs(
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> CurrencyPairListResponse:
    """Every supported base/quote pair"""
    pairs = service.get_supported_currency_pairs().value
    return CurrencyPairListResponse(
        pairs=[CurrencyPairSchema.from_domain(p) for p in pairs],
        count=len(pairs),
    )


@router.get("/base/{base}", response_model=RateListResponse)
async def get_rates_by_base(
    base: str,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> RateListResponse:
    """Rates of one crypto against every other supported crypto"""
    crypto_type = CryptoType.parse(base)
    if crypto_type is None:
        raise_for_error(
            Error.validation("CurrencyPair.InvalidBase", f"Unsupported base currency: {base}.")
        )
    return _rate_list(await service.get_rates_by_base(crypto_type))


@router.post("/batch", response_model=RateListResponse)
async def get_rates(
    request: RateBatchRequest,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> RateListResponse:
    """Rates for many pairs; pairs that fail are left out"""
    return _rate_list(await service.get_rates([p.to_domain() for p in request.pairs]))


@router.get("/{base}/{quote}", response_model=ExchangeRateResponse)
async def get_rate(
    base: str,
    quote: str,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ExchangeRateResponse:
    """Rate for one pair (cached for one minute)"""
    result = await service.get_rate(CurrencyPair(base.strip().upper(), quote.strip().upper()))
    if result.is_failure:
        raise_for_error(result.error, upstream=True)
    return ExchangeRateResponse.from_domain(result.value)
