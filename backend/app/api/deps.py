"""
Shared FastAPI dependencies.
"""
from fastapi import Depends, Request

from deelrate.application.services.exchange_rate_service import ExchangeRateService
from deelrate.application.use_cases.exchange_order import ExchangeOrderUseCase
from deelrate.container import Container


def get_container(request: Request) -> Container:
    """Container built at startup (see main.lifespan)."""
    return request.app.state.container


def get_exchange_order_use_case(
    container: Container = Depends(get_container),
) -> ExchangeOrderUseCase:
    return container.get_exchange_order_use_case()


def get_exchange_rate_service(
    container: Container = Depends(get_container),
) -> ExchangeRateService:
    return container.get_exchange_rate_service()
