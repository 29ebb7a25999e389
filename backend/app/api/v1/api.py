"""
API v1 router.
Aggregates every endpoint.
"""
from fastapi import APIRouter

from backend.app.api.v1.endpoints import exchange_orders, rates, health

api_router = APIRouter()

# Register endpoints
api_router.include_router(
    exchange_orders.router,
    prefix="/exchange-orders",
    tags=["exchange-orders"]
)

api_router.include_router(
    rates.router,
    prefix="/rates",
    tags=["rates"]
)

api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)
