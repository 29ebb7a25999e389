"""
Backend API test fixtures.

The ASGI transport does not run the application lifespan, so each test
installs its own in-memory container on app.state.
"""
import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from httpx import ASGITransport, AsyncClient

from backend.app.main import app
from deelrate.application.ports.outbound.rate_provider_port import RateProviderPort
from deelrate.container import Container


@pytest.fixture
def rate_provider():
    """Rate provider mock; tests set fetch.side_effect / return_value."""
    provider = MagicMock(spec=RateProviderPort)
    provider.name = "Mock"
    provider.fetch = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def container(rate_provider) -> Container:
    return Container.create_for_testing(rate_provider=rate_provider)


@pytest.fixture
async def client(container: Container) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for the FastAPI app.
    """
    app.state.container = container

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    del app.state.container


@pytest.fixture
def buy_order_data():
    """Valid buy order request body"""
    return {
        "user_id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
        "order_type": "buy",
        "crypto_type": "BTC",
        "fiat_amount": {"fiat_type": "USD", "amount": "100"},
        "user_destination": {
            "type": "crypto",
            "wallet": "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
        },
    }


@pytest.fixture
def sell_order_data():
    """Valid sell order request body"""
    return {
        "user_id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
        "order_type": "sell",
        "crypto_type": "ETH",
        "crypto_amount": {"currency": "ETH", "value": "1.5"},
        "fiat_type": "NGN",
        "user_destination": {
            "type": "fiat",
            "account_number": "0123456789",
            "account_name": "Ada Obi",
            "bank_name": "Zenith Bank",
        },
    }
