"""
Integration Test Fixtures for Adapter Tests.

Provides a database session factory for testing PostgresExchangeRepository.
Runs against a throwaway SQLite file through aiosqlite so the suite needs
no database server.
"""
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from backend.app.db.base import Base
import backend.app.models  # noqa: F401  (registers tables on Base.metadata)


@pytest.fixture(scope="function")
async def session_factory(tmp_path):
    """
    Provide a session factory bound to a fresh database.

    Creates a fresh engine and schema for each test function.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'deelrate_test.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    yield factory

    await engine.dispose()
