"""
Database session management.
Creates the async engine and session factory for the order repository.
"""
from typing import Any, Dict
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from backend.app.core.config import Settings, settings


def engine_options(config: Settings) -> Dict[str, Any]:
    """
    Engine keyword arguments for a settings object.

    Each order transition holds one pooled connection and a row lock
    (SELECT ... FOR UPDATE) until it commits.
    """
    return {
        "echo": config.LOG_LEVEL == "DEBUG",
        "pool_pre_ping": True,
        "pool_size": config.DB_POOL_SIZE,
        "max_overflow": config.DB_MAX_OVERFLOW,
        "pool_recycle": config.DB_POOL_RECYCLE_SECONDS,
        "connect_args": {
            "server_settings": {"application_name": config.PROJECT_NAME},
            "command_timeout": config.DB_COMMAND_TIMEOUT_SECONDS,
        },
    }


# Async engine (connects lazily on first use)
engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings))

# Async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

