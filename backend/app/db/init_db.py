"""
Database initialization.
Creates tables at application startup.
"""
import logging

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.models import ExchangeOrder  # noqa: F401

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """
    Create every table known to Base.metadata (existing tables are kept).
    """
    logger.info("Creating database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables ready")
