"""
Database models package.
Imports every SQLAlchemy model so metadata.create_all sees them.
"""
from backend.app.models.exchange_order import ExchangeOrder

__all__ = [
    "ExchangeOrder",
]
