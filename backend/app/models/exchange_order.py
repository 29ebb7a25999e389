"""
Exchange order model.
Stores one row per exchange order with its amounts, addresses and
completion record.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict
from sqlalchemy import JSON, String, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db.base import Base


class ExchangeOrder(Base):
    """Exchange order table"""
    __tablename__ = "exchange_orders"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    order_id: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, index=True,
        comment="Domain order UUID"
    )
    user_id: Mapped[str] = mapped_column(
        String(36), nullable=False, index=True,
        comment="Owner UUID"
    )
    order_type: Mapped[str] = mapped_column(
        String(10), nullable=False,
        comment="buy or sell"
    )
    crypto_type: Mapped[str] = mapped_column(
        String(10), nullable=False,
        comment="Cryptocurrency symbol (e.g. BTC)"
    )
    fiat_type: Mapped[str] = mapped_column(
        String(10), nullable=False,
        comment="Settlement fiat symbol (e.g. USD)"
    )
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, index=True,
        comment="Lifecycle status"
    )
    crypto_amount: Mapped[Decimal | None] = mapped_column(
        nullable=True,
        comment="Crypto quantity"
    )
    fiat_amount: Mapped[Decimal | None] = mapped_column(
        nullable=True,
        comment="Fiat quantity"
    )
    user_destination: Mapped[Dict[str, Any]] = mapped_column(
        JSON, nullable=False,
        comment="Where the user receives funds"
    )
    system_deposit: Mapped[Dict[str, Any]] = mapped_column(
        JSON, nullable=False,
        comment="Where the user pays in"
    )
    completion_rate: Mapped[Decimal | None] = mapped_column(
        nullable=True,
        comment="Effective rate recorded at completion"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True,
        comment="Order creation time (UTC)"
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True,
        comment="Completion time (UTC)"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False,
        comment="Last update time"
    )

    # Composite index: a user's orders by status and age
    __table_args__ = (
        Index('ix_exchange_orders_user_status_created_at', 'user_id', 'status', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<ExchangeOrder {self.order_id} {self.order_type} {self.crypto_type}/{self.fiat_type} ({self.status})>"
