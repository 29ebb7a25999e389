"""
SQLAlchemy declarative base for the exchange tables.

Every `Mapped[Decimal]` column is stored as NUMERIC(38, 18): wide enough
for fiat totals and exact down to the smallest crypto unit in use (1e-18 ETH).
"""
from decimal import Decimal

from sqlalchemy import MetaData, Numeric
from sqlalchemy.orm import DeclarativeBase

AMOUNT_PRECISION = 38
AMOUNT_SCALE = 18

# Naming convention for constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class Base(DeclarativeBase):
    """Base class of the exchange ORM models"""
    metadata = metadata
    type_annotation_map = {
        Decimal: Numeric(AMOUNT_PRECISION, AMOUNT_SCALE),
    }
