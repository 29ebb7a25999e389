"""
Exchange order schemas.
Pydantic models for API requests and responses.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union
from uuid import UUID
from pydantic import BaseModel, Field

from deelrate.domain.entities.exchange_completed import ExchangeCompleted
from deelrate.domain.entities.exchange_order import ExchangeOrder, ExchangeOrderStatus, ExchangeOrderType
from deelrate.domain.result import Result
from deelrate.domain.value_objects.amounts import CryptoAmount, CryptoType, FiatAmount, FiatType
from deelrate.domain.value_objects.destination_address import (
    CryptoAddress,
    DestinationAddress,
    FiatAccount,
)


class CryptoAmountSchema(BaseModel):
    """Crypto quantity"""
    currency: CryptoType = Field(..., description="Cryptocurrency (e.g. BTC)")
    value: Decimal = Field(..., description="Quantity")

    def to_domain(self) -> Result[CryptoAmount]:
        return CryptoAmount.create(self.value, self.currency)

    @classmethod
    def from_domain(cls, amount: CryptoAmount) -> "CryptoAmountSchema":
        return cls(currency=amount.currency, value=amount.value)


class FiatAmountSchema(BaseModel):
    """Fiat quantity"""
    fiat_type: FiatType = Field(..., description="Fiat currency (e.g. USD)")
    amount: Decimal = Field(..., description="Quantity")

    def to_domain(self) -> Result[FiatAmount]:
        return FiatAmount.create(self.fiat_type, self.amount)

    @classmethod
    def from_domain(cls, amount: FiatAmount) -> "FiatAmountSchema":
        return cls(fiat_type=amount.fiat_type, amount=amount.amount)


class CryptoAddressSchema(BaseModel):
    """Crypto wallet"""
    type: Literal["crypto"] = "crypto"
    wallet: str = Field(..., description="Wallet address")

    def to_domain(self) -> Result[DestinationAddress]:
        return CryptoAddress.create(self.wallet)


class FiatAccountSchema(BaseModel):
    """Bank account"""
    type: Literal["fiat"] = "fiat"
    account_number: str = Field(..., description="10-digit account number")
    account_name: str = Field(..., description="Account holder")
    bank_name: str = Field(..., description="Bank")

    def to_domain(self) -> Result[DestinationAddress]:
        return FiatAccount.create(self.account_number, self.account_name, self.bank_name)


DestinationSchema = Annotated[
    Union[CryptoAddressSchema, FiatAccountSchema],
    Field(discriminator="type"),
]


def destination_from_domain(address: DestinationAddress) -> Union[CryptoAddressSchema, FiatAccountSchema]:
    if isinstance(address, CryptoAddress):
        return CryptoAddressSchema(wallet=address.wallet)
    return FiatAccountSchema(
        account_number=address.account_number,
        account_name=address.account_name,
        bank_name=address.bank_name,
    )


class ExchangeOrderCreate(BaseModel):
    """Order creation request"""
    user_id: UUID = Field(..., description="Owner")
    order_type: ExchangeOrderType = Field(..., description="buy (fiat -> crypto) or sell (crypto -> fiat)")
    crypto_type: CryptoType = Field(..., description="Cryptocurrency exchanged")
    crypto_amount: CryptoAmountSchema | None = Field(None, description="Required for sell orders")
    fiat_amount: FiatAmountSchema | None = Field(None, description="Required for buy orders")
    fiat_type: FiatType | None = Field(None, description="Settlement fiat for sell orders (default USD)")
    user_destination: DestinationSchema = Field(..., description="Where the user receives funds")


class SystemConfirmRequest(BaseModel):
    """Payment received by the platform"""
    actual_fiat_received: FiatAmountSchema | None = Field(None, description="Fiat received (buy)")
    actual_crypto_received: CryptoAmountSchema | None = Field(None, description="Crypto received (sell)")
    rate: Decimal = Field(..., description="Quote per one unit of crypto")


class ExchangeCompletedResponse(BaseModel):
    """Completion record"""
    order_id: UUID
    user_id: UUID
    order_type: ExchangeOrderType
    crypto_type: CryptoType
    fiat_type: FiatType
    amount_from: Decimal = Field(..., description="Crypto quantity")
    amount_to: Decimal = Field(..., description="Fiat quantity")
    rate: Decimal

    @classmethod
    def from_domain(cls, record: ExchangeCompleted) -> "ExchangeCompletedResponse":
        return cls(
            order_id=record.order_id,
            user_id=record.user_id,
            order_type=record.order_type,
            crypto_type=record.crypto_type,
            fiat_type=record.fiat_type,
            amount_from=record.amount_from,
            amount_to=record.amount_to,
            rate=record.rate,
        )


class ExchangeOrderResponse(BaseModel):
    """Order response"""
    id: UUID
    user_id: UUID
    order_type: ExchangeOrderType
    crypto_type: CryptoType
    fiat_type: FiatType
    status: ExchangeOrderStatus
    crypto_amount: CryptoAmountSchema | None = None
    fiat_amount: FiatAmountSchema | None = None
    user_destination: DestinationSchema
    system_deposit: DestinationSchema
    created_at: datetime
    completed_at: datetime | None = None
    exchange_completed: ExchangeCompletedResponse | None = None

    @classmethod
    def from_domain(cls, order: ExchangeOrder) -> "ExchangeOrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            order_type=order.order_type,
            crypto_type=order.crypto_type,
            fiat_type=order.fiat_type,
            status=order.status,
            crypto_amount=CryptoAmountSchema.from_domain(order.crypto_amount) if order.crypto_amount else None,
            fiat_amount=FiatAmountSchema.from_domain(order.fiat_amount) if order.fiat_amount else None,
            user_destination=destination_from_domain(order.user_destination_address),
            system_deposit=destination_from_domain(order.system_deposit_address),
            created_at=order.created_at,
            completed_at=order.completed_at,
            exchange_completed=(
                ExchangeCompletedResponse.from_domain(order.exchange_completed)
                if order.exchange_completed else None
            ),
        )


class ExchangeOrderListResponse(BaseModel):
    """Order list response"""
    orders: list[ExchangeOrderResponse]
    total: int = Field(..., description="Number of orders")
