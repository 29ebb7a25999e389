"""
ExchangeOrder Aggregate

State machine for one crypto/fiat exchange order:

    INITIATED -> PAYMENT_PENDING -> SYSTEM_CONFIRMED_PAYMENT
              -> USER_CONFIRM_PAYMENT -> COMPLETED

CANCELLED is reachable from every non-terminal state. COMPLETED and
CANCELLED are terminal; the order is frozen once it reaches either.

Every operation returns a Result. A failed operation leaves the order
untouched.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union
from uuid import UUID, uuid4

from deelrate.domain.entities.exchange_completed import ExchangeCompleted
from deelrate.domain.result import Error, Result
from deelrate.domain.value_objects.amounts import (
    CryptoAmount,
    CryptoType,
    FiatAmount,
    FiatType,
)
from deelrate.domain.value_objects.destination_address import DestinationAddress

# Reconciliation tolerances. Fixed so retries reconcile identically.
FIAT_TOLERANCE = Decimal("0.01")
CRYPTO_TOLERANCE = Decimal("0.00000001")

DEFAULT_SETTLEMENT_FIAT = FiatType.USD


class ExchangeOrderType(Enum):
    """Order direction."""
    BUY = "buy"    # fiat -> crypto
    SELL = "sell"  # crypto -> fiat


class ExchangeOrderStatus(Enum):
    """Order lifecycle status."""
    INITIATED = "initiated"
    PAYMENT_PENDING = "payment_pending"
    SYSTEM_CONFIRMED_PAYMENT = "system_confirmed_payment"
    USER_CONFIRM_PAYMENT = "user_confirm_payment"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) status."""
        return self in (
            ExchangeOrderStatus.COMPLETED,
            ExchangeOrderStatus.CANCELLED,
        )


class OrderTransition(Enum):
    """Mutating operations of the aggregate."""
    MARK_PAYMENT_PENDING = "mark_payment_pending"
    SYSTEM_CONFIRM_PAYMENT = "system_confirm_payment"
    USER_CONFIRM_PAYMENT = "user_confirm_payment"
    COMPLETE_EXCHANGE = "complete_exchange"
    CANCEL = "cancel"


_S = ExchangeOrderStatus
_T = OrderTransition

# current status -> {allowed transition: next status}
TRANSITIONS: Dict[ExchangeOrderStatus, Dict[OrderTransition, ExchangeOrderStatus]] = {
    _S.INITIATED: {
        _T.MARK_PAYMENT_PENDING: _S.PAYMENT_PENDING,
        _T.CANCEL: _S.CANCELLED,
    },
    _S.PAYMENT_PENDING: {
        _T.SYSTEM_CONFIRM_PAYMENT: _S.SYSTEM_CONFIRMED_PAYMENT,
        _T.CANCEL: _S.CANCELLED,
    },
    _S.SYSTEM_CONFIRMED_PAYMENT: {
        _T.USER_CONFIRM_PAYMENT: _S.USER_CONFIRM_PAYMENT,
        _T.CANCEL: _S.CANCELLED,
    },
    _S.USER_CONFIRM_PAYMENT: {
        _T.COMPLETE_EXCHANGE: _S.COMPLETED,
        _T.CANCEL: _S.CANCELLED,
    },
    _S.COMPLETED: {},
    _S.CANCELLED: {},
}

_REJECTIONS: Dict[OrderTransition, Tuple[str, str]] = {
    _T.MARK_PAYMENT_PENDING: (
        "ExchangeOrder.NotInitiated",
        "Order must be in Initiated state to mark payment as pending.",
    ),
    _T.SYSTEM_CONFIRM_PAYMENT: (
        "ExchangeOrder.NotPaymentPending",
        "Order must be in PaymentPending state to confirm payment.",
    ),
    _T.USER_CONFIRM_PAYMENT: (
        "ExchangeOrder.NotSystemConfirmed",
        "Order must be in SystemConfirmedPayment state for the user to confirm.",
    ),
    _T.COMPLETE_EXCHANGE: (
        "ExchangeOrder.NotUserConfirmed",
        "Order must be in UserConfirmPayment state to complete.",
    ),
}


def next_status(
    status: ExchangeOrderStatus,
    transition: OrderTransition,
) -> Optional[ExchangeOrderStatus]:
    """Status reached by applying transition, or None when not allowed."""
    return TRANSITIONS[status].get(transition)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_user_id(user_id: Union[UUID, str, None]) -> Optional[UUID]:
    if isinstance(user_id, UUID):
        return user_id if user_id.int != 0 else None
    if isinstance(user_id, str) and user_id.strip():
        try:
            parsed = UUID(user_id.strip())
        except ValueError:
            return None
        return parsed if parsed.int != 0 else None
    return None


def _is_crypto(address: Any) -> bool:
    return isinstance(address, DestinationAddress) and address.is_crypto


def _is_fiat(address: Any) -> bool:
    return isinstance(address, DestinationAddress) and address.is_fiat


def _parse_rate(rate: Any) -> Optional[Decimal]:
    if rate is None or isinstance(rate, bool):
        return None
    try:
        value = rate if isinstance(rate, Decimal) else Decimal(str(rate))
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


@dataclass(eq=False)
class ExchangeOrder:
    """
    Aggregate root for a crypto/fiat exchange.

    Build new orders with initiate(); rebuild stored ones with rehydrate().

    Attributes:
        id: Unique order identifier
        user_id: Owner
        order_type: Buy (fiat -> crypto) or sell (crypto -> fiat)
        crypto_type: Cryptocurrency being exchanged
        fiat_type: Settlement fiat currency
        status: Current lifecycle status
        user_destination_address: Where the user receives funds
        system_deposit_address: Where the user pays in
        created_at: Creation time (UTC)
        crypto_amount: Set at initiation for sell, at confirmation for buy
        fiat_amount: Set at initiation for buy, at confirmation for sell
        completed_at: Completion time (UTC)
        exchange_completed: Completion record, set exactly once
    """
    id: UUID
    user_id: UUID
    order_type: ExchangeOrderType
    crypto_type: CryptoType
    fiat_type: FiatType
    status: ExchangeOrderStatus
    user_destination_address: DestinationAddress
    system_deposit_address: DestinationAddress
    created_at: datetime
    crypto_amount: Optional[CryptoAmount] = None
    fiat_amount: Optional[FiatAmount] = None
    completed_at: Optional[datetime] = None
    exchange_completed: Optional[ExchangeCompleted] = None

    # --- Factory Methods ---

    @classmethod
    def initiate(
        cls,
        user_id: Union[UUID, str, None],
        crypto_type: CryptoType,
        order_type: ExchangeOrderType,
        crypto_amount: Optional[CryptoAmount],
        fiat_amount: Optional[FiatAmount],
        user_destination_address: Optional[DestinationAddress],
        system_deposit_address: Optional[DestinationAddress],
        fiat_type: Optional[FiatType] = None,
        created_at: Optional[datetime] = None,
    ) -> Result[ExchangeOrder]:
        """Validate inputs and create an order in INITIATED status."""
        owner = _parse_user_id(user_id)
        if owner is None:
            return Result.failure(
                Error.validation("ExchangeOrder.InvalidUserId", "User ID must be a valid UUID.")
            )
        if not isinstance(order_type, ExchangeOrderType):
            return Result.failure(
                Error.validation("ExchangeOrder.InvalidType", "Invalid exchange order type.")
            )
        if not isinstance(crypto_type, CryptoType):
            return Result.failure(
                Error.validation("ExchangeOrder.InvalidCryptoType", "Invalid cryptocurrency type.")
            )
        if fiat_type is not None and not isinstance(fiat_type, FiatType):
            return Result.failure(
                Error.validation("ExchangeOrder.InvalidFiatType", "Invalid fiat type.")
            )

        if order_type == ExchangeOrderType.BUY:
            error = cls._validate_buy(crypto_amount, fiat_amount, fiat_type)
            settlement = fiat_amount.fiat_type if error is None else None
        else:
            error = cls._validate_sell(crypto_type, crypto_amount, fiat_amount)
            settlement = fiat_type or DEFAULT_SETTLEMENT_FIAT
        if error is not None:
            return Result.failure(error)

        error = cls._validate_addresses(
            order_type, user_destination_address, system_deposit_address
        )
        if error is not None:
            return Result.failure(error)

        return Result.success(
            cls(
                id=uuid4(),
                user_id=owner,
                order_type=order_type,
                crypto_type=crypto_type,
                fiat_type=settlement,
                status=ExchangeOrderStatus.INITIATED,
                user_destination_address=user_destination_address,
                system_deposit_address=system_deposit_address,
                created_at=created_at or _utcnow(),
                crypto_amount=crypto_amount,
                fiat_amount=fiat_amount,
            )
        )

    @classmethod
    def rehydrate(
        cls,
        id: UUID,
        user_id: UUID,
        order_type: ExchangeOrderType,
        crypto_type: CryptoType,
        fiat_type: FiatType,
        status: ExchangeOrderStatus,
        user_destination_address: DestinationAddress,
        system_deposit_address: DestinationAddress,
        created_at: datetime,
        crypto_amount: Optional[CryptoAmount] = None,
        fiat_amount: Optional[FiatAmount] = None,
        completed_at: Optional[datetime] = None,
        exchange_completed: Optional[ExchangeCompleted] = None,
    ) -> ExchangeOrder:
        """
        Rebuild a stored order without validation.

        For repository adapters only; domain callers use initiate().
        """
        return cls(
            id=id,
            user_id=user_id,
            order_type=order_type,
            crypto_type=crypto_type,
            fiat_type=fiat_type,
            status=status,
            user_destination_address=user_destination_address,
            system_deposit_address=system_deposit_address,
            created_at=created_at,
            crypto_amount=crypto_amount,
            fiat_amount=fiat_amount,
            completed_at=completed_at,
            exchange_completed=exchange_completed,
        )

    # --- State Transitions ---

    def mark_payment_pending(self) -> Result[None]:
        """INITIATED -> PAYMENT_PENDING."""
        error = self._check_transition(OrderTransition.MARK_PAYMENT_PENDING)
        if error is not None:
            return Result.failure(error)

        self._apply(OrderTransition.MARK_PAYMENT_PENDING)
        return Result.success()

    def system_confirm_payment(
        self,
        actual_fiat_received: Optional[FiatAmount],
        actual_crypto_received: Optional[CryptoAmount],
        rate: Union[Decimal, int, float, str],
    ) -> Result[None]:
        """
        PAYMENT_PENDING -> SYSTEM_CONFIRMED_PAYMENT.

        Reconciles what the platform received against the order and fills
        in the missing side using rate (quote per one unit of crypto).

        Buy: actual fiat must match the stored fiat amount within 0.01;
        crypto_amount becomes actual fiat / rate.
        Sell: actual crypto must match the stored crypto amount within
        1e-8; fiat_amount becomes actual crypto * rate.
        """
        error = self._check_transition(OrderTransition.SYSTEM_CONFIRM_PAYMENT)
        if error is not None:
            return Result.failure(error)

        confirmed_rate = _parse_rate(rate)
        if confirmed_rate is None:
            return Result.failure(
                Error.validation("ExchangeOrder.InvalidRate", "Rate must be greater than 0.")
            )

        if self.order_type == ExchangeOrderType.BUY:
            if actual_fiat_received is None:
                return Result.failure(
                    Error.validation(
                        "ExchangeOrder.MissingFiatReceived",
                        "Received fiat amount is required to confirm a Buy order.",
                    )
                )
            if not self.fiat_amount.matches(actual_fiat_received, FIAT_TOLERANCE):
                return Result.failure(
                    Error.validation(
                        "ExchangeOrder.FiatMismatch",
                        f"Received {actual_fiat_received} does not match expected "
                        f"{self.fiat_amount}.",
                    )
                )
            crypto_amount = CryptoAmount(
                actual_fiat_received.amount / confirmed_rate, self.crypto_type
            )
            self._apply(OrderTransition.SYSTEM_CONFIRM_PAYMENT)
            self.crypto_amount = crypto_amount
            return Result.success()

        if actual_crypto_received is None:
            return Result.failure(
                Error.validation(
                    "ExchangeOrder.MissingCryptoReceived",
                    "Received crypto amount is required to confirm a Sell order.",
                )
            )
        if not self.crypto_amount.matches(actual_crypto_received, CRYPTO_TOLERANCE):
            return Result.failure(
                Error.validation(
                    "ExchangeOrder.CryptoMismatch",
                    f"Received {actual_crypto_received} does not match expected "
                    f"{self.crypto_amount}.",
                )
            )
        fiat_amount = FiatAmount(
            self.fiat_type, actual_crypto_received.value * confirmed_rate
        )
        self._apply(OrderTransition.SYSTEM_CONFIRM_PAYMENT)
        self.fiat_amount = fiat_amount
        return Result.success()

    def user_confirm_payment(self) -> Result[None]:
        """SYSTEM_CONFIRMED_PAYMENT -> USER_CONFIRM_PAYMENT."""
        error = self._check_transition(OrderTransition.USER_CONFIRM_PAYMENT)
        if error is not None:
            return Result.failure(error)

        if self.crypto_amount is None or self.fiat_amount is None:
            return Result.failure(
                Error.validation(
                    "ExchangeOrder.MissingAmounts",
                    "Both crypto and fiat amounts must be set before user confirmation.",
                )
            )

        self._apply(OrderTransition.USER_CONFIRM_PAYMENT)
        return Result.success()

    def complete_exchange(
        self,
        completed_at: Optional[datetime] = None,
    ) -> Result[ExchangeCompleted]:
        """
        USER_CONFIRM_PAYMENT -> COMPLETED.

        Returns the completion record for the caller to persist/publish.
        """
        error = self._check_transition(OrderTransition.COMPLETE_EXCHANGE)
        if error is not None:
            return Result.failure(error)

        if self.order_type == ExchangeOrderType.BUY:
            effective_rate = self.fiat_amount.amount / self.crypto_amount.value
        else:
            effective_rate = self.crypto_amount.value / self.fiat_amount.amount

        record = ExchangeCompleted(
            order_id=self.id,
            user_id=self.user_id,
            order_type=self.order_type,
            crypto_type=self.crypto_amount.currency,
            fiat_type=self.fiat_amount.fiat_type,
            amount_from=self.crypto_amount.value,
            amount_to=self.fiat_amount.amount,
            rate=effective_rate,
        )

        self._apply(OrderTransition.COMPLETE_EXCHANGE)
        self.exchange_completed = record
        self.completed_at = completed_at or _utcnow()
        return Result.success(record)

    def cancel(self) -> Result[None]:
        """Any non-terminal status -> CANCELLED. Amounts are left as they are."""
        if self.status == ExchangeOrderStatus.CANCELLED:
            return Result.failure(
                Error.validation("ExchangeOrder.AlreadyCancelled", "Order is already cancelled.")
            )
        if self.status == ExchangeOrderStatus.COMPLETED:
            return Result.failure(
                Error.validation(
                    "ExchangeOrder.AlreadyCompleted", "Cannot cancel a completed order."
                )
            )

        self._apply(OrderTransition.CANCEL)
        return Result.success()

    # --- State Checks ---

    def allowed_transitions(self) -> FrozenSet[OrderTransition]:
        """Transitions permitted from the current status."""
        return frozenset(TRANSITIONS[self.status])

    def can(self, transition: OrderTransition) -> bool:
        return next_status(self.status, transition) is not None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal()

    # --- Private Methods ---

    def _check_transition(self, transition: OrderTransition) -> Optional[Error]:
        if self.can(transition):
            return None
        code, description = _REJECTIONS[transition]
        return Error.validation(code, description)

    def _apply(self, transition: OrderTransition) -> None:
        self.status = TRANSITIONS[self.status][transition]

    @staticmethod
    def _validate_buy(
        crypto_amount: Optional[CryptoAmount],
        fiat_amount: Optional[FiatAmount],
        fiat_type: Optional[FiatType],
    ) -> Optional[Error]:
        if fiat_amount is None:
            return Error.validation(
                "ExchangeOrder.MissingFiatAmount", "FiatAmount is required for a Buy order."
            )
        if crypto_amount is not None:
            return Error.validation(
                "ExchangeOrder.UnexpectedCryptoAmount",
                "CryptoAmount should not be provided for a Buy order at initiation.",
            )
        if fiat_type is not None and fiat_type != fiat_amount.fiat_type:
            return Error.validation(
                "ExchangeOrder.CurrencyMismatch",
                f"Fiat type {fiat_type.value} does not match the fiat amount "
                f"currency {fiat_amount.fiat_type.value}.",
            )
        return None

    @staticmethod
    def _validate_sell(
        crypto_type: CryptoType,
        crypto_amount: Optional[CryptoAmount],
        fiat_amount: Optional[FiatAmount],
    ) -> Optional[Error]:
        if crypto_amount is None:
            return Error.validation(
                "ExchangeOrder.MissingCryptoAmount", "CryptoAmount is required for a Sell order."
            )
        if fiat_amount is not None:
            return Error.validation(
                "ExchangeOrder.UnexpectedFiatAmount",
                "FiatAmount should not be provided for a Sell order at initiation.",
            )
        if crypto_amount.currency != crypto_type:
            return Error.validation(
                "ExchangeOrder.CurrencyMismatch",
                f"Crypto amount currency {crypto_amount.currency.value} does not match "
                f"the order crypto type {crypto_type.value}.",
            )
        return None

    @staticmethod
    def _validate_addresses(
        order_type: ExchangeOrderType,
        user_destination_address: Optional[DestinationAddress],
        system_deposit_address: Optional[DestinationAddress],
    ) -> Optional[Error]:
        if user_destination_address is None:
            return Error.validation(
                "ExchangeOrder.MissingDestination", "User destination address is required."
            )
        if system_deposit_address is None:
            return Error.validation(
                "ExchangeOrder.MissingDepositAddress", "System deposit address is required."
            )

        if order_type == ExchangeOrderType.BUY:
            if not _is_crypto(user_destination_address):
                return Error.validation(
                    "ExchangeOrder.InvalidDestination",
                    "For a Buy order, destination must be a crypto address.",
                )
            if not _is_fiat(system_deposit_address):
                return Error.validation(
                    "ExchangeOrder.InvalidDepositAddress",
                    "For a Buy order, the deposit address must be a fiat account.",
                )
        else:
            if not _is_fiat(user_destination_address):
                return Error.validation(
                    "ExchangeOrder.InvalidDestination",
                    "For a Sell order, destination must be a fiat account.",
                )
            if not _is_crypto(system_deposit_address):
                return Error.validation(
                    "ExchangeOrder.InvalidDepositAddress",
                    "For a Sell order, the deposit address must be a crypto address.",
                )
        return None
