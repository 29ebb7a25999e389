"""
Tests for the ExchangeOrder aggregate.
"""
import pytest
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from deelrate.domain.entities.exchange_order import (
    ExchangeOrder,
    ExchangeOrderStatus,
    ExchangeOrderType,
    OrderTransition,
    TRANSITIONS,
)
from deelrate.domain.result import ErrorType
from deelrate.domain.value_objects.amounts import CryptoAmount, CryptoType, FiatAmount, FiatType
from deelrate.domain.value_objects.destination_address import CryptoAddress, FiatAccount

USER_ID = UUID("7f0e3a52-9d3c-4b8e-a0b1-2c3d4e5f6a7b")
WALLET = CryptoAddress("bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq")
ACCOUNT = FiatAccount("0123456789", "Ada Obi", "First Bank")


def usd(amount) -> FiatAmount:
    return FiatAmount(FiatType.USD, Decimal(str(amount)))


def btc(value) -> CryptoAmount:
    return CryptoAmount(Decimal(str(value)), CryptoType.BTC)


def new_buy(fiat=None) -> ExchangeOrder:
    return ExchangeOrder.initiate(
        USER_ID, CryptoType.BTC, ExchangeOrderType.BUY,
        None, fiat or usd(100), WALLET, ACCOUNT,
    ).value


def new_sell(crypto=None, fiat_type=None) -> ExchangeOrder:
    return ExchangeOrder.initiate(
        USER_ID, CryptoType.BTC, ExchangeOrderType.SELL,
        crypto or btc("0.5"), None, ACCOUNT, WALLET, fiat_type=fiat_type,
    ).value


def advance(order: ExchangeOrder, status: ExchangeOrderStatus) -> ExchangeOrder:
    """Drive an order forward to status along the happy path."""
    if status == ExchangeOrderStatus.INITIATED:
        return order
    assert order.mark_payment_pending().is_success
    if status == ExchangeOrderStatus.PAYMENT_PENDING:
        return order
    if order.order_type == ExchangeOrderType.BUY:
        assert order.system_confirm_payment(order.fiat_amount, None, 50000).is_success
    else:
        assert order.system_confirm_payment(None, order.crypto_amount, 40000).is_success
    if status == ExchangeOrderStatus.SYSTEM_CONFIRMED_PAYMENT:
        return order
    assert order.user_confirm_payment().is_success
    if status == ExchangeOrderStatus.USER_CONFIRM_PAYMENT:
        return order
    if status == ExchangeOrderStatus.COMPLETED:
        assert order.complete_exchange().is_success
    else:
        assert order.cancel().is_success
    return order


class TestInitiate:
    """Tests for ExchangeOrder.initiate."""

    # --- Buy ---

    def test_buy_order_created(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), WALLET, ACCOUNT
        )

        assert result.is_success
        order = result.value
        assert isinstance(order.id, UUID)
        assert order.user_id == USER_ID
        assert order.status == ExchangeOrderStatus.INITIATED
        assert order.fiat_amount == usd(100)
        assert order.crypto_amount is None
        assert order.fiat_type == FiatType.USD
        assert order.created_at.tzinfo is not None
        assert order.completed_at is None
        assert order.exchange_completed is None

    def test_each_order_gets_a_fresh_id(self):
        assert new_buy().id != new_buy().id

    def test_user_id_string_is_parsed(self):
        result = ExchangeOrder.initiate(
            str(USER_ID), CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), WALLET, ACCOUNT
        )

        assert result.value.user_id == USER_ID

    @pytest.mark.parametrize(
        "user_id", ["", "not-a-uuid", None, UUID(int=0), "00000000-0000-0000-0000-000000000000"]
    )
    def test_invalid_user_id(self, user_id):
        result = ExchangeOrder.initiate(
            user_id, CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), WALLET, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.InvalidUserId"

    def test_invalid_order_type(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, "swap", None, usd(100), WALLET, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.InvalidType"

    def test_invalid_crypto_type(self):
        result = ExchangeOrder.initiate(
            USER_ID, "BTC", ExchangeOrderType.BUY, None, usd(100), WALLET, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.InvalidCryptoType"

    def test_buy_without_fiat_amount(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, None, None, WALLET, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.MissingFiatAmount"
        assert result.error.error_type == ErrorType.VALIDATION

    def test_buy_with_crypto_amount(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, btc(1), usd(100), WALLET, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.UnexpectedCryptoAmount"

    def test_buy_fiat_type_must_match_amount(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), WALLET, ACCOUNT,
            fiat_type=FiatType.EUR,
        )

        assert result.error.code == "ExchangeOrder.CurrencyMismatch"

    def test_buy_destination_must_be_crypto(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), ACCOUNT, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.InvalidDestination"

    def test_buy_deposit_must_be_fiat(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), WALLET, WALLET
        )

        assert result.error.code == "ExchangeOrder.InvalidDepositAddress"

    def test_missing_destination(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), None, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.MissingDestination"

    def test_missing_deposit_address(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.BUY, None, usd(100), WALLET, None
        )

        assert result.error.code == "ExchangeOrder.MissingDepositAddress"

    # --- Sell ---

    def test_sell_order_created_with_default_settlement(self):
        order = new_sell()

        assert order.status == ExchangeOrderStatus.INITIATED
        assert order.crypto_amount == btc("0.5")
        assert order.fiat_amount is None
        assert order.fiat_type == FiatType.USD

    def test_sell_order_with_explicit_settlement(self):
        assert new_sell(fiat_type=FiatType.NGN).fiat_type == FiatType.NGN

    def test_sell_without_crypto_amount(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.SELL, None, None, ACCOUNT, WALLET
        )

        assert result.error.code == "ExchangeOrder.MissingCryptoAmount"

    def test_sell_with_fiat_amount(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.SELL, btc(1), usd(1), ACCOUNT, WALLET
        )

        assert result.error.code == "ExchangeOrder.UnexpectedFiatAmount"

    def test_sell_crypto_currency_must_match(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.ETH, ExchangeOrderType.SELL, btc(1), None, ACCOUNT, WALLET
        )

        assert result.error.code == "ExchangeOrder.CurrencyMismatch"

    def test_sell_destination_must_be_fiat(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.SELL, btc(1), None, WALLET, WALLET
        )

        assert result.error.code == "ExchangeOrder.InvalidDestination"

    def test_sell_deposit_must_be_crypto(self):
        result = ExchangeOrder.initiate(
            USER_ID, CryptoType.BTC, ExchangeOrderType.SELL, btc(1), None, ACCOUNT, ACCOUNT
        )

        assert result.error.code == "ExchangeOrder.InvalidDepositAddress"


class TestTransitionTable:
    """Tests for the explicit transition table."""

    def test_terminal_states_allow_nothing(self):
        assert TRANSITIONS[ExchangeOrderStatus.COMPLETED] == {}
        assert TRANSITIONS[ExchangeOrderStatus.CANCELLED] == {}

    def test_cancel_allowed_from_every_non_terminal_state(self):
        for status, transitions in TRANSITIONS.items():
            if not status.is_terminal():
                assert transitions[OrderTransition.CANCEL] == ExchangeOrderStatus.CANCELLED

    def test_allowed_transitions_of_new_order(self):
        assert new_buy().allowed_transitions() == frozenset(
            {OrderTransition.MARK_PAYMENT_PENDING, OrderTransition.CANCEL}
        )

    @pytest.mark.parametrize("status", list(ExchangeOrderStatus))
    def test_out_of_order_transitions_are_rejected(self, status):
        """Every operation not in the table fails and leaves the order unchanged."""
        order = advance(new_buy(), status)
        operations = {
            OrderTransition.MARK_PAYMENT_PENDING: lambda: order.mark_payment_pending(),
            OrderTransition.SYSTEM_CONFIRM_PAYMENT: lambda: order.system_confirm_payment(usd(100), None, 50000),
            OrderTransition.USER_CONFIRM_PAYMENT: lambda: order.user_confirm_payment(),
            OrderTransition.COMPLETE_EXCHANGE: lambda: order.complete_exchange(),
        }

        for transition, operation in operations.items():
            if order.can(transition):
                continue
            before = (order.status, order.crypto_amount, order.fiat_amount)
            result = operation()

            assert result.is_failure
            assert result.error.error_type == ErrorType.VALIDATION
            assert (order.status, order.crypto_amount, order.fiat_amount) == before


class TestBuyLifecycle:
    """Full Buy scenario."""

    def test_buy_happy_path(self):
        # Given
        order = new_buy(usd(100))

        # When
        pending = order.mark_payment_pending()
        confirmed = order.system_confirm_payment(usd(100), None, Decimal("50000"))

        # Then
        assert pending.is_success and confirmed.is_success
        assert order.status == ExchangeOrderStatus.SYSTEM_CONFIRMED_PAYMENT
        assert order.crypto_amount == btc("0.002")

        # When
        assert order.user_confirm_payment().is_success
        completed_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        result = order.complete_exchange(completed_at)

        # Then
        assert result.is_success
        record = result.value
        assert record.order_id == order.id
        assert record.user_id == USER_ID
        assert record.order_type == ExchangeOrderType.BUY
        assert record.crypto_type == CryptoType.BTC
        assert record.fiat_type == FiatType.USD
        assert record.amount_from == Decimal("0.002")
        assert record.amount_to == Decimal("100")
        assert record.rate == Decimal("50000")
        assert order.status == ExchangeOrderStatus.COMPLETED
        assert order.completed_at == completed_at
        assert order.exchange_completed is record

    def test_fiat_within_tolerance_is_accepted(self):
        order = advance(new_buy(usd(100)), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(usd("100.009"), None, 50000)

        assert result.is_success
        assert order.crypto_amount.value == Decimal("100.009") / Decimal("50000")

    def test_fiat_at_tolerance_is_rejected(self):
        order = advance(new_buy(usd(100)), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(usd("100.01"), None, 50000)

        assert result.error.code == "ExchangeOrder.FiatMismatch"
        assert order.status == ExchangeOrderStatus.PAYMENT_PENDING
        assert order.crypto_amount is None

    def test_fiat_in_other_currency_is_rejected(self):
        order = advance(new_buy(usd(100)), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(FiatAmount(FiatType.EUR, 100), None, 50000)

        assert result.error.code == "ExchangeOrder.FiatMismatch"

    def test_missing_fiat_received(self):
        order = advance(new_buy(), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(None, btc(1), 50000)

        assert result.error.code == "ExchangeOrder.MissingFiatReceived"
        assert order.status == ExchangeOrderStatus.PAYMENT_PENDING

    @pytest.mark.parametrize("rate", [0, -1, None, "abc"])
    def test_non_positive_rate_is_rejected(self, rate):
        order = advance(new_buy(), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(usd(100), None, rate)

        assert result.error.code == "ExchangeOrder.InvalidRate"
        assert order.status == ExchangeOrderStatus.PAYMENT_PENDING


class TestSellLifecycle:
    """Full Sell scenario."""

    def test_sell_happy_path(self):
        # Given
        order = new_sell(btc("0.5"))
        assert order.mark_payment_pending().is_success

        # When
        result = order.system_confirm_payment(None, btc("0.5"), Decimal("40000"))

        # Then
        assert result.is_success
        assert order.fiat_amount == usd(20000)

        assert order.user_confirm_payment().is_success
        record = order.complete_exchange().value
        assert record.amount_from == Decimal("0.5")
        assert record.amount_to == Decimal("20000")
        assert record.rate == Decimal("0.5") / Decimal("20000")
        assert order.completed_at is not None

    def test_crypto_mismatch_is_rejected(self):
        order = advance(new_sell(btc("0.5")), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(None, btc("0.50000001"), 40000)

        assert result.error.code == "ExchangeOrder.CryptoMismatch"
        assert order.fiat_amount is None

    def test_crypto_within_tolerance_is_accepted(self):
        order = advance(new_sell(btc("0.5")), ExchangeOrderStatus.PAYMENT_PENDING)

        assert order.system_confirm_payment(None, btc("0.500000009"), 40000).is_success

    def test_missing_crypto_received(self):
        order = advance(new_sell(), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(usd(100), None, 40000)

        assert result.error.code == "ExchangeOrder.MissingCryptoReceived"

    @pytest.mark.parametrize("rate", [0, -1, None, "abc", "NaN"])
    def test_non_positive_rate_is_rejected(self, rate):
        order = advance(new_sell(btc("0.5")), ExchangeOrderStatus.PAYMENT_PENDING)

        result = order.system_confirm_payment(None, btc("0.5"), rate)

        assert result.error.code == "ExchangeOrder.InvalidRate"
        assert order.fiat_amount is None
        assert order.status == ExchangeOrderStatus.PAYMENT_PENDING

    def test_fiat_filled_in_settlement_currency(self):
        order = advance(new_sell(btc(1), fiat_type=FiatType.EUR), ExchangeOrderStatus.PAYMENT_PENDING)

        order.system_confirm_payment(None, btc(1), 30000)

        assert order.fiat_amount == FiatAmount(FiatType.EUR, 30000)


class TestStatusErrors:
    """Error codes for out-of-order operations."""

    def test_mark_payment_pending_twice(self):
        order = advance(new_buy(), ExchangeOrderStatus.PAYMENT_PENDING)

        assert order.mark_payment_pending().error.code == "ExchangeOrder.NotInitiated"

    def test_system_confirm_before_pending(self):
        result = new_buy().system_confirm_payment(usd(100), None, 50000)

        assert result.error.code == "ExchangeOrder.NotPaymentPending"

    def test_user_confirm_before_system_confirm(self):
        order = advance(new_buy(), ExchangeOrderStatus.PAYMENT_PENDING)

        assert order.user_confirm_payment().error.code == "ExchangeOrder.NotSystemConfirmed"

    def test_complete_initiated_order(self):
        order = new_buy()

        result = order.complete_exchange()

        assert result.error.code == "ExchangeOrder.NotUserConfirmed"
        assert order.status == ExchangeOrderStatus.INITIATED
        assert order.exchange_completed is None


class TestCancel:
    """Tests for cancel."""

    @pytest.mark.parametrize("status", [
        ExchangeOrderStatus.INITIATED,
        ExchangeOrderStatus.PAYMENT_PENDING,
        ExchangeOrderStatus.SYSTEM_CONFIRMED_PAYMENT,
        ExchangeOrderStatus.USER_CONFIRM_PAYMENT,
    ])
    def test_cancel_from_non_terminal_state(self, status):
        order = advance(new_buy(), status)
        amounts = (order.crypto_amount, order.fiat_amount)

        result = order.cancel()

        assert result.is_success
        assert order.status == ExchangeOrderStatus.CANCELLED
        assert (order.crypto_amount, order.fiat_amount) == amounts
        assert order.is_terminal

    def test_cancel_twice(self):
        order = advance(new_buy(), ExchangeOrderStatus.CANCELLED)

        result = order.cancel()

        assert result.error.code == "ExchangeOrder.AlreadyCancelled"
        assert order.status == ExchangeOrderStatus.CANCELLED

    def test_cancel_completed(self):
        order = advance(new_buy(), ExchangeOrderStatus.COMPLETED)

        result = order.cancel()

        assert result.error.code == "ExchangeOrder.AlreadyCompleted"
        assert order.status == ExchangeOrderStatus.COMPLETED

    def test_cancelled_order_is_frozen(self):
        order = advance(new_buy(), ExchangeOrderStatus.CANCELLED)

        assert order.mark_payment_pending().is_failure
        assert order.complete_exchange().is_failure
        assert order.allowed_transitions() == frozenset()


class TestRehydrate:

    def test_rehydrate_keeps_fields(self):
        order_id = uuid4()
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)

        order = ExchangeOrder.rehydrate(
            id=order_id,
            user_id=USER_ID,
            order_type=ExchangeOrderType.SELL,
            crypto_type=CryptoType.BTC,
            fiat_type=FiatType.NGN,
            status=ExchangeOrderStatus.PAYMENT_PENDING,
            user_destination_address=ACCOUNT,
            system_deposit_address=WALLET,
            created_at=created_at,
            crypto_amount=btc(1),
        )

        assert order.id == order_id
        assert order.status == ExchangeOrderStatus.PAYMENT_PENDING
        assert order.system_confirm_payment(None, btc(1), 1000).is_success
        assert order.fiat_amount == FiatAmount(FiatType.NGN, 1000)
