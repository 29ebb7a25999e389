"""
Exchange order API endpoints
"""
from uuid import UUID
from fastapi import APIRouter, Depends, status

from backend.app.api.deps import get_exchange_order_use_case
from backend.app.api.errors import raise_for_error
from backend.app.schemas.exchange_order import (
    ExchangeCompletedResponse,
    ExchangeOrderCreate,
    ExchangeOrderListResponse,
    ExchangeOrderResponse,
    SystemConfirmRequest,
)
from deelrate.application.use_cases.exchange_order import ExchangeOrderUseCase

router = APIRouter()


def _unwrap(result):
    """Value of a successful Result, HTTP error otherwise."""
    if result.is_failure:
        raise_for_error(result.error)
    return result.value


@router.post("", response_model=ExchangeOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_exchange_order(
    request: ExchangeOrderCreate,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeOrderResponse:
    """
    Create an exchange order

    - **buy**: send `fiat_amount` and a crypto wallet as `user_destination`
    - **sell**: send `crypto_amount` and a bank account as `user_destination`
    """
    crypto_amount = _unwrap(request.crypto_amount.to_domain()) if request.crypto_amount else None
    fiat_amount = _unwrap(request.fiat_amount.to_domain()) if request.fiat_amount else None
    destination = _unwrap(request.user_destination.to_domain())

    order = _unwrap(await use_case.create_order(
        user_id=request.user_id,
        crypto_type=request.crypto_type,
        order_type=request.order_type,
        crypto_amount=crypto_amount,
        fiat_amount=fiat_amount,
        user_destination=destination,
        fiat_type=request.fiat_type,
    ))
    return ExchangeOrderResponse.from_domain(order)


@router.get("/user/{user_id}", response_model=ExchangeOrderListResponse)
async def get_user_exchange_orders(
    user_id: UUID,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeOrderListResponse:
    """A user's orders, newest first"""
    orders = _unwrap(await use_case.get_user_orders(user_id))
    return ExchangeOrderListResponse(
        orders=[ExchangeOrderResponse.from_domain(o) for o in orders],
        total=len(orders),
    )


@router.get("/{order_id}", response_model=ExchangeOrderResponse)
async def get_exchange_order(
    order_id: UUID,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeOrderResponse:
    """Get one order"""
    order = _unwrap(await use_case.get_order(order_id))
    return ExchangeOrderResponse.from_domain(order)


@router.post("/{order_id}/payment-pending", response_model=ExchangeOrderResponse)
async def mark_payment_pending(
    order_id: UUID,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeOrderResponse:
    """initiated -> payment_pending"""
    order = _unwrap(await use_case.mark_payment_pending(order_id))
    return ExchangeOrderResponse.from_domain(order)


@router.post("/{order_id}/system-confirm", response_model=ExchangeOrderResponse)
async def system_confirm_payment(
    order_id: UUID,
    request: SystemConfirmRequest,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeOrderResponse:
    """
    payment_pending -> system_confirmed_payment

    Reconciles the received amount and fills in the other side at `rate`.
    """
    actual_fiat = (
        _unwrap(request.actual_fiat_received.to_domain())
        if request.actual_fiat_received else None
    )
    actual_crypto = (
        _unwrap(request.actual_crypto_received.to_domain())
        if request.actual_crypto_received else None
    )
    order = _unwrap(await use_case.system_confirm_payment(
        order_id, actual_fiat, actual_crypto, request.rate
    ))
    return ExchangeOrderResponse.from_domain(order)


@router.post("/{order_id}/user-confirm", response_model=ExchangeOrderResponse)
async def user_confirm_payment(
    order_id: UUID,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeOrderResponse:
    """system_confirmed_payment -> user_confirm_payment"""
    order = _unwrap(await use_case.user_confirm_payment(order_id))
    return ExchangeOrderResponse.from_domain(order)


@router.post("/{order_id}/complete", response_model=ExchangeCompletedResponse)
async def complete_exchange(
    order_id: UUID,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeCompletedResponse:
    """user_confirm_payment -> completed; returns the completion record"""
    record = _unwrap(await use_case.complete_exchange(order_id))
    return ExchangeCompletedResponse.from_domain(record)


@router.post("/{order_id}/cancel", response_model=ExchangeOrderResponse)
async def cancel_exchange_order(
    order_id: UUID,
    use_case: ExchangeOrderUseCase = Depends(get_exchange_order_use_case),
) -> ExchangeOrderResponse:
    """Cancel a non-terminal order"""
    order = _unwrap(await use_case.cancel(order_id))
    return ExchangeOrderResponse.from_domain(order)
