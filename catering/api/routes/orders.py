"""Order endpoints, including payments opened against an order."""

from fastapi import APIRouter, Depends, status

from catering.api.dependencies import (
    get_business_id,
    get_create_order_use_case,
    get_create_payment_use_case,
    get_ord_store,
    get_pay_store,
    get_update_order_use_case,
)
from catering.application.dto.requests import (
    CreateOrderRequest,
    CreatePaymentRequest,
    UpdateOrderRequest,
)
from catering.application.dto.responses import (
    ErrorResponse,
    OrderListResponse,
    OrderPaymentResponse,
    OrderResponse,
    PaymentSettlementResponse,
)
from catering.application.use_cases import (
    CreateOrderPaymentUseCase,
    CreateOrderUseCase,
    UpdateOrderUseCase,
)
from catering.core.exceptions import OrderNotFoundError
from catering.infrastructure.storage.sqlite import SQLiteOrderStore, SQLitePaymentStore

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
async def list_orders(
    limit: int = 100,
    offset: int = 0,
    business_id: int = Depends(get_business_id),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderListResponse:
    """List orders, latest event date first."""
    orders = await store.list_orders(business_id, limit=limit, offset=offset)
    return OrderListResponse(
        orders=[OrderResponse.from_entity(o) for o in orders],
        total=len(orders),
    )


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_order(
    request: CreateOrderRequest,
    business_id: int = Depends(get_business_id),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
) -> OrderResponse:
    """Create an order in Inquiry status."""
    order = await use_case.execute(business_id, request)
    return use_case.to_response(order)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderResponse:
    """Get an order with its lines."""
    order = await store.get_order(business_id, order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return OrderResponse.from_entity(order)


@router.put(
    "/{order_id}",
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_order(
    order_id: int,
    request: UpdateOrderRequest,
    business_id: int = Depends(get_business_id),
    use_case: UpdateOrderUseCase = Depends(get_update_order_use_case),
) -> OrderResponse:
    """Update status and/or advance; the balance is always recomputed."""
    order = await use_case.execute(business_id, order_id, request)
    return use_case.to_response(order)


@router.post(
    "/{order_id}/payments",
    response_model=PaymentSettlementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def create_order_payment(
    order_id: int,
    request: CreatePaymentRequest,
    business_id: int = Depends(get_business_id),
    use_case: CreateOrderPaymentUseCase = Depends(get_create_payment_use_case),
) -> PaymentSettlementResponse:
    """Open a processor payment intent against the order's balance."""
    result = await use_case.execute(business_id, order_id, request)
    return use_case.to_response(result)


@router.get(
    "/{order_id}/payments",
    response_model=list[OrderPaymentResponse],
)
async def list_order_payments(
    order_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLitePaymentStore = Depends(get_pay_store),
) -> list[OrderPaymentResponse]:
    """List payments recorded against an order."""
    payments = await store.list_for_order(business_id, order_id)
    return [OrderPaymentResponse.from_entity(p) for p in payments]
