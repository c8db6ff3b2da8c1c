"""Payment confirmation and refund endpoints."""

from fastapi import APIRouter, Depends

from catering.api.dependencies import (
    get_business_id,
    get_confirm_payment_use_case,
    get_refund_payment_use_case,
)
from catering.application.dto.requests import RefundPaymentRequest
from catering.application.dto.responses import ErrorResponse, PaymentSettlementResponse
from catering.application.use_cases import (
    ConfirmOrderPaymentUseCase,
    RefundOrderPaymentUseCase,
)

router = APIRouter(prefix="/api/payments", tags=["payments"])

_UPSTREAM_ERRORS = {
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post(
    "/{payment_id}/confirm",
    response_model=PaymentSettlementResponse,
    responses={400: {"model": ErrorResponse}, **_UPSTREAM_ERRORS},
)
async def confirm_payment(
    payment_id: int,
    business_id: int = Depends(get_business_id),
    use_case: ConfirmOrderPaymentUseCase = Depends(get_confirm_payment_use_case),
) -> PaymentSettlementResponse:
    """Confirm a payment; a success is credited to the order's advance."""
    result = await use_case.execute(business_id, payment_id)
    return use_case.to_response(result)


@router.post(
    "/{payment_id}/refund",
    response_model=PaymentSettlementResponse,
    responses={400: {"model": ErrorResponse}, **_UPSTREAM_ERRORS},
)
async def refund_payment(
    payment_id: int,
    request: RefundPaymentRequest,
    business_id: int = Depends(get_business_id),
    use_case: RefundOrderPaymentUseCase = Depends(get_refund_payment_use_case),
) -> PaymentSettlementResponse:
    """Refund all or part of a payment; the order's advance is reduced."""
    result = await use_case.execute(business_id, payment_id, request)
    return use_case.to_response(result)
