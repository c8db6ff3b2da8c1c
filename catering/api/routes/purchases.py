"""Purchase endpoints."""

from fastapi import APIRouter, Depends, status

from catering.api.dependencies import (
    get_business_id,
    get_create_purchase_use_case,
    get_purch_store,
    get_update_purchase_use_case,
)
from catering.application.dto.requests import CreatePurchaseRequest, UpdatePurchaseRequest
from catering.application.dto.responses import (
    ErrorResponse,
    PurchaseCreatedResponse,
    PurchaseListResponse,
    PurchaseResponse,
)
from catering.application.use_cases import CreatePurchaseUseCase, UpdatePurchaseUseCase
from catering.core.exceptions import PurchaseNotFoundError
from catering.infrastructure.storage.sqlite import SQLitePurchaseStore

router = APIRouter(prefix="/api/purchases", tags=["purchases"])


@router.get("", response_model=PurchaseListResponse)
async def list_purchases(
    limit: int = 100,
    offset: int = 0,
    business_id: int = Depends(get_business_id),
    store: SQLitePurchaseStore = Depends(get_purch_store),
) -> PurchaseListResponse:
    """List purchases, newest purchase date first."""
    purchases = await store.list_purchases(business_id, limit=limit, offset=offset)
    return PurchaseListResponse(
        purchases=[PurchaseResponse.from_entity(p) for p in purchases],
        total=len(purchases),
    )


@router.post(
    "",
    response_model=PurchaseCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_purchase(
    request: CreatePurchaseRequest,
    business_id: int = Depends(get_business_id),
    use_case: CreatePurchaseUseCase = Depends(get_create_purchase_use_case),
) -> PurchaseCreatedResponse:
    """Record a purchase and receive its stock in one transaction."""
    result = await use_case.execute(business_id, request)
    return use_case.to_response(result)


@router.get(
    "/{purchase_id}",
    response_model=PurchaseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase(
    purchase_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLitePurchaseStore = Depends(get_purch_store),
) -> PurchaseResponse:
    """Get a purchase with its lines."""
    purchase = await store.get_purchase(business_id, purchase_id)
    if purchase is None:
        raise PurchaseNotFoundError(purchase_id)
    return PurchaseResponse.from_entity(purchase)


@router.put(
    "/{purchase_id}",
    response_model=PurchaseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_purchase(
    purchase_id: int,
    request: UpdatePurchaseRequest,
    business_id: int = Depends(get_business_id),
    use_case: UpdatePurchaseUseCase = Depends(get_update_purchase_use_case),
) -> PurchaseResponse:
    """Update payment status and/or status."""
    purchase = await use_case.execute(business_id, purchase_id, request)
    return use_case.to_response(purchase)
