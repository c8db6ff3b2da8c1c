"""Business registration and profile endpoints."""

from fastapi import APIRouter, Depends, status

from catering.api.dependencies import (
    get_biz_store,
    get_business_id,
    get_create_business_use_case,
    get_update_business_use_case,
)
from catering.application.dto.requests import CreateBusinessRequest, UpdateBusinessRequest
from catering.application.dto.responses import BusinessResponse, ErrorResponse
from catering.application.use_cases import (
    CreateBusinessUseCase,
    UpdateBusinessProfileUseCase,
)
from catering.core.exceptions import BusinessNotFoundError
from catering.infrastructure.storage.sqlite import SQLiteBusinessStore

router = APIRouter(prefix="/api", tags=["business"])


@router.post(
    "/businesses",
    response_model=BusinessResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_business(
    request: CreateBusinessRequest,
    use_case: CreateBusinessUseCase = Depends(get_create_business_use_case),
) -> BusinessResponse:
    """Register a business; its id is the X-Business-ID for other calls."""
    business = await use_case.execute(request)
    return use_case.to_response(business)


@router.get(
    "/profile",
    response_model=BusinessResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_profile(
    business_id: int = Depends(get_business_id),
    store: SQLiteBusinessStore = Depends(get_biz_store),
) -> BusinessResponse:
    """Get the business profile."""
    business = await store.get_business(business_id)
    if business is None:
        raise BusinessNotFoundError(business_id)
    return BusinessResponse.from_entity(business)


@router.put(
    "/profile",
    response_model=BusinessResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_profile(
    request: UpdateBusinessRequest,
    business_id: int = Depends(get_business_id),
    use_case: UpdateBusinessProfileUseCase = Depends(get_update_business_use_case),
) -> BusinessResponse:
    """Update profile fields; omitted fields are unchanged."""
    business = await use_case.execute(business_id, request)
    return use_case.to_response(business)
