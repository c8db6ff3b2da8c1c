"""Staff endpoints."""

from fastapi import APIRouter, Depends, status

from catering.api.dependencies import (
    get_business_id,
    get_create_staff_use_case,
    get_staff_member_store,
    get_update_staff_use_case,
)
from catering.application.dto.requests import CreateStaffRequest, UpdateStaffRequest
from catering.application.dto.responses import (
    ErrorResponse,
    StaffListResponse,
    StaffResponse,
)
from catering.application.use_cases import CreateStaffUseCase, UpdateStaffUseCase
from catering.core.exceptions import StaffMemberNotFoundError
from catering.infrastructure.storage.sqlite import SQLiteStaffStore

router = APIRouter(prefix="/api/staff", tags=["staff"])


@router.get("", response_model=StaffListResponse)
async def list_staff(
    limit: int = 200,
    offset: int = 0,
    business_id: int = Depends(get_business_id),
    store: SQLiteStaffStore = Depends(get_staff_member_store),
) -> StaffListResponse:
    """List current staff by name, with role names."""
    members = await store.list_staff(business_id, limit=limit, offset=offset)
    return StaffListResponse(
        staff=[StaffResponse.from_entity(m) for m in members],
        total=len(members),
    )


@router.post(
    "",
    response_model=StaffResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_staff(
    request: CreateStaffRequest,
    business_id: int = Depends(get_business_id),
    use_case: CreateStaffUseCase = Depends(get_create_staff_use_case),
) -> StaffResponse:
    """Add a staff member; role_id must name a role of this business."""
    staff = await use_case.execute(business_id, request)
    return use_case.to_response(staff)


@router.get(
    "/{staff_id}",
    response_model=StaffResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_staff(
    staff_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLiteStaffStore = Depends(get_staff_member_store),
) -> StaffResponse:
    """Get a staff member with role name and permissions."""
    staff = await store.get_staff(business_id, staff_id)
    if staff is None:
        raise StaffMemberNotFoundError(staff_id)
    return StaffResponse.from_entity(staff)


@router.put(
    "/{staff_id}",
    response_model=StaffResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_staff(
    staff_id: int,
    request: UpdateStaffRequest,
    business_id: int = Depends(get_business_id),
    use_case: UpdateStaffUseCase = Depends(get_update_staff_use_case),
) -> StaffResponse:
    """Partially update a staff member; is_active=false deactivates."""
    staff = await use_case.execute(business_id, staff_id, request)
    return use_case.to_response(staff)


@router.delete(
    "/{staff_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_staff(
    staff_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLiteStaffStore = Depends(get_staff_member_store),
) -> None:
    """Soft delete a staff member."""
    if not await store.soft_delete_staff(business_id, staff_id):
        raise StaffMemberNotFoundError(staff_id)
