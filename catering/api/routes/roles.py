"""Role endpoints."""

from fastapi import APIRouter, Depends, status

from catering.api.dependencies import (
    get_business_id,
    get_create_role_use_case,
    get_staff_member_store,
    get_update_role_use_case,
)
from catering.application.dto.requests import CreateRoleRequest, UpdateRoleRequest
from catering.application.dto.responses import ErrorResponse, RoleListResponse, RoleResponse
from catering.application.use_cases import CreateRoleUseCase, UpdateRoleUseCase
from catering.infrastructure.storage.sqlite import SQLiteStaffStore

router = APIRouter(prefix="/api/roles", tags=["staff"])


@router.get("", response_model=RoleListResponse)
async def list_roles(
    business_id: int = Depends(get_business_id),
    store: SQLiteStaffStore = Depends(get_staff_member_store),
) -> RoleListResponse:
    """List roles with their permissions, ordered by name."""
    roles = await store.list_roles(business_id)
    return RoleListResponse(
        roles=[RoleResponse.from_entity(r) for r in roles],
        total=len(roles),
    )


@router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_role(
    request: CreateRoleRequest,
    business_id: int = Depends(get_business_id),
    use_case: CreateRoleUseCase = Depends(get_create_role_use_case),
) -> RoleResponse:
    """Create a role; names are unique per business."""
    role = await use_case.execute(business_id, request)
    return use_case.to_response(role)


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_role(
    role_id: int,
    request: UpdateRoleRequest,
    business_id: int = Depends(get_business_id),
    use_case: UpdateRoleUseCase = Depends(get_update_role_use_case),
) -> RoleResponse:
    """Update a role; a permissions list replaces the current set."""
    role = await use_case.execute(business_id, role_id, request)
    return use_case.to_response(role)
