"""Menu item endpoints."""

from fastapi import APIRouter, Depends, status

from catering.api.dependencies import (
    get_business_id,
    get_create_menu_item_use_case,
    get_menu_item_store,
    get_update_menu_item_use_case,
)
from catering.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from catering.application.dto.responses import (
    ErrorResponse,
    MenuItemResponse,
    MenuListResponse,
)
from catering.application.use_cases import CreateMenuItemUseCase, UpdateMenuItemUseCase
from catering.core.exceptions import MenuItemNotFoundError
from catering.infrastructure.storage.sqlite import SQLiteMenuStore

router = APIRouter(prefix="/api/menu-items", tags=["menu"])


@router.get("", response_model=MenuListResponse)
async def list_menu_items(
    limit: int = 200,
    offset: int = 0,
    business_id: int = Depends(get_business_id),
    store: SQLiteMenuStore = Depends(get_menu_item_store),
) -> MenuListResponse:
    """List menu items by category and name."""
    items = await store.list_menu_items(business_id, limit=limit, offset=offset)
    return MenuListResponse(
        menu_items=[MenuItemResponse.from_entity(m) for m in items],
        total=len(items),
    )


@router.post(
    "",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_menu_item(
    request: CreateMenuItemRequest,
    business_id: int = Depends(get_business_id),
    use_case: CreateMenuItemUseCase = Depends(get_create_menu_item_use_case),
) -> MenuItemResponse:
    """Create a menu item; margin is computed from cost and price."""
    menu_item = await use_case.execute(business_id, request)
    return use_case.to_response(menu_item)


@router.get(
    "/{menu_item_id}",
    response_model=MenuItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_menu_item(
    menu_item_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLiteMenuStore = Depends(get_menu_item_store),
) -> MenuItemResponse:
    """Get a menu item with its ingredients."""
    menu_item = await store.get_menu_item(business_id, menu_item_id)
    if menu_item is None:
        raise MenuItemNotFoundError(menu_item_id)
    return MenuItemResponse.from_entity(menu_item)


@router.put(
    "/{menu_item_id}",
    response_model=MenuItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_menu_item(
    menu_item_id: int,
    request: UpdateMenuItemRequest,
    business_id: int = Depends(get_business_id),
    use_case: UpdateMenuItemUseCase = Depends(get_update_menu_item_use_case),
) -> MenuItemResponse:
    """Partially update a menu item; margin is recomputed."""
    menu_item = await use_case.execute(business_id, menu_item_id, request)
    return use_case.to_response(menu_item)


@router.delete(
    "/{menu_item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_menu_item(
    menu_item_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLiteMenuStore = Depends(get_menu_item_store),
) -> None:
    """Soft delete a menu item."""
    if not await store.soft_delete_menu_item(business_id, menu_item_id):
        raise MenuItemNotFoundError(menu_item_id)
