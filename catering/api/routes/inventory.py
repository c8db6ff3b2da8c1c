"""Inventory management endpoints."""

from fastapi import APIRouter, Depends, status

from catering.api.dependencies import (
    get_business_id,
    get_create_inventory_item_use_case,
    get_deactivate_inventory_item_use_case,
    get_inv_item_store,
    get_record_stock_movement_use_case,
    get_update_inventory_item_use_case,
)
from catering.application.dto.requests import (
    CreateInventoryItemRequest,
    RecordStockMovementRequest,
    UpdateInventoryItemRequest,
)
from catering.application.dto.responses import (
    ErrorResponse,
    InventoryItemResponse,
    InventoryListResponse,
    StockMovementListResponse,
    StockMovementResponse,
    StockMovementResultResponse,
)
from catering.application.use_cases import (
    CreateInventoryItemUseCase,
    DeactivateInventoryItemUseCase,
    RecordStockMovementUseCase,
    UpdateInventoryItemUseCase,
)
from catering.core.exceptions import InventoryItemNotFoundError
from catering.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    limit: int = 100,
    offset: int = 0,
    business_id: int = Depends(get_business_id),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryListResponse:
    """List active inventory items by name."""
    items = await store.list_items(business_id, limit=limit, offset=offset)
    return InventoryListResponse(
        items=[InventoryItemResponse.from_entity(i) for i in items],
        total=len(items),
    )


@router.get("/low-stock", response_model=InventoryListResponse)
async def list_low_stock(
    limit: int = 100,
    business_id: int = Depends(get_business_id),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryListResponse:
    """Items at or below minimum stock, largest shortage first."""
    items = await store.list_low_stock(business_id, limit=limit)
    return InventoryListResponse(
        items=[InventoryItemResponse.from_entity(i) for i in items],
        total=len(items),
    )


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_inventory_item(
    request: CreateInventoryItemRequest,
    business_id: int = Depends(get_business_id),
    use_case: CreateInventoryItemUseCase = Depends(get_create_inventory_item_use_case),
) -> InventoryItemResponse:
    """Create an inventory item with zero stock."""
    item = await use_case.execute(business_id, request)
    return use_case.to_response(item)


@router.get(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_inventory_item(
    item_id: int,
    business_id: int = Depends(get_business_id),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryItemResponse:
    """Get an active inventory item."""
    item = await store.get_item(business_id, item_id)
    if item is None:
        raise InventoryItemNotFoundError(item_id)
    return InventoryItemResponse.from_entity(item)


@router.put(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_inventory_item(
    item_id: int,
    request: UpdateInventoryItemRequest,
    business_id: int = Depends(get_business_id),
    use_case: UpdateInventoryItemUseCase = Depends(get_update_inventory_item_use_case),
) -> InventoryItemResponse:
    """Update descriptive fields and minimum stock."""
    item = await use_case.execute(business_id, item_id, request)
    return use_case.to_response(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_inventory_item(
    item_id: int,
    business_id: int = Depends(get_business_id),
    use_case: DeactivateInventoryItemUseCase = Depends(get_deactivate_inventory_item_use_case),
) -> None:
    """Soft delete an inventory item."""
    await use_case.execute(business_id, item_id)


@router.put(
    "/{item_id}/stock",
    response_model=StockMovementResultResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_stock_movement(
    item_id: int,
    request: RecordStockMovementRequest,
    business_id: int = Depends(get_business_id),
    use_case: RecordStockMovementUseCase = Depends(get_record_stock_movement_use_case),
) -> StockMovementResultResponse:
    """Apply a signed stock change and append it to the ledger."""
    result = await use_case.execute(business_id, item_id, request)
    return use_case.to_response(result)


@router.get(
    "/{item_id}/movements",
    response_model=StockMovementListResponse,
)
async def get_movements(
    item_id: int,
    limit: int = 100,
    offset: int = 0,
    business_id: int = Depends(get_business_id),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> StockMovementListResponse:
    """Get stock movements for an inventory item, newest first."""
    movements = await store.get_movements(business_id, item_id, limit=limit, offset=offset)
    return StockMovementListResponse(
        movements=[StockMovementResponse.from_entity(m) for m in movements],
        total=len(movements),
    )
