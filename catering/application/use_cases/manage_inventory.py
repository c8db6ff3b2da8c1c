"""Inventory item use cases: create, update and soft delete."""

from catering.application.dto.requests import (
    CreateInventoryItemRequest,
    UpdateInventoryItemRequest,
)
from catering.application.dto.responses import InventoryItemResponse
from catering.config import get_logger
from catering.core.entities.inventory import InventoryItem
from catering.core.exceptions import InventoryItemNotFoundError
from catering.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class _InventoryUseCase:
    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from catering.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        return InventoryItemResponse.from_entity(item)


class CreateInventoryItemUseCase(_InventoryUseCase):
    """Create an item explicitly; stock starts at zero and moves via the ledger."""

    async def execute(
        self, business_id: int, request: CreateInventoryItemRequest
    ) -> InventoryItem:
        store = await self._get_inventory_store()
        item = await store.create_item(
            InventoryItem(business_id=business_id, current_stock=0.0, **request.model_dump())
        )
        logger.info("inventory_item_created", business_id=business_id, item_id=item.id)
        return item


class UpdateInventoryItemUseCase(_InventoryUseCase):
    """Partially update descriptive fields; current_stock is never touched."""

    async def execute(
        self, business_id: int, item_id: int, request: UpdateInventoryItemRequest
    ) -> InventoryItem:
        store = await self._get_inventory_store()
        item = await store.get_item(business_id, item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        for field_name, value in request.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(item, field_name, value)
        return await store.update_item(item)


class DeactivateInventoryItemUseCase(_InventoryUseCase):
    """Soft delete an item; its movements stay in the ledger."""

    async def execute(self, business_id: int, item_id: int) -> None:
        store = await self._get_inventory_store()
        if not await store.deactivate_item(business_id, item_id):
            raise InventoryItemNotFoundError(item_id)
