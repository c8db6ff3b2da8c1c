"""Record Stock Movement Use Case: signed adjustment through the ledger."""

from dataclasses import dataclass

from catering.application.dto.requests import RecordStockMovementRequest
from catering.application.dto.responses import (
    InventoryItemResponse,
    StockMovementResponse,
    StockMovementResultResponse,
)
from catering.config import get_logger, get_settings
from catering.core.entities.inventory import InventoryItem, ReferenceType, StockMovement
from catering.core.interfaces.inventory_store import IInventoryStore
from catering.core.interfaces.transaction import ITransactionManager
from catering.core.services.stock_ledger import StockLedgerService

logger = get_logger(__name__)


@dataclass
class RecordStockMovementResult:
    """Result of recording a stock movement."""

    inventory_item: InventoryItem
    movement: StockMovement


class RecordStockMovementUseCase:
    """Apply a signed stock change to one item in its own transaction."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        transaction_manager: ITransactionManager | None = None,
        allow_negative_stock: bool | None = None,
    ):
        self._inventory_store = inventory_store
        self._transaction_manager = transaction_manager
        if allow_negative_stock is None:
            allow_negative_stock = get_settings().inventory.allow_negative_stock
        self._allow_negative_stock = allow_negative_stock

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from catering.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from catering.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    async def execute(
        self,
        business_id: int,
        item_id: int,
        request: RecordStockMovementRequest,
    ) -> RecordStockMovementResult:
        """Execute record stock movement use case."""
        logger.info(
            "record_stock_movement_started",
            business_id=business_id,
            item_id=item_id,
            quantity=request.quantity,
            movement_type=request.movement_type.value,
        )

        ledger = StockLedgerService(
            await self._get_inventory_store(),
            allow_negative_stock=self._allow_negative_stock,
        )
        tx = await self._get_transaction_manager()

        reference_type = request.reference_type
        if reference_type is None and request.reference_id is None:
            reference_type = ReferenceType.MANUAL

        async with tx.transaction():
            item, movement = await ledger.record_movement(
                business_id,
                item_id,
                request.quantity,
                request.movement_type,
                reference_id=request.reference_id,
                reference_type=reference_type,
                notes=request.notes,
            )

        return RecordStockMovementResult(inventory_item=item, movement=movement)

    def to_response(self, result: RecordStockMovementResult) -> StockMovementResultResponse:
        """Convert result to API response."""
        return StockMovementResultResponse(
            inventory_item=InventoryItemResponse.from_entity(result.inventory_item),
            movement=StockMovementResponse.from_entity(result.movement),
        )
