"""Create Purchase Use Case: purchase header, lines and stock intake in one transaction."""

from dataclasses import dataclass, field
from datetime import date

from catering.application.dto.requests import CreatePurchaseRequest
from catering.application.dto.responses import (
    PurchaseCreatedResponse,
    PurchaseResponse,
    StockMovementResponse,
)
from catering.config import get_logger
from catering.core.entities.inventory import MovementType, ReferenceType, StockMovement
from catering.core.entities.purchase import PaymentStatus, Purchase, PurchaseLineItem
from catering.core.interfaces.inventory_store import IInventoryStore
from catering.core.interfaces.purchase_store import IPurchaseStore
from catering.core.interfaces.transaction import ITransactionManager
from catering.core.services.numbering import PURCHASE_PREFIX, generate_reference
from catering.core.services.stock_ledger import StockLedgerService

logger = get_logger(__name__)


@dataclass
class CreatePurchaseResult:
    """Result of purchase intake."""

    purchase: Purchase
    movements: list[StockMovement] = field(default_factory=list)
    created_item_ids: list[int] = field(default_factory=list)


class CreatePurchaseUseCase:
    """
    Record a supplier purchase and receive its stock.

    Each line resolves (or creates) the inventory item by exact name and
    records a Purchase movement tagged with the purchase id. The header,
    the lines and every movement commit together or not at all.
    """

    def __init__(
        self,
        purchase_store: IPurchaseStore | None = None,
        inventory_store: IInventoryStore | None = None,
        transaction_manager: ITransactionManager | None = None,
    ):
        self._purchase_store = purchase_store
        self._inventory_store = inventory_store
        self._transaction_manager = transaction_manager

    async def _get_purchase_store(self) -> IPurchaseStore:
        if self._purchase_store is None:
            from catering.infrastructure.storage.sqlite import get_purchase_store

            self._purchase_store = await get_purchase_store()
        return self._purchase_store

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
        self, business_id: int, request: CreatePurchaseRequest
    ) -> CreatePurchaseResult:
        """Execute create purchase use case."""
        logger.info(
            "create_purchase_started",
            business_id=business_id,
            supplier=request.supplier_name,
            items=len(request.items),
        )

        purchase_store = await self._get_purchase_store()
        # Purchases only add stock, so the negative-stock policy never applies
        ledger = StockLedgerService(await self._get_inventory_store())
        tx = await self._get_transaction_manager()

        purchase_date = request.purchase_date or date.today()
        lines = [
            PurchaseLineItem(
                ingredient_name=line.ingredient_name,
                quantity=line.quantity,
                unit=line.unit,
                unit_price=line.unit_price,
            )
            for line in request.items
        ]
        purchase = Purchase(
            business_id=business_id,
            purchase_order_number=generate_reference(PURCHASE_PREFIX),
            supplier_id=request.supplier_id,
            supplier_name=request.supplier_name,
            purchase_date=purchase_date,
            payment_status=PaymentStatus.PENDING,
            items=lines,
        )

        result = CreatePurchaseResult(purchase=purchase)

        async with tx.transaction():
            purchase = await purchase_store.create_purchase(purchase)

            for line in lines:
                item, created = await ledger.resolve_or_create_item(
                    business_id,
                    line.ingredient_name,
                    unit=line.unit,
                    cost_per_unit=line.unit_price,
                    supplier_id=request.supplier_id,
                    supplier_name=request.supplier_name,
                )
                if created:
                    result.created_item_ids.append(item.id)  # type: ignore[arg-type]

                _, movement = await ledger.record_movement(
                    business_id,
                    item.id,  # type: ignore[arg-type]
                    line.quantity,
                    MovementType.PURCHASE,
                    reference_id=purchase.id,
                    reference_type=ReferenceType.PURCHASE,
                    notes=f"Purchase {purchase.purchase_order_number}",
                )
                result.movements.append(movement)

                line.purchase_id = purchase.id
                line.inventory_item_id = item.id
                await purchase_store.add_line(line)

        result.purchase = purchase
        logger.info(
            "create_purchase_complete",
            purchase_id=purchase.id,
            purchase_order_number=purchase.purchase_order_number,
            total=purchase.total_amount,
            created_items=len(result.created_item_ids),
        )
        return result

    def to_response(self, result: CreatePurchaseResult) -> PurchaseCreatedResponse:
        """Convert result to API response."""
        return PurchaseCreatedResponse(
            purchase=PurchaseResponse.from_entity(result.purchase),
            movements=[StockMovementResponse.from_entity(m) for m in result.movements],
            created_items=result.created_item_ids,
        )
