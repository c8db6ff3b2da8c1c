"""
Stock ledger service.

The only code path that changes an item's current_stock. Every change is
written as a compare-and-set on the item row followed by an append-only
movement carrying before/after snapshots, so current_stock always equals
the net of its movements. Callers own the transaction.
"""

from catering.config import get_logger
from catering.core.entities.inventory import (
    InventoryItem,
    MovementType,
    ReferenceType,
    StockMovement,
)
from catering.core.entities.order import Order
from catering.core.exceptions import (
    InsufficientStockError,
    InventoryItemNotFoundError,
    ValidationError,
)
from catering.core.interfaces.inventory_store import IInventoryStore
from catering.core.interfaces.menu_store import IMenuStore

logger = get_logger(__name__)


class StockLedgerService:
    """
    Records stock movements against inventory items.

    Pure service, no infrastructure imports; the store is injected.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        allow_negative_stock: bool = False,
    ):
        self._inventory_store = inventory_store
        self._allow_negative_stock = allow_negative_stock

    async def record_movement(
        self,
        business_id: int,
        item_id: int,
        quantity_change: float,
        movement_type: MovementType,
        reference_id: int | None = None,
        reference_type: ReferenceType | None = None,
        notes: str | None = None,
    ) -> tuple[InventoryItem, StockMovement]:
        """
        Apply a signed quantity change to an item and append the movement.

        Args:
            business_id: Owning business
            item_id: Inventory item to adjust
            quantity_change: Signed delta, never zero
            movement_type: Purchase, Consumption or Adjustment
            reference_id: Optional id of the causing purchase/order
            reference_type: What reference_id points at
            notes: Free text

        Returns:
            Tuple of (updated item, recorded movement)

        Raises:
            InventoryItemNotFoundError: item missing, inactive or foreign
            InsufficientStockError: result would be negative
            ConcurrentModificationError: row changed between read and write
        """
        if quantity_change == 0:
            raise ValidationError(
                field="quantity_change",
                message="Quantity change must be non-zero",
                value=quantity_change,
            )

        item = await self._inventory_store.get_item(business_id, item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        previous_stock = item.current_stock
        new_stock = previous_stock + quantity_change

        if new_stock < 0:
            if not self._allow_negative_stock:
                raise InsufficientStockError(item_id, quantity_change, previous_stock)
            logger.warning(
                "negative_stock_anomaly",
                business_id=business_id,
                item_id=item_id,
                previous_stock=previous_stock,
                quantity_change=quantity_change,
                new_stock=new_stock,
            )

        updated = await self._inventory_store.update_stock(item, new_stock)

        movement = await self._inventory_store.add_movement(
            StockMovement(
                business_id=business_id,
                inventory_item_id=item_id,
                movement_type=movement_type,
                quantity_change=quantity_change,
                previous_stock=previous_stock,
                new_stock=new_stock,
                reference_id=reference_id,
                reference_type=reference_type,
                notes=notes,
            )
        )

        logger.info(
            "stock_movement_recorded",
            business_id=business_id,
            item_id=item_id,
            movement_type=movement_type.value,
            quantity_change=quantity_change,
            new_stock=new_stock,
        )
        return updated, movement

    async def resolve_or_create_item(
        self,
        business_id: int,
        name: str,
        unit: str | None = None,
        cost_per_unit: float = 0.0,
        supplier_id: int | None = None,
        supplier_name: str | None = None,
    ) -> tuple[InventoryItem, bool]:
        """
        Find an active item by exact name or create it with zero stock.

        Returns:
            Tuple of (item, created)
        """
        existing = await self._inventory_store.get_item_by_name(business_id, name)
        if existing is not None:
            return existing, False

        item = await self._inventory_store.create_item(
            InventoryItem(
                business_id=business_id,
                name=name,
                unit=unit,
                current_stock=0.0,
                minimum_stock=0.0,
                cost_per_unit=cost_per_unit,
                supplier_id=supplier_id,
                supplier_name=supplier_name,
            )
        )
        logger.info(
            "inventory_item_created",
            business_id=business_id,
            item_id=item.id,
            name=name,
        )
        return item, True

    async def list_low_stock(
        self, business_id: int, limit: int = 100
    ) -> list[InventoryItem]:
        """Active items at or below minimum stock, largest shortage first."""
        return await self._inventory_store.list_low_stock(business_id, limit=limit)

    async def consume_for_order(
        self, order: Order, menu_store: IMenuStore
    ) -> list[StockMovement]:
        """
        Post ingredient consumption for an order.

        Quantities are totalled per inventory item (quantity_required times
        line quantity), then one Consumption movement is recorded per item.
        Lines without a menu item and ingredients that resolve to no active
        inventory item are skipped with a warning.
        """
        assert order.id is not None
        totals: dict[int, float] = {}

        for line in order.items:
            if line.menu_item_id is None:
                continue
            menu_item = await menu_store.get_menu_item(
                order.business_id, line.menu_item_id
            )
            if menu_item is None:
                logger.warning(
                    "consumption_menu_item_missing",
                    order_id=order.id,
                    menu_item_id=line.menu_item_id,
                )
                continue

            for ingredient in menu_item.ingredients:
                item_id = ingredient.inventory_item_id
                if item_id is None:
                    found = await self._inventory_store.get_item_by_name(
                        order.business_id, ingredient.ingredient_name
                    )
                    item_id = found.id if found else None
                if item_id is None:
                    logger.warning(
                        "consumption_ingredient_unlinked",
                        order_id=order.id,
                        ingredient=ingredient.ingredient_name,
                    )
                    continue
                totals[item_id] = (
                    totals.get(item_id, 0.0)
                    + ingredient.quantity_required * line.quantity
                )

        movements = []
        for item_id, quantity in totals.items():
            if quantity <= 0:
                continue
            _, movement = await self.record_movement(
                order.business_id,
                item_id,
                -quantity,
                MovementType.CONSUMPTION,
                reference_id=order.id,
                reference_type=ReferenceType.ORDER,
                notes=f"Consumption for order {order.order_number}",
            )
            movements.append(movement)

        logger.info(
            "order_stock_consumed",
            order_id=order.id,
            movements=len(movements),
        )
        return movements
