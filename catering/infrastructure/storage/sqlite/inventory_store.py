"""SQLite implementation of inventory storage."""

from datetime import datetime

import aiosqlite

from catering.config import get_logger
from catering.core.entities.inventory import (
    InventoryItem,
    MovementType,
    ReferenceType,
    StockMovement,
)
from catering.core.exceptions import ConcurrentModificationError
from catering.core.interfaces.inventory_store import IInventoryStore
from catering.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from catering.infrastructure.storage.sqlite.rows import parse_datetime

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory item and stock movement storage."""

    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item."""
        now = datetime.utcnow()
        item.created_at = now
        item.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory_items (
                    business_id, name, category, unit, current_stock,
                    minimum_stock, cost_per_unit, supplier_id, supplier_name,
                    is_active, version, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 1, 0, ?, ?)
                """,
                (
                    item.business_id,
                    item.name,
                    item.category,
                    item.unit,
                    item.current_stock,
                    item.minimum_stock,
                    item.cost_per_unit,
                    item.supplier_id,
                    item.supplier_name,
                    item.created_at.isoformat(),
                    item.updated_at.isoformat(),
                ),
            )
            item.id = cursor.lastrowid
            item.version = 0
            item.is_active = True
            return item

    async def get_item(self, business_id: int, item_id: int) -> InventoryItem | None:
        """Get an active inventory item of the business by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE id = ? AND business_id = ? AND is_active = 1
                """,
                (item_id, business_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_inventory_item(row)

    async def get_item_by_name(
        self, business_id: int, name: str
    ) -> InventoryItem | None:
        """Get an active inventory item by exact name (lowest id wins)."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE business_id = ? AND name = ? AND is_active = 1
                ORDER BY id
                LIMIT 1
                """,
                (business_id, name),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_inventory_item(row)

    async def update_item(self, item: InventoryItem) -> InventoryItem:
        """Update descriptive fields and minimum stock."""
        item.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE inventory_items SET
                    name = ?,
                    category = ?,
                    unit = ?,
                    minimum_stock = ?,
                    cost_per_unit = ?,
                    supplier_id = ?,
                    supplier_name = ?,
                    updated_at = ?
                WHERE id = ? AND business_id = ?
                """,
                (
                    item.name,
                    item.category,
                    item.unit,
                    item.minimum_stock,
                    item.cost_per_unit,
                    item.supplier_id,
                    item.supplier_name,
                    item.updated_at.isoformat(),
                    item.id,
                    item.business_id,
                ),
            )
            logger.info("inventory_item_updated", item_id=item.id)
            return item

    async def update_stock(
        self, item: InventoryItem, new_stock: float
    ) -> InventoryItem:
        """Compare-and-set current_stock on the version read earlier."""
        now = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_items SET
                    current_stock = ?,
                    version = version + 1,
                    updated_at = ?
                WHERE id = ? AND business_id = ? AND version = ?
                """,
                (new_stock, now.isoformat(), item.id, item.business_id, item.version),
            )
            if cursor.rowcount == 0:
                logger.warning(
                    "inventory_version_conflict",
                    item_id=item.id,
                    expected_version=item.version,
                )
                raise ConcurrentModificationError("Inventory item", item.id)

        return item.model_copy(
            update={
                "current_stock": new_stock,
                "version": item.version + 1,
                "updated_at": now,
            }
        )

    async def deactivate_item(self, business_id: int, item_id: int) -> bool:
        """Soft delete an item."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_items SET is_active = 0, updated_at = ?
                WHERE id = ? AND business_id = ? AND is_active = 1
                """,
                (datetime.utcnow().isoformat(), item_id, business_id),
            )
            deactivated = cursor.rowcount > 0
            if deactivated:
                logger.info("inventory_item_deactivated", item_id=item_id)
            return deactivated

    async def list_items(
        self, business_id: int, limit: int = 100, offset: int = 0
    ) -> list[InventoryItem]:
        """List active inventory items ordered by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE business_id = ? AND is_active = 1
                ORDER BY name, id
                LIMIT ? OFFSET ?
                """,
                (business_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def list_low_stock(
        self, business_id: int, limit: int = 100
    ) -> list[InventoryItem]:
        """Active items at or below minimum stock, largest shortage first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE business_id = ? AND is_active = 1
                  AND current_stock <= minimum_stock
                ORDER BY (minimum_stock - current_stock) DESC, name
                LIMIT ?
                """,
                (business_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def add_movement(self, movement: StockMovement) -> StockMovement:
        """Append a stock movement."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_movements (
                    business_id, inventory_item_id, movement_type,
                    quantity_change, previous_stock, new_stock,
                    reference_id, reference_type, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    movement.business_id,
                    movement.inventory_item_id,
                    movement.movement_type.value,
                    movement.quantity_change,
                    movement.previous_stock,
                    movement.new_stock,
                    movement.reference_id,
                    movement.reference_type.value if movement.reference_type else None,
                    movement.notes,
                    movement.created_at.isoformat(),
                ),
            )
            return movement.model_copy(update={"id": cursor.lastrowid})

    async def get_movements(
        self, business_id: int, inventory_item_id: int, limit: int = 100, offset: int = 0
    ) -> list[StockMovement]:
        """Get movements for an inventory item, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE business_id = ? AND inventory_item_id = ?
                ORDER BY id DESC
                LIMIT ? OFFSET ?
                """,
                (business_id, inventory_item_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    @staticmethod
    def _row_to_inventory_item(row: aiosqlite.Row) -> InventoryItem:
        """Convert a database row to an InventoryItem entity."""
        return InventoryItem(
            id=row["id"],
            business_id=row["business_id"],
            name=row["name"],
            category=row["category"],
            unit=row["unit"],
            current_stock=float(row["current_stock"]),
            minimum_stock=float(row["minimum_stock"]),
            cost_per_unit=float(row["cost_per_unit"]),
            supplier_id=row["supplier_id"],
            supplier_name=row["supplier_name"],
            is_active=bool(row["is_active"]),
            version=row["version"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        """Convert a database row to a StockMovement entity."""
        return StockMovement(
            id=row["id"],
            business_id=row["business_id"],
            inventory_item_id=row["inventory_item_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity_change=float(row["quantity_change"]),
            previous_stock=float(row["previous_stock"]),
            new_stock=float(row["new_stock"]),
            reference_id=row["reference_id"],
            reference_type=(
                ReferenceType(row["reference_type"]) if row["reference_type"] else None
            ),
            notes=row["notes"],
            created_at=parse_datetime(row["created_at"]),
        )
