"""SQLite implementation of purchase storage."""

from datetime import date, datetime

import aiosqlite

from catering.config import get_logger
from catering.core.entities.purchase import (
    PaymentStatus,
    Purchase,
    PurchaseLineItem,
    PurchaseStatus,
)
from catering.core.exceptions import DuplicateReferenceError
from catering.core.interfaces.purchase_store import IPurchaseStore
from catering.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from catering.infrastructure.storage.sqlite.rows import parse_date, parse_datetime

logger = get_logger(__name__)


class SQLitePurchaseStore(IPurchaseStore):
    """SQLite implementation of purchase order storage."""

    async def create_purchase(self, purchase: Purchase) -> Purchase:
        """Insert the purchase header; lines are added one by one."""
        now = datetime.utcnow()
        purchase.created_at = now
        purchase.updated_at = now
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO purchases (
                        business_id, purchase_order_number, supplier_id,
                        supplier_name, purchase_date, total_amount,
                        final_amount, payment_status, status,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        purchase.business_id,
                        purchase.purchase_order_number,
                        purchase.supplier_id,
                        purchase.supplier_name,
                        purchase.purchase_date.isoformat(),
                        purchase.total_amount,
                        purchase.final_amount,
                        purchase.payment_status.value,
                        purchase.status.value,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise DuplicateReferenceError(purchase.purchase_order_number) from e
            purchase.id = cursor.lastrowid
            logger.info(
                "purchase_created",
                purchase_id=purchase.id,
                purchase_order_number=purchase.purchase_order_number,
                total=purchase.total_amount,
            )
            return purchase

    async def add_line(self, line: PurchaseLineItem) -> PurchaseLineItem:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO purchase_items (
                    purchase_id, inventory_item_id, ingredient_name,
                    quantity, unit, unit_price, total_price
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    line.purchase_id,
                    line.inventory_item_id,
                    line.ingredient_name,
                    line.quantity,
                    line.unit,
                    line.unit_price,
                    line.total_price,
                ),
            )
            line.id = cursor.lastrowid
            return line

    async def get_purchase(
        self, business_id: int, purchase_id: int
    ) -> Purchase | None:
        """Get purchase by ID with items."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM purchases WHERE id = ? AND business_id = ?",
                (purchase_id, business_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            items_cursor = await conn.execute(
                "SELECT * FROM purchase_items WHERE purchase_id = ? ORDER BY id",
                (purchase_id,),
            )
            item_rows = await items_cursor.fetchall()
            return self._row_to_purchase(
                row, [self._row_to_line(r) for r in item_rows]
            )

    async def list_purchases(
        self, business_id: int, limit: int = 100, offset: int = 0
    ) -> list[Purchase]:
        """List purchases by purchase date, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM purchases
                WHERE business_id = ?
                ORDER BY purchase_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (business_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_purchase(row) for row in rows]

    async def update_status(
        self,
        business_id: int,
        purchase_id: int,
        payment_status: PaymentStatus | None = None,
        status: PurchaseStatus | None = None,
    ) -> Purchase | None:
        """COALESCE update of payment_status and status."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE purchases SET
                    payment_status = COALESCE(?, payment_status),
                    status = COALESCE(?, status),
                    updated_at = ?
                WHERE id = ? AND business_id = ?
                """,
                (
                    payment_status.value if payment_status else None,
                    status.value if status else None,
                    datetime.utcnow().isoformat(),
                    purchase_id,
                    business_id,
                ),
            )
            if cursor.rowcount == 0:
                return None
            logger.info(
                "purchase_status_updated",
                purchase_id=purchase_id,
                payment_status=payment_status.value if payment_status else None,
                status=status.value if status else None,
            )
        return await self.get_purchase(business_id, purchase_id)

    @staticmethod
    def _row_to_purchase(
        row: aiosqlite.Row, items: list[PurchaseLineItem] | None = None
    ) -> Purchase:
        purchase = Purchase(
            id=row["id"],
            business_id=row["business_id"],
            purchase_order_number=row["purchase_order_number"],
            supplier_id=row["supplier_id"],
            supplier_name=row["supplier_name"],
            purchase_date=parse_date(row["purchase_date"]) or date.today(),
            payment_status=PaymentStatus(row["payment_status"]),
            status=PurchaseStatus(row["status"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
        # Stored totals are authoritative; set after construction so the
        # item-based recomputation does not run over a headers-only read.
        purchase.items = items or []
        purchase.total_amount = float(row["total_amount"])
        purchase.final_amount = float(row["final_amount"])
        return purchase

    @staticmethod
    def _row_to_line(row: aiosqlite.Row) -> PurchaseLineItem:
        line = PurchaseLineItem(
            id=row["id"],
            purchase_id=row["purchase_id"],
            inventory_item_id=row["inventory_item_id"],
            ingredient_name=row["ingredient_name"],
            quantity=float(row["quantity"]),
            unit=row["unit"],
            unit_price=float(row["unit_price"]),
        )
        line.total_price = float(row["total_price"])
        return line
