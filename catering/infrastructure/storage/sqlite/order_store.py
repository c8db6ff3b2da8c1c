"""SQLite implementation of order storage."""

from datetime import datetime

import aiosqlite

from catering.config import get_logger
from catering.core.entities.order import Order, OrderLineItem, OrderStatus
from catering.core.exceptions import DuplicateReferenceError
from catering.core.interfaces.order_store import IOrderStore
from catering.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from catering.infrastructure.storage.sqlite.rows import iso, parse_date, parse_datetime

logger = get_logger(__name__)


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of order storage."""

    async def create_order(self, order: Order) -> Order:
        """Create an order with all its items."""
        now = datetime.utcnow()
        order.created_at = now
        order.updated_at = now
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO orders (
                        business_id, order_number, client_name, client_type,
                        event_date, event_type, event_location, guest_count,
                        price_per_head, total_value, advance_received,
                        remaining_balance, status, stock_consumed,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order.business_id,
                        order.order_number,
                        order.client_name,
                        order.client_type,
                        iso(order.event_date),
                        order.event_type,
                        order.event_location,
                        order.guest_count,
                        order.price_per_head,
                        order.total_value,
                        order.advance_received,
                        order.remaining_balance,
                        order.status.value,
                        int(order.stock_consumed),
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise DuplicateReferenceError(order.order_number) from e
            order.id = cursor.lastrowid

            for item in order.items:
                item.order_id = order.id
                item_cursor = await conn.execute(
                    """
                    INSERT INTO order_items (
                        order_id, menu_item_id, item_name,
                        quantity, unit_price, total_price
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item.order_id,
                        item.menu_item_id,
                        item.item_name,
                        item.quantity,
                        item.unit_price,
                        item.total_price,
                    ),
                )
                item.id = item_cursor.lastrowid

            logger.info(
                "order_created",
                order_id=order.id,
                order_number=order.order_number,
                items=len(order.items),
                total=order.total_value,
            )
            return order

    async def get_order(self, business_id: int, order_id: int) -> Order | None:
        """Get order by ID with items."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM orders WHERE id = ? AND business_id = ?",
                (order_id, business_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            items_cursor = await conn.execute(
                "SELECT * FROM order_items WHERE order_id = ? ORDER BY id",
                (order_id,),
            )
            item_rows = await items_cursor.fetchall()
            order = self._row_to_order(row)
            order.items = [self._row_to_item(r) for r in item_rows]
            return order

    async def list_orders(
        self, business_id: int, limit: int = 100, offset: int = 0
    ) -> list[Order]:
        """List orders by event date, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM orders
                WHERE business_id = ?
                ORDER BY event_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (business_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_order(row) for row in rows]

    async def update_order(self, order: Order) -> Order:
        """Persist status, advance, balance and the stock_consumed flag."""
        order.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE orders SET
                    status = ?,
                    advance_received = ?,
                    remaining_balance = ?,
                    stock_consumed = ?,
                    updated_at = ?
                WHERE id = ? AND business_id = ?
                """,
                (
                    order.status.value,
                    order.advance_received,
                    order.remaining_balance,
                    int(order.stock_consumed),
                    order.updated_at.isoformat(),
                    order.id,
                    order.business_id,
                ),
            )
            logger.info(
                "order_updated",
                order_id=order.id,
                status=order.status.value,
                advance_received=order.advance_received,
                remaining_balance=order.remaining_balance,
            )
            return order

    @staticmethod
    def _row_to_order(row: aiosqlite.Row) -> Order:
        return Order(
            id=row["id"],
            business_id=row["business_id"],
            order_number=row["order_number"],
            client_name=row["client_name"],
            client_type=row["client_type"],
            event_date=parse_date(row["event_date"]),
            event_type=row["event_type"],
            event_location=row["event_location"],
            guest_count=row["guest_count"],
            price_per_head=float(row["price_per_head"]),
            total_value=float(row["total_value"]),
            advance_received=float(row["advance_received"]),
            remaining_balance=float(row["remaining_balance"]),
            status=OrderStatus(row["status"]),
            stock_consumed=bool(row["stock_consumed"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> OrderLineItem:
        item = OrderLineItem(
            id=row["id"],
            order_id=row["order_id"],
            menu_item_id=row["menu_item_id"],
            item_name=row["item_name"],
            quantity=float(row["quantity"]),
            unit_price=float(row["unit_price"]),
        )
        item.total_price = float(row["total_price"])
        return item
