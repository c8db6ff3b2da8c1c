"""SQLite implementation of dashboard and search queries."""

from datetime import date

from catering.core.interfaces.report_store import DashboardStats, IReportStore, SearchResults
from catering.infrastructure.storage.sqlite.connection import get_connection
from catering.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from catering.infrastructure.storage.sqlite.menu_store import SQLiteMenuStore
from catering.infrastructure.storage.sqlite.order_store import SQLiteOrderStore


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SQLiteReportStore(IReportStore):
    """Read-only aggregate queries over the business's records."""

    async def dashboard_stats(self, business_id: int, today: date) -> DashboardStats:
        """Compute dashboard figures as of the given day."""
        month = today.strftime("%Y-%m")
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    (SELECT COUNT(*) FROM orders
                     WHERE business_id = :b
                       AND status IN ('Inquiry', 'Confirmed', 'In Progress')
                    ) AS pending_orders,
                    (SELECT COUNT(DISTINCT substr(event_date, 1, 10)) FROM orders
                     WHERE business_id = :b
                       AND substr(event_date, 1, 10) >= :today
                       AND status != 'Closed'
                    ) AS upcoming_events,
                    (SELECT COUNT(*) FROM inventory_items
                     WHERE business_id = :b AND is_active = 1
                       AND current_stock <= minimum_stock
                    ) AS low_stock_items,
                    (SELECT COALESCE(SUM(current_stock * cost_per_unit), 0)
                     FROM inventory_items
                     WHERE business_id = :b AND is_active = 1
                    ) AS inventory_value,
                    (SELECT COALESCE(SUM(total_value), 0) FROM orders
                     WHERE business_id = :b
                       AND substr(event_date, 1, 7) = :month
                       AND status IN ('In Progress', 'Delivered')
                    ) AS monthly_revenue,
                    (SELECT COALESCE(SUM(total_value), 0) FROM orders
                     WHERE business_id = :b AND status = 'Delivered'
                    ) AS total_sales
                """,
                {"b": business_id, "today": today.isoformat(), "month": month},
            )
            row = await cursor.fetchone()
            return DashboardStats(
                pending_orders=row["pending_orders"],
                upcoming_events=row["upcoming_events"],
                low_stock_items=row["low_stock_items"],
                inventory_value=float(row["inventory_value"]),
                monthly_revenue=float(row["monthly_revenue"]),
                total_sales=float(row["total_sales"]),
            )

    async def search(
        self, business_id: int, query: str, limit: int = 5
    ) -> SearchResults:
        """Case-insensitive substring search across orders, menu and inventory."""
        pattern = _like_pattern(query)
        results = SearchResults()
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM orders
                WHERE business_id = ?
                  AND (client_name LIKE ? ESCAPE '\\' OR order_number LIKE ? ESCAPE '\\')
                ORDER BY id DESC
                LIMIT ?
                """,
                (business_id, pattern, pattern, limit),
            )
            results.orders = [
                SQLiteOrderStore._row_to_order(row) for row in await cursor.fetchall()
            ]

            cursor = await conn.execute(
                """
                SELECT * FROM menu_items
                WHERE business_id = ? AND deleted_at IS NULL
                  AND name LIKE ? ESCAPE '\\'
                ORDER BY name
                LIMIT ?
                """,
                (business_id, pattern, limit),
            )
            results.menu_items = [
                SQLiteMenuStore._row_to_menu_item(row) for row in await cursor.fetchall()
            ]

            cursor = await conn.execute(
                """
                SELECT * FROM inventory_items
                WHERE business_id = ? AND is_active = 1
                  AND name LIKE ? ESCAPE '\\'
                ORDER BY name
                LIMIT ?
                """,
                (business_id, pattern, limit),
            )
            results.inventory = [
                SQLiteInventoryStore._row_to_inventory_item(row)
                for row in await cursor.fetchall()
            ]

        return results
