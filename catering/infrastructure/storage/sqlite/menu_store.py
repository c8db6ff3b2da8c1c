"""SQLite implementation of menu storage."""

from datetime import datetime

import aiosqlite

from catering.config import get_logger
from catering.core.entities.menu import MenuItem, MenuItemIngredient
from catering.core.interfaces.menu_store import IMenuStore
from catering.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from catering.infrastructure.storage.sqlite.rows import parse_datetime, parse_optional_datetime

logger = get_logger(__name__)


class SQLiteMenuStore(IMenuStore):
    """SQLite implementation of menu item storage."""

    async def create_menu_item(self, menu_item: MenuItem) -> MenuItem:
        """Create a menu item with its ingredient links."""
        now = datetime.utcnow()
        menu_item.created_at = now
        menu_item.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO menu_items (
                    business_id, name, description, category,
                    cost_per_serving, selling_price, margin_percent,
                    is_available, is_vegetarian, prep_time_minutes,
                    image_url, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    menu_item.business_id,
                    menu_item.name,
                    menu_item.description,
                    menu_item.category,
                    menu_item.cost_per_serving,
                    menu_item.selling_price,
                    menu_item.margin_percent,
                    int(menu_item.is_available),
                    int(menu_item.is_vegetarian),
                    menu_item.prep_time_minutes,
                    menu_item.image_url,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            menu_item.id = cursor.lastrowid

            for ingredient in menu_item.ingredients:
                ingredient.menu_item_id = menu_item.id
                ing_cursor = await conn.execute(
                    """
                    INSERT INTO menu_item_ingredients (
                        menu_item_id, inventory_item_id, ingredient_name,
                        quantity_required, unit
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        ingredient.menu_item_id,
                        ingredient.inventory_item_id,
                        ingredient.ingredient_name,
                        ingredient.quantity_required,
                        ingredient.unit,
                    ),
                )
                ingredient.id = ing_cursor.lastrowid

            logger.info(
                "menu_item_created",
                menu_item_id=menu_item.id,
                ingredients=len(menu_item.ingredients),
                margin_percent=menu_item.margin_percent,
            )
            return menu_item

    async def get_menu_item(
        self, business_id: int, menu_item_id: int
    ) -> MenuItem | None:
        """Get a non-deleted menu item with ingredients."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM menu_items
                WHERE id = ? AND business_id = ? AND deleted_at IS NULL
                """,
                (menu_item_id, business_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            ing_cursor = await conn.execute(
                "SELECT * FROM menu_item_ingredients WHERE menu_item_id = ? ORDER BY id",
                (menu_item_id,),
            )
            ing_rows = await ing_cursor.fetchall()
            menu_item = self._row_to_menu_item(row)
            menu_item.ingredients = [self._row_to_ingredient(r) for r in ing_rows]
            return menu_item

    async def list_menu_items(
        self, business_id: int, limit: int = 200, offset: int = 0
    ) -> list[MenuItem]:
        """List non-deleted menu items ordered by category then name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM menu_items
                WHERE business_id = ? AND deleted_at IS NULL
                ORDER BY category, name
                LIMIT ? OFFSET ?
                """,
                (business_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_menu_item(row) for row in rows]

    async def update_menu_item(self, menu_item: MenuItem) -> MenuItem:
        """Persist descriptive fields, pricing and margin."""
        menu_item.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE menu_items SET
                    name = ?, description = ?, category = ?,
                    cost_per_serving = ?, selling_price = ?, margin_percent = ?,
                    is_available = ?, is_vegetarian = ?, prep_time_minutes = ?,
                    image_url = ?, updated_at = ?
                WHERE id = ? AND business_id = ? AND deleted_at IS NULL
                """,
                (
                    menu_item.name,
                    menu_item.description,
                    menu_item.category,
                    menu_item.cost_per_serving,
                    menu_item.selling_price,
                    menu_item.margin_percent,
                    int(menu_item.is_available),
                    int(menu_item.is_vegetarian),
                    menu_item.prep_time_minutes,
                    menu_item.image_url,
                    menu_item.updated_at.isoformat(),
                    menu_item.id,
                    menu_item.business_id,
                ),
            )
            logger.info(
                "menu_item_updated",
                menu_item_id=menu_item.id,
                margin_percent=menu_item.margin_percent,
            )
            return menu_item

    async def soft_delete_menu_item(self, business_id: int, menu_item_id: int) -> bool:
        """Stamp deleted_at."""
        now = datetime.utcnow().isoformat()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE menu_items SET deleted_at = ?, updated_at = ?
                WHERE id = ? AND business_id = ? AND deleted_at IS NULL
                """,
                (now, now, menu_item_id, business_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("menu_item_deleted", menu_item_id=menu_item_id)
            return deleted

    @staticmethod
    def _row_to_menu_item(row: aiosqlite.Row) -> MenuItem:
        return MenuItem(
            id=row["id"],
            business_id=row["business_id"],
            name=row["name"],
            description=row["description"],
            category=row["category"],
            cost_per_serving=float(row["cost_per_serving"]),
            selling_price=float(row["selling_price"]),
            margin_percent=float(row["margin_percent"]),
            is_available=bool(row["is_available"]),
            is_vegetarian=bool(row["is_vegetarian"]),
            prep_time_minutes=row["prep_time_minutes"],
            image_url=row["image_url"],
            deleted_at=parse_optional_datetime(row["deleted_at"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    @staticmethod
    def _row_to_ingredient(row: aiosqlite.Row) -> MenuItemIngredient:
        return MenuItemIngredient(
            id=row["id"],
            menu_item_id=row["menu_item_id"],
            inventory_item_id=row["inventory_item_id"],
            ingredient_name=row["ingredient_name"],
            quantity_required=float(row["quantity_required"]),
            unit=row["unit"],
        )
