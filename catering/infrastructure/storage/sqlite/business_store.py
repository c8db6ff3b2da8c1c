"""SQLite implementation of business storage."""

from datetime import datetime

import aiosqlite

from catering.config import get_logger
from catering.core.entities.business import Business
from catering.core.interfaces.business_store import IBusinessStore
from catering.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from catering.infrastructure.storage.sqlite.rows import parse_datetime

logger = get_logger(__name__)


class SQLiteBusinessStore(IBusinessStore):
    """SQLite implementation of business profile storage."""

    async def create_business(self, business: Business) -> Business:
        now = datetime.utcnow()
        business.created_at = now
        business.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO businesses (
                    name, tagline, email, phone, address, city,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    business.name,
                    business.tagline,
                    business.email,
                    business.phone,
                    business.address,
                    business.city,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            business.id = cursor.lastrowid
            logger.info("business_created", business_id=business.id)
            return business

    async def get_business(self, business_id: int) -> Business | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM businesses WHERE id = ?", (business_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_business(row) if row else None

    async def update_business(self, business: Business) -> Business:
        business.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE businesses SET
                    name = ?, tagline = ?, email = ?, phone = ?,
                    address = ?, city = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    business.name,
                    business.tagline,
                    business.email,
                    business.phone,
                    business.address,
                    business.city,
                    business.updated_at.isoformat(),
                    business.id,
                ),
            )
            logger.info("business_updated", business_id=business.id)
            return business

    @staticmethod
    def _row_to_business(row: aiosqlite.Row) -> Business:
        return Business(
            id=row["id"],
            name=row["name"],
            tagline=row["tagline"],
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            city=row["city"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
