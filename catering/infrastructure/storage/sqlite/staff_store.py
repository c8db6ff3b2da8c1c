"""SQLite implementation of staff and role storage."""

from datetime import datetime

import aiosqlite

from catering.config import get_logger
from catering.core.entities.staff import Role, StaffMember
from catering.core.exceptions import DuplicateRoleError
from catering.core.interfaces.staff_store import IStaffStore
from catering.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from catering.infrastructure.storage.sqlite.rows import (
    iso,
    parse_date,
    parse_datetime,
    parse_optional_datetime,
)

logger = get_logger(__name__)


class SQLiteStaffStore(IStaffStore):
    """SQLite implementation of role and staff storage."""

    # Roles

    async def create_role(self, role: Role) -> Role:
        """Create a role with its permissions."""
        now = datetime.utcnow()
        role.created_at = now
        role.updated_at = now
        async with get_transaction() as conn:
            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO roles (business_id, name, description, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        role.business_id,
                        role.name,
                        role.description,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise DuplicateRoleError(role.name) from e
            role.id = cursor.lastrowid
            await self._write_permissions(conn, role)
            logger.info("role_created", role_id=role.id, permissions=len(role.permissions))
            return role

    async def get_role(self, business_id: int, role_id: int) -> Role | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM roles WHERE id = ? AND business_id = ?",
                (role_id, business_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            role = self._row_to_role(row)
            role.permissions = await self._read_permissions(conn, role_id)
            return role

    async def list_roles(self, business_id: int) -> list[Role]:
        """List roles with permissions, ordered by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM roles WHERE business_id = ? ORDER BY name",
                (business_id,),
            )
            roles = [self._row_to_role(row) for row in await cursor.fetchall()]
            for role in roles:
                assert role.id is not None
                role.permissions = await self._read_permissions(conn, role.id)
            return roles

    async def update_role(self, role: Role) -> Role:
        """Persist name and description and replace the permission set."""
        role.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            try:
                await conn.execute(
                    """
                    UPDATE roles SET name = ?, description = ?, updated_at = ?
                    WHERE id = ? AND business_id = ?
                    """,
                    (
                        role.name,
                        role.description,
                        role.updated_at.isoformat(),
                        role.id,
                        role.business_id,
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise DuplicateRoleError(role.name) from e
            await conn.execute("DELETE FROM role_permissions WHERE role_id = ?", (role.id,))
            await self._write_permissions(conn, role)
            logger.info("role_updated", role_id=role.id, permissions=len(role.permissions))
            return role

    @staticmethod
    async def _write_permissions(conn: aiosqlite.Connection, role: Role) -> None:
        if role.permissions:
            await conn.executemany(
                "INSERT INTO role_permissions (role_id, permission) VALUES (?, ?)",
                [(role.id, permission) for permission in role.permissions],
            )

    @staticmethod
    async def _read_permissions(conn: aiosqlite.Connection, role_id: int) -> list[str]:
        cursor = await conn.execute(
            "SELECT permission FROM role_permissions WHERE role_id = ? ORDER BY id",
            (role_id,),
        )
        return [row["permission"] for row in await cursor.fetchall()]

    # Staff

    async def create_staff(self, staff: StaffMember) -> StaffMember:
        now = datetime.utcnow()
        staff.created_at = now
        staff.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO staff (
                    business_id, name, email, phone, role_id, position,
                    hire_date, is_active, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    staff.business_id,
                    staff.name,
                    staff.email,
                    staff.phone,
                    staff.role_id,
                    staff.position,
                    iso(staff.hire_date),
                    int(staff.is_active),
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            staff.id = cursor.lastrowid
            logger.info("staff_member_created", staff_id=staff.id, role_id=staff.role_id)
            return staff

    async def get_staff(self, business_id: int, staff_id: int) -> StaffMember | None:
        """Get a non-removed staff member with role name and permissions."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT s.*, r.name AS role_name
                FROM staff s
                LEFT JOIN roles r ON r.id = s.role_id
                WHERE s.id = ? AND s.business_id = ? AND s.deleted_at IS NULL
                """,
                (staff_id, business_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            staff = self._row_to_staff(row)
            if staff.role_id is not None:
                staff.permissions = await self._read_permissions(conn, staff.role_id)
            return staff

    async def list_staff(
        self, business_id: int, limit: int = 200, offset: int = 0
    ) -> list[StaffMember]:
        """List non-removed staff ordered by name, with role names."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT s.*, r.name AS role_name
                FROM staff s
                LEFT JOIN roles r ON r.id = s.role_id
                WHERE s.business_id = ? AND s.deleted_at IS NULL
                ORDER BY s.name
                LIMIT ? OFFSET ?
                """,
                (business_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_staff(row) for row in rows]

    async def update_staff(self, staff: StaffMember) -> StaffMember:
        staff.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE staff SET
                    name = ?, email = ?, phone = ?, role_id = ?, position = ?,
                    hire_date = ?, is_active = ?, updated_at = ?
                WHERE id = ? AND business_id = ? AND deleted_at IS NULL
                """,
                (
                    staff.name,
                    staff.email,
                    staff.phone,
                    staff.role_id,
                    staff.position,
                    iso(staff.hire_date),
                    int(staff.is_active),
                    staff.updated_at.isoformat(),
                    staff.id,
                    staff.business_id,
                ),
            )
            logger.info(
                "staff_member_updated",
                staff_id=staff.id,
                role_id=staff.role_id,
                is_active=staff.is_active,
            )
            return staff

    async def soft_delete_staff(self, business_id: int, staff_id: int) -> bool:
        """Stamp deleted_at."""
        now = datetime.utcnow().isoformat()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE staff SET deleted_at = ?, updated_at = ?
                WHERE id = ? AND business_id = ? AND deleted_at IS NULL
                """,
                (now, now, staff_id, business_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("staff_member_deleted", staff_id=staff_id)
            return deleted

    @staticmethod
    def _row_to_role(row: aiosqlite.Row) -> Role:
        return Role(
            id=row["id"],
            business_id=row["business_id"],
            name=row["name"],
            description=row["description"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    @staticmethod
    def _row_to_staff(row: aiosqlite.Row) -> StaffMember:
        return StaffMember(
            id=row["id"],
            business_id=row["business_id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            role_id=row["role_id"],
            role_name=row["role_name"],
            position=row["position"],
            hire_date=parse_date(row["hire_date"]),
            is_active=bool(row["is_active"]),
            deleted_at=parse_optional_datetime(row["deleted_at"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
