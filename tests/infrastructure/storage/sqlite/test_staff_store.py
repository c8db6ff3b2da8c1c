"""Tests for the SQLite staff and role store."""

from datetime import date

import pytest

from catering.core.entities import Business, Role, StaffMember
from catering.core.exceptions import DuplicateRoleError
from catering.infrastructure.storage.sqlite import SQLiteBusinessStore, SQLiteStaffStore


@pytest.fixture
def store():
    return SQLiteStaffStore()


async def _role(store: SQLiteStaffStore, business_id: int, name: str = "Head Chef") -> Role:
    return await store.create_role(
        Role(
            business_id=business_id,
            name=name,
            description="Runs the kitchen",
            permissions=["inventory:write", "orders:read"],
        )
    )


class TestRoles:
    async def test_create_and_list_with_permissions(self, business_id, store):
        await _role(store, business_id, "Server")
        await _role(store, business_id, "Head Chef")

        roles = await store.list_roles(business_id)

        assert [r.name for r in roles] == ["Head Chef", "Server"]
        assert roles[0].permissions == ["inventory:write", "orders:read"]

    async def test_duplicate_name_rejected(self, business_id, store):
        await _role(store, business_id)

        with pytest.raises(DuplicateRoleError):
            await _role(store, business_id)
        assert len(await store.list_roles(business_id)) == 1

    async def test_update_replaces_permissions(self, business_id, store):
        role = await _role(store, business_id)
        role.description = "Kitchen and stores"
        role.permissions = ["inventory:write", "purchases:write"]

        await store.update_role(role)

        fetched = await store.get_role(business_id, role.id)
        assert fetched.description == "Kitchen and stores"
        assert fetched.permissions == ["inventory:write", "purchases:write"]

    async def test_roles_scoped_by_business(self, business_id, store):
        role = await _role(store, business_id)
        other = await SQLiteBusinessStore().create_business(Business(name="Tandoor Tales"))

        assert await store.get_role(other.id, role.id) is None
        assert await store.list_roles(other.id) == []
        # Same name is free in another business
        await _role(store, other.id)


class TestStaff:
    async def test_create_get_with_role(self, business_id, store):
        role = await _role(store, business_id)
        staff = await store.create_staff(
            StaffMember(
                business_id=business_id,
                name="Ravi Kumar",
                phone="98200 12345",
                role_id=role.id,
                position="Chef",
                hire_date=date(2023, 4, 1),
            )
        )

        fetched = await store.get_staff(business_id, staff.id)

        assert fetched.role_name == "Head Chef"
        assert fetched.permissions == ["inventory:write", "orders:read"]
        assert fetched.hire_date == date(2023, 4, 1)
        assert fetched.is_active is True

    async def test_update_and_soft_delete(self, business_id, store):
        staff = await store.create_staff(StaffMember(business_id=business_id, name="Anita"))
        await store.create_staff(StaffMember(business_id=business_id, name="Bhavesh"))
        staff.is_active = False
        await store.update_staff(staff)

        assert (await store.get_staff(business_id, staff.id)).is_active is False
        assert await store.soft_delete_staff(business_id, staff.id) is True
        assert await store.soft_delete_staff(business_id, staff.id) is False
        assert await store.get_staff(business_id, staff.id) is None
        assert [s.name for s in await store.list_staff(business_id)] == ["Bhavesh"]

    async def test_staff_scoped_by_business(self, business_id, store):
        staff = await store.create_staff(StaffMember(business_id=business_id, name="Anita"))
        other = await SQLiteBusinessStore().create_business(Business(name="Tandoor Tales"))

        assert await store.get_staff(other.id, staff.id) is None
        assert await store.soft_delete_staff(other.id, staff.id) is False
