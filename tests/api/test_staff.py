"""API tests for role and staff endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from catering.api.dependencies import (
    get_business_id,
    get_create_role_use_case,
    get_create_staff_use_case,
    get_staff_member_store,
    get_update_role_use_case,
    get_update_staff_use_case,
)
from catering.api.main import app
from catering.application.use_cases import (
    CreateRoleUseCase,
    CreateStaffUseCase,
    UpdateRoleUseCase,
    UpdateStaffUseCase,
)
from catering.core.entities import Role, StaffMember
from catering.core.exceptions import DuplicateRoleError, RoleNotFoundError


@pytest.fixture
def head_chef():
    return Role(id=4, business_id=1, name="Head Chef", permissions=["inventory:write"])


@pytest.fixture
def ravi():
    return StaffMember(
        id=9,
        business_id=1,
        name="Ravi Kumar",
        role_id=4,
        role_name="Head Chef",
        permissions=["inventory:write"],
    )


@pytest.fixture
def staff_store(head_chef, ravi):
    store = AsyncMock()
    store.list_roles.return_value = [head_chef]
    store.list_staff.return_value = [ravi]
    store.get_staff.return_value = ravi
    store.soft_delete_staff.return_value = True
    return store


def _use_case(use_case_cls, result):
    uc = AsyncMock(spec=use_case_cls)
    uc.execute.return_value = result
    uc.to_response.return_value = use_case_cls().to_response(result)
    return uc


@pytest.fixture
def role_ucs(head_chef):
    return _use_case(CreateRoleUseCase, head_chef), _use_case(UpdateRoleUseCase, head_chef)


@pytest.fixture
def staff_ucs(ravi):
    return _use_case(CreateStaffUseCase, ravi), _use_case(UpdateStaffUseCase, ravi)


@pytest.fixture
async def client(staff_store, role_ucs, staff_ucs):
    app.dependency_overrides[get_business_id] = lambda: 1
    app.dependency_overrides[get_staff_member_store] = lambda: staff_store
    app.dependency_overrides[get_create_role_use_case] = lambda: role_ucs[0]
    app.dependency_overrides[get_update_role_use_case] = lambda: role_ucs[1]
    app.dependency_overrides[get_create_staff_use_case] = lambda: staff_ucs[0]
    app.dependency_overrides[get_update_staff_use_case] = lambda: staff_ucs[1]
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestRolesAPI:
    async def test_list_roles(self, client: AsyncClient):
        response = await client.get("/api/roles")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["roles"][0]["permissions"] == ["inventory:write"]

    async def test_create_role(self, client: AsyncClient, role_ucs):
        response = await client.post(
            "/api/roles", json={"name": "Head Chef", "permissions": ["inventory:write"]}
        )

        assert response.status_code == 201
        assert response.json()["id"] == 4
        role_ucs[0].execute.assert_awaited_once()

    async def test_duplicate_role_returns_409(self, client: AsyncClient, role_ucs):
        role_ucs[0].execute.side_effect = DuplicateRoleError("Head Chef")

        response = await client.post("/api/roles", json={"name": "Head Chef"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_ROLE"

    async def test_update_missing_role(self, client: AsyncClient, role_ucs):
        role_ucs[1].execute.side_effect = RoleNotFoundError(40)

        response = await client.put("/api/roles/40", json={"name": "Captain"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "ROLE_NOT_FOUND"


class TestStaffAPI:
    async def test_list_staff(self, client: AsyncClient, staff_store):
        response = await client.get("/api/staff")

        assert response.status_code == 200
        assert response.json()["staff"][0]["role_name"] == "Head Chef"
        staff_store.list_staff.assert_awaited_once_with(1, limit=200, offset=0)

    async def test_get_staff(self, client: AsyncClient):
        response = await client.get("/api/staff/9")

        assert response.status_code == 200
        assert response.json()["permissions"] == ["inventory:write"]

    async def test_get_missing_staff(self, client: AsyncClient, staff_store):
        staff_store.get_staff.return_value = None

        response = await client.get("/api/staff/90")

        assert response.status_code == 404
        assert response.json()["error_code"] == "STAFF_MEMBER_NOT_FOUND"

    async def test_create_staff(self, client: AsyncClient):
        response = await client.post("/api/staff", json={"name": "Ravi Kumar", "role_id": 4})

        assert response.status_code == 201

    async def test_blank_name_rejected(self, client: AsyncClient):
        response = await client.post("/api/staff", json={"name": ""})

        assert response.status_code == 422

    async def test_deactivate(self, client: AsyncClient, staff_ucs):
        response = await client.put("/api/staff/9", json={"is_active": False})

        assert response.status_code == 200
        staff_ucs[1].execute.assert_awaited_once()

    async def test_delete_is_soft(self, client: AsyncClient, staff_store):
        response = await client.delete("/api/staff/9")

        assert response.status_code == 204
        staff_store.soft_delete_staff.assert_awaited_once_with(1, 9)

    async def test_delete_missing(self, client: AsyncClient, staff_store):
        staff_store.soft_delete_staff.return_value = False

        response = await client.delete("/api/staff/90")

        assert response.status_code == 404
