"""API tests for inventory and purchase endpoints."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from catering.api.dependencies import (
    get_biz_store,
    get_business_id,
    get_create_purchase_use_case,
    get_inv_item_store,
    get_purch_store,
    get_record_stock_movement_use_case,
)
from catering.api.main import app
from catering.application.use_cases import (
    CreatePurchaseResult,
    CreatePurchaseUseCase,
    RecordStockMovementResult,
    RecordStockMovementUseCase,
)
from catering.core.entities import MovementType, Purchase, StockMovement
from catering.core.exceptions import (
    ConcurrentModificationError,
    InsufficientStockError,
    InventoryItemNotFoundError,
)


@pytest.fixture
def inventory_store(rice):
    store = AsyncMock()
    store.list_items.return_value = [rice]
    store.list_low_stock.return_value = []
    store.get_item.return_value = rice
    store.get_movements.return_value = []
    return store


@pytest.fixture
def movement_use_case(rice):
    uc = AsyncMock(spec=RecordStockMovementUseCase)
    movement = StockMovement(
        id=1,
        business_id=1,
        inventory_item_id=1,
        movement_type=MovementType.ADJUSTMENT,
        quantity_change=-5,
        previous_stock=50,
        new_stock=45,
    )
    rice.current_stock = 45.0
    result = RecordStockMovementResult(inventory_item=rice, movement=movement)
    uc.execute.return_value = result
    uc.to_response.return_value = RecordStockMovementUseCase(
        allow_negative_stock=False
    ).to_response(result)
    return uc


@pytest.fixture
def purchase_use_case():
    uc = AsyncMock(spec=CreatePurchaseUseCase)
    purchase = Purchase(
        id=11,
        business_id=1,
        purchase_order_number="PO-20240601-9F8E7D",
        supplier_name="Metro Wholesale",
        purchase_date=date(2024, 6, 1),
    )
    result = CreatePurchaseResult(purchase=purchase)
    uc.execute.return_value = result
    uc.to_response.return_value = CreatePurchaseUseCase().to_response(result)
    return uc


@pytest.fixture
async def client(inventory_store, movement_use_case, purchase_use_case):
    app.dependency_overrides[get_business_id] = lambda: 1
    app.dependency_overrides[get_inv_item_store] = lambda: inventory_store
    app.dependency_overrides[get_purch_store] = lambda: AsyncMock()
    app.dependency_overrides[get_record_stock_movement_use_case] = lambda: movement_use_case
    app.dependency_overrides[get_create_purchase_use_case] = lambda: purchase_use_case
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestInventoryAPI:
    async def test_list_items(self, client: AsyncClient):
        response = await client.get("/api/inventory")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["name"] == "Basmati Rice"

    async def test_low_stock_is_not_an_item_id(self, client: AsyncClient, inventory_store):
        response = await client.get("/api/inventory/low-stock")

        assert response.status_code == 200
        inventory_store.list_low_stock.assert_awaited_once()
        inventory_store.get_item.assert_not_awaited()

    async def test_missing_item_returns_404(self, client: AsyncClient, inventory_store):
        inventory_store.get_item.return_value = None

        response = await client.get("/api/inventory/99")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "INVENTORY_ITEM_NOT_FOUND"
        assert data["path"] == "/api/inventory/99"
        assert data["hint"]

    async def test_record_movement(self, client: AsyncClient, movement_use_case):
        response = await client.put("/api/inventory/1/stock", json={"quantity": -5})

        assert response.status_code == 200
        data = response.json()
        assert data["movement"]["new_stock"] == 45.0
        assert data["inventory_item"]["current_stock"] == 45.0

    async def test_insufficient_stock_returns_400(self, client: AsyncClient, movement_use_case):
        movement_use_case.execute.side_effect = InsufficientStockError(1, -80, 50)

        response = await client.put("/api/inventory/1/stock", json={"quantity": -80})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"

    async def test_version_conflict_returns_409(self, client: AsyncClient, movement_use_case):
        movement_use_case.execute.side_effect = ConcurrentModificationError("Inventory item", 1)

        response = await client.put("/api/inventory/1/stock", json={"quantity": 3})

        assert response.status_code == 409
        assert response.json()["error_code"] == "CONCURRENT_MODIFICATION"

    async def test_movement_on_unknown_item(self, client: AsyncClient, movement_use_case):
        movement_use_case.execute.side_effect = InventoryItemNotFoundError(42)

        response = await client.put("/api/inventory/42/stock", json={"quantity": 3})

        assert response.status_code == 404

    async def test_movement_requires_quantity(self, client: AsyncClient):
        response = await client.put("/api/inventory/1/stock", json={})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestPurchasesAPI:
    async def test_create_returns_201(self, client: AsyncClient):
        response = await client.post(
            "/api/purchases",
            json={
                "supplier_name": "Metro Wholesale",
                "items": [
                    {"ingredient_name": "Basmati Rice", "quantity": 50, "unit_price": 120}
                ],
            },
        )

        assert response.status_code == 201
        assert response.json()["purchase"]["purchase_order_number"] == "PO-20240601-9F8E7D"

    async def test_line_quantity_must_be_positive(self, client: AsyncClient):
        response = await client.post(
            "/api/purchases",
            json={"items": [{"ingredient_name": "Ghee", "quantity": 0, "unit_price": 500}]},
        )

        assert response.status_code == 422


class TestTenantHeader:
    @pytest.fixture
    async def bare_client(self, inventory_store):
        business_store = AsyncMock()
        business_store.get_business.return_value = None
        app.dependency_overrides[get_biz_store] = lambda: business_store
        app.dependency_overrides[get_inv_item_store] = lambda: inventory_store
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
        app.dependency_overrides.clear()

    async def test_missing_header_rejected(self, bare_client: AsyncClient):
        response = await bare_client.get("/api/inventory")

        assert response.status_code == 422

    async def test_unknown_business_returns_404(self, bare_client: AsyncClient):
        response = await bare_client.get("/api/inventory", headers={"X-Business-ID": "77"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "BUSINESS_NOT_FOUND"
