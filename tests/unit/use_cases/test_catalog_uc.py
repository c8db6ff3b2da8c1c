"""Tests for menu, inventory item, business and reporting use cases."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from catering.application.dto.requests import (
    CreateBusinessRequest,
    CreateInventoryItemRequest,
    CreateMenuItemRequest,
    MenuIngredientRequest,
    UpdateBusinessRequest,
    UpdateInventoryItemRequest,
    UpdateMenuItemRequest,
    UpdatePurchaseRequest,
)
from catering.application.use_cases import (
    CreateBusinessUseCase,
    CreateInventoryItemUseCase,
    CreateMenuItemUseCase,
    DeactivateInventoryItemUseCase,
    GetDashboardStatsUseCase,
    SearchRecordsUseCase,
    UpdateBusinessProfileUseCase,
    UpdateInventoryItemUseCase,
    UpdateMenuItemUseCase,
    UpdatePurchaseUseCase,
)
from catering.core.entities import Business, PaymentStatus, Purchase, PurchaseStatus
from catering.core.exceptions import (
    BusinessNotFoundError,
    InvalidSellingPriceError,
    InventoryItemNotFoundError,
    MenuItemNotFoundError,
    PurchaseNotFoundError,
)
from catering.core.interfaces.report_store import DashboardStats, SearchResults


@pytest.fixture
def menu_store(biryani):
    store = AsyncMock()
    store.create_menu_item.side_effect = lambda m: m.model_copy(update={"id": 7})
    store.get_menu_item.return_value = biryani
    store.update_menu_item.side_effect = lambda m: m
    return store


class TestMenuUseCases:
    async def test_create_computes_margin(self, menu_store, tx_manager):
        uc = CreateMenuItemUseCase(menu_store, tx_manager)

        item = await uc.execute(
            1,
            CreateMenuItemRequest(
                name="Veg Biryani",
                cost_per_serving=60,
                selling_price=150,
                ingredients=[
                    MenuIngredientRequest(ingredient_name="Basmati Rice", quantity_required=0.2)
                ],
            ),
        )

        assert item.id == 7
        assert item.margin_percent == 60.0
        assert item.ingredients[0].quantity_required == 0.2

    async def test_create_zero_price_rejected(self, menu_store, tx_manager):
        uc = CreateMenuItemUseCase(menu_store, tx_manager)

        with pytest.raises(InvalidSellingPriceError):
            await uc.execute(1, CreateMenuItemRequest(name="Free Water", selling_price=0))
        menu_store.create_menu_item.assert_not_awaited()

    async def test_update_recomputes_margin(self, menu_store, tx_manager):
        uc = UpdateMenuItemUseCase(menu_store, tx_manager)

        item = await uc.execute(1, 7, UpdateMenuItemRequest(selling_price=200, category="Rice"))

        assert item.margin_percent == 70.0
        assert item.cost_per_serving == 60.0
        assert item.category == "Rice"

    async def test_update_missing(self, menu_store, tx_manager):
        menu_store.get_menu_item.return_value = None
        uc = UpdateMenuItemUseCase(menu_store, tx_manager)

        with pytest.raises(MenuItemNotFoundError):
            await uc.execute(1, 7, UpdateMenuItemRequest(selling_price=200))

    async def test_update_negative_price_rejected(self, menu_store, tx_manager):
        uc = UpdateMenuItemUseCase(menu_store, tx_manager)

        with pytest.raises(InvalidSellingPriceError):
            await uc.execute(1, 7, UpdateMenuItemRequest(selling_price=-5))
        menu_store.update_menu_item.assert_not_awaited()


class TestInventoryItemUseCases:
    async def test_create_starts_at_zero(self):
        store = AsyncMock()
        store.create_item.side_effect = lambda i: i.model_copy(update={"id": 4})
        uc = CreateInventoryItemUseCase(store)

        item = await uc.execute(
            1, CreateInventoryItemRequest(name="Cardamom", unit="kg", minimum_stock=1)
        )

        assert item.id == 4
        assert item.current_stock == 0.0
        assert item.minimum_stock == 1.0

    async def test_update_leaves_stock_alone(self, rice):
        store = AsyncMock()
        store.get_item.return_value = rice
        store.update_item.side_effect = lambda i: i
        uc = UpdateInventoryItemUseCase(store)

        item = await uc.execute(1, 1, UpdateInventoryItemRequest(minimum_stock=20))

        assert item.minimum_stock == 20.0
        assert item.current_stock == 50.0

    async def test_update_missing(self):
        store = AsyncMock()
        store.get_item.return_value = None
        with pytest.raises(InventoryItemNotFoundError):
            await UpdateInventoryItemUseCase(store).execute(1, 9, UpdateInventoryItemRequest())

    async def test_deactivate_missing(self):
        store = AsyncMock()
        store.deactivate_item.return_value = False
        with pytest.raises(InventoryItemNotFoundError):
            await DeactivateInventoryItemUseCase(store).execute(1, 9)


class TestBusinessUseCases:
    async def test_create(self):
        store = AsyncMock()
        store.create_business.side_effect = lambda b: b.model_copy(update={"id": 1})

        business = await CreateBusinessUseCase(store).execute(
            CreateBusinessRequest(name="Spice Route Caterers")
        )

        assert business.id == 1

    async def test_update_merges_fields(self):
        store = AsyncMock()
        store.get_business.return_value = Business(id=1, name="Spice Route", city="Pune")
        store.update_business.side_effect = lambda b: b

        business = await UpdateBusinessProfileUseCase(store).execute(
            1, UpdateBusinessRequest(tagline="Feasts for every occasion")
        )

        assert business.name == "Spice Route"
        assert business.tagline == "Feasts for every occasion"
        assert business.city == "Pune"

    async def test_update_missing(self):
        store = AsyncMock()
        store.get_business.return_value = None
        with pytest.raises(BusinessNotFoundError):
            await UpdateBusinessProfileUseCase(store).execute(1, UpdateBusinessRequest(name="X"))


class TestReportingUseCases:
    async def test_dashboard_defaults_to_today(self):
        store = AsyncMock()
        store.dashboard_stats.return_value = DashboardStats(pending_orders=2)
        uc = GetDashboardStatsUseCase(store)

        stats = await uc.execute(1)

        store.dashboard_stats.assert_awaited_once_with(1, date.today())
        assert uc.to_response(stats).pending_orders == 2

    @pytest.mark.parametrize("query", [None, "", "a", " b "])
    async def test_short_query_returns_nothing(self, query):
        store = AsyncMock()
        uc = SearchRecordsUseCase(store)

        results = await uc.execute(1, query)

        assert results == SearchResults()
        store.search.assert_not_awaited()

    async def test_search_trims_and_limits(self):
        store = AsyncMock()
        store.search.return_value = SearchResults()
        uc = SearchRecordsUseCase(store)

        await uc.execute(1, "  paneer ")

        store.search.assert_awaited_once_with(1, "paneer", limit=5)


class TestUpdatePurchaseUseCase:
    async def test_missing_purchase(self):
        store = AsyncMock()
        store.update_status.return_value = None

        with pytest.raises(PurchaseNotFoundError):
            await UpdatePurchaseUseCase(store).execute(
                1, 5, UpdatePurchaseRequest(payment_status=PaymentStatus.PAID)
            )

    async def test_omitted_fields_passed_as_none(self):
        store = AsyncMock()
        store.update_status.return_value = Purchase(
            id=5, business_id=1, purchase_order_number="PO-20240601-000001"
        )

        await UpdatePurchaseUseCase(store).execute(
            1, 5, UpdatePurchaseRequest(status=PurchaseStatus.RECEIVED)
        )

        store.update_status.assert_awaited_once_with(
            1, 5, payment_status=None, status=PurchaseStatus.RECEIVED
        )
