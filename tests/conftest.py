"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from catering.config.settings import OrderSettings
from catering.core.entities import (
    InventoryItem,
    MenuItem,
    MenuItemIngredient,
    Order,
    OrderLineItem,
)
from catering.core.interfaces.transaction import ITransactionManager


class RecordingTransactionManager(ITransactionManager):
    """Transaction manager double that counts commits and rollbacks."""

    def __init__(self) -> None:
        self.begun = 0
        self.committed = 0
        self.rolled_back = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        self.begun += 1
        try:
            yield
        except BaseException:
            self.rolled_back += 1
            raise
        self.committed += 1


@pytest.fixture
def tx_manager() -> RecordingTransactionManager:
    return RecordingTransactionManager()


@pytest.fixture
def order_policy() -> OrderSettings:
    """Default order policy: strict overpayment and forward-only status."""
    return OrderSettings(
        reject_overpayment=True,
        enforce_forward_status=True,
        consume_stock_on_status="In Progress",
    )


@pytest.fixture
def rice() -> InventoryItem:
    return InventoryItem(
        id=1,
        business_id=1,
        name="Basmati Rice",
        unit="kg",
        current_stock=50.0,
        minimum_stock=10.0,
        cost_per_unit=120.0,
    )


@pytest.fixture
def biryani() -> MenuItem:
    return MenuItem(
        id=7,
        business_id=1,
        name="Veg Biryani",
        category="Main Course",
        cost_per_serving=60.0,
        selling_price=150.0,
        margin_percent=60.0,
        ingredients=[
            MenuItemIngredient(
                menu_item_id=7,
                inventory_item_id=1,
                ingredient_name="Basmati Rice",
                quantity_required=0.2,
                unit="kg",
            )
        ],
    )


@pytest.fixture
def wedding_order() -> Order:
    return Order(
        id=3,
        business_id=1,
        order_number="ORD-20240601-A1B2C3",
        client_name="Sharma Wedding",
        event_date=date(2024, 6, 1),
        guest_count=50,
        price_per_head=500.0,
        total_value=25000.0,
        advance_received=0.0,
        remaining_balance=25000.0,
        items=[
            OrderLineItem(
                id=1,
                order_id=3,
                menu_item_id=7,
                item_name="Veg Biryani",
                quantity=50,
                unit_price=150.0,
            )
        ],
    )


@pytest.fixture
async def sqlite_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database wired into the global connection pool."""
    import catering.infrastructure.storage.sqlite.connection as conn_module
    from catering.infrastructure.storage.sqlite.migrations.migrator import (
        initialize_database,
    )

    db_path = tmp_path / "catering.db"
    await initialize_database(db_path, create_backup_before=False)

    mock_settings = MagicMock()
    mock_settings.storage.db_path = db_path
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    await conn_module.close_pool()
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield db_path
        finally:
            await conn_module.close_pool()


@pytest.fixture
async def business_id(sqlite_db: Path) -> int:
    """A registered business in the temporary database."""
    from catering.core.entities import Business
    from catering.infrastructure.storage.sqlite import SQLiteBusinessStore

    business = await SQLiteBusinessStore().create_business(
        Business(name="Spice Route Caterers", city="Pune")
    )
    return business.id
