"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers, and resolves the
tenant from the X-Business-ID header.
"""

from functools import lru_cache

from fastapi import Depends, Header

from catering.application.use_cases import (
    ConfirmOrderPaymentUseCase,
    CreateBusinessUseCase,
    CreateInventoryItemUseCase,
    CreateMenuItemUseCase,
    CreateOrderPaymentUseCase,
    CreateOrderUseCase,
    CreatePurchaseUseCase,
    CreateRoleUseCase,
    CreateStaffUseCase,
    DeactivateInventoryItemUseCase,
    GetDashboardStatsUseCase,
    RecordStockMovementUseCase,
    RefundOrderPaymentUseCase,
    SearchRecordsUseCase,
    UpdateBusinessProfileUseCase,
    UpdateInventoryItemUseCase,
    UpdateMenuItemUseCase,
    UpdateOrderUseCase,
    UpdatePurchaseUseCase,
    UpdateRoleUseCase,
    UpdateStaffUseCase,
)
from catering.config import Settings, get_settings
from catering.core.exceptions import BusinessNotFoundError
from catering.core.interfaces import IPaymentProcessor
from catering.infrastructure.payments import get_payment_processor
from catering.infrastructure.storage.sqlite import (
    SQLiteBusinessStore,
    SQLiteInventoryStore,
    SQLiteMenuStore,
    SQLiteOrderStore,
    SQLitePaymentStore,
    SQLitePurchaseStore,
    SQLiteStaffStore,
    get_business_store,
    get_inventory_store,
    get_menu_store,
    get_order_store,
    get_payment_store,
    get_purchase_store,
    get_staff_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_biz_store() -> SQLiteBusinessStore:
    return await get_business_store()


async def get_inv_item_store() -> SQLiteInventoryStore:
    return await get_inventory_store()


async def get_purch_store() -> SQLitePurchaseStore:
    return await get_purchase_store()


async def get_ord_store() -> SQLiteOrderStore:
    return await get_order_store()


async def get_menu_item_store() -> SQLiteMenuStore:
    return await get_menu_store()


async def get_pay_store() -> SQLitePaymentStore:
    return await get_payment_store()


async def get_staff_member_store() -> SQLiteStaffStore:
    return await get_staff_store()


def get_processor() -> IPaymentProcessor:
    """Get configured payment processor."""
    return get_payment_processor()


# Tenant
async def get_business_id(
    x_business_id: int = Header(..., alias="X-Business-ID"),
    store: SQLiteBusinessStore = Depends(get_biz_store),
) -> int:
    """Resolve and validate the tenant for this request."""
    if await store.get_business(x_business_id) is None:
        raise BusinessNotFoundError(x_business_id)
    return x_business_id


# Use case dependencies
def get_create_business_use_case() -> CreateBusinessUseCase:
    return CreateBusinessUseCase()


def get_update_business_use_case() -> UpdateBusinessProfileUseCase:
    return UpdateBusinessProfileUseCase()


def get_create_inventory_item_use_case() -> CreateInventoryItemUseCase:
    return CreateInventoryItemUseCase()


def get_update_inventory_item_use_case() -> UpdateInventoryItemUseCase:
    return UpdateInventoryItemUseCase()


def get_deactivate_inventory_item_use_case() -> DeactivateInventoryItemUseCase:
    return DeactivateInventoryItemUseCase()


def get_record_stock_movement_use_case() -> RecordStockMovementUseCase:
    return RecordStockMovementUseCase()


def get_create_purchase_use_case() -> CreatePurchaseUseCase:
    return CreatePurchaseUseCase()


def get_update_purchase_use_case() -> UpdatePurchaseUseCase:
    return UpdatePurchaseUseCase()


def get_create_order_use_case() -> CreateOrderUseCase:
    return CreateOrderUseCase()


def get_update_order_use_case() -> UpdateOrderUseCase:
    return UpdateOrderUseCase()


def get_create_menu_item_use_case() -> CreateMenuItemUseCase:
    return CreateMenuItemUseCase()


def get_update_menu_item_use_case() -> UpdateMenuItemUseCase:
    return UpdateMenuItemUseCase()


def get_create_role_use_case() -> CreateRoleUseCase:
    return CreateRoleUseCase()


def get_update_role_use_case() -> UpdateRoleUseCase:
    return UpdateRoleUseCase()


def get_create_staff_use_case() -> CreateStaffUseCase:
    return CreateStaffUseCase()


def get_update_staff_use_case() -> UpdateStaffUseCase:
    return UpdateStaffUseCase()


def get_create_payment_use_case() -> CreateOrderPaymentUseCase:
    return CreateOrderPaymentUseCase()


def get_confirm_payment_use_case() -> ConfirmOrderPaymentUseCase:
    return ConfirmOrderPaymentUseCase()


def get_refund_payment_use_case() -> RefundOrderPaymentUseCase:
    return RefundOrderPaymentUseCase()


def get_dashboard_stats_use_case() -> GetDashboardStatsUseCase:
    return GetDashboardStatsUseCase()


def get_search_records_use_case() -> SearchRecordsUseCase:
    return SearchRecordsUseCase()
