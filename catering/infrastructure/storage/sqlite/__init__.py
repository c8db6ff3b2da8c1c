"""SQLite storage implementations."""

from catering.infrastructure.storage.sqlite.business_store import SQLiteBusinessStore
from catering.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from catering.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from catering.infrastructure.storage.sqlite.menu_store import SQLiteMenuStore
from catering.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from catering.infrastructure.storage.sqlite.payment_store import SQLitePaymentStore
from catering.infrastructure.storage.sqlite.purchase_store import SQLitePurchaseStore
from catering.infrastructure.storage.sqlite.report_store import SQLiteReportStore
from catering.infrastructure.storage.sqlite.staff_store import SQLiteStaffStore
from catering.infrastructure.storage.sqlite.transaction import SQLiteTransactionManager

# Singleton instances
_business_store: SQLiteBusinessStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_purchase_store: SQLitePurchaseStore | None = None
_order_store: SQLiteOrderStore | None = None
_menu_store: SQLiteMenuStore | None = None
_payment_store: SQLitePaymentStore | None = None
_report_store: SQLiteReportStore | None = None
_staff_store: SQLiteStaffStore | None = None
_transaction_manager: SQLiteTransactionManager | None = None


async def get_business_store() -> SQLiteBusinessStore:
    """Get singleton business store instance."""
    global _business_store
    if _business_store is None:
        _business_store = SQLiteBusinessStore()
    return _business_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_purchase_store() -> SQLitePurchaseStore:
    """Get singleton purchase store instance."""
    global _purchase_store
    if _purchase_store is None:
        _purchase_store = SQLitePurchaseStore()
    return _purchase_store


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton order store instance."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore()
    return _order_store


async def get_menu_store() -> SQLiteMenuStore:
    """Get singleton menu store instance."""
    global _menu_store
    if _menu_store is None:
        _menu_store = SQLiteMenuStore()
    return _menu_store


async def get_payment_store() -> SQLitePaymentStore:
    """Get singleton order payment store instance."""
    global _payment_store
    if _payment_store is None:
        _payment_store = SQLitePaymentStore()
    return _payment_store


async def get_report_store() -> SQLiteReportStore:
    """Get singleton report store instance."""
    global _report_store
    if _report_store is None:
        _report_store = SQLiteReportStore()
    return _report_store


async def get_staff_store() -> SQLiteStaffStore:
    """Get singleton staff and role store instance."""
    global _staff_store
    if _staff_store is None:
        _staff_store = SQLiteStaffStore()
    return _staff_store


async def get_transaction_manager() -> SQLiteTransactionManager:
    """Get singleton transaction manager instance."""
    global _transaction_manager
    if _transaction_manager is None:
        _transaction_manager = SQLiteTransactionManager()
    return _transaction_manager


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteBusinessStore",
    "SQLiteInventoryStore",
    "SQLitePurchaseStore",
    "SQLiteOrderStore",
    "SQLiteMenuStore",
    "SQLitePaymentStore",
    "SQLiteReportStore",
    "SQLiteStaffStore",
    "SQLiteTransactionManager",
    # Factory functions
    "get_business_store",
    "get_inventory_store",
    "get_purchase_store",
    "get_order_store",
    "get_menu_store",
    "get_payment_store",
    "get_report_store",
    "get_staff_store",
    "get_transaction_manager",
]
