"""Core interfaces (ports) for dependency injection."""

from catering.core.interfaces.business_store import IBusinessStore
from catering.core.interfaces.inventory_store import IInventoryStore
from catering.core.interfaces.menu_store import IMenuStore
from catering.core.interfaces.order_store import IOrderStore
from catering.core.interfaces.payment_processor import (
    IPaymentProcessor,
    PaymentIntentResult,
    ProcessorHealth,
    RefundResult,
)
from catering.core.interfaces.payment_store import IPaymentStore
from catering.core.interfaces.purchase_store import IPurchaseStore
from catering.core.interfaces.report_store import (
    DashboardStats,
    IReportStore,
    SearchResults,
)
from catering.core.interfaces.staff_store import IStaffStore
from catering.core.interfaces.transaction import ITransactionManager

__all__ = [
    # Storage interfaces
    "IBusinessStore",
    "IInventoryStore",
    "IPurchaseStore",
    "IOrderStore",
    "IMenuStore",
    "IPaymentStore",
    "IReportStore",
    "DashboardStats",
    "SearchResults",
    "IStaffStore",
    "ITransactionManager",
    # Payment processor
    "IPaymentProcessor",
    "PaymentIntentResult",
    "RefundResult",
    "ProcessorHealth",
]
