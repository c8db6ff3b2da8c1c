"""Application use cases."""

from catering.application.use_cases.create_order import CreateOrderUseCase
from catering.application.use_cases.create_purchase import (
    CreatePurchaseResult,
    CreatePurchaseUseCase,
)
from catering.application.use_cases.manage_business import (
    CreateBusinessUseCase,
    UpdateBusinessProfileUseCase,
)
from catering.application.use_cases.manage_inventory import (
    CreateInventoryItemUseCase,
    DeactivateInventoryItemUseCase,
    UpdateInventoryItemUseCase,
)
from catering.application.use_cases.manage_menu_item import (
    CreateMenuItemUseCase,
    UpdateMenuItemUseCase,
)
from catering.application.use_cases.manage_staff import (
    CreateRoleUseCase,
    CreateStaffUseCase,
    UpdateRoleUseCase,
    UpdateStaffUseCase,
)
from catering.application.use_cases.order_payments import (
    ConfirmOrderPaymentUseCase,
    CreateOrderPaymentUseCase,
    PaymentSettlementResult,
    RefundOrderPaymentUseCase,
)
from catering.application.use_cases.record_stock_movement import (
    RecordStockMovementResult,
    RecordStockMovementUseCase,
)
from catering.application.use_cases.reporting import (
    GetDashboardStatsUseCase,
    SearchRecordsUseCase,
)
from catering.application.use_cases.update_order import UpdateOrderUseCase
from catering.application.use_cases.update_purchase import UpdatePurchaseUseCase

__all__ = [
    "CreateBusinessUseCase",
    "UpdateBusinessProfileUseCase",
    "CreateInventoryItemUseCase",
    "UpdateInventoryItemUseCase",
    "DeactivateInventoryItemUseCase",
    "RecordStockMovementUseCase",
    "RecordStockMovementResult",
    "CreatePurchaseUseCase",
    "CreatePurchaseResult",
    "UpdatePurchaseUseCase",
    "CreateOrderUseCase",
    "UpdateOrderUseCase",
    "CreateMenuItemUseCase",
    "UpdateMenuItemUseCase",
    "CreateRoleUseCase",
    "UpdateRoleUseCase",
    "CreateStaffUseCase",
    "UpdateStaffUseCase",
    "CreateOrderPaymentUseCase",
    "ConfirmOrderPaymentUseCase",
    "RefundOrderPaymentUseCase",
    "PaymentSettlementResult",
    "GetDashboardStatsUseCase",
    "SearchRecordsUseCase",
]
