"""Core domain entities."""

from catering.core.entities.business import Business
from catering.core.entities.inventory import (
    InventoryItem,
    MovementType,
    ReferenceType,
    StockMovement,
)
from catering.core.entities.menu import (
    MenuItem,
    MenuItemIngredient,
    compute_margin_percent,
)
from catering.core.entities.order import (
    OPEN_STATUSES,
    Order,
    OrderLineItem,
    OrderStatus,
    compute_order_total,
)
from catering.core.entities.payment import OrderPayment, PaymentState
from catering.core.entities.purchase import (
    PaymentStatus,
    Purchase,
    PurchaseLineItem,
    PurchaseStatus,
)
from catering.core.entities.staff import Role, StaffMember

__all__ = [
    # Business
    "Business",
    # Inventory entities
    "InventoryItem",
    "StockMovement",
    "MovementType",
    "ReferenceType",
    # Purchase entities
    "Purchase",
    "PurchaseLineItem",
    "PaymentStatus",
    "PurchaseStatus",
    # Order entities
    "Order",
    "OrderLineItem",
    "OrderStatus",
    "OPEN_STATUSES",
    "compute_order_total",
    # Menu entities
    "MenuItem",
    "MenuItemIngredient",
    "compute_margin_percent",
    # Payment entities
    "OrderPayment",
    "PaymentState",
    # Staff entities
    "Role",
    "StaffMember",
]
