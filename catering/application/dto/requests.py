"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from catering.core.entities.inventory import MovementType, ReferenceType
from catering.core.entities.order import OrderStatus
from catering.core.entities.purchase import PaymentStatus, PurchaseStatus

# --- Business ---


class CreateBusinessRequest(BaseModel):
    """Request to register a business."""

    name: str = Field(..., min_length=1, description="Business display name")
    tagline: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None


class UpdateBusinessRequest(BaseModel):
    """Partial profile update; omitted fields keep their value."""

    name: str | None = Field(default=None, min_length=1)
    tagline: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None


# --- Inventory ---


class CreateInventoryItemRequest(BaseModel):
    """Request to create an inventory item with zero stock."""

    name: str = Field(..., min_length=1)
    category: str | None = None
    unit: str | None = Field(default=None, examples=["kg", "litre", "pcs"])
    minimum_stock: float = Field(default=0.0, ge=0)
    cost_per_unit: float = Field(default=0.0, ge=0)
    supplier_id: int | None = None
    supplier_name: str | None = None


class UpdateInventoryItemRequest(BaseModel):
    """Partial update of descriptive fields; stock changes go through movements."""

    name: str | None = Field(default=None, min_length=1)
    category: str | None = None
    unit: str | None = None
    minimum_stock: float | None = Field(default=None, ge=0)
    cost_per_unit: float | None = Field(default=None, ge=0)
    supplier_id: int | None = None
    supplier_name: str | None = None


class RecordStockMovementRequest(BaseModel):
    """Request to apply a signed stock change."""

    quantity: float = Field(..., description="Signed quantity change (negative to remove)")
    movement_type: MovementType = Field(default=MovementType.ADJUSTMENT)
    reference_id: int | None = Field(default=None, description="Causing purchase/order id")
    reference_type: ReferenceType | None = Field(default=None)
    notes: str | None = None


# --- Purchases ---


class PurchaseLineRequest(BaseModel):
    """One ingredient line of a purchase."""

    ingredient_name: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)
    unit: str | None = None
    unit_price: float = Field(..., ge=0)


class CreatePurchaseRequest(BaseModel):
    """Request to record a supplier purchase and receive its stock."""

    supplier_id: int | None = None
    supplier_name: str | None = None
    purchase_date: date | None = Field(
        default=None, description="Purchase date (defaults to today)"
    )
    items: list[PurchaseLineRequest] = Field(default_factory=list)


class UpdatePurchaseRequest(BaseModel):
    """COALESCE update of purchase statuses."""

    payment_status: PaymentStatus | None = None
    status: PurchaseStatus | None = None


# --- Orders ---


class OrderLineRequest(BaseModel):
    """One dish line of an itemized order."""

    menu_item_id: int | None = None
    item_name: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)
    unit_price: float = Field(..., ge=0)


class CreateOrderRequest(BaseModel):
    """Request to create a catering order."""

    client_name: str | None = Field(default=None, description="Required, non-blank")
    client_type: str | None = None
    event_date: date | None = None
    event_type: str | None = None
    event_location: str | None = None
    guest_count: int = Field(default=0, ge=0)
    price_per_head: float = Field(default=0.0, ge=0)
    items: list[OrderLineRequest] = Field(default_factory=list)


class UpdateOrderRequest(BaseModel):
    """COALESCE update of status and advance."""

    status: OrderStatus | None = None
    advance_received: float | None = Field(default=None, ge=0)


# --- Menu ---


class MenuIngredientRequest(BaseModel):
    """Ingredient link of a menu item."""

    inventory_item_id: int | None = None
    ingredient_name: str = Field(..., min_length=1)
    quantity_required: float = Field(..., gt=0, description="Quantity per serving")
    unit: str | None = None


class CreateMenuItemRequest(BaseModel):
    """Request to create a menu item; margin is derived."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    category: str | None = None
    cost_per_serving: float = Field(default=0.0, ge=0)
    selling_price: float
    is_available: bool = True
    is_vegetarian: bool = False
    prep_time_minutes: int | None = Field(default=None, ge=0)
    image_url: str | None = None
    ingredients: list[MenuIngredientRequest] = Field(default_factory=list)


class UpdateMenuItemRequest(BaseModel):
    """Partial menu update; margin is recomputed from merged values."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = None
    cost_per_serving: float | None = Field(default=None, ge=0)
    selling_price: float | None = None
    is_available: bool | None = None
    is_vegetarian: bool | None = None
    prep_time_minutes: int | None = Field(default=None, ge=0)
    image_url: str | None = None


# --- Payments ---


class CreatePaymentRequest(BaseModel):
    """Request to open a processor payment for an order."""

    amount: float = Field(..., gt=0)
    currency: str | None = Field(default=None, description="Defaults to configured currency")
    customer_ref: str | None = Field(default=None, description="Processor customer id")


class RefundPaymentRequest(BaseModel):
    """Request to refund all or part of a payment."""

    amount: float | None = Field(default=None, gt=0, description="Omit for full refund")


# --- Staff ---


def _normalize_permissions(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    permissions: list[str] = []
    for permission in value:
        permission = permission.strip()
        if permission and permission not in permissions:
            permissions.append(permission)
    return permissions


class CreateRoleRequest(BaseModel):
    """Request to create a role."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    permissions: list[str] = Field(default_factory=list, description="e.g. orders:write")

    @field_validator("permissions")
    @classmethod
    def clean_permissions(cls, v: list[str] | None) -> list[str] | None:
        return _normalize_permissions(v)


class UpdateRoleRequest(BaseModel):
    """Partial role update; permissions, when given, replace the whole set."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    permissions: list[str] | None = None

    @field_validator("permissions")
    @classmethod
    def clean_permissions(cls, v: list[str] | None) -> list[str] | None:
        return _normalize_permissions(v)


class CreateStaffRequest(BaseModel):
    """Request to add a staff member."""

    name: str = Field(..., min_length=1)
    email: str | None = None
    phone: str | None = None
    role_id: int | None = None
    position: str | None = None
    hire_date: date | None = None


class UpdateStaffRequest(BaseModel):
    """COALESCE update of a staff member."""

    name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    phone: str | None = None
    role_id: int | None = None
    position: str | None = None
    hire_date: date | None = None
    is_active: bool | None = None
