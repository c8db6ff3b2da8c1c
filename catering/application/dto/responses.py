"""Response DTOs for API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from catering.core.entities.business import Business
from catering.core.entities.inventory import InventoryItem, StockMovement
from catering.core.entities.menu import MenuItem
from catering.core.entities.order import Order
from catering.core.entities.payment import OrderPayment
from catering.core.entities.purchase import Purchase
from catering.core.entities.staff import Role, StaffMember


class BusinessResponse(BaseModel):
    """Business profile response."""

    id: int
    name: str
    tagline: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None

    @classmethod
    def from_entity(cls, business: Business) -> "BusinessResponse":
        return cls(**business.model_dump(exclude={"created_at", "updated_at"}))


# --- Inventory ---


class InventoryItemResponse(BaseModel):
    """Inventory item response DTO."""

    id: int
    name: str
    category: str | None = None
    unit: str | None = None
    current_stock: float
    minimum_stock: float
    cost_per_unit: float
    supplier_id: int | None = None
    supplier_name: str | None = None
    shortage: float
    is_low_stock: bool
    stock_value: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls(
            id=item.id,  # type: ignore[arg-type]
            name=item.name,
            category=item.category,
            unit=item.unit,
            current_stock=item.current_stock,
            minimum_stock=item.minimum_stock,
            cost_per_unit=item.cost_per_unit,
            supplier_id=item.supplier_id,
            supplier_name=item.supplier_name,
            shortage=item.shortage,
            is_low_stock=item.is_low_stock,
            stock_value=item.stock_value,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class StockMovementResponse(BaseModel):
    """Stock movement response DTO."""

    id: int
    inventory_item_id: int
    movement_type: str
    quantity_change: float
    previous_stock: float
    new_stock: float
    reference_id: int | None = None
    reference_type: str | None = None
    notes: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, movement: StockMovement) -> "StockMovementResponse":
        return cls(
            id=movement.id,  # type: ignore[arg-type]
            inventory_item_id=movement.inventory_item_id,
            movement_type=movement.movement_type.value,
            quantity_change=movement.quantity_change,
            previous_stock=movement.previous_stock,
            new_stock=movement.new_stock,
            reference_id=movement.reference_id,
            reference_type=movement.reference_type.value if movement.reference_type else None,
            notes=movement.notes,
            created_at=movement.created_at,
        )


class StockMovementResultResponse(BaseModel):
    """Response for a recorded stock movement."""

    inventory_item: InventoryItemResponse
    movement: StockMovementResponse


class InventoryListResponse(BaseModel):
    items: list[InventoryItemResponse]
    total: int


class StockMovementListResponse(BaseModel):
    movements: list[StockMovementResponse]
    total: int


# --- Purchases ---


class PurchaseLineResponse(BaseModel):
    id: int | None = None
    inventory_item_id: int | None = None
    ingredient_name: str
    quantity: float
    unit: str | None = None
    unit_price: float
    total_price: float


class PurchaseResponse(BaseModel):
    """Purchase response DTO (items empty in list views)."""

    id: int
    purchase_order_number: str
    supplier_id: int | None = None
    supplier_name: str | None = None
    purchase_date: date
    total_amount: float
    final_amount: float
    payment_status: str
    status: str
    items: list[PurchaseLineResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, purchase: Purchase) -> "PurchaseResponse":
        return cls(
            id=purchase.id,  # type: ignore[arg-type]
            purchase_order_number=purchase.purchase_order_number,
            supplier_id=purchase.supplier_id,
            supplier_name=purchase.supplier_name,
            purchase_date=purchase.purchase_date,
            total_amount=purchase.total_amount,
            final_amount=purchase.final_amount,
            payment_status=purchase.payment_status.value,
            status=purchase.status.value,
            items=[
                PurchaseLineResponse(**line.model_dump(exclude={"purchase_id"}))
                for line in purchase.items
            ],
            created_at=purchase.created_at,
            updated_at=purchase.updated_at,
        )


class PurchaseCreatedResponse(BaseModel):
    """Response for purchase intake."""

    purchase: PurchaseResponse
    movements: list[StockMovementResponse]
    created_items: list[int] = Field(
        default_factory=list, description="Inventory item ids created by this purchase"
    )


class PurchaseListResponse(BaseModel):
    purchases: list[PurchaseResponse]
    total: int


# --- Orders ---


class OrderLineResponse(BaseModel):
    id: int | None = None
    menu_item_id: int | None = None
    item_name: str
    quantity: float
    unit_price: float
    total_price: float


class OrderResponse(BaseModel):
    """Order response DTO with all derived money fields."""

    id: int
    order_number: str
    client_name: str
    client_type: str | None = None
    event_date: date | None = None
    event_type: str | None = None
    event_location: str | None = None
    guest_count: int
    price_per_head: float
    total_value: float
    advance_received: float
    remaining_balance: float
    status: str
    stock_consumed: bool
    items: list[OrderLineResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            client_name=order.client_name,
            client_type=order.client_type,
            event_date=order.event_date,
            event_type=order.event_type,
            event_location=order.event_location,
            guest_count=order.guest_count,
            price_per_head=order.price_per_head,
            total_value=order.total_value,
            advance_received=order.advance_received,
            remaining_balance=order.remaining_balance,
            status=order.status.value,
            stock_consumed=order.stock_consumed,
            items=[
                OrderLineResponse(**line.model_dump(exclude={"order_id"}))
                for line in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int


# --- Menu ---


class MenuIngredientResponse(BaseModel):
    id: int | None = None
    inventory_item_id: int | None = None
    ingredient_name: str
    quantity_required: float
    unit: str | None = None


class MenuItemResponse(BaseModel):
    """Menu item response DTO."""

    id: int
    name: str
    description: str | None = None
    category: str | None = None
    cost_per_serving: float
    selling_price: float
    margin_percent: float
    is_available: bool
    is_vegetarian: bool
    prep_time_minutes: int | None = None
    image_url: str | None = None
    ingredients: list[MenuIngredientResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, menu_item: MenuItem) -> "MenuItemResponse":
        return cls(
            id=menu_item.id,  # type: ignore[arg-type]
            name=menu_item.name,
            description=menu_item.description,
            category=menu_item.category,
            cost_per_serving=menu_item.cost_per_serving,
            selling_price=menu_item.selling_price,
            margin_percent=menu_item.margin_percent,
            is_available=menu_item.is_available,
            is_vegetarian=menu_item.is_vegetarian,
            prep_time_minutes=menu_item.prep_time_minutes,
            image_url=menu_item.image_url,
            ingredients=[
                MenuIngredientResponse(**ing.model_dump(exclude={"menu_item_id"}))
                for ing in menu_item.ingredients
            ],
            created_at=menu_item.created_at,
            updated_at=menu_item.updated_at,
        )


class MenuListResponse(BaseModel):
    menu_items: list[MenuItemResponse]
    total: int


# --- Payments ---


class OrderPaymentResponse(BaseModel):
    """Order payment response; client_secret only on creation."""

    id: int
    order_id: int
    processor: str
    intent_id: str
    amount: float
    currency: str
    status: str
    refunded_amount: float
    customer_ref: str | None = None
    client_secret: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, payment: OrderPayment, client_secret: str | None = None
    ) -> "OrderPaymentResponse":
        return cls(
            id=payment.id,  # type: ignore[arg-type]
            order_id=payment.order_id,
            processor=payment.processor,
            intent_id=payment.intent_id,
            amount=payment.amount,
            currency=payment.currency,
            status=payment.status.value,
            refunded_amount=payment.refunded_amount,
            customer_ref=payment.customer_ref,
            client_secret=client_secret,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class PaymentSettlementResponse(BaseModel):
    """Payment plus the order it settled against."""

    payment: OrderPaymentResponse
    order: OrderResponse


# --- Staff ---


class RoleResponse(BaseModel):
    """Role with its permission set."""

    id: int
    name: str
    description: str | None = None
    permissions: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, role: Role) -> "RoleResponse":
        return cls(**role.model_dump(exclude={"business_id"}))


class RoleListResponse(BaseModel):
    roles: list[RoleResponse]
    total: int


class StaffResponse(BaseModel):
    """Staff member response; permissions only on single-member reads."""

    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    role_id: int | None = None
    role_name: str | None = None
    permissions: list[str] = Field(default_factory=list)
    position: str | None = None
    hire_date: date | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, staff: StaffMember) -> "StaffResponse":
        return cls(**staff.model_dump(exclude={"business_id", "deleted_at"}))


class StaffListResponse(BaseModel):
    staff: list[StaffResponse]
    total: int


# --- Reporting ---


class DashboardStatsResponse(BaseModel):
    pending_orders: int
    upcoming_events: int
    low_stock_items: int
    inventory_value: float
    monthly_revenue: float
    total_sales: float


class SearchResponse(BaseModel):
    query: str
    orders: list[OrderResponse] = Field(default_factory=list)
    menu_items: list[MenuItemResponse] = Field(default_factory=list)
    inventory: list[InventoryItemResponse] = Field(default_factory=list)


# --- Health / errors ---


class ProviderHealthResponse(BaseModel):
    """Dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    payment_processor: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
