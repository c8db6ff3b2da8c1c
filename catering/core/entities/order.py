"""Order domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class OrderStatus(str, Enum):
    """Order lifecycle; declaration order is the forward sequence."""

    INQUIRY = "Inquiry"
    CONFIRMED = "Confirmed"
    IN_PROGRESS = "In Progress"
    DELIVERED = "Delivered"
    CLOSED = "Closed"

    @property
    def rank(self) -> int:
        return list(OrderStatus).index(self)

    def can_move_to(self, other: "OrderStatus") -> bool:
        """Forward moves (skipping allowed) and no-ops are legal."""
        return other.rank >= self.rank


OPEN_STATUSES = (OrderStatus.INQUIRY, OrderStatus.CONFIRMED, OrderStatus.IN_PROGRESS)


class OrderLineItem(BaseModel):
    """One dish line on an itemized order."""

    id: int | None = None
    order_id: int | None = None
    menu_item_id: int | None = None
    item_name: str
    quantity: float = Field(ge=0)
    unit_price: float = Field(ge=0)
    total_price: float = 0.0

    @model_validator(mode="after")
    def compute_line(self) -> "OrderLineItem":
        self.total_price = self.quantity * self.unit_price
        return self


class Order(BaseModel):
    """A catering order and its financial state."""

    id: int | None = None
    business_id: int
    order_number: str
    client_name: str
    client_type: str | None = None
    event_date: date | None = None
    event_type: str | None = None
    event_location: str | None = None
    guest_count: int = 0
    price_per_head: float = 0.0
    total_value: float = 0.0
    advance_received: float = Field(default=0.0, ge=0)
    remaining_balance: float = 0.0
    status: OrderStatus = OrderStatus.INQUIRY
    stock_consumed: bool = False
    items: list[OrderLineItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def settle(self, advance_received: float) -> None:
        """Set the advance and recompute the remaining balance."""
        self.advance_received = advance_received
        self.remaining_balance = self.total_value - advance_received


def compute_order_total(
    guest_count: int, price_per_head: float, items: list[OrderLineItem]
) -> float:
    """Itemized orders sum their lines; event orders charge per head."""
    if items:
        return sum(i.total_price for i in items)
    return guest_count * price_per_head
