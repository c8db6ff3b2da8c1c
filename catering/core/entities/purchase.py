"""Purchase domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class PaymentStatus(str, Enum):
    """Supplier payment state of a purchase."""

    PENDING = "Pending"
    PAID = "Paid"
    PARTIAL = "Partial"


class PurchaseStatus(str, Enum):
    """Fulfilment state of a purchase order."""

    ORDERED = "Ordered"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


class PurchaseLineItem(BaseModel):
    """One ingredient line on a purchase order."""

    id: int | None = None
    purchase_id: int | None = None
    inventory_item_id: int | None = None  # resolved during intake
    ingredient_name: str
    quantity: float = Field(ge=0)
    unit: str | None = None
    unit_price: float = Field(ge=0)
    total_price: float = 0.0  # quantity * unit_price

    @model_validator(mode="after")
    def compute_line(self) -> "PurchaseLineItem":
        self.total_price = self.quantity * self.unit_price
        return self


class Purchase(BaseModel):
    """A purchase order from a supplier with its line items."""

    id: int | None = None
    business_id: int
    purchase_order_number: str
    supplier_id: int | None = None
    supplier_name: str | None = None
    purchase_date: date = Field(default_factory=date.today)
    total_amount: float = 0.0
    final_amount: float = 0.0
    payment_status: PaymentStatus = PaymentStatus.PENDING
    status: PurchaseStatus = PurchaseStatus.ORDERED
    items: list[PurchaseLineItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def compute_totals(self) -> "Purchase":
        """Compute total/final amount from items when items are present."""
        if self.items:
            self.total_amount = sum(i.total_price for i in self.items)
            self.final_amount = self.total_amount
        return self
