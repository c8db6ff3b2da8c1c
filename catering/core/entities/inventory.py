"""Inventory domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class MovementType(str, Enum):
    """Types of stock movements."""

    PURCHASE = "Purchase"
    CONSUMPTION = "Consumption"
    ADJUSTMENT = "Adjustment"


class ReferenceType(str, Enum):
    """What caused a stock movement."""

    PURCHASE = "Purchase"
    ORDER = "Order"
    MANUAL = "Manual"


class InventoryItem(BaseModel):
    """An ingredient or supply tracked by quantity on hand."""

    id: int | None = None
    business_id: int
    name: str
    category: str | None = None
    unit: str | None = None
    current_stock: float = 0.0
    minimum_stock: float = Field(default=0.0, ge=0)
    cost_per_unit: float = Field(default=0.0, ge=0)
    supplier_id: int | None = None
    supplier_name: str | None = None
    is_active: bool = True
    version: int = 0  # bumped on every stock write
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def shortage(self) -> float:
        """How far stock sits below the minimum (negative when above)."""
        return self.minimum_stock - self.current_stock

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.minimum_stock

    @property
    def stock_value(self) -> float:
        """Value on hand = current_stock * cost_per_unit."""
        return self.current_stock * self.cost_per_unit


class StockMovement(BaseModel):
    """An immutable, signed adjustment with before/after snapshots."""

    id: int | None = None
    business_id: int
    inventory_item_id: int
    movement_type: MovementType
    quantity_change: float  # signed delta
    previous_stock: float
    new_stock: float
    reference_id: int | None = None
    reference_type: ReferenceType | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_snapshot(self) -> "StockMovement":
        """new_stock must equal previous_stock + quantity_change."""
        if abs(self.previous_stock + self.quantity_change - self.new_stock) > 1e-9:
            raise ValueError(
                f"new_stock {self.new_stock} != previous_stock {self.previous_stock}"
                f" + quantity_change {self.quantity_change}"
            )
        return self
