"""Menu domain entities and margin computation."""

from datetime import datetime

from pydantic import BaseModel, Field

from catering.core.exceptions import InvalidSellingPriceError


def compute_margin_percent(selling_price: float, cost_per_serving: float) -> float:
    """(selling - cost) / selling * 100, rounded to two decimals."""
    if selling_price <= 0:
        raise InvalidSellingPriceError(selling_price)
    return round((selling_price - cost_per_serving) / selling_price * 100, 2)


class MenuItemIngredient(BaseModel):
    """Quantity of an inventory item used per serving of a dish."""

    id: int | None = None
    menu_item_id: int | None = None
    inventory_item_id: int | None = None
    ingredient_name: str
    quantity_required: float = Field(ge=0)
    unit: str | None = None


class MenuItem(BaseModel):
    """A dish on the menu; margin is always derived from cost and price."""

    id: int | None = None
    business_id: int
    name: str
    description: str | None = None
    category: str | None = None
    cost_per_serving: float = Field(default=0.0, ge=0)
    selling_price: float
    margin_percent: float = 0.0
    is_available: bool = True
    is_vegetarian: bool = False
    prep_time_minutes: int | None = None
    image_url: str | None = None
    ingredients: list[MenuItemIngredient] = Field(default_factory=list)
    deleted_at: datetime | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def reprice(
        self,
        cost_per_serving: float | None = None,
        selling_price: float | None = None,
    ) -> None:
        """Apply new cost/price and recompute the margin."""
        if cost_per_serving is not None:
            self.cost_per_serving = cost_per_serving
        if selling_price is not None:
            self.selling_price = selling_price
        self.margin_percent = compute_margin_percent(
            self.selling_price, self.cost_per_serving
        )
