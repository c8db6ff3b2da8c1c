"""Abstract interface for read-only reporting queries."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date

from catering.core.entities.inventory import InventoryItem
from catering.core.entities.menu import MenuItem
from catering.core.entities.order import Order


@dataclass
class DashboardStats:
    """Headline figures for a business."""

    pending_orders: int = 0
    upcoming_events: int = 0
    low_stock_items: int = 0
    inventory_value: float = 0.0
    monthly_revenue: float = 0.0
    total_sales: float = 0.0


@dataclass
class SearchResults:
    """Matches grouped by kind."""

    orders: list[Order] = field(default_factory=list)
    menu_items: list[MenuItem] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)


class IReportStore(ABC):
    """Interface for dashboard and search queries."""

    @abstractmethod
    async def dashboard_stats(self, business_id: int, today: date) -> DashboardStats:
        """Compute dashboard figures as of the given day."""
        pass

    @abstractmethod
    async def search(
        self, business_id: int, query: str, limit: int = 5
    ) -> SearchResults:
        """Case-insensitive substring search across orders, menu and inventory."""
        pass
