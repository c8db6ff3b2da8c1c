"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from catering.core.entities.inventory import InventoryItem, StockMovement


class IInventoryStore(ABC):
    """Interface for inventory item and stock movement persistence."""

    @abstractmethod
    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item."""
        pass

    @abstractmethod
    async def get_item(self, business_id: int, item_id: int) -> InventoryItem | None:
        """Get an active inventory item of the business by ID."""
        pass

    @abstractmethod
    async def get_item_by_name(
        self, business_id: int, name: str
    ) -> InventoryItem | None:
        """Get an active inventory item by exact name."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem) -> InventoryItem:
        """Update descriptive fields and minimum stock (never current_stock)."""
        pass

    @abstractmethod
    async def update_stock(
        self, item: InventoryItem, new_stock: float
    ) -> InventoryItem:
        """
        Set current_stock if the row still carries item.version.

        Raises:
            ConcurrentModificationError: if the row changed since it was read
        """
        pass

    @abstractmethod
    async def deactivate_item(self, business_id: int, item_id: int) -> bool:
        """Soft delete an item. Returns False if it was not found."""
        pass

    @abstractmethod
    async def list_items(
        self, business_id: int, limit: int = 100, offset: int = 0
    ) -> list[InventoryItem]:
        """List active inventory items ordered by name."""
        pass

    @abstractmethod
    async def list_low_stock(
        self, business_id: int, limit: int = 100
    ) -> list[InventoryItem]:
        """List active items at or below minimum stock, largest shortage first."""
        pass

    @abstractmethod
    async def add_movement(self, movement: StockMovement) -> StockMovement:
        """Append a stock movement."""
        pass

    @abstractmethod
    async def get_movements(
        self, business_id: int, inventory_item_id: int, limit: int = 100, offset: int = 0
    ) -> list[StockMovement]:
        """Get movements for an inventory item, newest first."""
        pass
