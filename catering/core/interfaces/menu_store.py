"""Abstract interface for menu storage."""

from abc import ABC, abstractmethod

from catering.core.entities.menu import MenuItem


class IMenuStore(ABC):
    """Interface for menu item persistence."""

    @abstractmethod
    async def create_menu_item(self, menu_item: MenuItem) -> MenuItem:
        """Create a menu item with its ingredient links."""
        pass

    @abstractmethod
    async def get_menu_item(
        self, business_id: int, menu_item_id: int
    ) -> MenuItem | None:
        """Get a non-deleted menu item with ingredients."""
        pass

    @abstractmethod
    async def list_menu_items(
        self, business_id: int, limit: int = 200, offset: int = 0
    ) -> list[MenuItem]:
        """List non-deleted menu items ordered by category then name."""
        pass

    @abstractmethod
    async def update_menu_item(self, menu_item: MenuItem) -> MenuItem:
        """Persist descriptive fields, pricing and margin."""
        pass

    @abstractmethod
    async def soft_delete_menu_item(self, business_id: int, menu_item_id: int) -> bool:
        """Stamp deleted_at. Returns False if not found."""
        pass
