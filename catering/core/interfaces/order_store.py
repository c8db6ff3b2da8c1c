"""Abstract interface for order storage."""

from abc import ABC, abstractmethod

from catering.core.entities.order import Order


class IOrderStore(ABC):
    """Interface for order persistence."""

    @abstractmethod
    async def create_order(self, order: Order) -> Order:
        """
        Create an order with all its items.

        Raises:
            DuplicateReferenceError: if the order number is already taken
        """
        pass

    @abstractmethod
    async def get_order(self, business_id: int, order_id: int) -> Order | None:
        """Get order by ID with items."""
        pass

    @abstractmethod
    async def list_orders(
        self, business_id: int, limit: int = 100, offset: int = 0
    ) -> list[Order]:
        """List orders by event date, newest first (headers only)."""
        pass

    @abstractmethod
    async def update_order(self, order: Order) -> Order:
        """Persist status, advance, balance and the stock_consumed flag."""
        pass
