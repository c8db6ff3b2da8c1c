"""Abstract interface for purchase storage."""

from abc import ABC, abstractmethod

from catering.core.entities.purchase import (
    PaymentStatus,
    Purchase,
    PurchaseLineItem,
    PurchaseStatus,
)


class IPurchaseStore(ABC):
    """Interface for purchase order persistence."""

    @abstractmethod
    async def create_purchase(self, purchase: Purchase) -> Purchase:
        """
        Insert the purchase header only.

        Raises:
            DuplicateReferenceError: if the PO number is already taken
        """
        pass

    @abstractmethod
    async def add_line(self, line: PurchaseLineItem) -> PurchaseLineItem:
        """Insert one line of an existing purchase."""
        pass

    @abstractmethod
    async def get_purchase(
        self, business_id: int, purchase_id: int
    ) -> Purchase | None:
        """Get purchase by ID with items."""
        pass

    @abstractmethod
    async def list_purchases(
        self, business_id: int, limit: int = 100, offset: int = 0
    ) -> list[Purchase]:
        """List purchases by purchase date, newest first (headers only)."""
        pass

    @abstractmethod
    async def update_status(
        self,
        business_id: int,
        purchase_id: int,
        payment_status: PaymentStatus | None = None,
        status: PurchaseStatus | None = None,
    ) -> Purchase | None:
        """Update whichever of the statuses is given. None if not found."""
        pass
