"""Abstract interface for business (tenant) storage."""

from abc import ABC, abstractmethod

from catering.core.entities.business import Business


class IBusinessStore(ABC):
    """Interface for business profile persistence."""

    @abstractmethod
    async def create_business(self, business: Business) -> Business:
        """Create a new business."""
        pass

    @abstractmethod
    async def get_business(self, business_id: int) -> Business | None:
        """Get business by ID."""
        pass

    @abstractmethod
    async def update_business(self, business: Business) -> Business:
        """Persist profile fields of an existing business."""
        pass
