"""Abstract interface for staff and role storage."""

from abc import ABC, abstractmethod

from catering.core.entities.staff import Role, StaffMember


class IStaffStore(ABC):
    """Interface for role and staff persistence, scoped by business."""

    @abstractmethod
    async def create_role(self, role: Role) -> Role:
        """
        Create a role with its permissions.

        Raises:
            DuplicateRoleError: The business already has a role of that name.
        """
        pass

    @abstractmethod
    async def get_role(self, business_id: int, role_id: int) -> Role | None:
        pass

    @abstractmethod
    async def list_roles(self, business_id: int) -> list[Role]:
        """List roles with permissions, ordered by name."""
        pass

    @abstractmethod
    async def update_role(self, role: Role) -> Role:
        """Persist name and description and replace the permission set."""
        pass

    @abstractmethod
    async def create_staff(self, staff: StaffMember) -> StaffMember:
        pass

    @abstractmethod
    async def get_staff(self, business_id: int, staff_id: int) -> StaffMember | None:
        """Get a non-removed staff member with role name and permissions."""
        pass

    @abstractmethod
    async def list_staff(
        self, business_id: int, limit: int = 200, offset: int = 0
    ) -> list[StaffMember]:
        """List non-removed staff ordered by name, with role names."""
        pass

    @abstractmethod
    async def update_staff(self, staff: StaffMember) -> StaffMember:
        pass

    @abstractmethod
    async def soft_delete_staff(self, business_id: int, staff_id: int) -> bool:
        """Stamp deleted_at. Returns False if not found."""
        pass
