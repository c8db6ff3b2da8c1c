"""Role and staff use cases; every role reference is checked against the tenant."""

from catering.application.dto.requests import (
    CreateRoleRequest,
    CreateStaffRequest,
    UpdateRoleRequest,
    UpdateStaffRequest,
)
from catering.application.dto.responses import RoleResponse, StaffResponse
from catering.config import get_logger
from catering.core.entities.staff import Role, StaffMember
from catering.core.exceptions import RoleNotFoundError, StaffMemberNotFoundError
from catering.core.interfaces.staff_store import IStaffStore
from catering.core.interfaces.transaction import ITransactionManager

logger = get_logger(__name__)


class _StaffUseCase:
    def __init__(
        self,
        staff_store: IStaffStore | None = None,
        transaction_manager: ITransactionManager | None = None,
    ):
        self._staff_store = staff_store
        self._transaction_manager = transaction_manager

    async def _get_staff_store(self) -> IStaffStore:
        if self._staff_store is None:
            from catering.infrastructure.storage.sqlite import get_staff_store

            self._staff_store = await get_staff_store()
        return self._staff_store

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from catering.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    async def _load_role(self, business_id: int, role_id: int) -> Role:
        role = await (await self._get_staff_store()).get_role(business_id, role_id)
        if role is None:
            raise RoleNotFoundError(role_id)
        return role


class CreateRoleUseCase(_StaffUseCase):
    """Create a role with an initial permission set."""

    async def execute(self, business_id: int, request: CreateRoleRequest) -> Role:
        store = await self._get_staff_store()
        tx = await self._get_transaction_manager()
        async with tx.transaction():
            role = await store.create_role(
                Role(
                    business_id=business_id,
                    name=request.name.strip(),
                    description=request.description,
                    permissions=request.permissions,
                )
            )
        return role

    def to_response(self, role: Role) -> RoleResponse:
        return RoleResponse.from_entity(role)


class UpdateRoleUseCase(_StaffUseCase):
    """Rename or describe a role; given permissions replace the old set."""

    async def execute(
        self, business_id: int, role_id: int, request: UpdateRoleRequest
    ) -> Role:
        store = await self._get_staff_store()
        tx = await self._get_transaction_manager()

        async with tx.transaction():
            role = await self._load_role(business_id, role_id)
            changes = request.model_dump(exclude_unset=True, exclude_none=True)
            for field_name, value in changes.items():
                setattr(role, field_name, value)
            role = await store.update_role(role)

        return role

    def to_response(self, role: Role) -> RoleResponse:
        return RoleResponse.from_entity(role)


class CreateStaffUseCase(_StaffUseCase):
    """Add a staff member, optionally assigned to one of the business's roles."""

    async def execute(self, business_id: int, request: CreateStaffRequest) -> StaffMember:
        store = await self._get_staff_store()
        tx = await self._get_transaction_manager()

        async with tx.transaction():
            role = None
            if request.role_id is not None:
                role = await self._load_role(business_id, request.role_id)
            staff = await store.create_staff(
                StaffMember(business_id=business_id, **request.model_dump())
            )

        if role is not None:
            staff.role_name = role.name
            staff.permissions = role.permissions
        return staff

    def to_response(self, staff: StaffMember) -> StaffResponse:
        return StaffResponse.from_entity(staff)


class UpdateStaffUseCase(_StaffUseCase):
    """COALESCE update of a staff member, including deactivation."""

    async def execute(
        self, business_id: int, staff_id: int, request: UpdateStaffRequest
    ) -> StaffMember:
        store = await self._get_staff_store()
        tx = await self._get_transaction_manager()

        async with tx.transaction():
            staff = await store.get_staff(business_id, staff_id)
            if staff is None:
                raise StaffMemberNotFoundError(staff_id)

            if request.role_id is not None and request.role_id != staff.role_id:
                role = await self._load_role(business_id, request.role_id)
                staff.role_name = role.name
                staff.permissions = role.permissions

            changes = request.model_dump(exclude_unset=True, exclude_none=True)
            for field_name, value in changes.items():
                setattr(staff, field_name, value)
            staff = await store.update_staff(staff)

        if request.is_active is False:
            logger.info("staff_member_deactivated", staff_id=staff_id)
        return staff

    def to_response(self, staff: StaffMember) -> StaffResponse:
        return StaffResponse.from_entity(staff)
