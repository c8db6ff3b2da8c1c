"""Business profile use cases."""

from catering.application.dto.requests import CreateBusinessRequest, UpdateBusinessRequest
from catering.application.dto.responses import BusinessResponse
from catering.config import get_logger
from catering.core.entities.business import Business
from catering.core.exceptions import BusinessNotFoundError
from catering.core.interfaces.business_store import IBusinessStore

logger = get_logger(__name__)


class _BusinessUseCase:
    def __init__(self, business_store: IBusinessStore | None = None):
        self._business_store = business_store

    async def _get_business_store(self) -> IBusinessStore:
        if self._business_store is None:
            from catering.infrastructure.storage.sqlite import get_business_store

            self._business_store = await get_business_store()
        return self._business_store

    def to_response(self, business: Business) -> BusinessResponse:
        return BusinessResponse.from_entity(business)


class CreateBusinessUseCase(_BusinessUseCase):
    """Register a new business (tenant)."""

    async def execute(self, request: CreateBusinessRequest) -> Business:
        store = await self._get_business_store()
        return await store.create_business(Business(**request.model_dump()))


class UpdateBusinessProfileUseCase(_BusinessUseCase):
    """COALESCE update of the business profile."""

    async def execute(self, business_id: int, request: UpdateBusinessRequest) -> Business:
        store = await self._get_business_store()
        business = await store.get_business(business_id)
        if business is None:
            raise BusinessNotFoundError(business_id)

        for field_name, value in request.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(business, field_name, value)
        return await store.update_business(business)
