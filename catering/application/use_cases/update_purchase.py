"""Update Purchase Use Case: COALESCE update of purchase statuses."""

from catering.application.dto.requests import UpdatePurchaseRequest
from catering.application.dto.responses import PurchaseResponse
from catering.config import get_logger
from catering.core.entities.purchase import Purchase
from catering.core.exceptions import PurchaseNotFoundError
from catering.core.interfaces.purchase_store import IPurchaseStore

logger = get_logger(__name__)


class UpdatePurchaseUseCase:
    """Update payment status and/or status; omitted fields are unchanged."""

    def __init__(self, purchase_store: IPurchaseStore | None = None):
        self._purchase_store = purchase_store

    async def _get_purchase_store(self) -> IPurchaseStore:
        if self._purchase_store is None:
            from catering.infrastructure.storage.sqlite import get_purchase_store

            self._purchase_store = await get_purchase_store()
        return self._purchase_store

    async def execute(
        self, business_id: int, purchase_id: int, request: UpdatePurchaseRequest
    ) -> Purchase:
        store = await self._get_purchase_store()
        purchase = await store.update_status(
            business_id,
            purchase_id,
            payment_status=request.payment_status,
            status=request.status,
        )
        if purchase is None:
            raise PurchaseNotFoundError(purchase_id)
        return purchase

    def to_response(self, purchase: Purchase) -> PurchaseResponse:
        return PurchaseResponse.from_entity(purchase)
