"""Create Order Use Case: order header and lines in one transaction."""

from catering.application.dto.requests import CreateOrderRequest
from catering.application.dto.responses import OrderResponse
from catering.config import get_logger
from catering.core.entities.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    compute_order_total,
)
from catering.core.exceptions import ValidationError
from catering.core.interfaces.order_store import IOrderStore
from catering.core.interfaces.transaction import ITransactionManager
from catering.core.services.numbering import ORDER_PREFIX, generate_reference

logger = get_logger(__name__)


class CreateOrderUseCase:
    """
    Create a catering order.

    Itemized orders are valued at the sum of their lines; otherwise the
    order is valued per head. New orders start as Inquiry with no advance.
    """

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        transaction_manager: ITransactionManager | None = None,
    ):
        self._order_store = order_store
        self._transaction_manager = transaction_manager

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from catering.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from catering.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    async def execute(self, business_id: int, request: CreateOrderRequest) -> Order:
        """Execute create order use case."""
        client_name = (request.client_name or "").strip()
        if not client_name:
            raise ValidationError(
                field="client_name",
                message="Client name is required",
                value=request.client_name,
            )

        items = [
            OrderLineItem(
                menu_item_id=line.menu_item_id,
                item_name=line.item_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in request.items
        ]
        total_value = compute_order_total(request.guest_count, request.price_per_head, items)

        order = Order(
            business_id=business_id,
            order_number=generate_reference(ORDER_PREFIX),
            client_name=client_name,
            client_type=request.client_type,
            event_date=request.event_date,
            event_type=request.event_type,
            event_location=request.event_location,
            guest_count=request.guest_count,
            price_per_head=request.price_per_head,
            total_value=total_value,
            advance_received=0.0,
            remaining_balance=total_value,
            status=OrderStatus.INQUIRY,
            items=items,
        )

        store = await self._get_order_store()
        tx = await self._get_transaction_manager()
        async with tx.transaction():
            order = await store.create_order(order)

        logger.info(
            "create_order_complete",
            business_id=business_id,
            order_id=order.id,
            order_number=order.order_number,
            total_value=order.total_value,
        )
        return order

    def to_response(self, order: Order) -> OrderResponse:
        return OrderResponse.from_entity(order)
