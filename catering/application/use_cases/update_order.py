"""Update Order Use Case: status progression and settlement."""

from catering.application.dto.requests import UpdateOrderRequest
from catering.application.dto.responses import OrderResponse
from catering.config import get_logger, get_settings
from catering.config.settings import OrderSettings
from catering.core.entities.order import Order, OrderStatus
from catering.core.exceptions import (
    InvalidStatusTransitionError,
    OrderNotFoundError,
    OverpaymentError,
)
from catering.core.interfaces.inventory_store import IInventoryStore
from catering.core.interfaces.menu_store import IMenuStore
from catering.core.interfaces.order_store import IOrderStore
from catering.core.interfaces.transaction import ITransactionManager
from catering.core.services.stock_ledger import StockLedgerService

logger = get_logger(__name__)


class UpdateOrderUseCase:
    """
    Update an order's status and/or advance.

    Omitted fields keep their current value; the remaining balance is
    always recomputed from the stored total and the effective advance.
    Policies come from ORDERS_* settings:

    - overpayment (advance above total) is rejected unless relaxed
    - status may only move forward unless relaxed
    - entering the consumption status for the first time posts the
      order's ingredient consumption to the stock ledger
    """

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        inventory_store: IInventoryStore | None = None,
        menu_store: IMenuStore | None = None,
        transaction_manager: ITransactionManager | None = None,
        order_settings: OrderSettings | None = None,
        allow_negative_stock: bool | None = None,
    ):
        self._order_store = order_store
        self._inventory_store = inventory_store
        self._menu_store = menu_store
        self._transaction_manager = transaction_manager
        settings = get_settings()
        self._policy = order_settings or settings.orders
        if allow_negative_stock is None:
            allow_negative_stock = settings.inventory.allow_negative_stock
        self._allow_negative_stock = allow_negative_stock

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from catering.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from catering.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_menu_store(self) -> IMenuStore:
        if self._menu_store is None:
            from catering.infrastructure.storage.sqlite import get_menu_store

            self._menu_store = await get_menu_store()
        return self._menu_store

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from catering.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    def _check_status(self, order: Order, requested: OrderStatus) -> None:
        if order.status.can_move_to(requested):
            return
        if self._policy.enforce_forward_status:
            raise InvalidStatusTransitionError(order.status.value, requested.value)
        logger.warning(
            "order_status_regression",
            order_id=order.id,
            current=order.status.value,
            requested=requested.value,
        )

    def _check_advance(self, order: Order, advance: float) -> None:
        if advance <= order.total_value:
            return
        if self._policy.reject_overpayment:
            raise OverpaymentError(order.id, advance, order.total_value)  # type: ignore[arg-type]
        logger.warning(
            "order_overpayment",
            order_id=order.id,
            advance_received=advance,
            total_value=order.total_value,
        )

    def _should_consume(self, order: Order) -> bool:
        trigger = self._policy.consume_stock_on_status
        if trigger is None or order.stock_consumed:
            return False
        return order.status.rank >= OrderStatus(trigger).rank

    async def execute(
        self, business_id: int, order_id: int, request: UpdateOrderRequest
    ) -> Order:
        """Execute update order use case."""
        store = await self._get_order_store()
        tx = await self._get_transaction_manager()

        async with tx.transaction():
            order = await store.get_order(business_id, order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            if request.status is not None:
                self._check_status(order, request.status)
                order.status = request.status

            advance = (
                request.advance_received
                if request.advance_received is not None
                else order.advance_received
            )
            if request.advance_received is not None:
                self._check_advance(order, advance)
            order.settle(advance)

            if self._should_consume(order):
                ledger = StockLedgerService(
                    await self._get_inventory_store(),
                    allow_negative_stock=self._allow_negative_stock,
                )
                await ledger.consume_for_order(order, await self._get_menu_store())
                order.stock_consumed = True

            order = await store.update_order(order)

        logger.info(
            "update_order_complete",
            order_id=order.id,
            status=order.status.value,
            remaining_balance=order.remaining_balance,
        )
        return order

    def to_response(self, order: Order) -> OrderResponse:
        return OrderResponse.from_entity(order)
