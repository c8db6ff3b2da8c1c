"""Tests for CreateOrderUseCase and UpdateOrderUseCase."""

from unittest.mock import AsyncMock

import pytest

from catering.application.dto.requests import (
    CreateOrderRequest,
    OrderLineRequest,
    UpdateOrderRequest,
)
from catering.application.use_cases.create_order import CreateOrderUseCase
from catering.application.use_cases.update_order import UpdateOrderUseCase
from catering.config.settings import OrderSettings
from catering.core.entities import OrderStatus
from catering.core.exceptions import (
    InvalidStatusTransitionError,
    OrderNotFoundError,
    OverpaymentError,
    ValidationError,
)


@pytest.fixture
def order_store(wedding_order):
    store = AsyncMock()
    store.create_order.side_effect = lambda o: o.model_copy(update={"id": 3})
    store.get_order.return_value = wedding_order
    store.update_order.side_effect = lambda o: o
    return store


class TestCreateOrderUseCase:
    async def test_per_head_total(self, order_store, tx_manager):
        uc = CreateOrderUseCase(order_store, tx_manager)

        order = await uc.execute(
            1, CreateOrderRequest(client_name="Sharma Wedding", guest_count=50, price_per_head=500)
        )

        assert order.total_value == 25000.0
        assert order.remaining_balance == 25000.0
        assert order.advance_received == 0.0
        assert order.status == OrderStatus.INQUIRY
        assert order.order_number.startswith("ORD-")

    async def test_itemized_total(self, order_store, tx_manager):
        uc = CreateOrderUseCase(order_store, tx_manager)

        order = await uc.execute(
            1,
            CreateOrderRequest(
                client_name="Office Lunch",
                guest_count=20,
                price_per_head=300,
                items=[
                    OrderLineRequest(item_name="Thali", quantity=20, unit_price=220),
                    OrderLineRequest(item_name="Lassi", quantity=20, unit_price=60),
                ],
            ),
        )

        assert order.total_value == 5600.0

    @pytest.mark.parametrize("name", [None, "", "   "])
    async def test_client_name_required(self, order_store, tx_manager, name):
        uc = CreateOrderUseCase(order_store, tx_manager)

        with pytest.raises(ValidationError):
            await uc.execute(1, CreateOrderRequest(client_name=name, guest_count=5))
        order_store.create_order.assert_not_awaited()


class TestUpdateOrderUseCase:
    def _uc(self, order_store, tx_manager, policy, menu_store=None, inv_store=None):
        return UpdateOrderUseCase(
            order_store=order_store,
            inventory_store=inv_store or AsyncMock(),
            menu_store=menu_store or AsyncMock(),
            transaction_manager=tx_manager,
            order_settings=policy,
            allow_negative_stock=False,
        )

    async def test_advance_recomputes_balance(self, order_store, tx_manager, order_policy):
        uc = self._uc(order_store, tx_manager, order_policy)

        order = await uc.execute(1, 3, UpdateOrderRequest(advance_received=10000))

        assert order.advance_received == 10000.0
        assert order.remaining_balance == 15000.0
        assert order.status == OrderStatus.INQUIRY

    async def test_status_only_keeps_advance(self, order_store, tx_manager, order_policy, wedding_order):
        wedding_order.settle(5000.0)
        uc = self._uc(order_store, tx_manager, order_policy)

        order = await uc.execute(1, 3, UpdateOrderRequest(status=OrderStatus.CONFIRMED))

        assert order.status == OrderStatus.CONFIRMED
        assert order.advance_received == 5000.0
        assert order.remaining_balance == 20000.0

    async def test_missing_order(self, order_store, tx_manager, order_policy):
        order_store.get_order.return_value = None
        uc = self._uc(order_store, tx_manager, order_policy)

        with pytest.raises(OrderNotFoundError):
            await uc.execute(1, 99, UpdateOrderRequest(advance_received=1))
        assert tx_manager.rolled_back == 1

    async def test_overpayment_rejected(self, order_store, tx_manager, order_policy):
        uc = self._uc(order_store, tx_manager, order_policy)

        with pytest.raises(OverpaymentError):
            await uc.execute(1, 3, UpdateOrderRequest(advance_received=30000))
        order_store.update_order.assert_not_awaited()

    async def test_overpayment_allowed_when_relaxed(self, order_store, tx_manager):
        policy = OrderSettings(reject_overpayment=False, consume_stock_on_status=None)
        uc = self._uc(order_store, tx_manager, policy)

        order = await uc.execute(1, 3, UpdateOrderRequest(advance_received=30000))

        assert order.remaining_balance == -5000.0

    async def test_backward_status_rejected(self, order_store, tx_manager, order_policy, wedding_order):
        wedding_order.status = OrderStatus.DELIVERED
        wedding_order.stock_consumed = True
        uc = self._uc(order_store, tx_manager, order_policy)

        with pytest.raises(InvalidStatusTransitionError):
            await uc.execute(1, 3, UpdateOrderRequest(status=OrderStatus.CONFIRMED))

    async def test_consumption_posted_once(self, order_store, tx_manager, order_policy, biryani, rice):
        menu_store = AsyncMock()
        menu_store.get_menu_item.return_value = biryani
        inv_store = AsyncMock()
        inv_store.get_item.return_value = rice
        inv_store.update_stock.side_effect = lambda i, s: i.model_copy(update={"current_stock": s})
        inv_store.add_movement.side_effect = lambda m: m
        uc = self._uc(order_store, tx_manager, order_policy, menu_store, inv_store)

        order = await uc.execute(1, 3, UpdateOrderRequest(status=OrderStatus.IN_PROGRESS))
        assert order.stock_consumed is True
        assert inv_store.add_movement.await_count == 1

        await uc.execute(1, 3, UpdateOrderRequest(status=OrderStatus.DELIVERED))
        assert inv_store.add_movement.await_count == 1

    async def test_no_consumption_before_trigger(self, order_store, tx_manager, order_policy):
        inv_store = AsyncMock()
        uc = self._uc(order_store, tx_manager, order_policy, inv_store=inv_store)

        order = await uc.execute(1, 3, UpdateOrderRequest(status=OrderStatus.CONFIRMED))

        assert order.stock_consumed is False
        inv_store.add_movement.assert_not_awaited()
