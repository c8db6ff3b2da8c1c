"""Tests for order entities."""

import pytest

from catering.core.entities.order import (
    OPEN_STATUSES,
    Order,
    OrderLineItem,
    OrderStatus,
    compute_order_total,
)


class TestOrderStatus:
    def test_ranks_follow_lifecycle(self):
        ranks = [s.rank for s in OrderStatus]
        assert ranks == [0, 1, 2, 3, 4]
        assert OrderStatus.IN_PROGRESS.value == "In Progress"

    def test_forward_moves_allowed(self):
        assert OrderStatus.INQUIRY.can_move_to(OrderStatus.CONFIRMED)
        assert OrderStatus.INQUIRY.can_move_to(OrderStatus.DELIVERED)

    def test_same_status_allowed(self):
        assert OrderStatus.CONFIRMED.can_move_to(OrderStatus.CONFIRMED)

    def test_backward_move_rejected(self):
        assert not OrderStatus.DELIVERED.can_move_to(OrderStatus.CONFIRMED)

    def test_open_statuses(self):
        assert OrderStatus.CLOSED not in OPEN_STATUSES
        assert OrderStatus.DELIVERED not in OPEN_STATUSES
        assert OrderStatus.IN_PROGRESS in OPEN_STATUSES


class TestOrderTotals:
    def test_line_total(self):
        line = OrderLineItem(item_name="Paneer Tikka", quantity=4, unit_price=250)
        assert line.total_price == 1000.0

    def test_total_from_guests(self):
        assert compute_order_total(50, 500.0, []) == 25000.0

    def test_items_override_per_head(self):
        items = [
            OrderLineItem(item_name="Biryani", quantity=10, unit_price=150),
            OrderLineItem(item_name="Raita", quantity=10, unit_price=40),
        ]
        assert compute_order_total(50, 500.0, items) == 1900.0


class TestOrderSettle:
    def test_settle_recomputes_balance(self):
        order = Order(
            business_id=1,
            order_number="ORD-20240101-000001",
            client_name="Mehta",
            total_value=25000.0,
            remaining_balance=25000.0,
        )
        order.settle(10000.0)
        assert order.advance_received == 10000.0
        assert order.remaining_balance == 15000.0

    def test_negative_advance_rejected(self):
        with pytest.raises(ValueError):
            Order(
                business_id=1,
                order_number="ORD-20240101-000001",
                client_name="Mehta",
                advance_received=-1,
            )
