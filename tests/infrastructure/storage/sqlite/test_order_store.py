"""Tests for SQLite order, purchase, menu and payment stores."""

from datetime import date

import pytest

from catering.core.entities import (
    MenuItem,
    MenuItemIngredient,
    Order,
    OrderLineItem,
    OrderPayment,
    OrderStatus,
    PaymentState,
    PaymentStatus,
    Purchase,
    PurchaseLineItem,
    PurchaseStatus,
)
from catering.core.exceptions import ConcurrentModificationError, DuplicateReferenceError
from catering.infrastructure.storage.sqlite import (
    SQLiteMenuStore,
    SQLiteOrderStore,
    SQLitePaymentStore,
    SQLitePurchaseStore,
)


def _order(business_id: int, number: str = "ORD-20240601-000001", **kwargs) -> Order:
    defaults = dict(
        business_id=business_id,
        order_number=number,
        client_name="Sharma Wedding",
        event_date=date(2024, 6, 1),
        guest_count=50,
        price_per_head=500.0,
        total_value=25000.0,
        remaining_balance=25000.0,
    )
    defaults.update(kwargs)
    return Order(**defaults)


class TestOrderStore:
    async def test_create_and_get_with_items(self, business_id):
        store = SQLiteOrderStore()
        order = _order(
            business_id,
            items=[OrderLineItem(item_name="Biryani", quantity=10, unit_price=150)],
            total_value=1500.0,
            remaining_balance=1500.0,
        )
        created = await store.create_order(order)

        fetched = await store.get_order(business_id, created.id)

        assert fetched.order_number == "ORD-20240601-000001"
        assert fetched.event_date == date(2024, 6, 1)
        assert fetched.status == OrderStatus.INQUIRY
        assert len(fetched.items) == 1
        assert fetched.items[0].total_price == 1500.0

    async def test_duplicate_number_rejected(self, business_id):
        store = SQLiteOrderStore()
        await store.create_order(_order(business_id))
        with pytest.raises(DuplicateReferenceError):
            await store.create_order(_order(business_id))

    async def test_update_persists_settlement(self, business_id):
        store = SQLiteOrderStore()
        order = await store.create_order(_order(business_id))
        order.status = OrderStatus.CONFIRMED
        order.settle(10000.0)
        order.stock_consumed = True

        await store.update_order(order)
        fetched = await store.get_order(business_id, order.id)

        assert fetched.status == OrderStatus.CONFIRMED
        assert fetched.advance_received == 10000.0
        assert fetched.remaining_balance == 15000.0
        assert fetched.stock_consumed is True

    async def test_list_latest_event_first(self, business_id):
        store = SQLiteOrderStore()
        await store.create_order(_order(business_id, "ORD-A", event_date=date(2024, 5, 1)))
        await store.create_order(_order(business_id, "ORD-B", event_date=date(2024, 7, 1)))

        numbers = [o.order_number for o in await store.list_orders(business_id)]

        assert numbers == ["ORD-B", "ORD-A"]


class TestPurchaseStore:
    async def test_header_lines_and_status(self, business_id):
        store = SQLitePurchaseStore()
        purchase = await store.create_purchase(
            Purchase(
                business_id=business_id,
                purchase_order_number="PO-20240115-000001",
                supplier_name="Metro Wholesale",
                purchase_date=date(2024, 1, 15),
                items=[PurchaseLineItem(ingredient_name="Rice", quantity=50, unit_price=120)],
            )
        )
        for line in purchase.items:
            line.purchase_id = purchase.id
            await store.add_line(line)

        updated = await store.update_status(
            business_id, purchase.id, payment_status=PaymentStatus.PAID
        )

        assert updated.total_amount == 6000.0
        assert updated.payment_status == PaymentStatus.PAID
        assert updated.status == PurchaseStatus.ORDERED
        assert len(updated.items) == 1

    async def test_update_missing_returns_none(self, business_id):
        store = SQLitePurchaseStore()
        assert await store.update_status(business_id, 999, status=PurchaseStatus.RECEIVED) is None


class TestMenuStore:
    async def test_create_get_and_soft_delete(self, business_id):
        store = SQLiteMenuStore()
        menu_item = await store.create_menu_item(
            MenuItem(
                business_id=business_id,
                name="Veg Biryani",
                cost_per_serving=60.0,
                selling_price=150.0,
                margin_percent=60.0,
                ingredients=[
                    MenuItemIngredient(ingredient_name="Basmati Rice", quantity_required=0.2)
                ],
            )
        )

        fetched = await store.get_menu_item(business_id, menu_item.id)
        assert fetched.margin_percent == 60.0
        assert fetched.ingredients[0].ingredient_name == "Basmati Rice"

        assert await store.soft_delete_menu_item(business_id, menu_item.id) is True
        assert await store.get_menu_item(business_id, menu_item.id) is None
        assert await store.list_menu_items(business_id) == []


class TestPaymentStore:
    async def test_create_update_and_list(self, business_id):
        order = await SQLiteOrderStore().create_order(_order(business_id))
        store = SQLitePaymentStore()
        payment = await store.create_payment(
            OrderPayment(
                business_id=business_id,
                order_id=order.id,
                processor="stripe",
                intent_id="pi_123",
                amount=5000.0,
                currency="inr",
            )
        )
        payment.status = PaymentState.SUCCEEDED
        updated = await store.update_payment(payment)
        assert updated.version == 1

        payments = await store.list_for_order(business_id, order.id)

        assert len(payments) == 1
        assert payments[0].status == PaymentState.SUCCEEDED
        assert payments[0].amount == 5000.0

    async def test_stale_version_rejected(self, business_id):
        order = await SQLiteOrderStore().create_order(_order(business_id))
        store = SQLitePaymentStore()
        created = await store.create_payment(
            OrderPayment(
                business_id=business_id,
                order_id=order.id,
                processor="stripe",
                intent_id="pi_456",
                amount=600.0,
                currency="inr",
            )
        )
        first = await store.get_payment(business_id, created.id)
        second = await store.get_payment(business_id, created.id)

        first.status = PaymentState.SUCCEEDED
        await store.update_payment(first)
        second.status = PaymentState.FAILED
        with pytest.raises(ConcurrentModificationError):
            await store.update_payment(second)

        stored = await store.get_payment(business_id, created.id)
        assert stored.status == PaymentState.SUCCEEDED
        assert stored.version == 1
