"""Tests for purchase and payment entities."""

from catering.core.entities.payment import OrderPayment, PaymentState
from catering.core.entities.purchase import (
    PaymentStatus,
    Purchase,
    PurchaseLineItem,
    PurchaseStatus,
)


class TestPurchase:
    def test_line_total(self):
        line = PurchaseLineItem(ingredient_name="Basmati Rice", quantity=50, unit_price=120)
        assert line.total_price == 6000.0

    def test_totals_from_items(self):
        purchase = Purchase(
            business_id=1,
            purchase_order_number="PO-20240115-ABCDEF",
            items=[
                PurchaseLineItem(ingredient_name="Rice", quantity=50, unit_price=120),
                PurchaseLineItem(ingredient_name="Ghee", quantity=5, unit_price=600),
            ],
        )
        assert purchase.total_amount == 9000.0
        assert purchase.final_amount == 9000.0

    def test_defaults(self):
        purchase = Purchase(business_id=1, purchase_order_number="PO-20240115-ABCDEF")
        assert purchase.payment_status == PaymentStatus.PENDING
        assert purchase.status == PurchaseStatus.ORDERED
        assert purchase.total_amount == 0.0


class TestOrderPayment:
    def _payment(self, **kwargs) -> OrderPayment:
        defaults = dict(
            business_id=1,
            order_id=3,
            processor="stripe",
            intent_id="pi_123",
            amount=5000.0,
            currency="inr",
        )
        defaults.update(kwargs)
        return OrderPayment(**defaults)

    def test_unconfirmed_payment_not_refundable(self):
        assert self._payment().refundable_amount == 0.0

    def test_refundable_after_partial_refund(self):
        payment = self._payment(
            status=PaymentState.PARTIALLY_REFUNDED, refunded_amount=1500.0
        )
        assert payment.refundable_amount == 3500.0

    def test_fully_refunded_not_refundable(self):
        payment = self._payment(status=PaymentState.REFUNDED, refunded_amount=5000.0)
        assert payment.refundable_amount == 0.0
