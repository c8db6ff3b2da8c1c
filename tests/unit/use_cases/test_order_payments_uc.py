"""Tests for the order payment use cases."""

from unittest.mock import AsyncMock

import pytest

from catering.application.dto.requests import CreatePaymentRequest, RefundPaymentRequest
from catering.application.use_cases.order_payments import (
    ConfirmOrderPaymentUseCase,
    CreateOrderPaymentUseCase,
    RefundOrderPaymentUseCase,
)
from catering.core.entities import OrderPayment, PaymentState
from catering.core.exceptions import (
    InvalidPaymentAmountError,
    OverpaymentError,
    PaymentNotFoundError,
    PaymentProcessorError,
    PaymentProcessorUnavailableError,
)
from catering.core.interfaces.payment_processor import PaymentIntentResult, RefundResult


@pytest.fixture
def order_store(wedding_order):
    store = AsyncMock()
    store.get_order.return_value = wedding_order
    store.update_order.side_effect = lambda o: o
    return store


@pytest.fixture
def payment():
    return OrderPayment(
        id=21,
        business_id=1,
        order_id=3,
        processor="stripe",
        intent_id="pi_123",
        amount=10000.0,
        currency="inr",
    )


@pytest.fixture
def payment_store(payment):
    store = AsyncMock()
    store.create_payment.side_effect = lambda p: p.model_copy(update={"id": 21})
    store.get_payment.return_value = payment
    store.update_payment.side_effect = lambda p: p
    return store


@pytest.fixture
def processor():
    proc = AsyncMock()
    proc.provider_name = "stripe"
    proc.create_payment_intent.return_value = PaymentIntentResult(
        intent_id="pi_123",
        status="requires_confirmation",
        amount=10000.0,
        currency="inr",
        client_secret="pi_123_secret",
    )
    proc.confirm.return_value = PaymentIntentResult(
        intent_id="pi_123", status="succeeded", amount=10000.0, currency="inr"
    )
    proc.create_refund.return_value = RefundResult(
        refund_id="re_1", intent_id="pi_123", status="succeeded", amount=0.0
    )
    return proc


@pytest.fixture
def stores(order_store, payment_store, processor, tx_manager):
    return dict(
        order_store=order_store,
        payment_store=payment_store,
        payment_processor=processor,
        transaction_manager=tx_manager,
        reject_overpayment=True,
    )


class TestCreatePayment:
    async def test_creates_pending_payment(self, stores, processor):
        uc = CreateOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 3, CreatePaymentRequest(amount=10000, currency="INR"))

        assert result.payment.status == PaymentState.REQUIRES_CONFIRMATION
        assert result.payment.currency == "inr"
        assert result.client_secret == "pi_123_secret"
        assert result.order.advance_received == 0.0
        processor.create_payment_intent.assert_awaited_once()

    async def test_amount_above_balance_rejected(self, stores, processor):
        uc = CreateOrderPaymentUseCase(**stores)

        with pytest.raises(InvalidPaymentAmountError):
            await uc.execute(1, 3, CreatePaymentRequest(amount=25000.01))
        processor.create_payment_intent.assert_not_awaited()

    async def test_processor_down_writes_nothing(self, stores, processor, payment_store):
        processor.create_payment_intent.side_effect = PaymentProcessorUnavailableError("stripe")
        uc = CreateOrderPaymentUseCase(**stores)

        with pytest.raises(PaymentProcessorUnavailableError):
            await uc.execute(1, 3, CreatePaymentRequest(amount=1000))
        payment_store.create_payment.assert_not_awaited()

    async def test_response_carries_client_secret(self, stores):
        uc = CreateOrderPaymentUseCase(**stores)
        result = await uc.execute(1, 3, CreatePaymentRequest(amount=1000))

        response = uc.to_response(result)

        assert response.payment.client_secret == "pi_123_secret"
        assert response.order.remaining_balance == 25000.0


class TestConfirmPayment:
    async def test_success_settles_order(self, stores, tx_manager):
        uc = ConfirmOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 21)

        assert result.payment.status == PaymentState.SUCCEEDED
        assert result.order.advance_received == 10000.0
        assert result.order.remaining_balance == 15000.0
        assert tx_manager.committed == 1

    async def test_already_settled_is_idempotent(self, stores, payment, processor, order_store):
        payment.status = PaymentState.SUCCEEDED
        uc = ConfirmOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 21)

        assert result.payment.status == PaymentState.SUCCEEDED
        processor.confirm.assert_not_awaited()
        order_store.update_order.assert_not_awaited()

    async def test_canceled_marks_failed(self, stores, processor, order_store):
        processor.confirm.return_value = PaymentIntentResult(
            intent_id="pi_123", status="canceled", amount=10000.0, currency="inr"
        )
        uc = ConfirmOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 21)

        assert result.payment.status == PaymentState.FAILED
        order_store.update_order.assert_not_awaited()

    async def test_overpayment_checked_before_processor(self, stores, processor, wedding_order):
        wedding_order.settle(20000.0)
        uc = ConfirmOrderPaymentUseCase(**stores)

        with pytest.raises(OverpaymentError):
            await uc.execute(1, 21)
        processor.confirm.assert_not_awaited()

    async def test_missing_payment(self, stores, payment_store):
        payment_store.get_payment.return_value = None
        uc = ConfirmOrderPaymentUseCase(**stores)

        with pytest.raises(PaymentNotFoundError):
            await uc.execute(1, 99)

    async def test_settled_while_confirming_credits_once(
        self, stores, payment, payment_store, order_store
    ):
        settled = payment.model_copy(update={"status": PaymentState.SUCCEEDED, "version": 1})
        payment_store.get_payment.side_effect = [payment, settled]
        uc = ConfirmOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 21)

        assert result.payment.status == PaymentState.SUCCEEDED
        order_store.update_order.assert_not_awaited()
        payment_store.update_payment.assert_not_awaited()

    async def test_overpayment_rechecked_on_fresh_order(
        self, stores, processor, order_store, wedding_order, tx_manager
    ):
        credited = wedding_order.model_copy(deep=True)
        credited.settle(20000.0)
        order_store.get_order.side_effect = [wedding_order, credited]
        uc = ConfirmOrderPaymentUseCase(**stores)

        with pytest.raises(OverpaymentError):
            await uc.execute(1, 21)
        processor.confirm.assert_awaited_once()
        order_store.update_order.assert_not_awaited()
        assert tx_manager.rolled_back == 1


class TestRefundPayment:
    async def test_partial_refund(self, stores, payment, wedding_order, processor):
        payment.status = PaymentState.SUCCEEDED
        wedding_order.settle(10000.0)
        uc = RefundOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 21, RefundPaymentRequest(amount=4000))

        assert result.payment.status == PaymentState.PARTIALLY_REFUNDED
        assert result.payment.refunded_amount == 4000.0
        assert result.order.advance_received == 6000.0
        assert result.order.remaining_balance == 19000.0
        processor.create_refund.assert_awaited_once_with("pi_123", 4000)

    async def test_full_refund_by_default(self, stores, payment, wedding_order):
        payment.status = PaymentState.SUCCEEDED
        wedding_order.settle(10000.0)
        uc = RefundOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 21, RefundPaymentRequest())

        assert result.payment.status == PaymentState.REFUNDED
        assert result.order.advance_received == 0.0

    async def test_refund_of_unconfirmed_rejected(self, stores, processor):
        uc = RefundOrderPaymentUseCase(**stores)

        with pytest.raises(InvalidPaymentAmountError):
            await uc.execute(1, 21, RefundPaymentRequest(amount=100))
        processor.create_refund.assert_not_awaited()

    async def test_refund_above_refundable_rejected(self, stores, payment):
        payment.status = PaymentState.PARTIALLY_REFUNDED
        payment.refunded_amount = 8000.0
        uc = RefundOrderPaymentUseCase(**stores)

        with pytest.raises(InvalidPaymentAmountError):
            await uc.execute(1, 21, RefundPaymentRequest(amount=2500))

    async def test_advance_never_negative(self, stores, payment, wedding_order):
        """A refund larger than the recorded advance clamps it at zero."""
        payment.status = PaymentState.SUCCEEDED
        wedding_order.settle(3000.0)
        uc = RefundOrderPaymentUseCase(**stores)

        result = await uc.execute(1, 21, RefundPaymentRequest(amount=5000))

        assert result.order.advance_received == 0.0
        assert result.order.remaining_balance == 25000.0

    async def test_refund_reserved_before_processor(
        self, stores, payment, processor, payment_store
    ):
        payment.status = PaymentState.SUCCEEDED
        seen = {}

        async def create_refund(intent_id, amount):
            reserved = payment_store.update_payment.call_args.args[0]
            seen["refunded_amount"] = reserved.refunded_amount
            return RefundResult(
                refund_id="re_1", intent_id=intent_id, status="succeeded", amount=amount
            )

        processor.create_refund.side_effect = create_refund
        uc = RefundOrderPaymentUseCase(**stores)

        await uc.execute(1, 21, RefundPaymentRequest(amount=4000))

        assert seen["refunded_amount"] == 4000.0

    async def test_processor_failure_releases_reservation(
        self, stores, payment, processor, payment_store, order_store
    ):
        payment.status = PaymentState.SUCCEEDED
        processor.create_refund.side_effect = PaymentProcessorError("stripe", "card_declined")
        uc = RefundOrderPaymentUseCase(**stores)

        with pytest.raises(PaymentProcessorError):
            await uc.execute(1, 21, RefundPaymentRequest(amount=4000))

        assert payment.refunded_amount == 0.0
        assert payment.status == PaymentState.SUCCEEDED
        assert payment_store.update_payment.await_count == 2
        order_store.update_order.assert_not_awaited()
