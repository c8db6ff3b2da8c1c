"""
Order payment use cases: create, confirm and refund through the processor.

Processor calls happen outside any database transaction. Payment state is
re-read inside the write transaction and persisted with a version
compare-and-set, so a payment is credited to its order at most once and
refunds never exceed what was captured.
"""

from dataclasses import dataclass

from catering.application.dto.requests import CreatePaymentRequest, RefundPaymentRequest
from catering.application.dto.responses import (
    OrderPaymentResponse,
    OrderResponse,
    PaymentSettlementResponse,
)
from catering.config import get_logger, get_settings
from catering.core.entities.order import Order
from catering.core.entities.payment import OrderPayment, PaymentState
from catering.core.exceptions import (
    InvalidPaymentAmountError,
    OrderNotFoundError,
    OverpaymentError,
    PaymentNotFoundError,
)
from catering.core.interfaces.order_store import IOrderStore
from catering.core.interfaces.payment_processor import IPaymentProcessor
from catering.core.interfaces.payment_store import IPaymentStore
from catering.core.interfaces.transaction import ITransactionManager

logger = get_logger(__name__)

SETTLED_STATES = (
    PaymentState.SUCCEEDED,
    PaymentState.PARTIALLY_REFUNDED,
    PaymentState.REFUNDED,
)


@dataclass
class PaymentSettlementResult:
    """A payment and the order it applies to."""

    payment: OrderPayment
    order: Order
    client_secret: str | None = None


class _OrderPaymentUseCase:
    def __init__(
        self,
        order_store: IOrderStore | None = None,
        payment_store: IPaymentStore | None = None,
        payment_processor: IPaymentProcessor | None = None,
        transaction_manager: ITransactionManager | None = None,
        reject_overpayment: bool | None = None,
    ):
        self._order_store = order_store
        self._payment_store = payment_store
        self._payment_processor = payment_processor
        self._transaction_manager = transaction_manager
        if reject_overpayment is None:
            reject_overpayment = get_settings().orders.reject_overpayment
        self._reject_overpayment = reject_overpayment

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from catering.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_payment_store(self) -> IPaymentStore:
        if self._payment_store is None:
            from catering.infrastructure.storage.sqlite import get_payment_store

            self._payment_store = await get_payment_store()
        return self._payment_store

    def _get_payment_processor(self) -> IPaymentProcessor:
        if self._payment_processor is None:
            from catering.infrastructure.payments import get_payment_processor

            self._payment_processor = get_payment_processor()
        return self._payment_processor

    async def _get_transaction_manager(self) -> ITransactionManager:
        if self._transaction_manager is None:
            from catering.infrastructure.storage.sqlite import get_transaction_manager

            self._transaction_manager = await get_transaction_manager()
        return self._transaction_manager

    async def _load_order(self, business_id: int, order_id: int) -> Order:
        order = await (await self._get_order_store()).get_order(business_id, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def _load_payment(self, business_id: int, payment_id: int) -> OrderPayment:
        payment = await (await self._get_payment_store()).get_payment(business_id, payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    def _check_overpayment(self, order: Order, amount: float) -> None:
        advance = order.advance_received + amount
        if advance <= order.total_value:
            return
        if self._reject_overpayment:
            raise OverpaymentError(order.id, advance, order.total_value)  # type: ignore[arg-type]
        logger.warning(
            "order_overpayment",
            order_id=order.id,
            advance_received=advance,
            total_value=order.total_value,
        )

    def to_response(self, result: PaymentSettlementResult) -> PaymentSettlementResponse:
        return PaymentSettlementResponse(
            payment=OrderPaymentResponse.from_entity(result.payment, result.client_secret),
            order=OrderResponse.from_entity(result.order),
        )


class CreateOrderPaymentUseCase(_OrderPaymentUseCase):
    """Open a payment intent for part or all of an order's remaining balance."""

    async def execute(
        self, business_id: int, order_id: int, request: CreatePaymentRequest
    ) -> PaymentSettlementResult:
        order = await self._load_order(business_id, order_id)
        if request.amount > order.remaining_balance:
            raise InvalidPaymentAmountError(
                request.amount,
                order.remaining_balance,
                "Payment exceeds remaining balance",
            )

        processor = self._get_payment_processor()
        currency = (request.currency or get_settings().payment.currency).lower()
        intent = await processor.create_payment_intent(
            request.amount,
            currency,
            customer_ref=request.customer_ref,
            metadata={"order_id": str(order.id), "order_number": order.order_number},
        )

        payment_store = await self._get_payment_store()
        tx = await self._get_transaction_manager()
        async with tx.transaction():
            payment = await payment_store.create_payment(
                OrderPayment(
                    business_id=business_id,
                    order_id=order_id,
                    processor=processor.provider_name,
                    intent_id=intent.intent_id,
                    amount=request.amount,
                    currency=currency,
                    status=PaymentState.REQUIRES_CONFIRMATION,
                    customer_ref=request.customer_ref,
                )
            )

        return PaymentSettlementResult(
            payment=payment, order=order, client_secret=intent.client_secret
        )


class ConfirmOrderPaymentUseCase(_OrderPaymentUseCase):
    """Confirm a payment; on success the amount is added to the order's advance."""

    async def execute(self, business_id: int, payment_id: int) -> PaymentSettlementResult:
        payment = await self._load_payment(business_id, payment_id)

        if payment.status in SETTLED_STATES:
            logger.info("payment_already_settled", payment_id=payment_id)
            order = await self._load_order(business_id, payment.order_id)
            return PaymentSettlementResult(payment=payment, order=order)

        order = await self._load_order(business_id, payment.order_id)
        self._check_overpayment(order, payment.amount)

        intent = await self._get_payment_processor().confirm(payment.intent_id)

        order_store = await self._get_order_store()
        payment_store = await self._get_payment_store()
        tx = await self._get_transaction_manager()

        async with tx.transaction():
            # Another confirm may have settled this payment while the
            # processor call was in flight; only the first one credits.
            payment = await self._load_payment(business_id, payment_id)
            order = await self._load_order(business_id, payment.order_id)
            if payment.status in SETTLED_STATES:
                logger.info("payment_already_settled", payment_id=payment_id)
                return PaymentSettlementResult(payment=payment, order=order)

            if intent.status == "succeeded":
                self._check_overpayment(order, payment.amount)
                payment.status = PaymentState.SUCCEEDED
                order.settle(order.advance_received + payment.amount)
                order = await order_store.update_order(order)
                payment = await payment_store.update_payment(payment)
            elif intent.status == "canceled":
                payment.status = PaymentState.FAILED
                payment = await payment_store.update_payment(payment)

        logger.info(
            "payment_confirmation_processed",
            payment_id=payment_id,
            processor_status=intent.status,
            remaining_balance=order.remaining_balance,
        )
        return PaymentSettlementResult(payment=payment, order=order)


def _refund_state(payment: OrderPayment) -> PaymentState:
    if payment.refunded_amount <= 0:
        return PaymentState.SUCCEEDED
    if payment.refunded_amount >= payment.amount:
        return PaymentState.REFUNDED
    return PaymentState.PARTIALLY_REFUNDED


class RefundOrderPaymentUseCase(_OrderPaymentUseCase):
    """
    Refund a settled payment; the refund is taken off the order's advance.

    The refund is reserved on the payment row before the processor is
    called, so concurrent refunds cannot together exceed the captured
    amount. A processor failure releases the reservation again.
    """

    async def execute(
        self, business_id: int, payment_id: int, request: RefundPaymentRequest
    ) -> PaymentSettlementResult:
        payment_store = await self._get_payment_store()
        tx = await self._get_transaction_manager()

        async with tx.transaction():
            payment = await self._load_payment(business_id, payment_id)
            refundable = payment.refundable_amount
            amount = request.amount if request.amount is not None else refundable

            if refundable <= 0 or amount > refundable:
                raise InvalidPaymentAmountError(
                    amount, refundable, "Refund exceeds refundable amount"
                )

            payment.refunded_amount += amount
            payment.status = _refund_state(payment)
            payment = await payment_store.update_payment(payment)

        try:
            await self._get_payment_processor().create_refund(payment.intent_id, amount)
        except Exception:
            await self._release_reservation(business_id, payment_id, amount)
            raise

        order_store = await self._get_order_store()
        async with tx.transaction():
            order = await self._load_order(business_id, payment.order_id)
            advance = order.advance_received - amount
            if advance < 0:
                logger.warning(
                    "refund_exceeds_advance",
                    order_id=order.id,
                    advance_received=order.advance_received,
                    refund=amount,
                )
                advance = 0.0
            order.settle(advance)
            order = await order_store.update_order(order)

        logger.info(
            "payment_refunded",
            payment_id=payment_id,
            amount=amount,
            remaining_balance=order.remaining_balance,
        )
        return PaymentSettlementResult(payment=payment, order=order)

    async def _release_reservation(
        self, business_id: int, payment_id: int, amount: float
    ) -> None:
        payment_store = await self._get_payment_store()
        tx = await self._get_transaction_manager()
        async with tx.transaction():
            payment = await self._load_payment(business_id, payment_id)
            payment.refunded_amount = max(payment.refunded_amount - amount, 0.0)
            payment.status = _refund_state(payment)
            await payment_store.update_payment(payment)
        logger.warning(
            "refund_reservation_released",
            payment_id=payment_id,
            amount=amount,
            refunded_amount=payment.refunded_amount,
        )
