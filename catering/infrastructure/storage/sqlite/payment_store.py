"""SQLite implementation of order payment storage."""

from datetime import datetime

import aiosqlite

from catering.config import get_logger
from catering.core.entities.payment import OrderPayment, PaymentState
from catering.core.exceptions import ConcurrentModificationError
from catering.core.interfaces.payment_store import IPaymentStore
from catering.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from catering.infrastructure.storage.sqlite.rows import parse_datetime

logger = get_logger(__name__)


class SQLitePaymentStore(IPaymentStore):
    """SQLite implementation of order payment storage."""

    async def create_payment(self, payment: OrderPayment) -> OrderPayment:
        now = datetime.utcnow()
        payment.created_at = now
        payment.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO order_payments (
                    business_id, order_id, processor, intent_id, amount,
                    currency, status, refunded_amount, customer_ref,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payment.business_id,
                    payment.order_id,
                    payment.processor,
                    payment.intent_id,
                    payment.amount,
                    payment.currency,
                    payment.status.value,
                    payment.refunded_amount,
                    payment.customer_ref,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            payment.id = cursor.lastrowid
            logger.info(
                "order_payment_created",
                payment_id=payment.id,
                order_id=payment.order_id,
                intent_id=payment.intent_id,
            )
            return payment

    async def get_payment(
        self, business_id: int, payment_id: int
    ) -> OrderPayment | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM order_payments WHERE id = ? AND business_id = ?",
                (payment_id, business_id),
            )
            row = await cursor.fetchone()
            return self._row_to_payment(row) if row else None

    async def update_payment(self, payment: OrderPayment) -> OrderPayment:
        """Compare-and-set status and refunded amount on the version read earlier."""
        now = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE order_payments SET
                    status = ?, refunded_amount = ?,
                    version = version + 1, updated_at = ?
                WHERE id = ? AND business_id = ? AND version = ?
                """,
                (
                    payment.status.value,
                    payment.refunded_amount,
                    now.isoformat(),
                    payment.id,
                    payment.business_id,
                    payment.version,
                ),
            )
            if cursor.rowcount == 0:
                logger.warning(
                    "payment_version_conflict",
                    payment_id=payment.id,
                    expected_version=payment.version,
                )
                raise ConcurrentModificationError("Payment", payment.id)

            logger.info(
                "order_payment_updated",
                payment_id=payment.id,
                status=payment.status.value,
                refunded_amount=payment.refunded_amount,
            )
        return payment.model_copy(update={"version": payment.version + 1, "updated_at": now})

    async def list_for_order(self, business_id: int, order_id: int) -> list[OrderPayment]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM order_payments
                WHERE business_id = ? AND order_id = ?
                ORDER BY id
                """,
                (business_id, order_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_payment(row) for row in rows]

    @staticmethod
    def _row_to_payment(row: aiosqlite.Row) -> OrderPayment:
        return OrderPayment(
            id=row["id"],
            business_id=row["business_id"],
            order_id=row["order_id"],
            processor=row["processor"],
            intent_id=row["intent_id"],
            amount=float(row["amount"]),
            currency=row["currency"],
            status=PaymentState(row["status"]),
            refunded_amount=float(row["refunded_amount"]),
            customer_ref=row["customer_ref"],
            version=row["version"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
