"""Order payment entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class PaymentState(str, Enum):
    """Processor-reported state of an order payment."""

    REQUIRES_CONFIRMATION = "requires_confirmation"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    PARTIALLY_REFUNDED = "partially_refunded"
    REFUNDED = "refunded"


class OrderPayment(BaseModel):
    """A processor payment intent recorded against an order."""

    id: int | None = None
    business_id: int
    order_id: int
    processor: str
    intent_id: str
    amount: float = Field(gt=0)
    currency: str
    status: PaymentState = PaymentState.REQUIRES_CONFIRMATION
    refunded_amount: float = 0.0
    customer_ref: str | None = None
    version: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def refundable_amount(self) -> float:
        if self.status not in (PaymentState.SUCCEEDED, PaymentState.PARTIALLY_REFUNDED):
            return 0.0
        return self.amount - self.refunded_amount
