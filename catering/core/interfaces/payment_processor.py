"""
Abstract interface for the external payment processor.

Only the request/response contract is modeled; amounts are passed in
major currency units and implementations convert as their API requires.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class PaymentIntentResult:
    """Processor view of a payment intent."""

    intent_id: str
    status: str
    amount: float
    currency: str
    client_secret: str | None = None


@dataclass
class RefundResult:
    """Processor view of a refund."""

    refund_id: str
    intent_id: str
    status: str
    amount: float


@dataclass
class ProcessorHealth:
    """Payment processor health status."""

    available: bool
    provider: str
    error: str | None = None
    response_time_ms: float | None = None


class IPaymentProcessor(ABC):
    """
    Abstract interface for payment processors.

    Implementations: StripePaymentProcessor
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    async def create_payment_intent(
        self,
        amount: float,
        currency: str,
        customer_ref: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntentResult:
        """
        Create a payment intent.

        Args:
            amount: Amount in major units
            currency: ISO currency code
            customer_ref: Optional processor customer identifier
            metadata: Extra key/value pairs stored with the intent

        Returns:
            PaymentIntentResult carrying the intent id and client secret
        """
        pass

    @abstractmethod
    async def confirm(self, intent_id: str) -> PaymentIntentResult:
        """Confirm an intent and return its resulting status."""
        pass

    @abstractmethod
    async def create_refund(
        self, intent_id: str, amount: float | None = None
    ) -> RefundResult:
        """Refund all or part of a captured intent."""
        pass

    @abstractmethod
    async def health_check(self) -> ProcessorHealth:
        pass

    async def close(self) -> None:
        """Release client resources."""
        pass
