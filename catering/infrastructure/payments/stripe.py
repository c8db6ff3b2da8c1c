"""
Stripe-compatible payment processor.

Talks to the payment intents and refunds endpoints with form-encoded
requests authenticated by a bearer secret key. Amounts cross the wire in
minor units.
"""

import time

import httpx

from catering.config import get_logger
from catering.config.settings import PaymentSettings
from catering.core.exceptions import (
    PaymentProcessorError,
    PaymentProcessorUnavailableError,
)
from catering.core.interfaces.payment_processor import (
    PaymentIntentResult,
    ProcessorHealth,
    RefundResult,
)
from catering.infrastructure.payments.base import BasePaymentProcessor

logger = get_logger(__name__)


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def from_minor_units(amount: int) -> float:
    return amount / 100


class StripePaymentProcessor(BasePaymentProcessor):
    """Stripe HTTP API client."""

    provider = "stripe"

    def __init__(
        self,
        settings: PaymentSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(settings)
        self.api_base = self.settings.api_base.rstrip("/")
        self.timeout = self.settings.timeout
        self._transport = transport

    def _client(self, timeout: float | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_base,
            headers={"Authorization": f"Bearer {self.settings.secret_key}"},
            timeout=timeout or self.timeout,
            transport=self._transport,
        )

    async def _make_request(self, endpoint: str, data: dict | None = None) -> dict:
        """POST a form-encoded request and return the decoded body."""
        async with self._client() as client:
            response = await client.post(f"/{endpoint}", data=data or {})

        if response.status_code >= 500 or response.status_code == 429:
            raise PaymentProcessorUnavailableError(
                self.provider, f"HTTP {response.status_code}"
            )

        if response.status_code >= 400:
            try:
                message = response.json().get("error", {}).get("message")
            except ValueError:
                message = None
            raise PaymentProcessorError(
                self.provider,
                message or response.text[:200],
                status_code=response.status_code,
            )

        return response.json()

    @staticmethod
    def _to_intent(body: dict) -> PaymentIntentResult:
        return PaymentIntentResult(
            intent_id=body["id"],
            status=body["status"],
            amount=from_minor_units(body["amount"]),
            currency=body["currency"],
            client_secret=body.get("client_secret"),
        )

    async def create_payment_intent(
        self,
        amount: float,
        currency: str,
        customer_ref: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntentResult:
        data: dict[str, str | int] = {
            "amount": to_minor_units(amount),
            "currency": currency.lower(),
        }
        if customer_ref:
            data["customer"] = customer_ref
        for key, value in (metadata or {}).items():
            data[f"metadata[{key}]"] = value

        body = await self._with_resilience(self._make_request, "payment_intents", data)
        result = self._to_intent(body)
        logger.info(
            "payment_intent_created",
            provider=self.provider,
            intent_id=result.intent_id,
            status=result.status,
        )
        return result

    async def confirm(self, intent_id: str) -> PaymentIntentResult:
        body = await self._with_resilience(
            self._make_request, f"payment_intents/{intent_id}/confirm"
        )
        result = self._to_intent(body)
        logger.info(
            "payment_intent_confirmed",
            provider=self.provider,
            intent_id=intent_id,
            status=result.status,
        )
        return result

    async def create_refund(
        self, intent_id: str, amount: float | None = None
    ) -> RefundResult:
        data: dict[str, str | int] = {"payment_intent": intent_id}
        if amount is not None:
            data["amount"] = to_minor_units(amount)

        body = await self._with_resilience(self._make_request, "refunds", data)
        logger.info(
            "payment_refund_created",
            provider=self.provider,
            intent_id=intent_id,
            refund_id=body["id"],
        )
        return RefundResult(
            refund_id=body["id"],
            intent_id=intent_id,
            status=body["status"],
            amount=from_minor_units(body["amount"]),
        )

    async def health_check(self) -> ProcessorHealth:
        """Check that the API is reachable with the configured key."""
        if not self.settings.secret_key:
            return ProcessorHealth(
                available=False,
                provider=self.provider,
                error="PAYMENT_SECRET_KEY is not set",
            )

        start_time = time.time()
        try:
            async with self._client(timeout=10) as client:
                response = await client.get("/balance")
        except httpx.HTTPError as e:
            return ProcessorHealth(available=False, provider=self.provider, error=str(e))

        if response.status_code != 200:
            return ProcessorHealth(
                available=False,
                provider=self.provider,
                error=f"HTTP {response.status_code}",
            )

        return ProcessorHealth(
            available=True,
            provider=self.provider,
            response_time_ms=(time.time() - start_time) * 1000,
        )
