"""
Base payment processor with retry and circuit breaker patterns.

Provides resilience patterns for all processor implementations.
"""

import time
from abc import ABC
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar, cast

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from catering.config import get_logger, get_settings
from catering.config.settings import PaymentSettings
from catering.core.exceptions import (
    CircuitBreakerOpenError,
    PaymentProcessorUnavailableError,
)
from catering.core.interfaces.payment_processor import IPaymentProcessor

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class CircuitBreakerState:
    """State for circuit breaker pattern."""

    provider: str = "payment"
    failures: int = 0
    last_failure_time: float = 0.0
    is_open: bool = False
    cooldown_seconds: int = 60
    failure_threshold: int = 3

    def record_failure(self) -> None:
        """Record a failure and potentially open the circuit."""
        self.failures += 1
        self.last_failure_time = time.time()

        if self.failures >= self.failure_threshold:
            self.is_open = True
            logger.warning(
                "circuit_breaker_opened",
                provider=self.provider,
                failures=self.failures,
                cooldown=self.cooldown_seconds,
            )

    def record_success(self) -> None:
        """Record a success and reset the circuit."""
        if self.is_open:
            logger.info("circuit_breaker_closed", provider=self.provider)
        self.failures = 0
        self.is_open = False

    def check(self) -> None:
        """
        Check if circuit allows requests.

        Raises CircuitBreakerOpenError if circuit is open and cooldown not elapsed.
        """
        if not self.is_open:
            return

        elapsed = time.time() - self.last_failure_time
        if elapsed < self.cooldown_seconds:
            raise CircuitBreakerOpenError(self.provider, int(self.cooldown_seconds - elapsed))

        # Cooldown elapsed, allow one request (half-open state)
        logger.info("circuit_breaker_half_open", provider=self.provider)

    @property
    def cooldown_remaining(self) -> int:
        """Seconds remaining in cooldown."""
        if not self.is_open:
            return 0
        elapsed = time.time() - self.last_failure_time
        return max(0, int(self.cooldown_seconds - elapsed))


class BasePaymentProcessor(IPaymentProcessor, ABC):
    """
    Base class for payment processors with resilience patterns.

    Provides:
    - Bounded retries with exponential backoff on transport errors
    - Circuit breaker that trips on repeated unavailability
    """

    provider = "payment"

    def __init__(self, settings: PaymentSettings | None = None) -> None:
        self.settings = settings or get_settings().payment
        self.circuit_breaker = CircuitBreakerState(
            provider=self.provider,
            failure_threshold=self.settings.failure_threshold,
            cooldown_seconds=self.settings.cooldown_seconds,
        )

    @property
    def provider_name(self) -> str:
        return self.provider

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator with current settings."""
        delay = self.settings.retry_delay
        return retry(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=wait_exponential(
                multiplier=delay,
                min=delay,
                max=delay * (self.settings.retry_multiplier**3),
            ),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        """Log retry attempts."""
        logger.warning(
            "payment_processor_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _with_resilience(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Execute operation with retry and circuit breaker.

        Raises:
            CircuitBreakerOpenError: If circuit is open
            PaymentProcessorUnavailableError: If the processor cannot be reached
            PaymentProcessorError: If the processor rejected the request
        """
        self.circuit_breaker.check()

        try:
            retry_decorator = self._get_retry_decorator()
            result = await retry_decorator(operation)(*args, **kwargs)

        except httpx.TimeoutException as e:
            self.circuit_breaker.record_failure()
            raise PaymentProcessorUnavailableError(self.provider, "timeout") from e

        except httpx.TransportError as e:
            self.circuit_breaker.record_failure()
            raise PaymentProcessorUnavailableError(self.provider, str(e)) from e

        except PaymentProcessorUnavailableError:
            self.circuit_breaker.record_failure()
            raise

        self.circuit_breaker.record_success()
        return cast(T, result)
