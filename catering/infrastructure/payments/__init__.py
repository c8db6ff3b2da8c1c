"""Payment processor implementations."""

from catering.config import get_settings
from catering.core.exceptions import ConfigurationError
from catering.infrastructure.payments.base import BasePaymentProcessor, CircuitBreakerState
from catering.infrastructure.payments.stripe import StripePaymentProcessor

_processor: BasePaymentProcessor | None = None


def get_payment_processor() -> BasePaymentProcessor:
    """Get the configured payment processor (singleton)."""
    global _processor
    if _processor is None:
        provider = get_settings().payment.provider
        if provider == "stripe":
            _processor = StripePaymentProcessor()
        else:
            raise ConfigurationError(f"Unknown payment provider: {provider}")
    return _processor


def reset_payment_processor() -> None:
    """Drop the cached processor (used by tests)."""
    global _processor
    _processor = None


__all__ = [
    "BasePaymentProcessor",
    "CircuitBreakerState",
    "StripePaymentProcessor",
    "get_payment_processor",
    "reset_payment_processor",
]
