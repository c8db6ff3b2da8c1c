"""API middleware."""

from catering.api.middleware.error_handler import ErrorHandlerMiddleware
from catering.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
