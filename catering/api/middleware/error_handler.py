"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from catering.application.dto.responses import ErrorResponse
from catering.config import get_logger
from catering.core.exceptions import (
    CateringError,
    CircuitBreakerOpenError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    PaymentProcessorError,
    PaymentProcessorUnavailableError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes (first match wins)
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    PaymentProcessorError: status.HTTP_502_BAD_GATEWAY,
    PaymentProcessorUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    CircuitBreakerOpenError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "BUSINESS_NOT_FOUND": "Check the X-Business-ID header.",
    "INVENTORY_ITEM_NOT_FOUND": "Check the item ID and try GET /api/inventory to list active items.",
    "PURCHASE_NOT_FOUND": "Check the purchase ID and try GET /api/purchases.",
    "ORDER_NOT_FOUND": "Check the order ID and try GET /api/orders.",
    "MENU_ITEM_NOT_FOUND": "Check the menu item ID and try GET /api/menu-items.",
    "PAYMENT_NOT_FOUND": "Check the payment ID and try GET /api/orders/{id}/payments.",
    "ROLE_NOT_FOUND": "Check the role ID and try GET /api/roles.",
    "STAFF_MEMBER_NOT_FOUND": "Check the staff ID and try GET /api/staff.",
    "INSUFFICIENT_STOCK": "Record a purchase or adjustment before removing more stock.",
    "ORDER_OVERPAYMENT": "The advance cannot exceed the order total.",
    "INVALID_STATUS_TRANSITION": "Order status only moves forward: Inquiry, Confirmed, In Progress, Delivered, Closed.",
    "INVALID_SELLING_PRICE": "Selling price must be greater than zero.",
    "INVALID_PAYMENT_AMOUNT": "Check the amount against the remaining or refundable balance.",
    "CONCURRENT_MODIFICATION": "The record changed while saving. Retry the request.",
    "DUPLICATE_REFERENCE": "A reference number collided. Retry the request.",
    "DUPLICATE_ROLE": "Role names are unique within a business. Pick another name.",
    "PAYMENT_PROCESSOR_ERROR": "The payment processor rejected the request. Check the payment details.",
    "PAYMENT_PROCESSOR_UNAVAILABLE": "The payment processor is unreachable. Retry later.",
    "CIRCUIT_BREAKER_OPEN": "Too many payment processor failures. Wait for cooldown before retrying.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicted with a concurrent change. Retry.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "An upstream service returned an error.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions to standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return self._handle_exception(request, e)

    def _handle_exception(
        self,
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Convert exception to standardized JSON response."""
        status_code = _status_for(exc)
        error_code = exc.code if isinstance(exc, CateringError) else exc.__class__.__name__
        request_id = getattr(request.state, "request_id", None)

        if status_code >= 500:
            logger.error(
                "unhandled_exception",
                request_id=request_id,
                path=request.url.path,
                error_type=error_code,
                error=str(exc),
                traceback=traceback.format_exc(),
            )
        else:
            logger.warning(
                "request_rejected",
                request_id=request_id,
                path=request.url.path,
                error_type=error_code,
                error=str(exc),
            )

        detail = None
        if isinstance(exc, CateringError) and exc.details:
            detail = "; ".join(f"{k}={v}" for k, v in exc.details.items() if v is not None)

        error_response = ErrorResponse(
            error_code=error_code,
            message=exc.message if isinstance(exc, CateringError) else str(exc),
            hint=_get_hint(error_code, status_code),
            detail=detail or None,
            path=request.url.path,
        )

        return JSONResponse(
            status_code=status_code,
            content=error_response.model_dump(mode="json"),
        )


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = {
            400: "BAD_REQUEST",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
            422: "UNPROCESSABLE_ENTITY",
        }.get(exc.status_code, "HTTP_ERROR")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )
