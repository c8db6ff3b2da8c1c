"""
Domain exceptions for the catering backend.

Four families surface to callers: not-found, validation, conflict and
upstream failures. Storage errors are internal and map to 500.
"""

from typing import Any


class CateringError(Exception):
    """Base exception for all catering errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Not found
class NotFoundError(CateringError):
    """Referenced entity does not resolve."""

    def __init__(self, entity: str, entity_id: Any, code: str | None = None):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=code or f"{entity.upper().replace(' ', '_')}_NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )


class BusinessNotFoundError(NotFoundError):
    """Business (tenant) not found."""

    def __init__(self, business_id: int):
        super().__init__("Business", business_id)


class InventoryItemNotFoundError(NotFoundError):
    """Inventory item not found or inactive."""

    def __init__(self, item_id: int):
        super().__init__("Inventory item", item_id)


class PurchaseNotFoundError(NotFoundError):
    """Purchase not found."""

    def __init__(self, purchase_id: int):
        super().__init__("Purchase", purchase_id)


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: int):
        super().__init__("Order", order_id)


class MenuItemNotFoundError(NotFoundError):
    """Menu item not found or deleted."""

    def __init__(self, menu_item_id: int):
        super().__init__("Menu item", menu_item_id)


class PaymentNotFoundError(NotFoundError):
    """Order payment not found."""

    def __init__(self, payment_id: int):
        super().__init__("Payment", payment_id)


class RoleNotFoundError(NotFoundError):
    """Role not found in this business."""

    def __init__(self, role_id: int):
        super().__init__("Role", role_id)


class StaffMemberNotFoundError(NotFoundError):
    """Staff member not found or removed."""

    def __init__(self, staff_id: int):
        super().__init__("Staff member", staff_id)


# Validation
class ValidationError(CateringError):
    """Input validation failed."""

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code=code,
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(ValidationError):
    """A movement would drive stock below zero."""

    def __init__(self, item_id: int, requested: float, available: float):
        super().__init__(
            field="quantity",
            message=f"Insufficient stock for item {item_id}: "
            f"requested {abs(requested)}, available {available}",
            value=requested,
            code="INSUFFICIENT_STOCK",
        )
        self.details.update({"item_id": item_id, "available": available})


class OverpaymentError(ValidationError):
    """Advance received exceeds the order total."""

    def __init__(self, order_id: int, advance_received: float, total_value: float):
        super().__init__(
            field="advance_received",
            message=f"Advance {advance_received} exceeds order total {total_value}",
            value=advance_received,
            code="ORDER_OVERPAYMENT",
        )
        self.details.update({"order_id": order_id, "total_value": total_value})


class InvalidStatusTransitionError(ValidationError):
    """Order status may only move forward."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            field="status",
            message=f"Cannot move order from '{current}' back to '{requested}'",
            value=requested,
            code="INVALID_STATUS_TRANSITION",
        )
        self.details.update({"current": current, "requested": requested})


class InvalidSellingPriceError(ValidationError):
    """Margin is undefined for a non-positive selling price."""

    def __init__(self, selling_price: float):
        super().__init__(
            field="selling_price",
            message="Selling price must be greater than zero",
            value=selling_price,
            code="INVALID_SELLING_PRICE",
        )


class InvalidPaymentAmountError(ValidationError):
    """Payment or refund amount out of range."""

    def __init__(self, amount: float, limit: float, reason: str):
        super().__init__(
            field="amount",
            message=f"{reason} (amount {amount}, limit {limit})",
            value=amount,
            code="INVALID_PAYMENT_AMOUNT",
        )
        self.details["limit"] = limit


# Conflict
class ConflictError(CateringError):
    """Concurrent mutation or uniqueness clash; the caller may retry."""

    pass


class ConcurrentModificationError(ConflictError):
    """Row changed between read and write."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently",
            code="CONCURRENT_MODIFICATION",
            details={"entity": entity, "id": entity_id},
        )


class DuplicateReferenceError(ConflictError):
    """Generated reference number already taken."""

    def __init__(self, reference: str):
        super().__init__(
            f"Reference number already exists: {reference}",
            code="DUPLICATE_REFERENCE",
            details={"reference": reference},
        )


class DuplicateRoleError(ConflictError):
    """Role name already used in this business."""

    def __init__(self, name: str):
        super().__init__(
            f"Role already exists: {name}",
            code="DUPLICATE_ROLE",
            details={"name": name},
        )


# Storage
class StorageError(CateringError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Upstream
class UpstreamError(CateringError):
    """An external collaborator failed or timed out."""

    pass


class PaymentProcessorError(UpstreamError):
    """Payment processor rejected the request."""

    def __init__(self, provider: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Payment processor {provider} error: {reason}",
            code="PAYMENT_PROCESSOR_ERROR",
            details={"provider": provider, "reason": reason, "status_code": status_code},
        )


class PaymentProcessorUnavailableError(UpstreamError):
    """Payment processor unreachable or timed out."""

    def __init__(self, provider: str, reason: str | None = None):
        super().__init__(
            f"Payment processor unavailable: {provider}" + (f" - {reason}" if reason else ""),
            code="PAYMENT_PROCESSOR_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class CircuitBreakerOpenError(UpstreamError):
    """Circuit breaker is open due to repeated failures."""

    def __init__(self, provider: str, cooldown_remaining: int):
        super().__init__(
            f"Circuit breaker open for {provider}, retry in {cooldown_remaining}s",
            code="CIRCUIT_BREAKER_OPEN",
            details={"provider": provider, "cooldown_remaining": cooldown_remaining},
        )


class ConfigurationError(CateringError):
    """Configuration error."""

    pass
