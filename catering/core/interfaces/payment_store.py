"""Abstract interface for order payment storage."""

from abc import ABC, abstractmethod

from catering.core.entities.payment import OrderPayment


class IPaymentStore(ABC):
    """Interface for order payment persistence."""

    @abstractmethod
    async def create_payment(self, payment: OrderPayment) -> OrderPayment:
        pass

    @abstractmethod
    async def get_payment(
        self, business_id: int, payment_id: int
    ) -> OrderPayment | None:
        pass

    @abstractmethod
    async def update_payment(self, payment: OrderPayment) -> OrderPayment:
        """
        Persist status and refunded amount if the stored version still
        matches ``payment.version``; bumps the version on success.

        Raises:
            ConcurrentModificationError: The row changed since it was read.
        """
        pass

    @abstractmethod
    async def list_for_order(self, business_id: int, order_id: int) -> list[OrderPayment]:
        pass
