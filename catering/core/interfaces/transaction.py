"""Abstract interface for transactional scope."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class ITransactionManager(ABC):
    """
    Opens a unit of work.

    Store calls made inside the scope share one database transaction;
    the scope commits on normal exit and rolls back on any exception.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        pass
