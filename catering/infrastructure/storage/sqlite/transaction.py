"""SQLite implementation of the transaction manager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from catering.core.interfaces.transaction import ITransactionManager
from catering.infrastructure.storage.sqlite.connection import get_transaction


class SQLiteTransactionManager(ITransactionManager):
    """Opens a transaction on the global pool; stores called inside join it."""

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with get_transaction():
            yield
