"""In-memory transaction manager for testing."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from agora.domain.repository.transaction import TransactionManager


class InMemoryTransactionManager(TransactionManager):
    """Serializes atomic blocks with a lock.

    Writes made before an exception are not undone; services raise their
    domain errors before writing.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        async with self._lock:
            yield
