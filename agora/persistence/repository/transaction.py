"""PostgreSQL transaction manager."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Atomic blocks on the request session.

    Inside an already open transaction the block is a SAVEPOINT, so a
    failing block rolls back only its own writes; the request still commits
    or rolls back as a whole when it ends.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        if self.session.in_transaction():
            async with self.session.begin_nested():
                yield
        else:
            async with self.session.begin():
                yield
