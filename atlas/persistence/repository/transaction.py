"""Transaction manager backed by PostgreSQL savepoints."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from atlas.domain.repository.transaction import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Runs each unit of work in a SAVEPOINT of the request session.

    The request transaction still owns the final commit; a failed block is
    rolled back to its savepoint so that the rest of the request is unaffected.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield
