"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from atlas.config import Settings
from atlas.domain.repository import (
    AccountRepository,
    IdentityLinkRepository,
    MetricEventRepository,
    TransactionManager,
)
from atlas.persistence.database import create_engine, create_session_factory
from atlas.persistence.repository import (
    PostgresAccountRepository,
    PostgresIdentityLinkRepository,
    PostgresMetricEventRepository,
    PostgresTransactionManager,
)
from atlas.util.di.base import ProviderBase
from atlas.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if an exception was raised. Routes that turn
        a failure into a normal response rely on units of work opened through
        the transaction manager to discard their partial writes.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_identity_link_repository(
        self, session: AsyncSession
    ) -> IdentityLinkRepository:
        """Provide IdentityLink repository."""
        return PostgresIdentityLinkRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_metric_event_repository(
        self, session: AsyncSession
    ) -> MetricEventRepository:
        """Provide MetricEvent repository."""
        return PostgresMetricEventRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, session: AsyncSession) -> TransactionManager:
        """Provide savepoint-backed transaction manager."""
        return PostgresTransactionManager(session)
