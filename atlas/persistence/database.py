"""Async PostgreSQL engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from atlas.config import Settings

APPLICATION_NAME = "atlas-api"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg-backed engine.

    SQL is echoed in debug mode. Connections are checked before use so that
    a restarted database does not fail the first request after it.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the factory for request sessions.

    Repositories return detached domain models, so nothing needs to be
    reloaded after commit; flushes are issued by the repositories.
    """
    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        autoflush=False,
    )
