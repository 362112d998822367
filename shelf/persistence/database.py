"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from shelf.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine.

    SQL is echoed in debug mode. Connections carry an application name so
    sweep row locks can be told apart from API traffic in ``pg_stat_activity``,
    and a statement stuck behind a lock fails after ``command_timeout`` seconds.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={
            "server_settings": {"application_name": f"shelf-{settings.environment}"},
            "command_timeout": settings.database.command_timeout,
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used for each request scope.

    Objects stay readable after commit, and repositories flush explicitly so
    constraint errors surface inside the service that caused them.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
