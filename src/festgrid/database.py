"""Database engine and session factories for the document store."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from festgrid.config import settings


def create_session_factory(
    database_url: str | None = None,
    echo: bool = False,
) -> async_sessionmaker[AsyncSession]:
    """
    Build an async session factory bound to its own engine.

    Args:
        database_url: Async SQLAlchemy URL (the configured database if not provided)
        echo: Log every SQL statement

    Returns:
        Session factory yielding sessions that keep loaded documents usable after commit
    """
    engine = create_async_engine(database_url or settings.database_url, echo=echo, future=True)
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Application-wide factory; the engine connects lazily on first use
AsyncSessionLocal = create_session_factory()
