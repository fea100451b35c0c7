"""Async SQLAlchemy engine and session helpers.

Provides a configured async engine, sessionmaker and helper functions for
initializing the database and yielding sessions for dependency injection.
"""

from anganwadi.config.config import settings
from anganwadi.core.logging import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for ``database_url``.

    Connection pool sizing is only applied to server databases; SQLite
    drivers use their own pool classes that reject those arguments.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)
    return create_async_engine(database_url, echo=echo, pool_size=5, max_overflow=10)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL_ASYNC, echo=settings.DATABASE_ECHO)

AsyncSessionLocal = build_sessionmaker(engine)


async def initialize_database(bind: AsyncEngine = engine) -> None:
    """Create the metadata tables declared on ``Base``.

    Raises:
        Exception: Re-raises any exception encountered while initializing.
    """
    # NOTE: models register their tables on Base at import time
    import anganwadi.models.programs  # noqa: F401

    logger.info("Initializing database tables")
    async with bind.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database initialization complete")
        except Exception:
            logger.exception("Database initialization failed")
            raise

