"""Database connection management using async SQLAlchemy.

The engine is opened at startup when ``ORDER_STORE=database``, or lazily by
the first ``session_scope``, and is shared by every request afterwards.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.core.settings import get_settings

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for tables this service maps but does not create."""


_engine: AsyncEngine | None = None
_sessions: async_sessionmaker[AsyncSession] | None = None


def redacted_url(url: str) -> str:
    """Database URL with the password masked, safe for logs."""
    return make_url(url).render_as_string(hide_password=True)


async def init_db() -> None:
    """Open the engine and session factory; a no-op when already open."""
    global _engine, _sessions

    if _engine is not None:
        return

    settings = get_settings()
    _engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    _sessions = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)

    logger.info(
        "database_initialized",
        url=redacted_url(settings.database_url),
        pool_size=settings.database_pool_size,
    )


async def close_db() -> None:
    """Dispose of the engine. A later ``session_scope`` reopens it."""
    global _engine, _sessions

    if _engine is None:
        return

    engine, _engine, _sessions = _engine, None, None
    await engine.dispose()
    logger.info("database_closed")


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """One unit of work: commit when the block exits cleanly, else roll back."""
    await init_db()

    async with _sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
