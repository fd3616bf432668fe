"""Async SQLAlchemy engine, session factory and the per-request session."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


class Base(DeclarativeBase):
    pass


def driver_connect_args(url: URL, timeout: float) -> dict:
    """Driver-level timeouts, so a slow statement fails inside the driver.

    asyncpg takes separate connect and per-statement timeouts; sqlite3 only
    has a busy timeout for waiting on locks held by other connections.
    """
    if url.get_backend_name() == "postgresql":
        return {"timeout": timeout, "command_timeout": timeout}
    if url.get_backend_name() == "sqlite":
        return {"timeout": timeout}
    return {}


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    connect_args=driver_connect_args(settings.database_url, settings.driver_timeout_seconds),
)

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield one session per request and always close it.

    Repositories commit their own writes; whatever is left open here (an
    interrupted or failed statement) is rolled back when the session closes.
    """
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()
