# This project was developed with assistance from AI tools.
"""Async engine, session factory and FastAPI session dependency.

The default URL is an in-memory SQLite database. A ``StaticPool`` keeps a
single connection alive so every session in the process sees the same
data; without it each new connection would open an empty database.
"""

import logging
from collections.abc import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from .config import db_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine with pool settings appropriate for the backend."""
    kwargs: dict = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+aiosqlite://"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_async_engine(url, **kwargs)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned entities stay readable after commit
    # without an implicit (and, under asyncio, illegal) lazy refresh.
    return async_sessionmaker(bind, expire_on_commit=False)


engine = build_engine(db_settings.DATABASE_URL, echo=db_settings.SQL_ECHO)
SessionLocal = build_sessionmaker(engine)


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401  (register mappers on Base.metadata)

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready (%s)", target.url.render_as_string(hide_password=True))


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    async with SessionLocal() as session:
        yield session


class DatabaseService:
    """Connectivity check used by the health endpoint."""

    def __init__(self, bind: AsyncEngine):
        self._engine = bind

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database ping failed")
            return False
        return True


_db_service = DatabaseService(engine)


def get_db_service() -> DatabaseService:
    return _db_service
