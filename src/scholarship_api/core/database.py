"""
Database Configuration

Async SQLAlchemy engine and session factory.

The engine is a process-wide resource: it is created on first use, verified
during application startup (init_db) and disposed on shutdown (close_db).
Request handlers never touch the engine directly; they receive an
AsyncSession through the get_db dependency, which tests override to point
at a substitute backend.
"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

from sqlalchemy import DateTime, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from scholarship_api.core.config import settings


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp stored in UTC.

    Backends without a timezone-aware type (SQLite) hand back naive values;
    those are read as UTC so every timestamp leaves the database aware.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is not None and value.tzinfo is not None:
            return value.astimezone(UTC)
        return value

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used for every backend (objects stay loaded after commit)."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def get_engine() -> AsyncEngine:
    """Return the shared engine, creating it from settings on first use."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            settings.sqlalchemy_database_url,
            echo=settings.database_echo,
            pool_pre_ping=True,
        )
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Return the shared session factory, bound to the shared engine."""
    global _session_maker
    if _session_maker is None:
        _session_maker = build_session_maker(get_engine())
    return _session_maker


async def init_db() -> AsyncEngine:
    """
    Initialize the database connection.

    Call this on application startup. Opens one connection to fail fast
    when the backend is unreachable or misconfigured.
    """
    engine = get_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return engine


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all tables directly from the ORM metadata.

    Production schemas are managed by Alembic; this is for local
    development databases and test backends.
    """
    # Register every model on Base.metadata
    from scholarship_api.modules.scholarship_applications import models as _applications  # noqa: F401
    from scholarship_api.modules.users import models as _users  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine and its connection pool."""
    global _engine, _session_maker
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_maker = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_session_maker()() as session:
        yield session
