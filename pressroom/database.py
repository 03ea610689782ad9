"""
Pressroom Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI session dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by the dependency providers in `pressroom.dependencies`.
When:  Engine is created at module import; sessions are created per-request.

Transaction model:
    One session == one transaction == one request. Services only flush;
    the commit happens here once the route handler returns. A multi-step write
    (store blob → insert photo → insert article) therefore either lands
    completely or not at all on the database side.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pressroom.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """
    Build engine keyword arguments for the given URL.

    SQLite (used by the test-suite) does not take pool sizing arguments;
    every other backend gets the configured pool.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if database_url.startswith("sqlite"):
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
    )
    return options


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine configured for `database_url`."""
    return create_async_engine(database_url, **engine_options(database_url))


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url)

# expire_on_commit=False: attributes stay readable after commit, which the
# response serializers rely on.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by `create_tables()` at startup
    and by the test-suite to build a throwaway schema.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the service layer
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Raises:
        Any exception from the handler is re-raised after rollback so the
        global exception handlers can respond.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """
    What:  Creates any missing tables from the ORM metadata.
    When:  Application startup, if `settings.db_create_tables` is on.
    Note:  Idempotent; existing tables are left untouched (no migrations).
    """
    # Importing the models registers them on Base.metadata
    import pressroom.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool on shutdown."""
    await engine.dispose()
