"""
Blog Backend — Database Session Management
===========================================

What:  Async SQLAlchemy engine factory, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   The application factory builds one engine per app instance and keeps it
       on `app.state`; the session dependency reads it from the request, so
       every app (and every test) owns its own store.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created by create_app(); sessions are created per-request.

SQLite specifics:
    - Foreign keys are OFF by default in SQLite. Every new DBAPI connection
      runs `PRAGMA foreign_keys=ON`, otherwise the ON DELETE RESTRICT on
      posts.category_id would never fire.
    - In-memory databases live only as long as their connection, so they use
      a StaticPool (one shared connection for the whole engine).
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from blog.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object used by the startup migrator
    (metadata.create_all) and by Alembic autogenerate.
    """
    pass


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(config: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured SQLite database.

    Echoes SQL when the log level is DEBUG.
    """
    options = {
        "pool_pre_ping": config.db_pool_pre_ping,
        "echo": config.log_level == "DEBUG",
    }
    if config.database_path is None:
        options["poolclass"] = StaticPool

    engine = create_async_engine(config.database_url, **options)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: objects stay readable after the request commits
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's session factory
        2. Yields it to the route handler (the handler calls services)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Raises:
        Any exception is propagated to the global error handlers,
        which return the matching HTTP status codes.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine(engine: AsyncEngine) -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()
