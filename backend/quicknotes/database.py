"""
QuickNotes Backend — Storage Gateway
======================================

What:  Async SQLAlchemy engine, session factory, schema setup and the FastAPI
       session dependency.
How:   A StorageGateway instance owns one engine. The application factory
       stores it on `app.state.storage`; `get_db_session` reads it back from
       the request, so every app (and every test) talks to its own database.
Who:   Used by the lifespan handler (initialize/dispose) and by route
       handlers via FastAPI's dependency injection system.
When:  Engine is created with the app; sessions are created per-request.

Schema:
    notes(id INTEGER PRIMARY KEY AUTOINCREMENT,
          title TEXT, content TEXT, created_at DATETIME)

    Created with CREATE TABLE IF NOT EXISTS on every startup. There are no
    migrations beyond this initial creation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from quicknotes.exceptions import StorageInitError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models register their tables on `Base.metadata`, which
    StorageGateway.initialize() uses to create the schema.
    """
    pass


class StorageGateway:
    """
    Owns the database handle for one application instance.

    Lifecycle:
        gateway = StorageGateway(url)
        await gateway.initialize()      # startup: open file, create table
        async with gateway.session() as db:
            ...                         # one statement per request
        await gateway.dispose()         # shutdown: close pooled connections

    Concurrency:
        The engine is shared by all concurrent requests. No locks are taken
        here; SQLite serializes writers itself and `busy_timeout` makes a
        blocked writer wait instead of failing with "database is locked".
    """

    def __init__(
        self,
        database_url: str,
        busy_timeout: float = 5.0,
        echo: bool = False,
    ):
        self.database_url = database_url

        connect_args: Dict[str, Any] = {}
        if database_url.startswith("sqlite"):
            # Passed through aiosqlite to sqlite3.connect(timeout=...)
            connect_args["timeout"] = busy_timeout

        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=echo,
            connect_args=connect_args,
        )

        # expire_on_commit=False: attributes stay loaded after commit, so a
        # freshly inserted note can be serialized without another SELECT
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def initialize(self) -> None:
        """
        Open the database and make sure the `notes` table exists.

        Raises:
            StorageInitError: the database cannot be opened or the table
                cannot be created. Callers must treat this as fatal.
        """
        # Register the Note table on Base.metadata
        from quicknotes.models.note import Note  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.critical("Could not initialize storage at %s: %s", self.database_url, e)
            raise StorageInitError(
                message=f"Could not initialize storage: {e}",
                context={"database_url": self.database_url},
            ) from e

        logger.info("Storage ready: %s", self.database_url)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide one AsyncSession, rolled back on error and always closed.

        Writes are committed by the service call that issued them.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the gateway attached to the application that is
    serving this request (`request.app.state.storage`).

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            return await note_service.list_notes(db)
    """
    storage: StorageGateway = request.app.state.storage
    async with storage.session() as session:
        yield session
