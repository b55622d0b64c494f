"""
Database handle for the vote ledger.

The engine is created lazily on first use so the service can start (and
serve degraded reads) without a reachable database. A single Database
instance is created at startup and injected into the ledger.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import structlog
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings
from core.exceptions import StoreUnavailable

logger = structlog.get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Process-wide store handle with init-on-first-use.

    Usage:
        database = Database("sqlite+aiosqlite:///./onevote.db")
        async with database.session() as session:
            ...
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.url)

    def get_engine(self) -> AsyncEngine:
        """Get or create the async engine, raising StoreUnavailable on failure."""
        if self._engine is None:
            if not self.url:
                raise StoreUnavailable("DATABASE_URL is not configured")

            try:
                engine = create_async_engine(self.url, echo=self.echo, pool_pre_ping=True)
            except (SQLAlchemyError, ImportError) as e:
                logger.warning("Failed to create database engine", error=str(e))
                raise StoreUnavailable("Database engine could not be created") from e

            if engine.dialect.name == "sqlite":
                event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

            self._engine = engine
            self._sessionmaker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
            logger.info("Database engine initialized", dialect=engine.dialect.name)

        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session; the caller owns commit/rollback."""
        self.get_engine()
        assert self._sessionmaker is not None
        async with self._sessionmaker() as session:
            yield session

    async def create_schema(self) -> None:
        """Create the ledger tables if they do not exist."""
        # Register the mapped tables on Base.metadata
        import models  # noqa: F401
        from db.base import Base

        engine = self.get_engine()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable("Database schema could not be created") from e

    async def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        try:
            engine = self.get_engine()
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (StoreUnavailable, SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed", error=str(e))
            return False

    async def dispose(self) -> None:
        """Close pooled connections. Safe to call when never initialized."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None


_database: Database | None = None


def get_database() -> Database:
    """Get the application's Database handle, creating it from settings on first use."""
    global _database
    if _database is None:
        _database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    return _database


async def init_db() -> Database:
    """Create the database handle and, if enabled, the schema."""
    database = get_database()
    if not database.is_configured:
        logger.warning("DATABASE_URL is not set; voting store is unavailable")
        return database

    if settings.CREATE_SCHEMA_ON_STARTUP:
        try:
            await database.create_schema()
        except StoreUnavailable as e:
            logger.warning("Schema creation failed; continuing in degraded mode", error=str(e))

    return database


async def close_db() -> None:
    """Dispose of the database handle."""
    global _database
    if _database is not None:
        await _database.dispose()
        _database = None
