"""
Database configuration and session management.

Provides the SQLAlchemy async engine, the session factory and lifecycle
helpers. Connection pooling is left entirely to the engine.
"""

from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from user_storage.core.config import settings
from user_storage.core.logging_config import get_logger
from user_storage.models.base import Base


logger = get_logger(__name__)


def get_async_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    For SQLite:
    - In-memory databases use StaticPool, since each new connection would
      otherwise open a separate empty database
    - File databases keep the driver default pool so every session gets its
      own connection and transaction
    - Enables check_same_thread=False for async compatibility
    - Turns on foreign key enforcement per connection

    Other drivers get a regular queue pool sized from settings.

    Args:
        database_url: Override for settings.database_url

    Returns:
        Configured AsyncEngine instance
    """
    url = database_url or settings.database_url
    parsed_url = make_url(url)
    is_sqlite = parsed_url.get_backend_name() == "sqlite"

    engine_kwargs = {
        "echo": settings.database_echo,
    }

    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if parsed_url.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_size"] = settings.database_pool_size
        engine_kwargs["max_overflow"] = settings.database_max_overflow
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_maker(bind: AsyncEngine) -> async_sessionmaker:
    """Build a session factory bound to the given engine."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Global async engine instance, created at import, connects lazily
engine = get_async_engine()

# Async session factory used by repositories by default
async_session_maker = create_session_maker(engine)


async def init_db(
    create_tables: Optional[bool] = None,
    bind: Optional[AsyncEngine] = None,
) -> None:
    """
    Initialize the database.

    Creates the users table when create_tables is True, or when it is None
    and settings.create_tables_on_startup is set. Existing tables are left
    untouched.

    Args:
        create_tables: Force (True) or skip (False) table creation
        bind: Engine to use instead of the global engine
    """
    # Import models so metadata is populated before create_all()
    from user_storage import models  # noqa: F401

    if create_tables is None:
        create_tables = settings.create_tables_on_startup

    if not create_tables:
        return

    target = bind or engine
    if target.dialect.name == "sqlite":
        # SQLite creates the file but not its directory
        database = make_url(target.url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


async def close_db() -> None:
    """
    Dispose of the engine and close all pooled connections.

    Should be called at shutdown.
    """
    await engine.dispose()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session generator for scripts and background tasks.

    Yields:
        AsyncSession instance; the caller commits or rolls back

    Example:
        async for session in get_session():
            result = await session.execute(text("SELECT count(*) FROM users"))
    """
    async with async_session_maker() as session:
        yield session


class DatabaseHealthCheck:
    """
    Database health check utilities.
    """

    @staticmethod
    async def check_connection(session_maker: Optional[async_sessionmaker] = None) -> bool:
        """
        Check if database connection is healthy.

        Returns:
            True if database is reachable, False otherwise
        """
        maker = session_maker or async_session_maker
        try:
            async with maker() as session:
                await session.execute(text("SELECT 1"))
                return True
        except Exception:
            logger.warning("Database health check failed", exc_info=True)
            return False

    @staticmethod
    async def get_database_info() -> dict:
        """
        Get database information for monitoring.

        Returns:
            Dictionary with the URL (password masked) and dialect
        """
        return {
            "url": engine.url.render_as_string(hide_password=True),
            "dialect": engine.dialect.name,
            "async": True,
        }
