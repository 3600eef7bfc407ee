"""
Tests for database lifecycle helpers.

Covers engine construction, init_db table creation and the health check.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from user_storage.core.database import (
    DatabaseHealthCheck,
    close_db,
    create_session_maker,
    get_async_engine,
    get_session,
    init_db,
)
from user_storage.repositories.user import SQLUserRepository


async def _table_names(engine):
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


class TestGetAsyncEngine:
    """Tests for get_async_engine()."""

    async def test_sqlite_uses_static_pool(self):
        engine = get_async_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert isinstance(engine.pool, StaticPool)
            assert engine.dialect.name == "sqlite"
        finally:
            await engine.dispose()

    async def test_sqlite_file_database_does_not_share_one_connection(self, tmp_path):
        """Test file databases keep a pool that hands out separate connections."""
        engine = get_async_engine(f"sqlite+aiosqlite:///{tmp_path}/users.db")
        try:
            assert not isinstance(engine.pool, StaticPool)
        finally:
            await engine.dispose()

    async def test_sqlite_foreign_keys_enabled(self):
        """Test the connect hook turns on foreign key enforcement."""
        from sqlalchemy import text

        engine = get_async_engine("sqlite+aiosqlite:///:memory:")
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text("PRAGMA foreign_keys"))
                assert result.scalar() == 1
        finally:
            await engine.dispose()


class TestInitDb:
    """Tests for init_db()."""

    async def test_init_db_creates_users_table(self):
        """
        Test init_db creates the users table on a fresh database.

        Arrange: Empty in-memory engine
        Act: init_db(create_tables=True)
        Assert: users table exists and is empty
        """
        # Arrange
        engine = get_async_engine("sqlite+aiosqlite:///:memory:")

        try:
            # Act
            await init_db(create_tables=True, bind=engine)

            # Assert
            assert "users" in await _table_names(engine)
            repo = SQLUserRepository(create_session_maker(engine))
            assert await repo.get_all() == []
        finally:
            await engine.dispose()

    async def test_init_db_is_idempotent(self, make_user):
        """Test running init_db twice keeps existing rows."""
        # Arrange
        engine = get_async_engine("sqlite+aiosqlite:///:memory:")
        repo = SQLUserRepository(create_session_maker(engine))

        try:
            await init_db(create_tables=True, bind=engine)
            user = make_user()
            await repo.store(user)

            # Act
            await init_db(create_tables=True, bind=engine)

            # Assert
            assert await repo.get_one(user.uuid) == user
        finally:
            await engine.dispose()

    async def test_init_db_respects_setting_when_not_forced(self):
        """Test create_tables_on_startup=False (the test default) skips creation."""
        # Arrange
        engine = get_async_engine("sqlite+aiosqlite:///:memory:")
        repo = SQLUserRepository(create_session_maker(engine))

        try:
            # Act
            await init_db(bind=engine)

            # Assert
            with pytest.raises(OperationalError):
                await repo.get_all()
        finally:
            await engine.dispose()

    async def test_init_db_creates_sqlite_directory(self, tmp_path):
        """Test the parent directory of a SQLite file is created."""
        # Arrange
        db_path = tmp_path / "nested" / "dir" / "users.db"
        engine = get_async_engine(f"sqlite+aiosqlite:///{db_path}")

        try:
            # Act
            await init_db(create_tables=True, bind=engine)

            # Assert
            assert db_path.exists()
        finally:
            await engine.dispose()


class TestDatabaseHealthCheck:
    """Tests for DatabaseHealthCheck."""

    async def test_check_connection_healthy(self, session_maker):
        assert await DatabaseHealthCheck.check_connection(session_maker) is True

    async def test_check_connection_unreachable(self, tmp_path):
        """Test an unopenable database reports unhealthy instead of raising."""
        # Arrange
        engine = get_async_engine(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/users.db")

        try:
            # Act
            healthy = await DatabaseHealthCheck.check_connection(create_session_maker(engine))

            # Assert
            assert healthy is False
        finally:
            await engine.dispose()

    async def test_get_database_info(self):
        info = await DatabaseHealthCheck.get_database_info()

        assert info["dialect"] == "sqlite"
        assert info["async"] is True
        assert ":memory:" in info["url"]


async def test_get_session_yields_session():
    from sqlalchemy import text

    async for session in get_session():
        result = await session.execute(text("SELECT 1"))
        assert result.scalar() == 1


async def test_close_db_disposes_pool_and_engine_reconnects():
    """Test the global engine is usable again after close_db()."""
    # Act
    await close_db()

    # Assert
    assert await DatabaseHealthCheck.check_connection() is True
