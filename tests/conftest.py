"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- In-memory database engine and session factory
- Sample user data
"""

import os

# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_JSON"] = "true"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from user_storage.core.database import create_session_maker
from user_storage.models import Base
from user_storage.repositories.user import SQLUserRepository
from user_storage.schemas.user import new_user


@pytest.fixture
async def engine():
    """
    Create an in-memory SQLite engine with the users table.

    Yields:
        AsyncEngine for testing
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    """Session factory bound to the test engine."""
    return create_session_maker(engine)


@pytest.fixture
def repo(session_maker):
    """SQLUserRepository backed by the in-memory database."""
    return SQLUserRepository(session_maker)


@pytest.fixture
def make_user():
    """
    Factory for users with a fresh uuid.

    Keyword arguments override the default field values.
    """
    def _make_user(**overrides):
        fields = {
            "firstname": "Ada",
            "lastname": "Lovelace",
            "username": "ada",
            "password": "analytical-engine",
            "email": "ada@example.com",
            "ip": "192.168.0.10",
            "mac_address": "00:1B:44:11:3A:B7",
            "website": "https://example.com/ada",
            "image": "https://example.com/ada.png",
        }
        fields.update(overrides)
        return new_user(**fields)

    return _make_user
