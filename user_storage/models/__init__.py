"""
SQLAlchemy ORM models.

Import models from this module to ensure they're registered with SQLAlchemy.
"""

from user_storage.models.base import Base
from user_storage.models.user import UserRecord

__all__ = [
    "Base",
    "UserRecord",
]
