"""
user-storage: async SQL persistence for user records.

Exposes the user repository and domain model at package level.
"""

from user_storage.schemas.user import User, new_user
from user_storage.repositories.user import SQLUserRepository
from user_storage.core.exceptions import UserStorageError, RowsAffectedError

__version__ = "0.1.0"

__all__ = [
    "User",
    "new_user",
    "SQLUserRepository",
    "UserStorageError",
    "RowsAffectedError",
]
