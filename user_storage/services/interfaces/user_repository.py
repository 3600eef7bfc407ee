"""
User Repository Interface (IUserRepository)

Abstract contract for user persistence. Implementations must:
- Make every method async
- Hold no per-call mutable state
- Let driver errors propagate unchanged
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from user_storage.schemas.user import User


class IUserRepository(ABC):
    """
    Abstract interface for user CRUD operations.
    """

    @abstractmethod
    async def store(self, user: User) -> None:
        """
        Insert a new user.

        Raises:
            sqlalchemy.exc.IntegrityError: If the uuid already exists
        """
        pass

    @abstractmethod
    async def get_one(self, user_id: UUID) -> Optional[User]:
        """
        Fetch a user by uuid.

        Returns:
            The user, or None when no row matches
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> None:
        """
        Overwrite every field except uuid for the user with user.uuid.

        Raises:
            RowsAffectedError: If the update did not touch exactly one row
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[User]:
        """
        Fetch every user in database order.

        Returns:
            List of users, empty when the table is empty
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> None:
        """
        Remove a user by uuid.

        Raises:
            RowsAffectedError: If the delete did not touch exactly one row
        """
        pass
