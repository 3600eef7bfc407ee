"""
SQL repository for user CRUD operations.

Implements IUserRepository with five fixed parameterized statements. Each
call opens its own session from the factory, so operations are independent
units of work against the engine's connection pool.
"""

from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import bindparam, delete, insert, select, update
from sqlalchemy.ext.asyncio import async_sessionmaker

from user_storage.core.database import async_session_maker
from user_storage.core.exceptions import RowsAffectedError
from user_storage.core.logging_config import get_logger
from user_storage.models.user import UserRecord
from user_storage.schemas.user import User
from user_storage.services.interfaces.user_repository import IUserRepository


logger = get_logger(__name__)


users = UserRecord.__table__

# Built from the table so every dialect quotes the mixed-case macAddress column
INSERT_QUERY = insert(users)
SELECT_ONE_QUERY = select(users).where(users.c.uuid == bindparam("user_id"))
UPDATE_QUERY = update(users).where(users.c.uuid == bindparam("user_id"))
SELECT_ALL_QUERY = select(users)
DELETE_QUERY = delete(users).where(users.c.uuid == bindparam("user_id"))


def _column_values(user: User) -> dict[str, Any]:
    """Mutable fields keyed by column name (everything but uuid)."""
    return {
        "firstname": user.firstname,
        "lastname": user.lastname,
        "username": user.username,
        "password": user.password,
        "email": user.email,
        "ip": user.ip,
        "macAddress": user.mac_address,
        "website": user.website,
        "image": user.image,
    }


def _to_user(row: Mapping[str, Any]) -> User:
    """Map a result row (column names as keys) onto the domain model."""
    return User(
        uuid=row["uuid"],
        firstname=row["firstname"],
        lastname=row["lastname"],
        username=row["username"],
        password=row["password"],
        email=row["email"],
        ip=row["ip"],
        mac_address=row["macAddress"],
        website=row["website"],
        image=row["image"],
    )


class SQLUserRepository(IUserRepository):
    """
    Repository for user data access over SQL statements.

    Attributes:
        session_maker: Async session factory; one session per operation
    """

    def __init__(self, session_maker: Optional[async_sessionmaker] = None):
        """
        Initialize repository with a session factory.

        Args:
            session_maker: Async session factory. Defaults to the global
                           async_session_maker.
        """
        self.session_maker = session_maker or async_session_maker

    async def store(self, user: User) -> None:
        """
        Insert a new user row.

        Raises:
            IntegrityError: If a user with the same uuid already exists
        """
        async with self.session_maker() as session:
            await session.execute(
                INSERT_QUERY, {"uuid": str(user.uuid), **_column_values(user)}
            )
            await session.commit()

        logger.debug("User stored", extra={"operation": "store", "user_id": str(user.uuid)})

    async def get_one(self, user_id: UUID) -> Optional[User]:
        """
        Retrieve a single user by uuid.

        Returns:
            User, or None if no row matches
        """
        async with self.session_maker() as session:
            result = await session.execute(SELECT_ONE_QUERY, {"user_id": str(user_id)})
            row = result.mappings().first()

        if row is None:
            logger.debug("User not found", extra={"operation": "get_one", "user_id": str(user_id)})
            return None

        return _to_user(row)

    async def update(self, user: User) -> None:
        """
        Update every mutable field of the user identified by user.uuid.

        Raises:
            RowsAffectedError: If zero or more than one row was updated
        """
        async with self.session_maker() as session:
            result = await session.execute(
                UPDATE_QUERY, {"user_id": str(user.uuid), **_column_values(user)}
            )
            rows_affected = result.rowcount
            await session.commit()

        self._check_rows_affected("updated", rows_affected, user.uuid)
        logger.debug("User updated", extra={"operation": "update", "user_id": str(user.uuid)})

    async def get_all(self) -> List[User]:
        """
        Retrieve every user in database-defined order.

        Returns:
            List of users (empty if the table has no rows)
        """
        async with self.session_maker() as session:
            result = await session.execute(SELECT_ALL_QUERY)
            rows = result.mappings().all()

        return [_to_user(row) for row in rows]

    async def delete(self, user_id: UUID) -> None:
        """
        Delete the user identified by user_id.

        Raises:
            RowsAffectedError: If zero or more than one row was deleted
        """
        async with self.session_maker() as session:
            result = await session.execute(DELETE_QUERY, {"user_id": str(user_id)})
            rows_affected = result.rowcount
            await session.commit()

        self._check_rows_affected("deleted", rows_affected, user_id)
        logger.debug("User deleted", extra={"operation": "delete", "user_id": str(user_id)})

    @staticmethod
    def _check_rows_affected(operation: str, rows_affected: int, user_id: UUID) -> None:
        if rows_affected != 1:
            logger.warning(
                "Unexpected rows affected",
                extra={
                    "operation": operation,
                    "user_id": str(user_id),
                    "rows_affected": rows_affected,
                }
            )
            raise RowsAffectedError(operation, rows_affected)
