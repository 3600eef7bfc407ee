"""
User storage command line interface.

Usage:
    user-storage init-db
    user-storage create --firstname Ada --lastname Lovelace ...
    user-storage get 8a48aee3-1359-4a5e-a052-6523aca2d0b1
    user-storage list
    user-storage update 8a48aee3-1359-4a5e-a052-6523aca2d0b1 --email ada@new.example
    user-storage delete 8a48aee3-1359-4a5e-a052-6523aca2d0b1

Environment Variables:
    DATABASE_URL  - Async SQLAlchemy database URL
    LOG_LEVEL     - Root log level
    LOG_JSON      - Emit JSON log lines (true/false)
"""

import argparse
import asyncio
import sys
from typing import List, Optional
from uuid import UUID

from dotenv import load_dotenv
from sqlalchemy.exc import IntegrityError

from user_storage.core.config import settings
from user_storage.core.database import create_session_maker, get_async_engine, init_db
from user_storage.core.exceptions import UserStorageError
from user_storage.core.logging_config import get_logger, setup_logging
from user_storage.repositories.user import SQLUserRepository
from user_storage.schemas.user import User, new_user


logger = get_logger(__name__)

USER_FIELDS = (
    "firstname",
    "lastname",
    "username",
    "password",
    "email",
    "ip",
    "mac_address",
    "website",
    "image",
)


def _add_user_fields(parser: argparse.ArgumentParser, required: bool) -> None:
    for field in USER_FIELDS:
        parser.add_argument(
            f"--{field.replace('_', '-')}",
            dest=field,
            required=required,
            help=f"User {field.replace('_', ' ')}",
        )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Returns:
        Parser with one subcommand per repository operation plus init-db
    """
    parser = argparse.ArgumentParser(
        prog="user-storage",
        description="Manage stored users",
    )
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the users table if missing")
    subparsers.add_parser("list", help="Print every user as JSON lines")

    get_parser = subparsers.add_parser("get", help="Print one user as JSON")
    get_parser.add_argument("uuid", type=UUID, help="User UUID")

    create_parser = subparsers.add_parser("create", help="Store a new user")
    create_parser.add_argument("--uuid", type=UUID, help="Explicit UUID (default: random)")
    _add_user_fields(create_parser, required=True)

    update_parser = subparsers.add_parser("update", help="Change fields of a stored user")
    update_parser.add_argument("uuid", type=UUID, help="User UUID")
    _add_user_fields(update_parser, required=False)

    delete_parser = subparsers.add_parser("delete", help="Delete a user")
    delete_parser.add_argument("uuid", type=UUID, help="User UUID")

    return parser


def _print_user(user: User) -> None:
    print(user.model_dump_json())


async def run(args: argparse.Namespace) -> int:
    """
    Execute the parsed command.

    Returns:
        Process exit code
    """
    engine = get_async_engine(args.database_url)
    repo = SQLUserRepository(create_session_maker(engine))

    try:
        if args.command == "init-db":
            await init_db(create_tables=True, bind=engine)
            print("users table ready")
            return 0

        if args.command == "list":
            for user in await repo.get_all():
                _print_user(user)
            return 0

        if args.command == "get":
            user = await repo.get_one(args.uuid)
            if user is None:
                print(f"user {args.uuid} not found", file=sys.stderr)
                return 1
            _print_user(user)
            return 0

        if args.command == "create":
            fields = {field: getattr(args, field) for field in USER_FIELDS}
            user = User(uuid=args.uuid, **fields) if args.uuid else new_user(**fields)
            try:
                await repo.store(user)
            except IntegrityError:
                print(f"error: user {user.uuid} already exists", file=sys.stderr)
                return 1
            _print_user(user)
            return 0

        if args.command == "update":
            user = await repo.get_one(args.uuid)
            if user is None:
                print(f"user {args.uuid} not found", file=sys.stderr)
                return 1
            changes = {
                field: getattr(args, field)
                for field in USER_FIELDS
                if getattr(args, field) is not None
            }
            user = user.model_copy(update=changes)
            await repo.update(user)
            _print_user(user)
            return 0

        if args.command == "delete":
            await repo.delete(args.uuid)
            print(f"user {args.uuid} deleted")
            return 0

        raise ValueError(f"Unknown command: {args.command}")

    except UserStorageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        await engine.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    setup_logging(
        level=args.log_level or settings.log_level,
        json_format=settings.log_json,
    )
    logger.debug("Running command", extra={"command": args.command})

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
