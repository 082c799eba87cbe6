#!/usr/bin/env python3
"""Admin script to inspect and delete user accounts.

Deleting a user also deletes every task they own.

Usage:
    uv run python scripts/manage_users.py --list
    uv run python scripts/manage_users.py --delete <email>
"""

import asyncio
import logging
import sys

from organiza.core.config import settings
from organiza.core.db_client import Database
from organiza.core.errors import NotFoundError
from organiza.core.schema import init_db
from organiza.services.user_service import UserRepository


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def list_users(users: UserRepository) -> None:
    """List every user with their task count."""
    rows = await users.list_with_task_counts()

    if not rows:
        logger.info("No users registered")
        return

    for row in rows:
        logger.info(f"{row.id:>5}  {row.email}  {row.name}  ({row.task_count} tasks)")


async def delete_user(users: UserRepository, email: str) -> None:
    """Delete the user with this email, exiting non-zero if there is none."""
    user = await users.find_by_email(email)
    if user is None:
        logger.info(f"No user with email {email}")
        sys.exit(1)

    try:
        await users.delete(user.id)
    except NotFoundError:
        sys.exit(1)

    logger.info(f"Deleted user {user.email} (id {user.id}) and their tasks")


def print_usage() -> None:
    """Print usage information."""
    logger.info(__doc__)


async def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]

    if not args or "--help" in args or "-h" in args:
        print_usage()
        return

    database = Database(settings.sqlite_db_path)
    await database.connect()
    try:
        await init_db(database)
        users = UserRepository(database)

        if "--list" in args:
            await list_users(users)
            return

        if "--delete" in args:
            delete_index = args.index("--delete")
            if delete_index + 1 >= len(args):
                print_usage()
                sys.exit(1)
            await delete_user(users, args[delete_index + 1])
            return

        print_usage()
        sys.exit(1)
    finally:
        await database.close()


if __name__ == "__main__":
    asyncio.run(main())
