"""
User service for sign-in bookkeeping and role administration.
"""

import sqlite3
from typing import Tuple

from ...core.enums import UserRole
from ...core.exceptions import LastAdminViolation, UserNotFound
from ...core.models import RoleChange, User, UserLogin
from ...stores import Database, UserStore
from ...utils.logging import get_logger

logger = get_logger("saad.users")


class UserService:
    """Service for user records and roles."""

    def __init__(self, database: Database, users: UserStore):
        self.database = database
        self.users = users

    async def register_or_login(self, login: UserLogin) -> Tuple[User, bool]:
        """
        Create the user on first sign-in, otherwise refresh the profile.

        Returns:
            Tuple of (user, registered) where ``registered`` is True for a
            newly created user
        """
        user, created = await self.users.upsert_login(login)
        logger.info(f"users: {'registered' if created else 'login'} {user.email}")
        return user, created

    async def get_user(self, email: str) -> User:
        """Fetch a user by email."""
        return await self.users.get_by_email(email)

    async def change_role(self, email: str, change: RoleChange) -> User:
        """
        Apply a role change, refusing to demote the last admin.

        The admin count and the write share one transaction.

        Raises:
            UserNotFound: if the user does not exist
            LastAdminViolation: if the change would leave no admin
        """

        def _apply(conn: sqlite3.Connection) -> User:
            row = self.users.fetch_row(conn, email)
            if row is None:
                raise UserNotFound(f"User {email} not found")
            demoting = row["role"] == UserRole.ADMIN.value and change.role != UserRole.ADMIN
            if demoting and self.users.count_admins_in(conn) <= 1:
                raise LastAdminViolation(f"Cannot change role of {email}: last remaining admin")
            return self.users.set_role_in(conn, email, change.role)

        try:
            user = await self.database.transaction(_apply)
        except LastAdminViolation:
            logger.warning(f"users: refused to demote last admin {email}")
            raise

        logger.info(f"users: role of {email} set to {user.role.value}")
        return user
