"""
User store: registered users and their roles.
"""

import sqlite3
from datetime import datetime, timezone
from typing import Optional, Tuple

from ..core.enums import UserRole
from ..core.exceptions import UserNotFound
from ..core.models import User, UserLogin
from .database import Database


def _row_to_user(row: sqlite3.Row) -> User:
    return User(
        email=row["email"],
        name=row["name"],
        photo_url=row["photo_url"],
        role=UserRole(row["role"]),
        created_at=row["created_at"],
        last_login_at=row["last_login_at"],
    )


class UserStore:
    """Persistence for users."""

    def __init__(self, database: Database):
        self.database = database

    async def upsert_login(self, login: UserLogin) -> Tuple[User, bool]:
        """
        Register a user on first sign-in, otherwise refresh the profile.

        Returns:
            Tuple of (user, created)
        """
        email = str(login.email)
        now = datetime.now(timezone.utc).isoformat()

        def _upsert(conn: sqlite3.Connection) -> Tuple[User, bool]:
            existing = self.fetch_row(conn, email)
            if existing is None:
                conn.execute(
                    """
                    INSERT INTO users (email, name, photo_url, role, created_at, last_login_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (email, login.name, login.photo_url, UserRole.USER.value, now, now),
                )
                created = True
            else:
                conn.execute(
                    "UPDATE users SET name = ?, photo_url = ?, last_login_at = ? WHERE email = ?",
                    (login.name, login.photo_url, now, email),
                )
                created = False
            return _row_to_user(self.fetch_row(conn, email)), created

        return await self.database.transaction(_upsert)

    async def get_by_email(self, email: str) -> User:
        """
        Fetch a user.

        Raises:
            UserNotFound: if no user has this email
        """
        row = await self.database.run(lambda conn: self.fetch_row(conn, email))
        if row is None:
            raise UserNotFound(f"User {email} not found")
        return _row_to_user(row)

    async def count_admins(self) -> int:
        """Count users holding the admin role."""
        return await self.database.run(self.count_admins_in)

    @staticmethod
    def fetch_row(conn: sqlite3.Connection, email: str) -> Optional[sqlite3.Row]:
        return conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()

    @staticmethod
    def count_admins_in(conn: sqlite3.Connection) -> int:
        row = conn.execute(
            "SELECT COUNT(*) FROM users WHERE role = ?", (UserRole.ADMIN.value,)
        ).fetchone()
        return int(row[0])

    def set_role_in(self, conn: sqlite3.Connection, email: str, role: UserRole) -> User:
        """Write a new role on an open connection."""
        cur = conn.execute("UPDATE users SET role = ? WHERE email = ?", (role.value, email))
        if cur.rowcount == 0:
            raise UserNotFound(f"User {email} not found")
        return _row_to_user(self.fetch_row(conn, email))
