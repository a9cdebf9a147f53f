"""
Business logic for user accounts.

``UserService`` registers users, checks credentials and changes
passwords in the ``auth`` database.  The ``covid_portal`` and
``twitter`` services keep their own ``user`` tables and use the
subclasses below, which only change the database, the stored columns
and the minimum password length.

Failures are reported with ``ValueError`` carrying the message the
client receives (``User already exists``, ``Invalid password``, ...).
"""

import logging
import sqlite3
from typing import Optional, Sequence

from pydantic import BaseModel

from ..core.db import get_connection
from ..core.security import hash_password, verify_password

logger = logging.getLogger(__name__)

USER_EXISTS = "User already exists"
PASSWORD_TOO_SHORT = "Password is too short"
INVALID_USER = "Invalid user"
INVALID_PASSWORD = "Invalid password"
INVALID_CURRENT_PASSWORD = "Invalid current password"


class UserService:
    """Service for registering and authenticating users.

    Subclasses select another database by overriding ``database`` and
    adapt ``columns`` to that database's ``user`` table.
    """

    database: str = "auth"
    columns: Sequence[str] = ("username", "name", "password", "gender", "location")
    min_password_length: int = 5

    @classmethod
    def _fetch_user(cls, cursor: sqlite3.Cursor, username: str) -> Optional[sqlite3.Row]:
        return cursor.execute("SELECT * FROM user WHERE username = ?", (username,)).fetchone()

    @classmethod
    async def get_user(cls, username: str) -> Optional[dict]:
        """Return the stored user row as a dict, or ``None``."""
        conn = get_connection(cls.database)
        try:
            row = cls._fetch_user(conn.cursor(), username)
            return dict(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def create_user(cls, data: BaseModel) -> None:
        """Register a new user.

        The username must be unused and the password at least
        ``min_password_length`` characters long.  Only a salted hash
        of the password is stored.
        """
        values = data.model_dump()
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            if cls._fetch_user(cursor, values["username"]):
                raise ValueError(USER_EXISTS)
            if len(values["password"]) < cls.min_password_length:
                raise ValueError(PASSWORD_TOO_SHORT)
            values["password"] = hash_password(values["password"])
            columns = [column for column in cls.columns if column in values]
            placeholders = ", ".join("?" for _ in columns)
            cursor.execute(
                f"INSERT INTO user ({', '.join(columns)}) VALUES ({placeholders})",
                tuple(values[column] for column in columns),
            )
            conn.commit()
            logger.info("Registered user %s in %s", values["username"], cls.database)
        finally:
            conn.close()

    @classmethod
    async def authenticate(cls, username: str, password: str) -> dict:
        """Check a username/password pair and return the user row.

        Raises ``ValueError`` with ``Invalid user`` for an unknown
        username and ``Invalid password`` for a wrong password.
        """
        user = await cls.get_user(username)
        if user is None:
            logger.warning("Login attempt for unknown user %s in %s", username, cls.database)
            raise ValueError(INVALID_USER)
        if not verify_password(password, user["password"]):
            logger.warning("Wrong password for %s in %s", username, cls.database)
            raise ValueError(INVALID_PASSWORD)
        return user

    @classmethod
    async def change_password(cls, username: str, old_password: str, new_password: str) -> None:
        """Replace a user's password after checking the current one.

        An unknown username is reported exactly like a wrong current
        password so the endpoint does not reveal which usernames exist.
        """
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            row = cls._fetch_user(cursor, username)
            if not row or not verify_password(old_password, row["password"]):
                raise ValueError(INVALID_CURRENT_PASSWORD)
            if len(new_password) < cls.min_password_length:
                raise ValueError(PASSWORD_TOO_SHORT)
            cursor.execute(
                "UPDATE user SET password = ? WHERE username = ?",
                (hash_password(new_password), username),
            )
            conn.commit()
            logger.info("Password changed for %s in %s", username, cls.database)
        finally:
            conn.close()


class PortalUserService(UserService):
    """Users of the authenticated COVID-19 portal."""

    database = "covid_portal"


class TwitterUserService(UserService):
    """Users of the Twitter clone."""

    database = "twitter"
    columns = ("name", "username", "password", "gender")
    min_password_length = 6

    @classmethod
    async def get_user_id(cls, username: str) -> Optional[int]:
        user = await cls.get_user(username)
        return user["user_id"] if user else None


USER_SERVICES = {
    service.database: service
    for service in (UserService, PortalUserService, TwitterUserService)
}
