"""
SQLite-backed store for user records.

``UserRepository`` is deliberately dumb: it offers keyed lookups,
existence queries, an insert-or-update ``save`` and deletion, and
leaves every business rule to ``UserService``.  The only decision made
here is translating a UNIQUE constraint violation into
``DuplicateFieldError`` so that a conflicting write racing past the
service-level checks still surfaces as the right error kind.

All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Callable, List, Optional

from user_management_api.app.core.db import get_connection
from user_management_api.app.core.exceptions import DuplicateFieldError, UserField, UserNotFoundError
from user_management_api.app.schemas.user import UserBase, UserRead

logger = logging.getLogger(__name__)

_COLUMNS = "id, username, email, full_name, active"


class UserRepository:
    """Keyed CRUD and uniqueness queries over the ``users`` table."""

    def __init__(self, connection_factory: Callable[[], sqlite3.Connection] = get_connection) -> None:
        self._connect = connection_factory

    def find_all(self) -> List[UserRead]:
        conn = self._connect()
        try:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM users ORDER BY id ASC").fetchall()
            return [self._row_to_user_read(row) for row in rows]
        finally:
            conn.close()

    def find_by_active(self, active: bool = True) -> List[UserRead]:
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM users WHERE active = ? ORDER BY id ASC",
                (1 if active else 0,),
            ).fetchall()
            return [self._row_to_user_read(row) for row in rows]
        finally:
            conn.close()

    def find_by_id(self, user_id: int) -> Optional[UserRead]:
        return self._find_one("id", user_id)

    def find_by_username(self, username: str) -> Optional[UserRead]:
        return self._find_one("username", username)

    def exists_by_id(self, user_id: int) -> bool:
        return self._exists("id", user_id)

    def exists_by_username(self, username: str) -> bool:
        return self._exists("username", username)

    def exists_by_email(self, email: str) -> bool:
        return self._exists("email", email)

    def save(self, user: UserBase, user_id: Optional[int] = None) -> UserRead:
        """Insert ``user``, or overwrite the record ``user_id`` with it.

        Without ``user_id`` a new row is inserted and SQLite assigns the
        id.  With ``user_id`` the existing row is overwritten and
        ``updated_at`` is refreshed; a deleted id is never brought back,
        ``UserNotFoundError`` is raised instead.  Raises
        ``DuplicateFieldError`` if the write would break username or
        email uniqueness.  The transaction is rolled back on failure.
        """
        values = (user.username, user.email, user.full_name, 1 if user.active else 0)
        conn = self._connect()
        try:
            cursor = conn.cursor()
            try:
                if user_id is None:
                    cursor.execute(
                        "INSERT INTO users (username, email, full_name, active) VALUES (?, ?, ?, ?)",
                        values,
                    )
                    user_id = cursor.lastrowid
                else:
                    cursor.execute(
                        """
                        UPDATE users
                        SET username = ?, email = ?, full_name = ?, active = ?, updated_at = CURRENT_TIMESTAMP
                        WHERE id = ?
                        """,
                        (*values, user_id),
                    )
                    if cursor.rowcount == 0:
                        conn.rollback()
                        raise UserNotFoundError(user_id)
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                field = self._unique_violation_field(exc)
                if field is None:
                    raise
                logger.warning("Store rejected duplicate %s for user %s", field.value, user.username)
                raise DuplicateFieldError(field) from exc
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            return self._row_to_user_read(row)
        finally:
            conn.close()

    def delete_by_id(self, user_id: int) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            conn.commit()
        finally:
            conn.close()

    def count(self, active: Optional[bool] = None) -> int:
        """Number of stored users, optionally restricted by ``active``."""
        conn = self._connect()
        try:
            if active is None:
                row = conn.execute("SELECT COUNT(*) AS count FROM users").fetchone()
            else:
                row = conn.execute(
                    "SELECT COUNT(*) AS count FROM users WHERE active = ?",
                    (1 if active else 0,),
                ).fetchone()
            return row["count"]
        finally:
            conn.close()

    def _find_one(self, column: str, value) -> Optional[UserRead]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM users WHERE {column} = ?", (value,)
            ).fetchone()
            if not row:
                return None
            return self._row_to_user_read(row)
        finally:
            conn.close()

    def _exists(self, column: str, value) -> bool:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT 1 FROM users WHERE {column} = ? LIMIT 1", (value,)
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    @staticmethod
    def _unique_violation_field(exc: sqlite3.IntegrityError) -> Optional[UserField]:
        # SQLite reports e.g. "UNIQUE constraint failed: users.email"
        message = str(exc)
        if "UNIQUE" not in message:
            return None
        if "users.username" in message:
            return UserField.USERNAME
        if "users.email" in message:
            return UserField.EMAIL
        return None

    @staticmethod
    def _row_to_user_read(row: sqlite3.Row) -> UserRead:
        """Convert a database row to a UserRead schema instance."""
        return UserRead(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            full_name=row["full_name"],
            active=bool(row["active"]),
        )
