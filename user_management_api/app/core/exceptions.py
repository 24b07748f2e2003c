"""
Error taxonomy for the user service.

Precondition failures are raised as distinct exception classes so the
API layer can map them to status codes without inspecting messages.
Storage errors are not wrapped; they propagate as raised by ``sqlite3``.
"""

from enum import Enum
from typing import Any


class UserField(str, Enum):
    """Fields of a user record that must be unique."""

    USERNAME = "username"
    EMAIL = "email"


class UserServiceError(Exception):
    """Base class for user service precondition failures."""


class DuplicateFieldError(UserServiceError):
    """A username or email is already taken by another user."""

    def __init__(self, field: UserField) -> None:
        self.field = UserField(field)
        super().__init__(f"{self.field.value.capitalize()} already exists")


class UserNotFoundError(UserServiceError):
    """No user exists with the given id."""

    def __init__(self, user_id: Any) -> None:
        self.user_id = user_id
        super().__init__(f"User not found with id: {user_id}")
