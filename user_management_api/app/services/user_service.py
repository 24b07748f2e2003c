"""
Business logic for users.

``UserService`` is the single source of truth for the user lifecycle.
It enforces username and email uniqueness on create and update,
reports missing records on update and delete, and otherwise passes
calls straight through to the repository.  The service holds no state
of its own besides the repository reference, so one instance can be
shared by concurrent requests.

Uniqueness is always checked username first, then email, so when both
collide the username error wins.  Storage errors are not caught here.
"""

import logging
from typing import List, Optional

from user_management_api.app.core.exceptions import (
    DuplicateFieldError,
    UserField,
    UserNotFoundError,
)
from user_management_api.app.repositories.user_repository import UserRepository
from user_management_api.app.schemas.user import UserCreate, UserRead, UserUpdate


class UserService:
    """Service for creating, reading, replacing and deleting users."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def list_users(self) -> List[UserRead]:
        """Return all users."""
        return self.repository.find_all()

    async def list_active_users(self) -> List[UserRead]:
        """Return users whose ``active`` flag is set."""
        return self.repository.find_by_active(True)

    async def get_user_by_id(self, user_id: int) -> Optional[UserRead]:
        """Retrieve a user by ID, or ``None`` if there is no such user."""
        return self.repository.find_by_id(user_id)

    async def get_user_by_username(self, username: str) -> Optional[UserRead]:
        """Retrieve a user by username, or ``None`` if there is no such user."""
        return self.repository.find_by_username(username)

    async def create_user(self, data: UserCreate) -> UserRead:
        """Store a new user and return it with its assigned id.

        Raises ``DuplicateFieldError`` if the username or the email is
        already taken.  Nothing is written in that case.
        """
        logger = logging.getLogger(__name__)
        if self.repository.exists_by_username(data.username):
            logger.warning("Rejected user creation: username %s already exists", data.username)
            raise DuplicateFieldError(UserField.USERNAME)
        if self.repository.exists_by_email(data.email):
            logger.warning("Rejected user creation: email %s already exists", data.email)
            raise DuplicateFieldError(UserField.EMAIL)
        user = self.repository.save(data)
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> UserRead:
        """Replace the username, email, full name and active flag of a user.

        A user may keep its own current username or email; only a value
        that differs from the stored one is checked against the other
        users.  The id never changes.  Raises ``UserNotFoundError`` if
        the user does not exist and ``DuplicateFieldError`` on a
        collision; the stored record is untouched on failure.
        """
        logger = logging.getLogger(__name__)
        existing = self.repository.find_by_id(user_id)
        if existing is None:
            logger.warning("Rejected update: user %s not found", user_id)
            raise UserNotFoundError(user_id)

        if existing.username != data.username and self.repository.exists_by_username(data.username):
            logger.warning("Rejected update of user %s: username %s already exists", user_id, data.username)
            raise DuplicateFieldError(UserField.USERNAME)
        if existing.email != data.email and self.repository.exists_by_email(data.email):
            logger.warning("Rejected update of user %s: email %s already exists", user_id, data.email)
            raise DuplicateFieldError(UserField.EMAIL)

        user = self.repository.save(data, user_id=existing.id)
        logger.info("Updated user %s", user_id)
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user.

        Raises ``UserNotFoundError`` if the user does not exist.
        """
        logger = logging.getLogger(__name__)
        if not self.repository.exists_by_id(user_id):
            logger.warning("Rejected delete: user %s not found", user_id)
            raise UserNotFoundError(user_id)
        self.repository.delete_by_id(user_id)
        logger.info("Deleted user %s", user_id)

    async def count_users(self) -> dict:
        """Return total and active user counts."""
        return {
            "total": self.repository.count(),
            "active": self.repository.count(active=True),
        }
