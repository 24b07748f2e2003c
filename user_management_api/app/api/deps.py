"""FastAPI dependency providers."""

from fastapi import Depends

from user_management_api.app.repositories.user_repository import UserRepository
from user_management_api.app.services.user_service import UserService


def get_user_repository() -> UserRepository:
    """Get a SQLite user repository instance."""
    return UserRepository()


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
) -> UserService:
    """Get a user service bound to the repository."""
    return UserService(repository)
