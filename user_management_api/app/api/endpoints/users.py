"""
User endpoints.

Expose list, lookup, create, replace and delete operations for user
records under ``/api/users``.  Each handler delegates to
``UserService`` and maps its outcome to a status code:

* ``DuplicateFieldError`` -> 400
* ``UserNotFoundError`` and empty lookups -> 404

Malformed bodies are rejected with 400 by the validation handler
registered in ``main.create_app`` before a handler runs.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from user_management_api.app.api.deps import get_user_service
from user_management_api.app.core.exceptions import DuplicateFieldError, UserNotFoundError
from user_management_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from user_management_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return all users."""
    return await service.list_users()


@router.get("/active", response_model=List[UserRead])
async def list_active_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return only users with ``active`` set."""
    return await service.list_active_users()


@router.get("/username/{username:path}", response_model=UserRead)
async def get_user_by_username(
    username: str,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Retrieve a user by username.  Returns 404 if no user has it.

    The ``path`` convertor lets usernames containing ``/`` (sent as
    ``%2F``) reach this handler.
    """
    user = await service.get_user_by_username(username)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> UserRead:
    """Retrieve a user by ID.  Returns 404 if the user does not exist."""
    user = await service.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Create a user.

    ``active`` defaults to true.  A username or e-mail that is already
    taken yields 400.
    """
    try:
        return await service.create_user(user_in)
    except DuplicateFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    user_in: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Replace all mutable fields of a user.

    The body must carry the complete record; the id in the path wins
    over any id in the body.
    """
    try:
        return await service.update_user(user_id, user_in)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateFieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> None:
    """Delete a user by ID."""
    try:
        await service.delete_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return None
