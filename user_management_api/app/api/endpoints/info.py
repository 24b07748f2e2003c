"""
Information endpoint.

Returns the service name and version together with the number of
stored users, which makes it usable as a liveness check that also
touches the database.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from user_management_api.app.api.deps import get_user_service
from user_management_api.app.core.config import settings
from user_management_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def get_info(service: UserService = Depends(get_user_service)) -> Dict[str, Any]:
    counts = await service.count_users()
    return {
        "name": settings.project_name,
        "version": settings.api_version,
        "users": counts,
    }
