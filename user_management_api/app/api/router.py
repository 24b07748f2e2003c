"""
Top-level API router.

Aggregates domain-specific routers under a unified prefix.  When new
endpoints are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import info, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(info.router, prefix="/info", tags=["info"])
