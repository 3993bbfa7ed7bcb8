"""Version 1 API routers."""

from fastapi import APIRouter

from . import posts

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(posts.router)

__all__ = ["api_router"]
