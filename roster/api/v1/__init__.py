"""API v1 routes."""

from fastapi import APIRouter

from roster.api.v1 import auth, characters, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(characters.router, prefix="/characters", tags=["characters"])
