"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from sentia.api.routers.access import router as access_router
from sentia.api.routers.analyze import router as analyze_router
from sentia.api.routers.health import router as health_router
from sentia.api.routers.history import router as history_router

api_router = APIRouter()

api_router.include_router(analyze_router, tags=["analyze"])
api_router.include_router(access_router, tags=["access"])
api_router.include_router(history_router, prefix="/history", tags=["history"])
api_router.include_router(health_router, tags=["health"])
