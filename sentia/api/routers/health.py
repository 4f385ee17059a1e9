"""Health endpoint."""

from fastapi import APIRouter, Depends

from sentia.api.models import HealthResponse
from sentia.config.settings import Settings, get_settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:  # noqa: B008
    return HealthResponse(status="healthy", version=settings.app_version)
