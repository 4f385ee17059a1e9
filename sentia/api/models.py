"""Request/Response models for API endpoints."""

import base64
import binascii
from typing import Any, Optional

from pydantic import BaseModel, Field

from sentia.config.constants import Category
from sentia.exceptions import InvalidImageError
from sentia.orchestrator.state import AnalysisRequest


class Location(BaseModel):
    """GPS coordinates of the capture."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class AnalyzeRequest(BaseModel):
    """Request model for the analyze endpoints."""

    image: str = Field(..., description="Base64-encoded image")
    location: Optional[Location] = Field(None, description="Optional GPS coordinates")
    capture_id: Optional[str] = Field(
        None, description="Client capture identifier; one analysis runs per capture at a time"
    )

    def to_analysis_request(self) -> AnalysisRequest:
        if not self.image.strip():
            raise InvalidImageError("No image provided")
        try:
            image_bytes = base64.b64decode(self.image, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidImageError("Image is not valid base64") from e
        return AnalysisRequest(
            image=image_bytes,
            location=self.location.model_dump() if self.location else None,
            capture_id=self.capture_id,
        )


class ReanalyzeRequest(AnalyzeRequest):
    """Re-run the main analysis with a category picked by the user."""

    category: Category


class AnalyzeResponse(BaseModel):
    """Response model for the analyze endpoint."""

    status: str = Field(..., description="complete or not_relevant")
    category: Optional[str] = None
    category_label: Optional[str] = None
    confidence_label: Optional[str] = None
    result: Optional[dict[str, Any]] = None
    reason: Optional[str] = None
    title: Optional[str] = Field(None, description="Guidance title when not relevant")
    suggestion: Optional[str] = Field(None, description="Recapture guidance when not relevant")
    scan_id: Optional[str] = None
    quota: Optional[dict[str, Any]] = None
    nearby_paywall: Optional[dict[str, Any]] = None


class PremiumRequest(BaseModel):
    """Request model for setting the premium flag after a purchase."""

    is_premium: bool


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
