"""Scan history models."""

import uuid
from datetime import UTC, datetime
from typing import Optional

from pydantic import Field

from sentia.config.constants import Category
from sentia.services.analysis.models import AnalysisResult
from sentia.services.base import CamelModel
from sentia.services.discovery.models import NearbySuggestion


def _new_scan_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ScanRecord(CamelModel):
    """A completed analysis kept in the user's history."""

    id: str = Field(default_factory=_new_scan_id)
    timestamp: datetime = Field(default_factory=_utc_now)
    category: Category
    analysis: AnalysisResult
    location: Optional[dict[str, float]] = None
    nearby: list[NearbySuggestion] = Field(default_factory=list)
