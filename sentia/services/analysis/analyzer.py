"""Main cultural analysis service."""

import logging
from typing import Optional

from sentia.config.constants import Category, Endpoint
from sentia.infrastructure.http import ImageRef, TransportClient
from sentia.services.analysis.models import AnalysisResult

logger = logging.getLogger(__name__)


class CultureAnalyzer:
    """Runs the category-specific analysis call."""

    def __init__(self, client: TransportClient):
        self.client = client

    async def analyze(
        self,
        image: ImageRef,
        category: Category,
        prompt: str,
        location: Optional[dict[str, float]] = None,
    ) -> AnalysisResult:
        """Send the image with its category prompt and parse the explanation."""
        response = await self.client.post_image(
            Endpoint.ANALYZE.value,
            image,
            prompt=prompt,
            location=location,
        )
        return AnalysisResult.from_response(response, category)
