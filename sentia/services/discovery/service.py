"""Nearby cultural place discovery."""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from sentia.config.constants import Category, Endpoint
from sentia.config.prompts import build_nearby_prompt
from sentia.infrastructure.http import TransportClient
from sentia.services.discovery.models import NearbyResponse, NearbySuggestion

logger = logging.getLogger(__name__)


def _has_coordinates(location: Optional[dict[str, float]]) -> bool:
    if not location:
        return False
    return location.get("latitude") is not None and location.get("longitude") is not None


class DiscoveryService:
    """Suggests museums, landmarks and walking routes near the user.

    Best-effort: any failure yields an empty suggestion list.
    """

    def __init__(self, client: TransportClient, max_suggestions: int = 3):
        self.client = client
        self.max_suggestions = max_suggestions

    async def get_nearby(
        self,
        location: Optional[dict[str, float]],
        current_category: Category,
    ) -> NearbyResponse:
        if not _has_coordinates(location):
            return NearbyResponse.empty()

        coordinates = {"latitude": location["latitude"], "longitude": location["longitude"]}
        try:
            response = await self.client.send(
                Endpoint.NEARBY.value,
                {
                    "prompt": build_nearby_prompt(
                        coordinates, current_category, self.max_suggestions
                    ),
                    "location": coordinates,
                },
            )
        except Exception as e:
            logger.warning(f"Nearby discovery failed: {e}", exc_info=True)
            return NearbyResponse.empty()

        return NearbyResponse(suggestions=self._parse_suggestions(response))

    def _parse_suggestions(self, response: dict[str, Any]) -> list[NearbySuggestion]:
        raw = response.get("suggestions")
        if not isinstance(raw, list):
            return []

        suggestions: list[NearbySuggestion] = []
        for item in raw[: self.max_suggestions]:
            if not isinstance(item, dict) or not item.get("name") or not item.get("description"):
                continue
            try:
                suggestions.append(NearbySuggestion.model_validate(item))
            except ValidationError as e:
                logger.debug(f"Skipping malformed suggestion {item!r}: {e}")
        return suggestions
