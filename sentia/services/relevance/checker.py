"""Relevance check service."""

import logging

from sentia.config.constants import Endpoint
from sentia.config.prompts import build_relevance_prompt
from sentia.infrastructure.http import ImageRef, TransportClient
from sentia.services.relevance.models import RelevanceResult

logger = logging.getLogger(__name__)


class RelevanceChecker:
    """Asks the vision service whether an image is worth analyzing.

    Filters out close-ups, textures, food, selfies and documents before the
    more expensive stages run.
    """

    def __init__(self, client: TransportClient):
        self.client = client

    async def check(self, image: ImageRef) -> RelevanceResult:
        """Run the relevance filter on ``image``.

        Raises:
            SentiaError: Any classified transport failure; the pipeline decides
                whether to fail open.
        """
        response = await self.client.post_image(
            Endpoint.RELEVANCE.value,
            image,
            prompt=build_relevance_prompt(),
        )
        result = RelevanceResult.model_validate(response)
        logger.debug(f"Relevance: {result.is_relevant} ({result.reason})")
        return result
