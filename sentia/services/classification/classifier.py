"""Category classifier service."""

import logging

from sentia.config.constants import Endpoint
from sentia.config.prompts import build_classification_prompt
from sentia.infrastructure.http import ImageRef, TransportClient
from sentia.services.classification.models import ClassificationResult

logger = logging.getLogger(__name__)


class CategoryClassifier:
    """Classifies an image into one of the cultural categories."""

    def __init__(self, client: TransportClient):
        self.client = client

    async def classify(self, image: ImageRef) -> ClassificationResult:
        """
        Classify an image.

        Args:
            image: Local image reference

        Returns:
            ClassificationResult; unknown category strings become UNCLEAR
        """
        response = await self.client.post_image(
            Endpoint.CATEGORY.value,
            image,
            prompt=build_classification_prompt(),
        )
        raw_category = response.get("category")
        result = ClassificationResult.model_validate(response)
        if raw_category != result.category.value:
            logger.warning(
                "Unrecognized category %r from service, using %s",
                raw_category,
                result.category.value,
            )
        return result
