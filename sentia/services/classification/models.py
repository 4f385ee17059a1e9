"""Category classification models."""

from typing import Any

from pydantic import field_validator

from sentia.config.constants import Category, ConfidenceLevel
from sentia.services.base import CamelModel


class ClassificationResult(CamelModel):
    """Category assigned to an image. Unknown values coerce to UNCLEAR / LOW."""

    category: Category = Category.UNCLEAR
    confidence: ConfidenceLevel = ConfidenceLevel.LOW

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Category:
        return Category.coerce(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> ConfidenceLevel:
        return ConfidenceLevel.coerce(v)

    @classmethod
    def unclear(cls) -> "ClassificationResult":
        return cls(category=Category.UNCLEAR, confidence=ConfidenceLevel.LOW)
