"""Main analysis models."""

from typing import Any, Optional

from pydantic import field_validator

from sentia.config.constants import Category, ConfidenceLevel
from sentia.config.message import ANALYSIS_UNAVAILABLE_TITLE
from sentia.services.base import CamelModel, as_text


class AnalysisResult(CamelModel):
    """Structured cultural explanation of an image.

    String fields are never ``None``; only ``tip`` is optional.
    """

    title: str = ""
    confidence: ConfidenceLevel = ConfidenceLevel.LOW
    category: Category = Category.UNCLEAR
    quick_reason: str = ""
    short_explanation: str = ""
    why_here: str = ""
    audio_guide: str = ""
    tip: Optional[str] = None

    @field_validator(
        "title", "quick_reason", "short_explanation", "why_here", "audio_guide", mode="before"
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return as_text(v)

    @field_validator("tip", mode="before")
    @classmethod
    def coerce_tip(cls, v: Any) -> Optional[str]:
        text = as_text(v)
        return text or None

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v: Any) -> ConfidenceLevel:
        return ConfidenceLevel.coerce(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Category:
        return Category.coerce(v)

    @classmethod
    def from_response(cls, data: dict[str, Any], category: Category) -> "AnalysisResult":
        """Build a result from a raw service response.

        A missing or unrecognized ``category`` in the response keeps the
        category the pipeline classified.
        """
        fields = {key: value for key, value in data.items() if value is not None}
        raw_category = fields.get("category")
        known = {c.value for c in Category}
        if not (isinstance(raw_category, str) and raw_category.strip().lower() in known):
            fields["category"] = category
        return cls.model_validate(fields)

    @classmethod
    def unavailable(cls, category: Category) -> "AnalysisResult":
        """Safe result returned when the analysis response cannot be used."""
        return cls(
            title=ANALYSIS_UNAVAILABLE_TITLE,
            confidence=ConfidenceLevel.LOW,
            category=category,
        )
