"""
Constants, enums, and static values.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Cultural subject categories. Values are the remote service's wire names."""

    PLACE = "place_or_environment"
    ARCHITECTURE = "building_or_architecture"
    ARTWORK = "artwork_or_painting"
    SCULPTURE = "sculpture_or_object"
    UNCLEAR = "unclear"

    @classmethod
    def coerce(cls, value: object) -> "Category":
        """Map a raw service value onto a known category, falling back to UNCLEAR."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.UNCLEAR

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[Category, str] = {
    Category.PLACE: "Place",
    Category.ARCHITECTURE: "Architecture",
    Category.ARTWORK: "Artwork",
    Category.SCULPTURE: "Sculpture",
    Category.UNCLEAR: "Unknown",
}


class ConfidenceLevel(str, Enum):
    """Confidence reported by the remote service."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def coerce(cls, value: object) -> "ConfidenceLevel":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.LOW


class Feature(str, Enum):
    """Named features that may sit behind the premium tier."""

    AUDIO_GUIDE = "audio_guide"
    NEARBY_DISCOVERY = "nearby_discovery"
    UNLIMITED_SCANS = "unlimited_scans"


class SuggestionType(str, Enum):
    """Nearby discovery suggestion groups."""

    MUSEUM = "museum"
    CITY_EXPLORATION = "city_exploration"
    WALKING_ROUTE = "walking_route"


class Endpoint(str, Enum):
    """Remote service endpoints, relative to the configured base URL."""

    RELEVANCE = "/analyze/relevance"
    CATEGORY = "/analyze/category"
    ANALYZE = "/analyze/main"
    NEARBY = "/discovery/nearby"


class StorageKey(str, Enum):
    """Keys in the persistent key-value store."""

    SCAN_HISTORY = "@sentia_scan_history"
    SCAN_COUNT_TODAY = "@sentia_scan_count_today"
    LAST_SCAN_DATE = "@sentia_last_scan_date"
    IS_PREMIUM = "@sentia_is_premium"


class PipelineStage(str, Enum):
    """Analysis pipeline states."""

    IDLE = "idle"
    CHECKING_RELEVANCE = "checking_relevance"
    CLASSIFYING = "classifying"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    NOT_RELEVANT = "not_relevant"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STAGES


TERMINAL_STAGES = frozenset(
    {PipelineStage.COMPLETE, PipelineStage.NOT_RELEVANT, PipelineStage.ERROR}
)


class PipelineStageDescription(str, Enum):
    """Pipeline stage descriptions used in logs."""

    CHECKING_RELEVANCE = "Check whether the image shows a culturally analyzable subject"
    CLASSIFYING = "Classify the image into a cultural category"
    ANALYZING = "Produce the category-specific cultural explanation"


def log_pipeline_stage(stage: PipelineStage) -> None:
    """Log the start of a pipeline stage with its description."""
    description = PipelineStageDescription[stage.name].value
    logger.info(f"{stage.value}: {description}", extra={"stage": stage.value})
