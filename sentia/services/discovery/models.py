"""Nearby discovery models."""

from typing import Any, Optional

from pydantic import Field, field_validator

from sentia.config.constants import SuggestionType
from sentia.services.base import CamelModel, as_text


class NearbySuggestion(CamelModel):
    """A cultural place near the user."""

    name: str
    type: SuggestionType = SuggestionType.CITY_EXPLORATION
    description: str
    distance: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> SuggestionType:
        try:
            return SuggestionType(as_text(v).lower())
        except ValueError:
            return SuggestionType.CITY_EXPLORATION

    @field_validator("distance", mode="before")
    @classmethod
    def coerce_distance(cls, v: Any) -> Optional[str]:
        return as_text(v) or None


class NearbyResponse(CamelModel):
    """Suggestions returned by nearby discovery."""

    suggestions: list[NearbySuggestion] = Field(default_factory=list)

    @property
    def has_suggestions(self) -> bool:
        return len(self.suggestions) > 0

    @classmethod
    def empty(cls) -> "NearbyResponse":
        return cls(suggestions=[])


def group_suggestions(suggestions: list[NearbySuggestion]) -> dict[str, list[NearbySuggestion]]:
    """Bucket suggestions by type, in a fixed group order."""
    groups: dict[str, list[NearbySuggestion]] = {t.value: [] for t in SuggestionType}
    for suggestion in suggestions:
        groups[suggestion.type.value].append(suggestion)
    return groups
