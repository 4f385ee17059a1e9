"""Relevance check models."""

from typing import Any

from pydantic import field_validator

from sentia.services.base import CamelModel, as_text

_TRUTHY_STRINGS = {"true", "yes", "1"}


class RelevanceResult(CamelModel):
    """Whether an image depicts a culturally analyzable subject."""

    is_relevant: bool = False
    reason: str = ""

    @field_validator("is_relevant", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() in _TRUTHY_STRINGS
        if isinstance(v, (int, float)):
            return v != 0
        return False

    @field_validator("reason", mode="before")
    @classmethod
    def coerce_reason(cls, v: Any) -> str:
        return as_text(v)

    @classmethod
    def assumed_relevant(cls) -> "RelevanceResult":
        """Result used when the check could not reach the service."""
        return cls(is_relevant=True, reason="")
