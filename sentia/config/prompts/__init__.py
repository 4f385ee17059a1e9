"""Instruction templates sent to the remote vision service."""

from sentia.config.prompts.analysis import (
    HEDGING_RULES,
    build_architecture_prompt,
    build_artwork_prompt,
    build_place_prompt,
    build_sculpture_prompt,
    build_unclear_prompt,
)
from sentia.config.prompts.classification import build_classification_prompt
from sentia.config.prompts.discovery import build_nearby_prompt
from sentia.config.prompts.relevance import build_relevance_prompt

__all__ = [
    "HEDGING_RULES",
    "build_architecture_prompt",
    "build_artwork_prompt",
    "build_classification_prompt",
    "build_nearby_prompt",
    "build_place_prompt",
    "build_relevance_prompt",
    "build_sculpture_prompt",
    "build_unclear_prompt",
]
