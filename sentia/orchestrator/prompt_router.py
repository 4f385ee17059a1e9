"""Map a classified category to its analysis instruction."""

import logging
from collections.abc import Callable
from typing import Optional

from sentia.config.constants import Category
from sentia.config.prompts import (
    build_architecture_prompt,
    build_artwork_prompt,
    build_place_prompt,
    build_sculpture_prompt,
    build_unclear_prompt,
)

logger = logging.getLogger(__name__)

PromptBuilder = Callable[[Optional[dict[str, float]]], str]

_PROMPT_BUILDERS: dict[Category, PromptBuilder] = {
    Category.PLACE: build_place_prompt,
    Category.ARCHITECTURE: build_architecture_prompt,
    Category.ARTWORK: build_artwork_prompt,
    Category.SCULPTURE: build_sculpture_prompt,
    Category.UNCLEAR: build_unclear_prompt,
}


def prompt_for(category: Category | str, location: Optional[dict[str, float]] = None) -> str:
    """Return the analysis instruction for ``category``.

    Anything that is not a known category gets the unclear-subject prompt.
    """
    resolved = Category.coerce(category)
    if resolved is Category.UNCLEAR and category not in (Category.UNCLEAR, Category.UNCLEAR.value):
        logger.warning("No prompt for category '%s', using the unclear-subject prompt", category)
    return _PROMPT_BUILDERS[resolved](location)
