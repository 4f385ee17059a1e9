"""
Category classification prompt.
"""

from sentia.config.constants import Category, ConfidenceLevel

_CATEGORY_HINTS: dict[Category, str] = {
    Category.PLACE: "streets, squares, parks, city scenes, landscapes",
    Category.ARCHITECTURE: "buildings, monuments, churches, architectural details",
    Category.ARTWORK: "paintings, murals, drawings, flat artwork",
    Category.SCULPTURE: "sculptures, statues, three-dimensional art",
    Category.UNCLEAR: "if you cannot determine",
}


def build_classification_prompt() -> str:
    """Build the instruction used after the relevance check passes."""
    categories = "\n".join(f"- {c.value}: {_CATEGORY_HINTS[c]}" for c in Category)
    confidences = "|".join(level.value for level in ConfidenceLevel)

    return f"""You are a cultural image classifier.

Classify the image into ONE of these categories:
{categories}

Respond ONLY with valid JSON:
{{
  "category": "category_name",
  "confidence": "{confidences}"
}}"""
