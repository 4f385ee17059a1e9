"""
Main analysis prompts, one per category.

Every template shares the hedging rules and the JSON shape of ``AnalysisResult``;
they differ only in domain framing.
"""

from sentia.config.constants import Category

HEDGING_RULES = """IMPORTANT: Be honest about uncertainty.
- Use "appears to be" or "likely" if not certain
- Say "I cannot confidently identify" if unsure
- Never invent facts"""


def _location_line(location: dict[str, float] | None) -> str:
    if not location:
        return ""
    return f"Location context: {location['latitude']}, {location['longitude']}"


def _response_shape(category: Category, hints: dict[str, str]) -> str:
    return f"""Respond with valid JSON:
{{
  "title": "{hints['title']}",
  "confidence": "high|medium|low",
  "category": "{category.value}",
  "quickReason": "{hints['quickReason']}",
  "shortExplanation": "{hints['shortExplanation']}",
  "whyHere": "{hints['whyHere']}",
  "audioGuide": "{hints['audioGuide']}",
  "tip": "{hints['tip']}"
}}"""


def build_place_prompt(location: dict[str, float] | None = None) -> str:
    """Places and environments: context, atmosphere, why it matters here."""
    shape = _response_shape(
        Category.PLACE,
        {
            "title": "short, descriptive name",
            "quickReason": "1-2 sentences explaining what this is",
            "shortExplanation": "2-3 sentences about the place, its atmosphere, and cultural context",
            "whyHere": "why this place matters in this location",
            "audioGuide": "20-30 second spoken explanation, short sentences, conversational tone",
            "tip": "optional suggestion for the visitor",
        },
    )
    return f"""You are a calm, knowledgeable cultural guide for places and environments.

Analyze this place or environment. Focus on:
1. What kind of place this is (square, park, street, neighborhood, etc.)
2. The atmosphere and feeling of the space
3. Cultural or historical context if relevant
4. Why this place matters in this location

{_location_line(location)}

{HEDGING_RULES}

{shape}"""


def build_architecture_prompt(location: dict[str, float] | None = None) -> str:
    """Buildings: name, period, function, architectural significance."""
    shape = _response_shape(
        Category.ARCHITECTURE,
        {
            "title": "building name or architectural description",
            "quickReason": "1-2 sentences identifying the building or style",
            "shortExplanation": "2-3 sentences about architectural style, period, and significance",
            "whyHere": "historical or cultural context for this building",
            "audioGuide": "20-30 second spoken explanation, short sentences, focus on what makes it interesting",
            "tip": "optional observation for the visitor",
        },
    )
    return f"""You are an architectural historian and cultural guide.

Analyze this building or architecture. Focus on:
1. Building name or type if identifiable
2. Architectural style and period
3. Original function and current use if known
4. Historical or architectural significance
5. Notable features (materials, design, details)

{_location_line(location)}

{HEDGING_RULES}

{shape}"""


def build_artwork_prompt(location: dict[str, float] | None = None) -> str:
    """Paintings: artist, title, movement, date."""
    shape = _response_shape(
        Category.ARTWORK,
        {
            "title": "artwork title or descriptive placeholder",
            "quickReason": "1-2 sentences about the artwork or artist",
            "shortExplanation": "2-3 sentences about the artist, movement, and significance",
            "whyHere": "context for this artwork (artist bio, historical importance)",
            "audioGuide": "20-30 second spoken explanation, short sentences, bring the artwork to life",
            "tip": "optional suggestion for viewing",
        },
    )
    return f"""You are an art historian and museum guide.

Analyze this artwork or painting. Focus on:
1. Artist name if identifiable
2. Artwork title if identifiable
3. Art movement and approximate date
4. Short artist biography (why this artist matters)
5. What makes this artwork significant or interesting

{_location_line(location)}

{HEDGING_RULES}
- If the artwork is not identifiable, describe the STYLE clearly

For unidentifiable but stylistic works, describe:
- Style characteristics
- Possible period or movement
- Visual elements and techniques

{shape}"""


def build_sculpture_prompt(location: dict[str, float] | None = None) -> str:
    """Sculptures and three-dimensional objects."""
    shape = _response_shape(
        Category.SCULPTURE,
        {
            "title": "sculpture name or subject description",
            "quickReason": "1-2 sentences about the sculpture",
            "shortExplanation": "2-3 sentences about subject, artist if known, and significance",
            "whyHere": "cultural context or historical background",
            "audioGuide": "20-30 second spoken explanation, short sentences",
            "tip": "optional viewing suggestion",
        },
    )
    return f"""You are a sculpture and cultural object specialist.

Analyze this sculpture or three-dimensional object. Focus on:
1. Artist or creator if identifiable
2. Subject matter depicted
3. Period and style
4. Materials and techniques if evident
5. Cultural or artistic significance

{_location_line(location)}

{HEDGING_RULES}

{shape}"""


def build_unclear_prompt(location: dict[str, float] | None = None) -> str:
    """Fallback for images that passed relevance but fit no category."""
    shape = _response_shape(
        Category.UNCLEAR,
        {
            "title": "descriptive title",
            "quickReason": "1-2 sentences about what is visible",
            "shortExplanation": "2-3 sentences about what can be observed",
            "whyHere": "context if available",
            "audioGuide": "20-30 second spoken explanation",
            "tip": "optional suggestion",
        },
    )
    return f"""You are a cultural guide analyzing an interesting image.

This image appears to show something culturally interesting, but the category is unclear.

Provide helpful context:
1. What you can confidently observe
2. Possible category or type
3. Why this might be interesting

{_location_line(location)}

{HEDGING_RULES}
- Say what you see, not what you guess

{shape}"""
