"""
Nearby discovery prompt.
"""

from sentia.config.constants import Category, SuggestionType


def build_nearby_prompt(
    location: dict[str, float],
    current_category: Category | str,
    max_suggestions: int = 3,
) -> str:
    """Build the nearby-discovery instruction for a location.

    Args:
        location: ``{"latitude", "longitude"}`` of the user.
        current_category: Category of the scan the user just viewed.
        max_suggestions: Upper bound on suggestions requested.

    Returns:
        Prompt asking for ``{"suggestions": [...]}``.
    """
    category_value = (
        current_category.value if isinstance(current_category, Category) else current_category
    )
    types = "|".join(t.value for t in SuggestionType)

    return f"""You are a local cultural guide for nearby discovery.

Given this location: {location['latitude']}, {location['longitude']}

The user just viewed: {category_value}

Suggest up to {max_suggestions} nearby cultural places to explore:
- Museums or galleries
- Notable buildings or monuments
- Parks, squares, or interesting streets
- Walking routes with multiple cultural points

Group suggestions by type:
- museum: museums, galleries, cultural institutions
- city_exploration: notable buildings, monuments, sites
- walking_route: areas worth exploring on foot

For each suggestion provide:
- Name
- Brief description (why it's worth visiting)
- Approximate distance if reasonable

DO NOT provide navigation directions or maps.
This is for discovery, not directions.

Respond with valid JSON:
{{
  "suggestions": [
    {{
      "name": "place name",
      "type": "{types}",
      "description": "1-2 sentences about why visit",
      "distance": "walking distance if applicable"
    }}
  ]
}}"""
