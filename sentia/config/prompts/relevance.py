"""
Relevance filter prompt.
"""


def build_relevance_prompt() -> str:
    """Build the instruction for the lightweight relevance check.

    Returns:
        Prompt asking the vision service for ``{"isRelevant", "reason"}``.
    """
    return """You are a relevance filter for a cultural exploration app.

Your task: Determine if an image shows a PLACE, BUILDING, ARTWORK, or CULTURAL OBJECT.

RELEVANT images include:
- City streets, squares, parks, environments
- Buildings, architecture, monuments
- Paintings, artwork in museums
- Sculptures, statues, fountains
- Cultural sites, religious buildings
- Historic sites, ruins

NOT RELEVANT images include:
- Close-ups of objects (coffee mug, keyboard, furniture)
- Textures, walls, floors (no wider context)
- Food, drinks, products
- People, portraits, selfies
- Documents, screens, text

Respond ONLY with valid JSON:
{
  "isRelevant": true/false,
  "reason": "brief explanation"
}"""
