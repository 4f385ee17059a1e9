"""Tests for nearby discovery."""

import httpx
import pytest

from sentia.config.constants import Category, SuggestionType
from sentia.services.discovery import DiscoveryService

LOCATION = {"latitude": 48.8606, "longitude": 2.3376}


@pytest.mark.asyncio
async def test_no_location_returns_empty_without_call(client, vision):
    """Test no location returns empty without call."""
    service = DiscoveryService(client)
    response = await service.get_nearby(None, Category.ARTWORK)
    assert response.suggestions == []
    assert vision.calls == []

    response = await service.get_nearby({"latitude": 1.0}, Category.ARTWORK)
    assert response.suggestions == []
    assert vision.calls == []


@pytest.mark.asyncio
async def test_truncates_then_drops_incomplete_entries(client, vision):
    """Test truncates then drops incomplete entries."""
    vision.on(
        "/discovery/nearby",
        {
            "suggestions": [
                {"name": "Louvre", "type": "museum", "description": "Art museum", "distance": "5 min"},
                {"name": "", "type": "museum", "description": "Nameless"},
                {"name": "Tuileries", "type": "walking_route", "description": "Gardens"},
                {"name": "Orsay", "type": "museum", "description": "Impressionists"},
            ]
        },
    )

    response = await DiscoveryService(client, max_suggestions=3).get_nearby(
        LOCATION, Category.ARTWORK
    )

    assert [s.name for s in response.suggestions] == ["Louvre", "Tuileries"]
    assert response.suggestions[0].type is SuggestionType.MUSEUM
    assert response.suggestions[0].distance == "5 min"
    assert response.suggestions[1].distance is None


@pytest.mark.asyncio
async def test_request_carries_prompt_and_location_but_no_image(client, vision):
    """Test request carries prompt and location but no image."""
    vision.on("/discovery/nearby", {"suggestions": []})
    await DiscoveryService(client).get_nearby(LOCATION, Category.ARCHITECTURE)

    payload = vision.calls_to("/discovery/nearby")[0]
    assert "image" not in payload
    assert payload["location"] == LOCATION
    assert "building_or_architecture" in payload["prompt"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        httpx.Response(500, json={"message": "down"}),
        httpx.Response(200, text="oops"),
        {"suggestions": "not a list"},
    ],
)


async def test_failures_yield_empty_list(client, vision, reply):
    """Test failures yield empty list."""
    vision.on("/discovery/nearby", reply)
    response = await DiscoveryService(client).get_nearby(LOCATION, Category.PLACE)
    assert response.has_suggestions is False
