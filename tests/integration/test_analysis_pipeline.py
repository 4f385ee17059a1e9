"""End-to-end pipeline tests driven by a mock vision service."""

import base64

import pytest

from sentia.config.constants import Category, PipelineStage
from sentia.infrastructure.http import RequestConfig, TransportClient
from sentia.orchestrator.context import AppContext
from sentia.orchestrator.scan_session import ScanCoordinator
from sentia.orchestrator.state import AnalysisRequest, Completed, NotRelevant

ARCHITECTURE_ANALYSIS = {
    "title": "Casa Batllo",
    "confidence": "high",
    "category": "building_or_architecture",
    "quickReason": "Antoni Gaudi's remodelled house on Passeig de Gracia.",
    "shortExplanation": "The facade appears to evoke the sea with its ceramic mosaic.",
    "whyHere": "Passeig de Gracia was the showcase of Barcelona's modernisme.",
    "audioGuide": "Look at the balconies. They likely resemble masks or skulls.",
    "tip": "Visit at dusk when the facade is lit.",
}


@pytest.fixture
def context(settings, store, today, base_url, vision, sleep_recorder):
    client = TransportClient(
        base_url,
        RequestConfig.from_settings(settings),
        max_image_size_bytes=settings.max_image_size_bytes,
        transport=vision.transport,
        sleep=sleep_recorder,
    )
    return AppContext(settings, store, client, today=today)


@pytest.mark.asyncio
async def test_architecture_image_end_to_end(context, vision, tmp_path, image):
    """Test architecture image end to end."""
    photo = tmp_path / "casa_batllo.jpg"
    photo.write_bytes(image)
    vision.on("/analyze/relevance", {"isRelevant": True, "reason": "building facade"})
    vision.on("/analyze/category", {"category": "building_or_architecture", "confidence": "high"})
    vision.on("/analyze/main", ARCHITECTURE_ANALYSIS)

    async with context:
        outcome = await context.pipeline.process(AnalysisRequest(image=photo))

    assert isinstance(outcome, Completed)
    assert outcome.category is Category.ARCHITECTURE
    assert outcome.result.title == "Casa Batllo"
    assert outcome.result.tip == "Visit at dusk when the facade is lit."
    assert [path for path, _ in vision.calls] == [
        "/analyze/relevance",
        "/analyze/category",
        "/analyze/main",
    ]
    for _path, payload in vision.calls:
        assert base64.b64decode(payload["image"]) == image
        assert payload["prompt"]


@pytest.mark.asyncio
async def test_not_relevant_image_stops_after_relevance(context, vision, image):
    """Test not relevant image stops after relevance."""
    vision.on("/analyze/relevance", {"isRelevant": False, "reason": "too close"})

    async with context:
        outcome = await context.pipeline.process(AnalysisRequest(image=image))

    assert outcome == NotRelevant(reason="too close")
    assert [path for path, _ in vision.calls] == ["/analyze/relevance"]


@pytest.mark.asyncio
async def test_premium_scan_with_nearby_discovery(context, vision, image):
    """Test premium scan with nearby discovery."""
    vision.on("/analyze/relevance", {"isRelevant": True})
    vision.on("/analyze/category", {"category": "building_or_architecture", "confidence": "high"})
    vision.on("/analyze/main", ARCHITECTURE_ANALYSIS)
    vision.on(
        "/discovery/nearby",
        {
            "suggestions": [
                {"name": "Casa Amatller", "type": "city_exploration", "description": "Next door"},
                {"name": "Fundacio Tapies", "type": "museum", "description": "Modern art"},
            ]
        },
    )
    await context.gate.set_premium(True)
    coordinator = ScanCoordinator(context)
    request = AnalysisRequest(
        image=image,
        location={"latitude": 41.3917, "longitude": 2.1649},
        capture_id="capture-42",
    )

    stages = []
    async with coordinator.session(request) as session:
        async for event in session.events():
            stages.append(event.stage)

    nearby = await session.report.nearby()
    await coordinator.close()
    await context.close()

    assert stages[-1] is PipelineStage.COMPLETE
    assert session.report.quota.unlimited
    assert [s.name for s in nearby.suggestions] == ["Casa Amatller", "Fundacio Tapies"]
    history = await context.history.list()
    assert history[0].category is Category.ARCHITECTURE
    assert len(history[0].nearby) == 2
    assert await context.quota.get_today_count() == 0
