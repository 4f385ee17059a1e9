"""Tests for scan coordination: guard, quota, history, nearby and autoplay."""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from sentia.config.constants import Category, PipelineStage, StorageKey
from sentia.exceptions import PipelineBusyError, QuotaExceededError, ServerError
from sentia.infrastructure.http import RequestConfig, TransportClient
from sentia.orchestrator.context import AppContext
from sentia.orchestrator.scan_session import ScanCoordinator
from sentia.orchestrator.state import AnalysisRequest, Completed, NotRelevant

LOCATION = {"latitude": 41.4036, "longitude": 2.1744}

NEARBY = {
    "suggestions": [
        {"name": "Park Guell", "type": "walking_route", "description": "Gaudi's park"},
        {"name": "Casa Mila", "type": "city_exploration", "description": "La Pedrera"},
    ]
}


@pytest.fixture
def context(settings, store, today, client):
    return AppContext(settings, store, client, today=today)


@pytest.fixture
def coordinator(context):
    return ScanCoordinator(context)


@pytest.fixture
def happy_vision(vision):
    vision.on("/analyze/relevance", {"isRelevant": True, "reason": "church"})
    vision.on("/analyze/category", {"category": "building_or_architecture", "confidence": "high"})
    vision.on(
        "/analyze/main",
        {
            "title": "Sagrada Familia",
            "confidence": "high",
            "category": "building_or_architecture",
            "audioGuide": "Gaudi's unfinished basilica...",
        },
    )
    vision.on("/discovery/nearby", NEARBY)
    return vision


def _request(image, capture_id="capture-1"):
    return AnalysisRequest(image=image, location=LOCATION, capture_id=capture_id)


@pytest.mark.asyncio
async def test_free_scan_counts_against_quota(coordinator, context, happy_vision, image):
    """Test free scan counts against quota."""
    report = await coordinator.scan(_request(image))

    assert isinstance(report.outcome, Completed)
    assert report.quota.used == 1
    assert report.quota.remaining == 2
    assert await context.quota.get_today_count() == 1


@pytest.mark.asyncio
async def test_premium_scan_is_not_counted(coordinator, context, happy_vision, image):
    """Test premium scan is not counted."""
    await context.gate.set_premium(True)

    report = await coordinator.scan(_request(image))

    assert report.quota.unlimited
    assert await context.quota.get_today_count() == 0


@pytest.mark.asyncio
async def test_exhausted_quota_raises_with_paywall(coordinator, context, happy_vision, image):
    """Test exhausted quota raises with paywall."""
    for _ in range(3):
        await context.quota.increment_count()

    with pytest.raises(QuotaExceededError) as exc_info:
        await coordinator.scan(_request(image))

    assert exc_info.value.paywall["title"] == "Unlimited Scans"
    assert happy_vision.calls == []
    assert not coordinator.is_active("capture-1")


@pytest.mark.asyncio
async def test_second_run_for_same_capture_is_refused(coordinator, happy_vision, image):
    """Test second run for same capture is refused."""
    async with coordinator.session(_request(image)) as session:
        with pytest.raises(PipelineBusyError):
            async with coordinator.session(_request(image)):
                pass
        async for _event in session.events():
            pass

    assert not coordinator.is_active("capture-1")
    report = await coordinator.scan(_request(image))
    assert report.completed


@pytest.mark.asyncio
async def test_different_captures_may_run_concurrently(coordinator, happy_vision, image):
    """Test different captures may run concurrently."""
    reports = await asyncio.gather(
        coordinator.scan(_request(image, "a")),
        coordinator.scan(_request(image, "b")),
    )
    assert all(report.completed for report in reports)


@pytest.mark.asyncio
async def test_completed_scan_is_saved_with_nearby(coordinator, context, happy_vision, image):
    """Test completed scan is saved with nearby."""
    await context.gate.set_premium(True)

    report = await coordinator.scan(_request(image))
    nearby = await report.nearby()

    assert [s.name for s in nearby.suggestions] == ["Park Guell", "Casa Mila"]
    history = await context.history.list()
    assert history[0].id == report.record.id
    assert history[0].analysis.title == "Sagrada Familia"
    assert [s.name for s in history[0].nearby] == ["Park Guell", "Casa Mila"]


@pytest.mark.asyncio
async def test_nearby_locked_for_free_users(coordinator, happy_vision, image):
    """Test nearby locked for free users."""
    report = await coordinator.scan(_request(image))

    assert report.nearby_paywall.title == "Nearby Discovery"
    assert (await report.nearby()).suggestions == []
    assert happy_vision.calls_to("/discovery/nearby") == []


@pytest.mark.asyncio
async def test_nearby_starts_after_outcome(coordinator, context, happy_vision, image):
    """Test nearby starts after outcome."""
    await context.gate.set_premium(True)

    async with coordinator.session(_request(image)) as session:
        async for event in session.events():
            if event.stage is PipelineStage.COMPLETE:
                assert session.report.outcome is event.outcome
                assert happy_vision.calls_to("/discovery/nearby") == []

    assert (await session.report.nearby()).has_suggestions


@pytest.mark.asyncio
async def test_nearby_failure_never_raises(coordinator, context, happy_vision, image):
    """Test nearby failure never raises."""
    await context.gate.set_premium(True)
    context.discovery.get_nearby = AsyncMock(side_effect=RuntimeError("boom"))

    report = await coordinator.scan(_request(image))

    assert (await report.nearby()).suggestions == []


@pytest.mark.asyncio
async def test_not_relevant_is_not_billed(coordinator, context, vision, image):
    """Test not relevant is not billed."""
    vision.on("/analyze/relevance", {"isRelevant": False, "reason": "too close"})

    report = await coordinator.scan(_request(image))

    assert report.outcome == NotRelevant(reason="too close")
    assert await context.quota.get_today_count() == 0
    assert await context.history.list() == []


@pytest.mark.asyncio
async def test_hard_failure_is_raised_and_not_billed(coordinator, context, vision, image):
    """Test hard failure is raised and not billed."""
    vision.on("/analyze/relevance", {"isRelevant": True})
    vision.on("/analyze/category", {"category": "artwork_or_painting"})
    vision.on("/analyze/main", httpx.Response(500, json={"message": "down"}))

    with pytest.raises(ServerError):
        await coordinator.scan(_request(image))

    assert await context.quota.get_today_count() == 0
    assert not coordinator.is_active("capture-1")


@pytest.mark.asyncio
async def test_autoplay_for_premium_with_headphones(context, happy_vision, image):
    """Test autoplay for premium with headphones."""
    await context.gate.set_premium(True)
    player = AsyncMock()
    player.headphones_connected.return_value = True
    coordinator = ScanCoordinator(context, audio_player=player)

    report = await coordinator.scan(_request(image))

    assert report.autoplayed is True
    player.speak.assert_awaited_once_with("Gaudi's unfinished basilica...")


@pytest.mark.asyncio
async def test_no_autoplay_without_headphones(context, happy_vision, image):
    """Test no autoplay without headphones."""
    await context.gate.set_premium(True)
    player = AsyncMock()
    player.headphones_connected.return_value = False
    coordinator = ScanCoordinator(context, audio_player=player)

    report = await coordinator.scan(_request(image))

    assert report.autoplayed is False
    player.speak.assert_not_awaited()


@pytest.mark.asyncio
async def test_reanalyze_is_not_billed(coordinator, context, happy_vision, image):
    """Test reanalyze is not billed."""
    completed = await coordinator.reanalyze(_request(image), Category.PLACE)
    assert completed.category is Category.PLACE
    assert await context.quota.get_today_count() == 0


@pytest.mark.asyncio
async def test_close_cancels_pending_nearby(settings, store, today, image, vision):
    """Test close cancels pending nearby."""
    vision.on("/analyze/relevance", {"isRelevant": True})
    vision.on("/analyze/category", {"category": "place_or_environment"})
    vision.on("/analyze/main", {"title": "Plaza"})

    async def slow_nearby(location, category):
        await asyncio.sleep(10)

    client = TransportClient(
        "https://vision.test/v1", RequestConfig(), transport=vision.transport
    )
    context = AppContext(settings, store, client, today=today)
    await store.set(StorageKey.IS_PREMIUM.value, True)
    context.discovery.get_nearby = slow_nearby
    coordinator = ScanCoordinator(context)

    report = await coordinator.scan(_request(image))
    await coordinator.close()

    assert report.nearby_task.cancelled()
    assert (await report.nearby()).suggestions == []
    await context.close()


@pytest.mark.asyncio
async def test_free_user_is_billed_when_unlimited_scans_not_premium(
    settings, store, today, client, happy_vision, image
):
    """Test free users stay limited even when unlimited scans is not a premium feature."""
    settings = settings.model_copy(update={"premium_features": ["audio_guide", "nearby_discovery"]})
    context = AppContext(settings, store, client, today=today)
    coordinator = ScanCoordinator(context)

    for n in range(3):
        await coordinator.scan(_request(image, f"capture-{n}"))
    with pytest.raises(QuotaExceededError):
        await coordinator.scan(_request(image, "capture-3"))

    assert await context.quota.get_today_count() == 3


@pytest.mark.asyncio
async def test_concurrent_free_scans_stop_at_daily_limit(coordinator, context, happy_vision, image):
    """Test concurrent free scans never run past the daily limit."""
    results = await asyncio.gather(
        *(coordinator.scan(_request(image, f"capture-{n}")) for n in range(6)),
        return_exceptions=True,
    )

    completed = [r for r in results if not isinstance(r, Exception)]
    refused = [r for r in results if isinstance(r, QuotaExceededError)]
    assert len(completed) == 3
    assert len(refused) == 3
    assert await context.quota.get_today_count() == 3
    assert len(happy_vision.calls_to("/analyze/main")) == 3


@pytest.mark.asyncio
async def test_slot_is_held_while_scan_runs(coordinator, context, happy_vision, image):
    """Test an open scan session already holds its quota slot."""
    async with coordinator.session(_request(image)) as session:
        assert await context.quota.get_today_count() == 1
        async for _event in session.events():
            pass

    assert await context.quota.get_today_count() == 1


@pytest.mark.asyncio
async def test_abandoned_session_gives_slot_back(coordinator, context, happy_vision, image):
    """Test a session closed before its terminal event releases its slot."""
    async with coordinator.session(_request(image)):
        assert await context.quota.get_today_count() == 1

    assert await context.quota.get_today_count() == 0
    assert happy_vision.calls == []
