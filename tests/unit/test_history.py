"""Tests for the scan history."""

import pytest

from sentia.config.constants import Category, StorageKey
from sentia.infrastructure.storage import InMemoryStore
from sentia.services.analysis import AnalysisResult
from sentia.services.discovery import NearbySuggestion
from sentia.services.history import ScanHistory, ScanRecord


def _record(title):
    return ScanRecord(
        category=Category.ARCHITECTURE,
        analysis=AnalysisResult(title=title, category=Category.ARCHITECTURE),
    )


@pytest.mark.asyncio
async def test_newest_first():
    """Test newest first."""
    history = ScanHistory(InMemoryStore())
    await history.add(_record("first"))
    await history.add(_record("second"))
    assert [r.analysis.title for r in await history.list()] == ["second", "first"]


@pytest.mark.asyncio
async def test_capped_at_max_items():
    """Test capped at max items."""
    history = ScanHistory(InMemoryStore(), max_items=2)
    for title in ("a", "b", "c"):
        await history.add(_record(title))
    assert [r.analysis.title for r in await history.list()] == ["c", "b"]


@pytest.mark.asyncio
async def test_delete_and_clear():
    """Test delete and clear."""
    history = ScanHistory(InMemoryStore())
    kept = await history.add(_record("kept"))
    dropped = await history.add(_record("dropped"))

    assert await history.delete(dropped.id) is True
    assert await history.delete(dropped.id) is False
    assert [r.id for r in await history.list()] == [kept.id]

    await history.clear()
    assert await history.list() == []


@pytest.mark.asyncio
async def test_attach_nearby():
    """Test attach nearby."""
    history = ScanHistory(InMemoryStore())
    record = await history.add(_record("Sagrada Familia"))

    attached = await history.attach_nearby(
        record.id, [NearbySuggestion(name="Park Guell", description="Gaudi park")]
    )

    assert attached is True
    stored = await history.get(record.id)
    assert [s.name for s in stored.nearby] == ["Park Guell"]
    assert await history.attach_nearby("missing", []) is False


@pytest.mark.asyncio
async def test_records_persist_in_camel_case():
    """Test records persist in camel case."""
    store = InMemoryStore()
    history = ScanHistory(store)
    await history.add(_record("Casa Mila"))

    raw = await store.get(StorageKey.SCAN_HISTORY.value)
    assert raw[0]["analysis"]["quickReason"] == ""
    assert raw[0]["category"] == "building_or_architecture"


@pytest.mark.asyncio
async def test_unreadable_entries_are_dropped():
    """Test unreadable entries are dropped."""
    store = InMemoryStore({StorageKey.SCAN_HISTORY.value: [{"bogus": True}]})
    assert await ScanHistory(store).list() == []
