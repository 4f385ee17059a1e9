"""Persisted scan history."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from sentia.config.constants import StorageKey
from sentia.infrastructure.storage import KeyValueStore
from sentia.services.discovery.models import NearbySuggestion
from sentia.services.history.models import ScanRecord

logger = logging.getLogger(__name__)


class ScanHistory:
    """Newest-first list of completed scans, capped at ``max_items``."""

    def __init__(self, store: KeyValueStore, max_items: int = 100):
        self.store = store
        self.max_items = max_items
        self._lock = asyncio.Lock()

    async def _read(self) -> list[ScanRecord]:
        raw: list[dict[str, Any]] = await self.store.get(StorageKey.SCAN_HISTORY.value, [])
        records: list[ScanRecord] = []
        for item in raw or []:
            try:
                records.append(ScanRecord.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Dropping unreadable history entry: {e}")
        return records

    async def _write(self, records: list[ScanRecord]) -> None:
        await self.store.set(
            StorageKey.SCAN_HISTORY.value,
            [record.to_wire() for record in records[: self.max_items]],
        )

    async def add(self, record: ScanRecord) -> ScanRecord:
        async with self._lock:
            records = await self._read()
            records.insert(0, record)
            await self._write(records)
        logger.debug(f"Scan {record.id} saved to history")
        return record

    async def list(self) -> list[ScanRecord]:
        async with self._lock:
            return await self._read()

    async def get(self, scan_id: str) -> ScanRecord | None:
        for record in await self.list():
            if record.id == scan_id:
                return record
        return None

    async def attach_nearby(self, scan_id: str, suggestions: list[NearbySuggestion]) -> bool:
        """Store discovery results on an existing record; False if it is gone."""
        async with self._lock:
            records = await self._read()
            for index, record in enumerate(records):
                if record.id == scan_id:
                    records[index] = record.model_copy(update={"nearby": list(suggestions)})
                    await self._write(records)
                    return True
        return False

    async def delete(self, scan_id: str) -> bool:
        async with self._lock:
            records = await self._read()
            remaining = [record for record in records if record.id != scan_id]
            if len(remaining) == len(records):
                return False
            await self._write(remaining)
        return True

    async def clear(self) -> None:
        async with self._lock:
            await self.store.remove(StorageKey.SCAN_HISTORY.value)
