"""Persistent key-value store for quota counters, premium flag and history.

Values are JSON-serializable. Every access is a coroutine so callers treat it
as a suspension point, whatever the backing medium.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Async key-value store interface."""

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value or ``default`` when the key is absent."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    async def set_many(self, items: dict[str, Any]) -> None:
        """Store several keys in a single write."""

    @abstractmethod
    async def remove(self, key: str) -> bool:
        """Delete ``key``; return whether it existed."""

    @abstractmethod
    async def clear(self) -> None:
        """Delete every key."""


class InMemoryStore(KeyValueStore):
    """Process-local store. Values are JSON round-tripped to mimic persistence."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value)

    async def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        return default if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    async def set_many(self, items: dict[str, Any]) -> None:
        for key, value in items.items():
            self._data[key] = json.dumps(value)

    async def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def clear(self) -> None:
        self._data.clear()


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON document on disk.

    The document is loaded on first access and rewritten atomically (temp file
    then rename) on every mutation.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] | None = None
        self._lock = asyncio.Lock()

    def _read_file(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable store file {self._path}: {e}")
            return {}
        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring store file {self._path}: top level is not an object")
            return {}
        return loaded

    def _write_file(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)

    async def _load(self) -> dict[str, Any]:
        if self._data is None:
            self._data = await asyncio.to_thread(self._read_file)
        return self._data

    async def _flush(self) -> None:
        snapshot = dict(self._data or {})
        await asyncio.to_thread(self._write_file, snapshot)

    async def get(self, key: str, default: Any = None) -> Any:
        async with self._lock:
            data = await self._load()
            return data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        await self.set_many({key: value})

    async def set_many(self, items: dict[str, Any]) -> None:
        async with self._lock:
            data = await self._load()
            data.update(json.loads(json.dumps(items)))
            await self._flush()

    async def remove(self, key: str) -> bool:
        async with self._lock:
            data = await self._load()
            existed = data.pop(key, None) is not None
            if existed:
                await self._flush()
            return existed

    async def clear(self) -> None:
        async with self._lock:
            self._data = {}
            await self._flush()


def create_store(path: str = "") -> KeyValueStore:
    """Return a file-backed store when ``path`` is set, else an in-memory one."""
    if path.strip():
        return JsonFileStore(path.strip())
    return InMemoryStore()
