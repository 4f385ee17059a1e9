"""Persistent state backends."""

from sentia.infrastructure.storage.kv_store import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    create_store,
)

__all__ = ["InMemoryStore", "JsonFileStore", "KeyValueStore", "create_store"]
