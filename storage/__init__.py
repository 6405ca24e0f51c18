"""Key-value persistence for batches and user preferences."""

from .kv_store import KeyValueStore, InMemoryStore, JsonFileStore

__all__ = ["KeyValueStore", "InMemoryStore", "JsonFileStore"]
