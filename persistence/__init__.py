from __future__ import annotations

from .disk_store import DiskKeyValueStore
from .interfaces import KeyValueStore
from .memory_store import InMemoryKeyValueStore

__all__ = [
    "KeyValueStore",
    "DiskKeyValueStore",
    "InMemoryKeyValueStore",
]
