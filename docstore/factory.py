from __future__ import annotations

from typing import Any, Mapping

from persistence.disk_store import DiskKeyValueStore
from persistence.interfaces import KeyValueStore

from .collection import Collection
from .schema import Schema
from .settings import Settings, get_settings


def open_collection(
    name: str,
    schema: Schema | Mapping[str, Any] | None = None,
    *,
    store: KeyValueStore | None = None,
    settings: Settings | None = None,
) -> Collection:
    """
    Build a Collection handle.

    Without an explicit store, a disk store rooted at `settings.data_dir` is used.
    A new store object is created per call; handles over the same directory still
    share slots through the files themselves.
    """
    settings = settings or get_settings()
    if store is None:
        store = DiskKeyValueStore(settings.data_dir)
    return Collection(
        name,
        store,
        schema,
        id_length=settings.id_length,
        indent=settings.json_indent,
    )
