from __future__ import annotations

import logging
from pathlib import Path

from .interfaces import KeyValueStore
from .json_store import atomic_write_text, read_text
from .locks import GLOBAL_SLOT_LOCKS
from .paths import ensure_dir, slot_filename

logger = logging.getLogger(__name__)


class DiskKeyValueStore(KeyValueStore):
    """
    Stores each key as its own file under a root directory.

    - `get` returns None when the slot file does not exist.
    - Writes atomically, under a per-file lock.
    """

    def __init__(self, root: Path):
        self._root = ensure_dir(Path(root))

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        return self._root / slot_filename(key)

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        with GLOBAL_SLOT_LOCKS.lock_for(path):
            raw = read_text(path)
        if raw is None:
            return None
        # Drop only the newline atomic_write_text appended.
        return raw[:-1] if raw.endswith("\n") else raw

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        with GLOBAL_SLOT_LOCKS.lock_for(path):
            atomic_write_text(path, value)
        logger.debug("DISK STORE: wrote %d chars to %s", len(value), path)
