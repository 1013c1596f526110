from __future__ import annotations

import threading
from pathlib import Path


class SlotLockRegistry:
    """
    Hands out one lock per slot file, shared by every store rooted at the same directory.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        resolved = path.resolve()
        with self._guard:
            return self._locks.setdefault(resolved, threading.Lock())

    def known_paths(self) -> list[Path]:
        with self._guard:
            return sorted(self._locks)


GLOBAL_SLOT_LOCKS = SlotLockRegistry()
