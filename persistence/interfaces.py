from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Minimal substrate interface: one serialized string persisted under a key.
    """

    def get(self, key: str) -> str | None:
        """Return the stored string, or None when the slot was never written."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the whole slot."""
        ...
