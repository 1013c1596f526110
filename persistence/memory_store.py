from __future__ import annotations

from .interfaces import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local slots kept in a dict. Handles sharing one instance see the same data.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("value must be a str")
        self._slots[key] = value

    def keys(self) -> list[str]:
        return list(self._slots)
