from __future__ import annotations

from pathlib import Path
from urllib.parse import quote


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def slot_filename(key: str) -> str:
    """
    Map a collection key onto a file name inside the store directory.

    Percent-encoding is reversible, so distinct keys never share a file.
    """
    if not key:
        raise ValueError("key must be a non-empty str")
    return f"{quote(key, safe='')}.json"
