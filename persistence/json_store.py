from __future__ import annotations

from pathlib import Path


def read_text(path: Path) -> str | None:
    """
    Read a slot file from disk.

    Returns None for missing files. Content is returned as-is; parsing is the caller's job.
    """
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def atomic_write_text(path: Path, payload: str) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.

    Always appends exactly one trailing newline.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(payload)
        f.write("\n")
    tmp_path.replace(path)
