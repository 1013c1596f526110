from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .ids import DEFAULT_ID_LENGTH


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    # Disk store root used when no store is passed explicitly
    data_dir: Path

    # Length of generated record ids
    id_length: int

    # Indent the persisted JSON (readable files, bigger slots)
    pretty_json: bool

    @property
    def json_indent(self) -> int | None:
        return 2 if self.pretty_json else None


def get_settings(env_file: str | os.PathLike[str] | None = ".env") -> Settings:
    if env_file is not None:
        # Real environment variables win over the file.
        load_dotenv(env_file, override=False)

    data_dir = Path(os.getenv("DOCSTORE_DATA_DIR", "data")).expanduser()

    id_length = _env_int("DOCSTORE_ID_LENGTH", DEFAULT_ID_LENGTH)
    if id_length < 1:
        raise ValueError(f"DOCSTORE_ID_LENGTH must be positive, got {id_length}")

    pretty_json = _env_bool("DOCSTORE_PRETTY_JSON", False)

    return Settings(
        data_dir=data_dir,
        id_length=id_length,
        pretty_json=pretty_json,
    )
