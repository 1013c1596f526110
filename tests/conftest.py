from __future__ import annotations

import random
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer DOCSTORE_* variables out of the tests."""
    for name in ("DOCSTORE_DATA_DIR", "DOCSTORE_ID_LENGTH", "DOCSTORE_PRETTY_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def memory_store():
    from persistence.memory_store import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


@pytest.fixture
def sandbox_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point the default disk store at a temp directory so tests never touch a real ./data.
    """
    data = tmp_path / "data"
    monkeypatch.setenv("DOCSTORE_DATA_DIR", str(data))
    return data


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
