from __future__ import annotations

from pathlib import Path

import pytest

from docstore.factory import open_collection
from docstore.settings import Settings, get_settings
from persistence.memory_store import InMemoryKeyValueStore


def test_defaults():
    s = get_settings(env_file=None)
    assert s.data_dir == Path("data")
    assert s.id_length == 10
    assert s.pretty_json is False
    assert s.json_indent is None


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("DOCSTORE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DOCSTORE_ID_LENGTH", "16")
    monkeypatch.setenv("DOCSTORE_PRETTY_JSON", "yes")
    s = get_settings(env_file=None)
    assert s.data_dir == tmp_path
    assert s.id_length == 16
    assert s.json_indent == 2


def test_dotenv_file_is_loaded_but_env_wins(monkeypatch, tmp_path):
    env_file = tmp_path / "docstore.env"
    env_file.write_text("DOCSTORE_ID_LENGTH=12\nDOCSTORE_PRETTY_JSON=true\n", encoding="utf-8")
    monkeypatch.setenv("DOCSTORE_PRETTY_JSON", "0")
    s = get_settings(env_file=env_file)
    assert s.id_length == 12
    assert s.pretty_json is False


@pytest.mark.parametrize("raw", ["ten", "0", "-1"])
def test_bad_id_length(monkeypatch, raw):
    monkeypatch.setenv("DOCSTORE_ID_LENGTH", raw)
    with pytest.raises(ValueError):
        get_settings(env_file=None)


def test_open_collection_defaults_to_disk(sandbox_data_dir):
    notes = open_collection("notes", settings=get_settings(env_file=None))
    rec = notes.create({"text": "hi"})
    assert (sandbox_data_dir / "notes.json").exists()
    assert open_collection("notes", settings=get_settings(env_file=None)).find() == [rec]


def test_open_collection_with_explicit_store_and_settings():
    store = InMemoryKeyValueStore()
    settings = Settings(data_dir=Path("unused"), id_length=6, pretty_json=False)
    items = open_collection("items", {"n": int}, store=store, settings=settings)
    rec = items.create({"n": 1})
    assert len(rec["id"]) == 6
    assert store.keys() == ["items"]
