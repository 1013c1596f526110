from __future__ import annotations

import json

import pytest

from docstore.collection import Collection
from persistence.disk_store import DiskKeyValueStore
from persistence.interfaces import KeyValueStore
from persistence.locks import GLOBAL_SLOT_LOCKS, SlotLockRegistry
from persistence.memory_store import InMemoryKeyValueStore
from persistence.paths import slot_filename


def test_memory_store_roundtrip():
    store = InMemoryKeyValueStore()
    assert isinstance(store, KeyValueStore)
    assert store.get("k") is None
    store.set("k", "[]")
    assert store.get("k") == "[]"
    assert store.keys() == ["k"]
    with pytest.raises(TypeError):
        store.set("k", [])


def test_disk_store_roundtrip(tmp_path):
    store = DiskKeyValueStore(tmp_path / "slots")
    assert isinstance(store, KeyValueStore)
    assert store.get("users") is None

    store.set("users", '[{"id": "a"}]')
    assert store.get("users") == '[{"id": "a"}]'
    assert store.path_for("users") == tmp_path / "slots" / "users.json"
    assert not (tmp_path / "slots" / "users.json.tmp").exists()
    assert store.path_for("users").resolve() in GLOBAL_SLOT_LOCKS.known_paths()


def test_disk_stores_over_same_root_share_slots(tmp_path):
    one = DiskKeyValueStore(tmp_path)
    two = DiskKeyValueStore(tmp_path)
    a = Collection("notes", one)
    b = Collection("notes", two)
    rec = a.create({"text": "hi"})
    assert b.find() == [rec]
    assert json.loads((tmp_path / "notes.json").read_text(encoding="utf-8")) == [rec]


@pytest.mark.parametrize(
    "key, expected",
    [
        ("users", "users.json"),
        ("my users/2024", "my%20users%2F2024.json"),
        ("../etc", "..%2Fetc.json"),
        ("100%", "100%25.json"),
    ],
)
def test_slot_filename_percent_encodes(key, expected):
    assert slot_filename(key) == expected


def test_slot_filename_rejects_empty_key():
    with pytest.raises(ValueError):
        slot_filename("")


def test_similar_names_get_separate_slots(tmp_path):
    store = DiskKeyValueStore(tmp_path)
    Collection("my users", store).create({"v": 1})
    assert Collection("my_users", store).find() == []
    assert Collection("my/users", store).find() == []
    assert len({store.path_for(k) for k in ("my users", "my_users", "my/users")}) == 3


def test_disk_store_keeps_trailing_newlines(tmp_path):
    store = DiskKeyValueStore(tmp_path)
    store.set("k", "line\n\n")
    assert store.get("k") == "line\n\n"
    store.set("k", "plain")
    assert store.get("k") == "plain"


def test_lock_registry_reuses_locks(tmp_path):
    registry = SlotLockRegistry()
    p = tmp_path / "a.json"
    assert registry.lock_for(p) is registry.lock_for(tmp_path / "." / "a.json")
    assert registry.known_paths() == [p.resolve()]
