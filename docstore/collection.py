from __future__ import annotations

import json
import logging
import random
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from persistence.interfaces import KeyValueStore

from .errors import CollectionCorruptedError, InvalidArgumentError
from .ids import DEFAULT_ID_LENGTH, generate_id
from .query import Predicate, Projection, ensure_id, ensure_mapping, find_all, find_where, matches
from .query import find_by_id as _find_by_id
from .records import ID_FIELD, Record
from .schema import Schema, compile_schema

logger = logging.getLogger(__name__)

EMPTY_COLLECTION = "[]"


def _has_value(value: Any) -> bool:
    # JavaScript truthiness: empty containers count as set, 0/""/None/False/NaN do not.
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0
    return True


def _json_copy(value: Mapping[str, Any], what: str) -> dict[str, Any]:
    try:
        return json.loads(json.dumps(dict(value)))
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{what} is not JSON serializable: {e}") from e


class Collection:
    """
    Handle over one named collection persisted in a key-value store.

    Every call reads the whole collection from the store and, unless it is a
    read, writes the whole collection back. Nothing is cached between calls, so
    handles sharing a store and a name always observe the same records.

    The read-modify-write is not locked: two writers interleaving on the same
    key lose updates. Serialize externally if that matters.
    """

    def __init__(
        self,
        name: str,
        store: KeyValueStore,
        schema: Schema | Mapping[str, Any] | None = None,
        *,
        id_length: int = DEFAULT_ID_LENGTH,
        rng: random.Random | None = None,
        indent: int | None = None,
    ):
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("collection name must be a non-empty str")
        if not isinstance(store, KeyValueStore):
            raise InvalidArgumentError(f"store must provide get/set, got {type(store).__name__}")
        self._name = name
        self._store = store
        self._schema = compile_schema(schema)
        self._id_length = id_length
        self._rng = rng
        self._indent = indent

        if self._store.get(self._name) is None:
            self._store.set(self._name, EMPTY_COLLECTION)
            logger.info("COLLECTION %s: initialized empty slot", self._name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> Schema | None:
        return self._schema

    def __repr__(self) -> str:
        return f"Collection(name={self._name!r}, schema={'yes' if self._schema else 'no'})"

    # --- storage round trip ---

    def _load(self) -> list[Record]:
        raw = self._store.get(self._name)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CollectionCorruptedError(f"collection {self._name!r} is not valid JSON") from e
        if not isinstance(payload, list):
            raise CollectionCorruptedError(f"collection {self._name!r} is not a JSON array")

        records: list[Record] = []
        for pos, doc in enumerate(payload):
            if not isinstance(doc, dict):
                raise CollectionCorruptedError(f"collection {self._name!r}: item {pos} is not an object")
            try:
                records.append(Record.from_document(doc))
            except ValidationError as e:
                raise CollectionCorruptedError(f"collection {self._name!r}: item {pos} has no valid id") from e
        return records

    def _save(self, records: list[Record]) -> None:
        docs = [r.to_document() for r in records]
        try:
            payload = json.dumps(docs, indent=self._indent)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"collection {self._name!r} holds a value that is not JSON serializable") from e
        self._store.set(self._name, payload)

    @staticmethod
    def _apply_patch(record: Record, patch: Mapping[str, Any]) -> None:
        # Only overwrites fields that already hold a value; never adds fields, never touches id.
        for field, value in patch.items():
            if field == ID_FIELD:
                continue
            if _has_value(record.fields.get(field)):
                record.fields[field] = value

    def _update_matching(self, predicate: Predicate | None, patch: Any) -> list[Record]:
        patch = _json_copy(ensure_mapping(patch, "patch"), "patch")
        records = self._load()
        updated: list[Record] = []
        for r in records:
            if matches(r.to_document(), predicate):
                self._apply_patch(r, patch)
                updated.append(r)
        self._save(records)
        logger.debug("COLLECTION %s: updated %d of %d", self._name, len(updated), len(records))
        return updated

    def _delete_matching(self, predicate: Predicate | None) -> list[Record]:
        records = self._load()
        kept: list[Record] = []
        removed: list[Record] = []
        for r in records:
            (removed if matches(r.to_document(), predicate) else kept).append(r)
        self._save(kept)
        logger.debug("COLLECTION %s: deleted %d, %d left", self._name, len(removed), len(kept))
        return removed

    # --- create / read ---

    def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        candidate = _json_copy(ensure_mapping(data, "data"), "data")
        records = self._load()
        record_id = generate_id(self._id_length, rng=self._rng)
        if self._schema is not None:
            candidate = self._schema.validate(candidate)
        if ID_FIELD in candidate:
            logger.warning("COLLECTION %s: discarding caller-supplied id %r", self._name, candidate[ID_FIELD])
            candidate.pop(ID_FIELD)

        record = Record(id=record_id, fields=candidate)
        self._save([record, *records])
        logger.debug("COLLECTION %s: created %s", self._name, record_id)
        return record.to_document()

    def find(self, predicate: Predicate | None = None, projection: Projection | None = None) -> list[dict[str, Any]]:
        predicate = ensure_mapping(predicate, "predicate", optional=True)
        projection = ensure_mapping(projection, "projection", optional=True)
        docs = [r.to_document() for r in self._load()]
        if not predicate and not projection:
            return find_all(docs)
        return find_where(docs, predicate, projection or None)

    def find_by_id(self, record_id: str) -> dict[str, Any] | None:
        return _find_by_id((r.to_document() for r in self._load()), record_id)

    def count(self, predicate: Predicate | None = None) -> int:
        predicate = ensure_mapping(predicate, "predicate", optional=True)
        return sum(1 for r in self._load() if matches(r.to_document(), predicate))

    def __len__(self) -> int:
        return len(self._load())

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.find())

    # --- update ---

    def update(self, predicate: Predicate, patch: Mapping[str, Any]) -> dict[str, Any]:
        """
        Patch every record matching `predicate`.

        Returns the last updated record only (or {} when nothing matched);
        use `update_many` to get all of them.
        """
        predicate = ensure_mapping(predicate, "predicate", optional=True)
        updated = self._update_matching(predicate, patch)
        return updated[-1].to_document() if updated else {}

    def update_many(self, predicate: Predicate, patch: Mapping[str, Any]) -> list[dict[str, Any]]:
        predicate = ensure_mapping(predicate, "predicate", optional=True)
        return [r.to_document() for r in self._update_matching(predicate, patch)]

    def update_by_id(self, record_id: str, patch: Mapping[str, Any]) -> dict[str, Any]:
        record_id = ensure_id(record_id)
        updated = self._update_matching({ID_FIELD: record_id}, patch)
        return updated[0].to_document() if updated else {}

    def update_all(self, patch: Mapping[str, Any]) -> list[dict[str, Any]]:
        return [r.to_document() for r in self._update_matching(None, patch)]

    # --- delete ---

    def delete(self, predicate: Predicate | None) -> dict[str, Any]:
        """
        Remove every record matching `predicate`; an empty predicate matches all.

        Returns the last removed record only (or {}); see `delete_many`.
        """
        predicate = ensure_mapping(predicate, "predicate", optional=True)
        removed = self._delete_matching(predicate)
        return removed[-1].to_document() if removed else {}

    def delete_many(self, predicate: Predicate | None) -> list[dict[str, Any]]:
        predicate = ensure_mapping(predicate, "predicate", optional=True)
        return [r.to_document() for r in self._delete_matching(predicate)]

    def delete_by_id(self, record_id: str) -> dict[str, Any]:
        record_id = ensure_id(record_id)
        removed = self._delete_matching({ID_FIELD: record_id})
        return removed[0].to_document() if removed else {}

    def delete_all(self) -> list[dict[str, Any]]:
        self._store.set(self._name, EMPTY_COLLECTION)
        logger.debug("COLLECTION %s: reset to empty", self._name)
        return []

    def remove(self, predicate: Predicate | None = None) -> dict[str, Any]:
        """Same as `delete`, except an empty or missing predicate resets the collection first."""
        predicate = ensure_mapping(predicate, "predicate", optional=True)
        if not predicate:
            self.delete_all()
        return self.delete(predicate)

    findById = find_by_id
    updateById = update_by_id
    updateAll = update_all
    deleteById = delete_by_id
    deleteAll = delete_all
