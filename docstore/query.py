from __future__ import annotations

from typing import Any, Iterable, Mapping

from .errors import InvalidArgumentError
from .records import ID_FIELD

Predicate = Mapping[str, Any]
Projection = Mapping[str, Any]

_MISSING = object()


def ensure_mapping(value: Any, what: str, *, optional: bool = False) -> Mapping[str, Any]:
    if value is None and optional:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(f"{what} should be a mapping, got {type(value).__name__}")
    return value


def ensure_id(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"id should be a str, got {type(value).__name__}")
    return value


def strict_equal(left: Any, right: Any) -> bool:
    """
    Equality without cross-type coercion.

    Booleans only equal booleans, numbers compare numerically (1 == 1.0) and
    containers compare by identity, never structurally.
    """
    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right


def matches(record: Mapping[str, Any], predicate: Predicate | None) -> bool:
    """True iff every predicate field is present on `record` with a strictly equal value."""
    if not predicate:
        return True
    for field, expected in predicate.items():
        actual = record.get(field, _MISSING)
        if actual is _MISSING or not strict_equal(actual, expected):
            return False
    return True


def project(record: Mapping[str, Any], projection: Projection | None) -> dict[str, Any]:
    """
    Shape one result record.

    Any non-zero value switches to inclusion mode and keeps the union of those
    fields; fields mapped to 0 are dropped afterwards. Returns a new dict.
    """
    if not projection:
        return dict(record)
    included = [field for field, flag in projection.items() if flag != 0]
    if included:
        result = {field: record[field] for field in record if field in included}
    else:
        result = dict(record)
    for field, flag in projection.items():
        if flag == 0:
            result.pop(field, None)
    return result


def find_all(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [dict(r) for r in records]


def find_where(
    records: Iterable[Mapping[str, Any]],
    predicate: Predicate | None,
    projection: Projection | None = None,
) -> list[dict[str, Any]]:
    return [project(r, projection) for r in records if matches(r, predicate)]


def find_by_id(records: Iterable[Mapping[str, Any]], record_id: Any) -> dict[str, Any] | None:
    record_id = ensure_id(record_id)
    for r in records:
        if r.get(ID_FIELD) == record_id:
            return dict(r)
    return None
