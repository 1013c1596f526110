from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError, field_validator

from .errors import RequiredFieldMissingError, SchemaConfigurationError, TypeMismatchError
from .records import ID_FIELD

logger = logging.getLogger(__name__)


class Kind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


def kind_of(value: Any) -> Kind | None:
    """Runtime type category of a JSON-like value; None for anything else."""
    # bool is a subclass of int, so it has to be tested first.
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if value is None:
        return Kind.NULL
    if isinstance(value, Mapping):
        return Kind.OBJECT
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    return None


def resolve_witness(witness: Any) -> Kind:
    """
    Turn a type witness into a Kind once, at schema compile time.

    A witness is a Kind or a zero-argument callable whose return value
    exemplifies the field type: `str`, `int`, `bool`, `dict`, `list`, `lambda: 0`.
    """
    if isinstance(witness, Kind):
        return witness
    if not callable(witness):
        raise ValueError(f"expected a function, got {type(witness).__name__}")
    try:
        sample = witness()
    except TypeError as e:
        raise ValueError(f"type witness {witness!r} must be callable without arguments") from e
    kind = kind_of(sample)
    if kind is None:
        raise ValueError(f"type witness {witness!r} returned unsupported {type(sample).__name__}")
    return kind


class TypeWitness(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Kind


class FieldDescriptor(BaseModel):
    """
    Descriptor form of a schema entry:
      { "type": <witness>, "default": <literal or zero-arg callable>, "required": <bool> }
    Every key is optional. An explicit `default=None` counts as a declared default.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    type: Kind | None = None
    default: Any = None
    required: StrictBool = False

    @field_validator("type", mode="before")
    @classmethod
    def _resolve_type(cls, value: Any) -> Any:
        if value is None:
            return None
        return resolve_witness(value)

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set

    def make_default(self) -> Any:
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)


SchemaEntry = Union[TypeWitness, FieldDescriptor]


def _compile_entry(field: str, raw: Any) -> SchemaEntry:
    if isinstance(raw, (TypeWitness, FieldDescriptor)):
        return raw
    if isinstance(raw, Mapping):
        try:
            return FieldDescriptor.model_validate(dict(raw))
        except ValidationError as e:
            raise SchemaConfigurationError(f"'{field}': invalid descriptor: {e}") from e
    if isinstance(raw, Kind) or callable(raw):
        try:
            return TypeWitness(kind=resolve_witness(raw))
        except ValueError as e:
            raise SchemaConfigurationError(f"'{field}': {e}") from e
    raise SchemaConfigurationError(
        f"'{field}': expected a function or a descriptor object, got {type(raw).__name__}"
    )


MISSING_KIND = "missing value"


def _is_absent(candidate: Mapping[str, Any], field: str) -> bool:
    return candidate.get(field) is None


def _check_kind(field: str, expected: Kind, value: Any) -> None:
    actual = kind_of(value)
    if actual is not expected:
        raise TypeMismatchError(field, expected.value, actual.value if actual else type(value).__name__)


class Schema:
    """Compiled, immutable per-collection field contract, checked on create only."""

    def __init__(self, entries: Mapping[str, SchemaEntry]):
        self._entries: dict[str, SchemaEntry] = dict(entries)

    @property
    def entries(self) -> dict[str, SchemaEntry]:
        return dict(self._entries)

    def __contains__(self, field: str) -> bool:
        return field in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def validate(self, candidate: dict[str, Any]) -> dict[str, Any]:
        """
        Fill defaults, enforce required fields and check kinds, in declared order.

        Mutates and returns `candidate`. For defaults and required checks a field is
        absent when its key is missing or its value is None. A descriptor `type`
        always applies, so an absent field fails it; a bare witness only checks
        fields that are present. Fields outside the schema pass through untouched.
        """
        for field, entry in self._entries.items():
            if isinstance(entry, TypeWitness):
                if field in candidate:
                    _check_kind(field, entry.kind, candidate[field])
                continue

            if entry.has_default and _is_absent(candidate, field):
                candidate[field] = entry.make_default()
                logger.debug("SCHEMA: defaulted %s", field)
            if entry.required and _is_absent(candidate, field):
                raise RequiredFieldMissingError(field)
            if entry.type is not None:
                if field not in candidate:
                    raise TypeMismatchError(field, entry.type.value, MISSING_KIND)
                _check_kind(field, entry.type, candidate[field])
        return candidate


def compile_schema(schema: Schema | Mapping[str, Any] | None) -> Schema | None:
    if schema is None or isinstance(schema, Schema):
        return schema
    if not isinstance(schema, Mapping):
        raise SchemaConfigurationError(f"schema must be a mapping, got {type(schema).__name__}")

    entries: dict[str, SchemaEntry] = {}
    for field, raw in schema.items():
        if not isinstance(field, str):
            raise SchemaConfigurationError(f"schema field names must be str, got {field!r}")
        if field == ID_FIELD:
            raise SchemaConfigurationError("'id' is reserved and cannot be declared in a schema")
        entries[field] = _compile_entry(field, raw)
    return Schema(entries)
