from __future__ import annotations

from .collection import Collection
from .errors import (
    CollectionCorruptedError,
    DocStoreError,
    InvalidArgumentError,
    RequiredFieldMissingError,
    SchemaConfigurationError,
    TypeMismatchError,
)
from .factory import open_collection
from .ids import generate_id
from .records import Record
from .schema import FieldDescriptor, Kind, Schema, TypeWitness, compile_schema
from .settings import Settings, get_settings

__all__ = [
    "Collection",
    "open_collection",
    "generate_id",
    "Record",
    "Schema",
    "Kind",
    "TypeWitness",
    "FieldDescriptor",
    "compile_schema",
    "Settings",
    "get_settings",
    "DocStoreError",
    "InvalidArgumentError",
    "TypeMismatchError",
    "RequiredFieldMissingError",
    "SchemaConfigurationError",
    "CollectionCorruptedError",
]
