from __future__ import annotations


class DocStoreError(Exception):
    """Base class for every error raised by docstore."""


class InvalidArgumentError(DocStoreError, TypeError):
    """An operation received a value of the wrong shape."""


class TypeMismatchError(DocStoreError, TypeError):
    def __init__(self, field: str, expected: str, actual: str) -> None:
        super().__init__(f"'{field}': expected a {expected} instead got a {actual}")
        self.field = field
        self.expected = expected
        self.actual = actual


class RequiredFieldMissingError(DocStoreError, ValueError):
    def __init__(self, field: str) -> None:
        super().__init__(f"'{field}' is required")
        self.field = field


class SchemaConfigurationError(DocStoreError, ValueError):
    """A schema entry is neither a type witness nor a valid descriptor."""


class CollectionCorruptedError(DocStoreError, ValueError):
    """The persisted slot could not be read back as a list of records."""
