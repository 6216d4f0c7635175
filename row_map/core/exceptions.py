"""row-map exception hierarchy.

Public operations raise only row-map exceptions. Failures raised by
collaborators (row-sets, cursors, destination constructors) are wrapped in
:class:`MappingError`; row-map exceptions propagate unchanged.
"""

from __future__ import annotations


class RowMapError(Exception):
    """Base exception for all row-map errors."""


class ArgumentError(RowMapError, ValueError):
    """Raised when a required argument is missing."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Argument '{argument}' must not be None")


# --- Schema ---


class SchemaError(RowMapError):
    """Raised when a type descriptor cannot be built."""

    def __init__(self, type_name: str, detail: str) -> None:
        self.type_name = type_name
        super().__init__(f"Cannot describe {type_name}: {detail}")


# --- Mapping ---


class MappingError(RowMapError):
    """Base for mapping errors.

    Also used directly to wrap foreign exceptions raised while mapping; the
    original exception is kept in ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class ValueNotMappableError(MappingError):
    """Raised when a literal has no enum association and no default."""

    def __init__(self, enum_name: str, value: object) -> None:
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"Value {value!r} cannot be mapped to {enum_name}")


class ConversionError(MappingError):
    """Raised when a value cannot be coerced to the destination type."""

    def __init__(self, field_name: str, value: object, target: str) -> None:
        self.field_name = field_name
        self.value = value
        self.target = target
        super().__init__(f"Cannot convert {value!r} to {target} for field '{field_name}'")


class DuplicateKeyError(MappingError):
    """Raised when a dictionary mapping produces the same key twice."""

    def __init__(self, key_field: str, key: object) -> None:
        self.key_field = key_field
        self.key = key
        super().__init__(f"Duplicate key {key!r} in column '{key_field}'")


class VersionNotFoundError(MappingError):
    """Raised when a row has no data for the requested version."""

    def __init__(self, version: str, state: str) -> None:
        self.version = version
        self.state = state
        super().__init__(f"Row in state '{state}' has no {version} version")


class ColumnMismatchError(MappingError):
    """Raised when required constructor fields cannot be filled from the source."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")
