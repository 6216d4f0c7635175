"""Public mapping operations.

Mapper wraps each operation in a single error boundary: row-map exceptions
propagate as they are, anything else raised by a collaborator is wrapped in
MappingError with the original exception as its cause.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from enum import Enum
from typing import Any, TypeVar

from row_map.adapters.cursor import CursorReader
from row_map.adapters.mapping import MappingSource
from row_map.adapters.protocol import DataSource
from row_map.adapters.rowset import RowReader, TableAdapter
from row_map.core.cache import BuildOnceCache
from row_map.core.coerce import coerce, is_scalar_type
from row_map.core.config import MapperConfig
from row_map.core.enums import RowVersion
from row_map.core.exceptions import (
    ArgumentError,
    DuplicateKeyError,
    MappingError,
    RowMapError,
    SchemaError,
)
from row_map.core.nulls import is_null
from row_map.core.rowset import Row, RowSet
from row_map.mapping.construct import construct
from row_map.mapping.context import MappingContext
from row_map.mapping.convert import effective_wrapper, is_enum_type
from row_map.mapping.convert import from_value as _from_value
from row_map.mapping.descriptor import TypeDescriptor, get_descriptor
from row_map.mapping.engine import map_fields
from row_map.mapping.metadata import FieldMeta, MetadataResolver
from row_map.mapping.values import get_value_table

logger = logging.getLogger(__name__)

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


def map_errors(func: F) -> F:
    """Wrap foreign exceptions raised by *func* in MappingError."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except RowMapError:
            raise
        except Exception as e:
            logger.debug("Wrapping %s raised in %s", type(e).__name__, func.__name__)
            raise MappingError(f"{func.__name__} failed: {e}", e) from e

    return wrapper  # type: ignore[return-value]


def _column_type(field: FieldMeta) -> type | None:
    """Column type inferred for *field*; None unless it is a plain scalar."""
    declared = field.declared_type
    if effective_wrapper(field) or is_enum_type(declared) or not is_scalar_type(declared):
        return None
    return declared  # type: ignore[no-any-return]


def _is_cursor(obj: Any) -> bool:
    """DB-API cursors expose ``description`` and ``fetchone``."""
    return hasattr(obj, "fetchone") and hasattr(obj, "description")


class Mapper:
    """Maps between rows, row-sets, cursors and business objects.

    Args:
        config: Mapper settings; defaults to ``MapperConfig()``.
        resolver: Metadata resolver for target types. Without one, the
            process-wide descriptors built from annotations are shared;
            with one, this mapper keeps its own descriptor cache.
    """

    def __init__(
        self,
        config: MapperConfig | None = None,
        resolver: MetadataResolver | None = None,
    ) -> None:
        self.config = config or MapperConfig()
        self.resolver = resolver
        if resolver is None:
            self._describe: Callable[[type], TypeDescriptor] = get_descriptor
        else:
            cache: BuildOnceCache[type, TypeDescriptor] = BuildOnceCache(
                functools.partial(TypeDescriptor.build, resolver=resolver)
            )
            self._describe = cache.get

    @classmethod
    def from_config(cls, resolver: MetadataResolver | None = None, **settings: Any) -> Mapper:
        """Create a Mapper from keyword settings validated by MapperConfig."""
        return cls(MapperConfig(**settings), resolver)

    # --- Single objects ---

    @map_errors
    def to_object(
        self,
        source: Any,
        dest: Any,
        *parameters: Any,
        version: RowVersion | None = None,
    ) -> Any:
        """Map *source* onto *dest* and return the destination.

        Args:
            source: A Row, a RowSet (its first row), a positioned CursorReader,
                a DB-API cursor (its next record), a dict row or an object.
            dest: A class to instantiate, an existing object, a Row, or a
                RowSet to which a new row is appended.
            *parameters: Forwarded to ``from_mapping`` constructors.
            version: Row version to read when *source* is a Row or RowSet.
        """
        if source is None:
            raise ArgumentError("source")
        if dest is None:
            raise ArgumentError("dest")

        adapter, data = self._source_for(source, self._version(version))

        if isinstance(dest, type):
            return construct(self._describe(dest), MappingContext(adapter, data, parameters))

        if isinstance(dest, RowSet):
            self._append_row(TableAdapter(dest), adapter, data)
            return dest

        if isinstance(dest, Row):
            map_fields(adapter, data, RowReader(dest), dest)
            return dest

        map_fields(adapter, data, self._describe(type(dest)), dest)
        return dest

    # --- Collections ---

    @map_errors
    def to_list(
        self,
        source: Any,
        target_type: type[T],
        *parameters: Any,
        version: RowVersion | None = None,
        into: list[T] | None = None,
    ) -> list[T]:
        """Create one *target_type* instance per source record.

        Args:
            source: A RowSet, a CursorReader or DB-API cursor, or an iterable
                of dict rows or objects.
            target_type: Class of the objects to create.
            *parameters: Forwarded to ``from_mapping`` constructors.
            version: Row version to read from a RowSet. Without one, deleted
                rows are skipped.
            into: List to append to; a new list by default. Objects appended
                before a failure stay in it.
        """
        if source is None:
            raise ArgumentError("source")
        if target_type is None:
            raise ArgumentError("target_type")

        result: list[T] = into if into is not None else []
        descriptor = self._describe(target_type)
        for adapter, data in self._records(source, self._version(version)):
            result.append(construct(descriptor, MappingContext(adapter, data, parameters)))
        return result

    @map_errors
    def to_dictionary(
        self,
        source: Any,
        key_field: str,
        target_type: type[T],
        *parameters: Any,
        version: RowVersion | None = None,
        into: MutableMapping[Any, T] | None = None,
    ) -> MutableMapping[Any, T]:
        """Like ``to_list`` but keyed by the source field *key_field*.

        Raises:
            DuplicateKeyError: When a key repeats and ``duplicate_keys`` is
                ``"error"``.
        """
        if source is None:
            raise ArgumentError("source")
        if not key_field:
            raise ArgumentError("key_field")
        if target_type is None:
            raise ArgumentError("target_type")

        result: MutableMapping[Any, T] = into if into is not None else {}
        descriptor = self._describe(target_type)
        replace = self.config.duplicate_keys == "replace"
        for adapter, data in self._records(source, self._version(version)):
            key = self._key_of(adapter, data, key_field)
            if not replace and key in result:
                raise DuplicateKeyError(key_field, key)
            result[key] = construct(descriptor, MappingContext(adapter, data, parameters))
        return result

    @map_errors
    def to_table(
        self,
        source: Any,
        table: RowSet | None = None,
        *parameters: Any,
        version: RowVersion | None = None,
    ) -> RowSet:
        """Append one row per source record to *table*.

        Args:
            source: A RowSet, a CursorReader or DB-API cursor, or an iterable
                of objects or dict rows.
            table: Destination; a new RowSet by default. A destination with
                no columns gets them from the source when ``infer_columns``
                is enabled.
            *parameters: Accepted like the other bulk operations. Rows are
                allocated by the row-set, never by a ``from_mapping``
                constructor, so nothing consumes them.
            version: Row version to read from a RowSet source.
        """
        if source is None:
            raise ArgumentError("source")
        target = TableAdapter(table if table is not None else RowSet())
        if parameters:
            logger.debug("to_table ignores %d constructor parameters", len(parameters))

        for adapter, data in self._records(source, self._version(version)):
            self._append_row(target, adapter, data)
        return target.table

    # --- Values ---

    @map_errors
    def to_value(self, value: Any, target_type: type) -> Any:
        """Convert a single tabular *value* to *target_type*.

        Enum targets go through their value table; any other type is
        coerced like a field of that type. A None value stays None for
        non-enum targets.
        """
        if target_type is None:
            raise ArgumentError("target_type")
        if is_enum_type(target_type):
            return get_value_table(target_type).to_member(value)
        if value is None:
            return None
        return coerce(value, target_type)

    @map_errors
    def from_value(self, value: Any) -> Any:
        """Tabular form of *value*: enum literal or unwrapped wrapper value."""
        if value is None:
            raise ArgumentError("value")
        return _from_value(value)

    def to_enum(self, value: Any, enum_type: type[Enum]) -> Enum | None:
        """Enum member associated with *value*.

        Raises:
            SchemaError: If *enum_type* is not an Enum.
        """
        if enum_type is not None and not is_enum_type(enum_type):
            raise SchemaError(getattr(enum_type, "__name__", repr(enum_type)), "not an Enum")
        return self.to_value(value, enum_type)  # type: ignore[no-any-return]

    def from_enum(self, member: Enum) -> Any:
        return self.from_value(member)

    @staticmethod
    def is_null(value: Any) -> bool:
        return is_null(value)

    def descriptor(self, target_type: type) -> TypeDescriptor:
        return self._describe(target_type)

    # --- Internals ---

    def _append_row(self, table: TableAdapter, adapter: DataSource, data: Any) -> None:
        self._ensure_columns(table.table, adapter)
        row = table.new_row()
        map_fields(adapter, data, RowReader(row), row)
        table.commit_row(row)

    def _version(self, version: RowVersion | None) -> RowVersion | None:
        return version if version is not None else self.config.default_version

    def _source_for(self, source: Any, version: RowVersion | None) -> tuple[DataSource, Any]:
        if isinstance(source, Row):
            return RowReader(source, version), source
        if isinstance(source, RowSet):
            row = TableAdapter(source, version).first_row()
            if row is None:
                raise MappingError("Source row-set has no rows")
            return RowReader(row, version), row
        if isinstance(source, CursorReader):
            return source, source
        if _is_cursor(source):
            reader = CursorReader(source)
            if not reader.read():
                raise MappingError("Source cursor returned no records")
            return reader, reader
        if isinstance(source, Mapping):
            return MappingSource(source), source
        return self._describe(type(source)), source

    def _records(self, source: Any, version: RowVersion | None) -> Iterator[tuple[DataSource, Any]]:
        if isinstance(source, RowSet):
            tables = TableAdapter(source, version)
            reader: RowReader | None = None
            for row in tables.source_rows():
                if reader is None:
                    reader = tables.reader(row)
                reader.row = row
                yield reader, row
            return

        if isinstance(source, CursorReader) or _is_cursor(source):
            cursor = source if isinstance(source, CursorReader) else CursorReader(source)
            while cursor.read():
                yield cursor, cursor
            return

        if isinstance(source, (str, bytes, Mapping)) or not isinstance(source, Iterable):
            raise MappingError(f"Cannot read records from {type(source).__name__}")

        for item in source:
            if item is None:
                raise ArgumentError("source item")
            yield self._source_for(item, version)

    @staticmethod
    def _key_of(adapter: DataSource, data: Any, key_field: str) -> Any:
        wanted = key_field.lower()
        for i in range(adapter.field_count):
            if adapter.field_name(i).lower() == wanted:
                return adapter.get_value(i, data)
        raise MappingError(f"Key field '{key_field}' is not in the source")

    def _ensure_columns(self, table: RowSet, adapter: DataSource) -> None:
        if table.columns or not self.config.infer_columns:
            return
        if isinstance(adapter, TypeDescriptor):
            columns = [(f.name, _column_type(f)) for f in adapter.fields]
        elif isinstance(adapter, RowReader):
            columns = [(c.name, c.data_type) for c in adapter.table.columns]
        else:
            columns = [(adapter.field_name(i), None) for i in range(adapter.field_count)]
        for name, data_type in columns:
            if name and table.column_index(name) is None:
                table.add_column(name, data_type)


default_mapper = Mapper()

to_object = default_mapper.to_object
to_list = default_mapper.to_list
to_dictionary = default_mapper.to_dictionary
to_table = default_mapper.to_table
to_value = default_mapper.to_value
from_value = default_mapper.from_value
to_enum = default_mapper.to_enum
from_enum = default_mapper.from_enum
descriptor = default_mapper.descriptor
