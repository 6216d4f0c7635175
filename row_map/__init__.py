"""row-map - declarative mapping between tabular data and business objects."""

from __future__ import annotations

from row_map.adapters.cursor import CursorReader
from row_map.adapters.mapping import MappingSource
from row_map.adapters.protocol import DataReceiver, DataSource, MapSettable, SupportsInitialize
from row_map.adapters.rowset import RowReader, TableAdapter
from row_map.core.config import MapperConfig
from row_map.core.enums import Construction, RowState, RowVersion
from row_map.core.exceptions import (
    ArgumentError,
    ColumnMismatchError,
    ConversionError,
    DuplicateKeyError,
    MappingError,
    RowMapError,
    SchemaError,
    ValueNotMappableError,
    VersionNotFoundError,
)
from row_map.core.nulls import is_null
from row_map.core.rowset import Column, Row, RowSet
from row_map.mapping.context import MappingContext
from row_map.mapping.descriptor import TypeDescriptor, get_descriptor
from row_map.mapping.mapper import (
    Mapper,
    descriptor,
    from_enum,
    from_value,
    to_dictionary,
    to_enum,
    to_list,
    to_object,
    to_table,
    to_value,
)
from row_map.mapping.metadata import FieldMeta, MapField, MapIgnore
from row_map.mapping.values import map_values

__all__ = [
    # Operations
    "Mapper",
    "MapperConfig",
    "to_object",
    "to_list",
    "to_dictionary",
    "to_table",
    "to_value",
    "from_value",
    "to_enum",
    "from_enum",
    "is_null",
    "descriptor",
    # Metadata
    "MapField",
    "MapIgnore",
    "map_values",
    "FieldMeta",
    "TypeDescriptor",
    "get_descriptor",
    "MappingContext",
    "Construction",
    # Row-sets
    "RowSet",
    "Row",
    "Column",
    "RowState",
    "RowVersion",
    # Adapters
    "DataSource",
    "DataReceiver",
    "SupportsInitialize",
    "MapSettable",
    "RowReader",
    "TableAdapter",
    "CursorReader",
    "MappingSource",
    # Exceptions
    "RowMapError",
    "ArgumentError",
    "SchemaError",
    "MappingError",
    "ValueNotMappableError",
    "ConversionError",
    "DuplicateKeyError",
    "VersionNotFoundError",
    "ColumnMismatchError",
]
