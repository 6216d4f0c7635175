"""Mapping layer - move values between tabular data and objects."""

from __future__ import annotations

from row_map.mapping.context import MappingContext
from row_map.mapping.convert import convert, from_value
from row_map.mapping.descriptor import TypeDescriptor, get_descriptor
from row_map.mapping.engine import map_fields
from row_map.mapping.mapper import Mapper, default_mapper, map_errors
from row_map.mapping.metadata import (
    AnnotationResolver,
    FieldMeta,
    MapField,
    MapIgnore,
    MetadataResolver,
)
from row_map.mapping.values import EnumValueTable, get_value_table, map_values

__all__ = [
    "Mapper",
    "default_mapper",
    "map_errors",
    "map_fields",
    "MappingContext",
    "TypeDescriptor",
    "get_descriptor",
    "FieldMeta",
    "MapField",
    "MapIgnore",
    "MetadataResolver",
    "AnnotationResolver",
    "EnumValueTable",
    "get_value_table",
    "map_values",
    "convert",
    "from_value",
]
