"""Type descriptors.

A TypeDescriptor is the cached, immutable field schema of one class. It is
also the object adapter: a DataSource reading an instance's fields in
descriptor order and a DataReceiver writing them by slot.
"""

from __future__ import annotations

import dataclasses
import datetime
import inspect
import logging
from collections.abc import Iterator
from decimal import Decimal
from typing import Any

from row_map.core.cache import BuildOnceCache
from row_map.core.enums import Construction
from row_map.core.exceptions import SchemaError
from row_map.mapping.convert import convert, from_value, is_wrapper_type
from row_map.mapping.metadata import (
    AnnotationResolver,
    FieldMeta,
    MetadataResolver,
    is_pydantic_model,
)

logger = logging.getLogger(__name__)

_NULL_VALUES: dict[Any, Any] = {
    int: 0,
    float: 0.0,
    Decimal: Decimal(0),
    str: "",
    bool: False,
    datetime.datetime: datetime.datetime.min,
    datetime.date: datetime.date.min,
}


def _null_value(field: FieldMeta) -> Any:
    if field.optional or field.wrapper is not None:
        return None
    return _NULL_VALUES.get(field.declared_type)


def _check_wrapper(type_name: str, field: FieldMeta) -> None:
    wrapper = field.wrapper
    if wrapper is None:
        return
    if not is_wrapper_type(wrapper):
        raise SchemaError(
            type_name,
            f"wrapper {wrapper!r} of field '{field.attr_name}' needs 'is_null' and 'value'",
        )
    declared = field.declared_type
    if declared is Any or declared is object or declared is wrapper:
        return
    if isinstance(declared, type) and issubclass(wrapper, declared):
        return
    raise SchemaError(
        type_name,
        f"wrapper {wrapper.__name__} cannot hold field '{field.attr_name}' of type {declared!r}",
    )


def _required_and_init_names(cls: type) -> tuple[frozenset[str], frozenset[str] | None]:
    """Required constructor names, and accepted names (None accepts any)."""
    if is_pydantic_model(cls):
        fields = cls.model_fields  # type: ignore[attr-defined]
        return (
            frozenset(n for n, f in fields.items() if f.is_required()),
            frozenset(fields),
        )
    if dataclasses.is_dataclass(cls):
        init_fields = [f for f in dataclasses.fields(cls) if f.init]
        required = frozenset(
            f.name
            for f in init_fields
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        )
        return required, frozenset(f.name for f in init_fields)
    try:
        sig = inspect.signature(cls)
    except (ValueError, TypeError):
        return frozenset(), None
    required_names: set[str] = set()
    accepted: set[str] = set()
    open_kwargs = False
    for name, param in sig.parameters.items():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            open_kwargs = True
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            continue
        else:
            accepted.add(name)
            if param.default is inspect.Parameter.empty:
                required_names.add(name)
    return frozenset(required_names), None if open_kwargs else frozenset(accepted)


def _select_construction(cls: type, required: frozenset[str]) -> Construction:
    if callable(getattr(cls, "from_mapping", None)):
        return Construction.INJECT
    if inspect.isabstract(cls):
        raise SchemaError(cls.__name__, "abstract type defines no from_mapping()")
    if is_pydantic_model(cls):
        return Construction.KWARGS
    if dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        return Construction.KWARGS
    if required:
        return Construction.KWARGS
    return Construction.DEFAULT


class TypeDescriptor:
    """Immutable field schema of *target_type*.

    Build with ``get_descriptor`` to share the process-wide instance.
    """

    def __init__(
        self,
        target_type: type,
        fields: list[FieldMeta],
        construction: Construction,
        required: frozenset[str] = frozenset(),
        init_names: frozenset[str] | None = None,
    ) -> None:
        self._target_type = target_type
        self._fields = tuple(fields)
        self._slots = {f.name.lower(): f.slot_index for f in self._fields}
        self._construction = construction
        self._required = required
        self._init_names = init_names

    @classmethod
    def build(cls, target_type: type, resolver: MetadataResolver | None = None) -> TypeDescriptor:
        """Build an uncached descriptor.

        Raises:
            SchemaError: On incompatible wrapper overrides, duplicate field
                names, or abstract types that cannot be constructed.
        """
        if not isinstance(target_type, type):
            raise SchemaError(repr(target_type), "not a class")
        type_name = target_type.__name__
        resolver = resolver or AnnotationResolver()

        fields: list[FieldMeta] = []
        seen: dict[str, str] = {}
        for meta in resolver.resolve(target_type):
            if meta.ignored:
                continue
            key = meta.name.lower()
            if key in seen:
                raise SchemaError(
                    type_name,
                    f"fields '{seen[key]}' and '{meta.attr_name}' both map to '{meta.name}'",
                )
            seen[key] = meta.attr_name
            _check_wrapper(type_name, meta)
            fields.append(
                dataclasses.replace(meta, slot_index=len(fields), null_value=_null_value(meta))
            )

        required, init_names = _required_and_init_names(target_type)
        construction = _select_construction(target_type, required)
        logger.debug(
            "Built descriptor for %s: %d fields, %s construction",
            type_name,
            len(fields),
            construction.value,
        )
        return cls(target_type, fields, construction, required, init_names)

    @property
    def target_type(self) -> type:
        return self._target_type

    @property
    def fields(self) -> tuple[FieldMeta, ...]:
        return self._fields

    @property
    def construction(self) -> Construction:
        return self._construction

    @property
    def required(self) -> frozenset[str]:
        """Constructor arguments without defaults."""
        return self._required

    @property
    def init_names(self) -> frozenset[str] | None:
        """Names accepted by the constructor, or None for ``**kwargs``."""
        return self._init_names

    def field(self, name: str) -> FieldMeta | None:
        """Field matched by *name* (case-insensitive), or None."""
        slot = self._slots.get(name.lower())
        return None if slot is None else self._fields[slot]

    def __iter__(self) -> Iterator[FieldMeta]:
        return iter(self._fields)

    def __repr__(self) -> str:
        names = [f.name for f in self._fields]
        return f"TypeDescriptor({self._target_type.__name__}, fields={names})"

    # --- DataSource ---

    @property
    def field_count(self) -> int:
        return len(self._fields)

    def field_name(self, index: int) -> str:
        return self._fields[index].name

    def get_value(self, index: int, data: Any) -> Any:
        field = self._fields[index]
        return from_value(getattr(data, field.attr_name, None), field)

    # --- DataReceiver ---

    def resolve_slot(self, name: str) -> int | None:
        slot = self._slots.get(name.lower())
        if slot is None or self._fields[slot].readonly:
            return None
        return slot

    def convert_value(self, slot: int, value: Any) -> Any:
        """Convert *value* for storage in *slot*."""
        return convert(value, self._fields[slot])

    def set_value(self, slot: int, name: str, target: Any, value: Any) -> None:
        setattr(target, self._fields[slot].attr_name, self.convert_value(slot, value))


_descriptors: BuildOnceCache[type, TypeDescriptor] = BuildOnceCache(TypeDescriptor.build)


def get_descriptor(target_type: type) -> TypeDescriptor:
    """Return the shared descriptor for *target_type*, building it once."""
    return _descriptors.get(target_type)
