"""Object construction.

The strategy is fixed per type when its descriptor is built:

* INJECT  - ``cls.from_mapping(context)``; the generic copy follows unless
  the constructor set ``context.stop_mapping``.
* KWARGS  - values are collected by the generic copy first and passed to
  the constructor (``model_validate`` for Pydantic models). Instances with
  ``begin_init``/``end_init`` or ``set_mapped_field`` then get the source
  replayed through those hooks.
* DEFAULT - ``cls()`` followed by the generic copy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from row_map.adapters.protocol import MapSettable, SupportsInitialize
from row_map.core.enums import Construction
from row_map.core.exceptions import ColumnMismatchError
from row_map.mapping.context import MappingContext
from row_map.mapping.engine import map_fields
from row_map.mapping.metadata import is_pydantic_model

if TYPE_CHECKING:
    from row_map.mapping.descriptor import TypeDescriptor

logger = logging.getLogger(__name__)


class KwargsReceiver:
    """DataReceiver collecting converted values into a dict by attribute name."""

    def __init__(self, descriptor: TypeDescriptor) -> None:
        self._descriptor = descriptor

    def resolve_slot(self, name: str) -> int | None:
        return self._descriptor.resolve_slot(name)

    def set_value(self, slot: int, name: str, target: Any, value: Any) -> None:
        attr_name = self._descriptor.fields[slot].attr_name
        target[attr_name] = self._descriptor.convert_value(slot, value)


class _HooksOnly:
    """DataReceiver with no slots; only the instance hooks see the fields."""

    def resolve_slot(self, name: str) -> int | None:
        return None

    def set_value(self, slot: int, name: str, target: Any, value: Any) -> None:
        pass


def _build_from_values(descriptor: TypeDescriptor, values: dict[str, Any]) -> Any:
    cls = descriptor.target_type

    if is_pydantic_model(cls):
        try:
            return cls.model_validate(values)  # type: ignore[attr-defined]
        except Exception as e:
            raise ColumnMismatchError(cls.__name__, [str(e)]) from e

    missing = sorted(descriptor.required - values.keys())
    if missing:
        raise ColumnMismatchError(cls.__name__, missing)

    accepted = descriptor.init_names
    if accepted is None:
        return cls(**values)

    instance = cls(**{k: v for k, v in values.items() if k in accepted})
    for attr_name, value in values.items():
        if attr_name not in accepted:
            setattr(instance, attr_name, value)
    return instance


def construct(descriptor: TypeDescriptor, context: MappingContext) -> Any:
    """Create a populated instance of the descriptor's type."""
    cls = descriptor.target_type
    strategy = descriptor.construction

    if strategy is Construction.KWARGS:
        values: dict[str, Any] = {}
        map_fields(context.source, context.source_data, KwargsReceiver(descriptor), values)
        instance = _build_from_values(descriptor, values)
        # constructor already stored the values; replay lets hooks override them
        if isinstance(instance, (SupportsInitialize, MapSettable)):
            map_fields(context.source, context.source_data, _HooksOnly(), instance)
        return instance

    if strategy is Construction.INJECT:
        instance = cls.from_mapping(context)  # type: ignore[attr-defined]
        if context.stop_mapping:
            logger.debug("%s.from_mapping populated the instance; skipping copy", cls.__name__)
            return instance
    else:
        instance = cls()

    map_fields(context.source, context.source_data, descriptor, instance)
    return instance
