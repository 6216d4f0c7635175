"""Value conversion between tabular and object representations.

``convert`` moves a raw source value into a destination field; ``from_value``
produces the tabular form of an object's value.

Nullable wrappers are any class exposing ``is_null`` and ``value``. A null
wrapper is obtained from ``Wrapper.null()`` when defined, else a ``NULL``
class attribute, else ``Wrapper(None)``.
"""

from __future__ import annotations

import inspect
import types
from enum import Enum
from typing import Any

from row_map.core.coerce import coerce
from row_map.core.exceptions import ConversionError
from row_map.core.nulls import is_null
from row_map.mapping.metadata import FieldMeta
from row_map.mapping.values import get_value_table


def _is_class(tp: Any) -> bool:
    # list[int] passes isinstance(type) on 3.10
    return isinstance(tp, type) and not isinstance(tp, types.GenericAlias)


def _has_value(cls: type) -> bool:
    """Whether instances of *cls* expose a ``value`` attribute."""
    if hasattr(cls, "value"):
        return True
    if any("value" in inspect.get_annotations(klass) for klass in cls.__mro__):
        return True
    if cls.__init__ is object.__init__:
        return False
    try:
        return "value" in inspect.signature(cls.__init__).parameters
    except (ValueError, TypeError):
        return False


def is_wrapper_type(tp: Any) -> bool:
    """Return True if *tp* is a nullable wrapper class.

    Wrappers expose ``is_null`` on the class and ``value`` as a class
    attribute, an annotation or an ``__init__`` parameter.
    """
    return (
        _is_class(tp)
        and hasattr(tp, "is_null")
        and not issubclass(tp, Enum)
        and _has_value(tp)
    )


def is_wrapper(value: Any) -> bool:
    """Return True if *value* is a nullable wrapper instance."""
    return not isinstance(value, type) and is_wrapper_type(type(value))


def is_enum_type(tp: Any) -> bool:
    return _is_class(tp) and issubclass(tp, Enum)


def unwrap(value: Any) -> Any:
    """Underlying value of a wrapper, None when it is null."""
    return None if value.is_null else value.value


def null_wrapper(wrapper: type) -> Any:
    """The null instance of *wrapper*."""
    factory = getattr(wrapper, "null", None)
    if callable(factory):
        return factory()
    null = getattr(wrapper, "NULL", None)
    if isinstance(null, wrapper):
        return null
    return wrapper(None)


def effective_wrapper(field: FieldMeta) -> type | None:
    """Explicit wrapper override, else the declared type when it is a wrapper."""
    if field.wrapper is not None:
        return field.wrapper
    if is_wrapper_type(field.declared_type):
        return field.declared_type  # type: ignore[no-any-return]
    return None


def _wrap(value: Any, wrapper: type, field: FieldMeta) -> Any:
    if isinstance(value, wrapper):
        return value
    if is_wrapper(value):
        value = unwrap(value)
    if value is None:
        return null_wrapper(wrapper)
    try:
        return wrapper(value)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ConversionError(field.name, value, wrapper.__name__) from e


def convert(value: Any, field: FieldMeta) -> Any:
    """Convert raw source *value* for storage in *field*.

    ``None`` becomes the field's null value (its wrapper's null instance,
    the enum default, or the zero value of its declared type).
    """
    wrapper = effective_wrapper(field)
    if wrapper is not None:
        return _wrap(value, wrapper, field)

    if is_wrapper(value):
        value = unwrap(value)

    declared = field.declared_type
    if is_enum_type(declared):
        member = get_value_table(declared).to_member(value)
        if member is None:
            return field.null_value
        return member

    if value is None:
        return field.null_value
    return coerce(value, declared, field.name)


def from_value(value: Any, field: FieldMeta | None = None) -> Any:
    """Tabular form of an object's *value*.

    Enum members become their declared literal, wrappers their underlying
    value (None when null). Nullable fields write logically-null values as
    None.
    """
    if isinstance(value, Enum):
        value = get_value_table(type(value)).to_literal(value)
    elif is_wrapper(value):
        value = unwrap(value)
    if field is not None and field.nullable and is_null(value):
        return None
    return value
