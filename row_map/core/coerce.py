"""Primitive value coercion.

Converts a non-null value to one of the scalar kinds that appear in row-sets
and business objects. Values already of the target type are returned as-is;
targets outside the table below pass through unchanged.
"""

from __future__ import annotations

import datetime
import uuid
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from row_map.core.exceptions import ConversionError

_TRUE = frozenset({"true", "t", "yes", "y", "1", "on"})
_FALSE = frozenset({"false", "f", "no", "n", "0", "off", ""})


def _to_str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


def _to_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, (float, Decimal)) and value != int(value):
        raise ValueError(f"{value!r} has a fractional part")
    return int(value)


def _to_float(value: Any) -> float:
    if isinstance(value, str):
        return float(value.strip())
    return float(value)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    return Decimal(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"not a boolean literal: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        return bool(value)
    raise TypeError(f"cannot interpret {type(value).__name__} as bool")


def _to_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time.min)
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value.strip())
    raise TypeError(f"cannot interpret {type(value).__name__} as datetime")


def _to_date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, str):
        return datetime.date.fromisoformat(value.strip())
    raise TypeError(f"cannot interpret {type(value).__name__} as date")


def _to_time(value: Any) -> datetime.time:
    if isinstance(value, datetime.datetime):
        return value.time()
    if isinstance(value, str):
        return datetime.time.fromisoformat(value.strip())
    raise TypeError(f"cannot interpret {type(value).__name__} as time")


def _to_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, (bytes, bytearray)):
        return uuid.UUID(bytes=bytes(value))
    return uuid.UUID(str(value))


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, uuid.UUID):
        return value.bytes
    return bytes(value)


_COERCERS: dict[type, Callable[[Any], Any]] = {
    str: _to_str,
    int: _to_int,
    float: _to_float,
    Decimal: _to_decimal,
    bool: _to_bool,
    datetime.datetime: _to_datetime,
    datetime.date: _to_date,
    datetime.time: _to_time,
    uuid.UUID: _to_uuid,
    bytes: _to_bytes,
}


def is_scalar_type(target: Any) -> bool:
    """Return True if *target* is one of the coercible scalar kinds."""
    return target in _COERCERS


def coerce(value: Any, target: Any, field_name: str = "") -> Any:
    """Convert non-null *value* to *target*.

    Raises:
        ConversionError: If the value cannot be expressed as *target*.
    """
    if type(value) is target:
        return value
    coercer = _COERCERS.get(target)
    if coercer is None:
        return value
    # datetime passes isinstance(date) and bool passes isinstance(int); both still convert
    if isinstance(value, target) and not (
        target is datetime.date and isinstance(value, datetime.datetime)
    ) and not (target is int and isinstance(value, bool)):
        return value
    try:
        return coercer(value)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ConversionError(field_name, value, target.__name__) from e
