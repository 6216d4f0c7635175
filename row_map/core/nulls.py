"""Logical null predicate.

The policy is fixed:

=========  ==========================================
Type       Logically null when
=========  ==========================================
any        ``None``
str        empty after stripping trailing whitespace
datetime   ``datetime.min``
date       ``date.min``
int        ``0`` (``bool`` is not an integer here)
=========  ==========================================
"""

from __future__ import annotations

import datetime
from typing import Any


def is_null(value: Any) -> bool:
    """Return True if *value* is logically null."""
    if value is None:
        return True
    if isinstance(value, str):
        return len(value.rstrip()) == 0
    if isinstance(value, datetime.datetime):
        return value == datetime.datetime.min
    if isinstance(value, datetime.date):
        return value == datetime.date.min
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 0
    return False
