"""Dict row adapter - read-only source over ``dict[str, Any]`` rows."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class MappingSource:
    """DataSource over a dict row; field order is the dict's key order."""

    def __init__(self, row: Mapping[str, Any]) -> None:
        self._names = list(row.keys())

    @property
    def field_count(self) -> int:
        return len(self._names)

    def field_name(self, index: int) -> str:
        return self._names[index]

    def get_value(self, index: int, data: Any) -> Any:
        return data.get(self._names[index])
