"""Per-instance mapping context handed to injected constructors."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from row_map.adapters.protocol import DataSource


class MappingContext:
    """Source and parameters for building one destination instance.

    Types that define a ``from_mapping(context)`` classmethod receive this
    object. Setting ``stop_mapping`` to True skips the generic field copy
    that would otherwise follow construction.

    Args:
        source: Adapter over the source payload.
        source_data: The current row, cursor or object.
        parameters: Extra values forwarded by the caller.
    """

    def __init__(
        self,
        source: DataSource,
        source_data: Any,
        parameters: Sequence[Any] | None = None,
    ) -> None:
        self.source = source
        self.source_data = source_data
        self.parameters: tuple[Any, ...] = tuple(parameters or ())
        self.stop_mapping = False

    def field_names(self) -> list[str]:
        return [self.source.field_name(i) for i in range(self.source.field_count)]

    def get(self, name: str, default: Any = None) -> Any:
        """Value of the source field *name* (case-insensitive)."""
        key = name.lower()
        for i in range(self.source.field_count):
            if self.source.field_name(i).lower() == key:
                return self.source.get_value(i, self.source_data)
        return default

    def values(self) -> dict[str, Any]:
        """All source fields as a dict, in source order."""
        return {
            self.source.field_name(i): self.source.get_value(i, self.source_data)
            for i in range(self.source.field_count)
        }
