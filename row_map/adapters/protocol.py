"""Adapter protocols.

Every data shape the mapper moves values between is exposed through these
protocols. The copy algorithm only ever talks to a DataSource on one side
and a DataReceiver on the other.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DataSource(Protocol):
    """Indexed, named fields that can be read from a payload."""

    @property
    def field_count(self) -> int:
        """Number of readable fields."""
        ...

    def field_name(self, index: int) -> str:
        """Name of the field at *index*."""
        ...

    def get_value(self, index: int, data: Any) -> Any:
        """Value of the field at *index* in *data*; None for null."""
        ...


@runtime_checkable
class DataReceiver(Protocol):
    """Named slots that can be written on a payload."""

    def resolve_slot(self, name: str) -> int | None:
        """Slot for *name* (case-insensitive), or None if there is none."""
        ...

    def set_value(self, slot: int, name: str, target: Any, value: Any) -> None:
        """Write *value* into *slot* of *target*."""
        ...


@runtime_checkable
class SupportsInitialize(Protocol):
    """Receiver that brackets population with begin/end calls."""

    def begin_init(self) -> None: ...

    def end_init(self) -> None: ...


@runtime_checkable
class MapSettable(Protocol):
    """Receiver that may take over individual fields.

    ``set_mapped_field`` returns True when it handled the field, in which
    case the generic copy skips it.
    """

    def set_mapped_field(self, name: str, value: Any) -> bool: ...
