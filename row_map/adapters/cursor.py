"""Forward-only cursor adapter.

Wraps a DB-API 2.0 cursor (anything with ``description`` and ``fetchone``).
Tuple-like rows (including ``sqlite3.Row``) are read by ordinal; dict rows
(psycopg ``dict_row``, MySQL dict cursors) are read by column name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_NO_RECORD = object()


class CursorReader:
    """Single-pass DataSource over a cursor.

    Call ``read()`` to advance before reading each record; values are only
    valid for the current record.
    """

    def __init__(self, cursor: Any) -> None:
        self.cursor = cursor
        self._names: list[str] | None = None
        self._ordinals: dict[str, int] = {}
        self._current: Any = _NO_RECORD
        self._exhausted = False

    @property
    def columns(self) -> list[str]:
        """Column names of the result set, in ordinal order."""
        if self._names is None:
            self._load_columns()
        return self._names  # type: ignore[return-value]

    def _load_columns(self) -> None:
        description = self.cursor.description
        self._names = [desc[0] for desc in description] if description else []
        self._ordinals = {name.lower(): i for i, name in enumerate(self._names)}

    @property
    def has_record(self) -> bool:
        return self._current is not _NO_RECORD

    def read(self) -> bool:
        """Advance to the next record. Returns False once exhausted."""
        if self._exhausted:
            return False
        row = self.cursor.fetchone()
        if row is None:
            self._current = _NO_RECORD
            self._exhausted = True
            return False
        self._current = row
        return True

    def get_ordinal(self, name: str) -> int | None:
        """Ordinal of the column called *name* (case-insensitive), or None."""
        if self._names is None:
            self._load_columns()
        return self._ordinals.get(name.lower())

    # --- DataSource ---

    @property
    def field_count(self) -> int:
        return len(self.columns)

    def field_name(self, index: int) -> str:
        return self.columns[index]

    def get_value(self, index: int, data: Any = None) -> Any:
        if self._current is _NO_RECORD:
            raise RuntimeError("Cursor has no current record; call read() first")
        if isinstance(self._current, Mapping):
            return self._current[self.columns[index]]
        return self._current[index]

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            ordinal = self.get_ordinal(key)
            if ordinal is None:
                raise KeyError(f"Column '{key}' is not in the result set")
            key = ordinal
        return self.get_value(key)
