"""In-memory, change-tracked row-set.

A ``RowSet`` is an ordered list of named columns plus rows. Each row keeps up
to three copies of its values:

* current  - the live values (absent once the row is deleted)
* original - values as of the last ``accept_changes`` (absent for new rows)
* proposed - values being edited between ``begin_edit`` and ``end_edit``

Column names are matched case-insensitively. ``None`` is the null value.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from row_map.core.enums import RowState, RowVersion
from row_map.core.exceptions import VersionNotFoundError


@dataclass(frozen=True)
class Column:
    """A named, optionally typed, row-set column."""

    name: str
    ordinal: int
    data_type: type | None = None


class RowSet:
    """Ordered columns and change-tracked rows.

    Args:
        columns: Column names, or ``(name, type)`` pairs.
    """

    def __init__(self, columns: Iterable[str | tuple[str, type | None]] = ()) -> None:
        self._columns: list[Column] = []
        self._index: dict[str, int] = {}
        self._rows: list[Row] = []
        for column in columns:
            if isinstance(column, str):
                self.add_column(column)
            else:
                self.add_column(*column)

    @classmethod
    def from_records(
        cls,
        columns: Iterable[str | tuple[str, type | None]],
        records: Iterable[Sequence[Any] | Mapping[str, Any]],
        *,
        accept: bool = True,
    ) -> RowSet:
        """Build a row-set and add one row per record.

        With *accept* (the default) the rows start out UNCHANGED, as if just
        loaded from a database.
        """
        table = cls(columns)
        for record in records:
            table.add_row(record)
        if accept:
            table.accept_changes()
        return table

    # --- Columns ---

    @property
    def columns(self) -> list[Column]:
        return list(self._columns)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self._columns]

    def add_column(self, name: str, data_type: type | None = None) -> Column:
        """Append a column. Existing rows get ``None`` for it."""
        key = name.lower()
        if key in self._index:
            raise ValueError(f"Column '{name}' already belongs to this row-set")
        column = Column(name=name, ordinal=len(self._columns), data_type=data_type)
        self._columns.append(column)
        self._index[key] = column.ordinal
        for row in self._rows:
            row._extend()
        return column

    def column_index(self, name: str) -> int | None:
        """Ordinal of the column called *name*, or None."""
        return self._index.get(name.lower())

    # --- Rows ---

    @property
    def rows(self) -> list[Row]:
        return list(self._rows)

    def new_row(self) -> Row:
        """Create a detached row with this row-set's schema."""
        return Row(self)

    def add_row(self, row: Row | Sequence[Any] | Mapping[str, Any] | None = None) -> Row:
        """Attach *row* (or a new row built from values) as ADDED."""
        if not isinstance(row, Row):
            values = row
            row = self.new_row()
            if isinstance(values, Mapping):
                for name, value in values.items():
                    row[name] = value
            elif values is not None:
                if len(values) > len(self._columns):
                    raise ValueError(
                        f"Got {len(values)} values for {len(self._columns)} columns"
                    )
                for ordinal, value in enumerate(values):
                    row[ordinal] = value
        if row.table is not self:
            raise ValueError("Row belongs to a different row-set")
        if row.state is not RowState.DETACHED:
            raise ValueError("Row is already attached")
        row._state = RowState.ADDED
        self._rows.append(row)
        return row

    def select(self, state: RowState | None = None) -> list[Row]:
        """Rows in *state*, or every row when *state* is None."""
        if state is None:
            return list(self._rows)
        return [r for r in self._rows if r.state is state]

    def accept_changes(self) -> None:
        """Commit every row; deleted rows are removed."""
        for row in list(self._rows):
            row.accept_changes()

    def _detach(self, row: Row) -> None:
        self._rows.remove(row)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(list(self._rows))

    def __getitem__(self, index: int) -> Row:
        return self._rows[index]

    def __repr__(self) -> str:
        return f"RowSet(columns={self.column_names}, rows={len(self._rows)})"


class Row:
    """A single change-tracked row. Create rows with ``RowSet.new_row``."""

    def __init__(self, table: RowSet) -> None:
        self._table = table
        self._current: list[Any] | None = [None] * len(table.columns)
        self._original: list[Any] | None = None
        self._proposed: list[Any] | None = None
        self._state = RowState.DETACHED

    @property
    def table(self) -> RowSet:
        return self._table

    @property
    def state(self) -> RowState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._proposed is not None

    def has_version(self, version: RowVersion) -> bool:
        """Return True if the row holds data for *version*."""
        return self._values(version, strict=False) is not None

    def get(self, key: int | str, version: RowVersion = RowVersion.DEFAULT) -> Any:
        """Value of column *key* at *version*."""
        values = self._values(version, strict=True)
        return values[self._ordinal(key)]  # type: ignore[index]

    def __getitem__(self, key: int | str) -> Any:
        return self.get(key)

    def __setitem__(self, key: int | str, value: Any) -> None:
        ordinal = self._ordinal(key)
        if self._proposed is not None:
            self._proposed[ordinal] = value
            return
        if self._current is None:
            raise ValueError("Cannot set a value on a deleted row")
        self._current[ordinal] = value
        if self._state is RowState.UNCHANGED:
            self._state = RowState.MODIFIED

    # --- Editing ---

    def begin_edit(self) -> None:
        """Start buffering assignments in the proposed version."""
        if self._current is None:
            raise ValueError("Cannot edit a deleted row")
        if self._proposed is None:
            self._proposed = list(self._current)

    def end_edit(self) -> None:
        """Move the proposed values into the current version."""
        if self._proposed is None:
            return
        proposed, self._proposed = self._proposed, None
        if proposed != self._current:
            self._current = proposed
            if self._state is RowState.UNCHANGED:
                self._state = RowState.MODIFIED

    def cancel_edit(self) -> None:
        """Discard the proposed values."""
        self._proposed = None

    def delete(self) -> None:
        """Mark the row deleted; a row that was never accepted is removed."""
        if self._state is RowState.ADDED:
            self._table._detach(self)
            self._state = RowState.DETACHED
            return
        if self._state is RowState.DETACHED:
            raise ValueError("Cannot delete a detached row")
        self._proposed = None
        self._current = None
        self._state = RowState.DELETED

    def accept_changes(self) -> None:
        """Make the current values the original ones."""
        self.end_edit()
        if self._state is RowState.DELETED:
            self._table._detach(self)
            self._state = RowState.DETACHED
            return
        if self._state is RowState.DETACHED:
            return
        self._original = list(self._current)  # type: ignore[arg-type]
        self._state = RowState.UNCHANGED

    def reject_changes(self) -> None:
        """Restore the original values."""
        self._proposed = None
        if self._state is RowState.ADDED:
            self._table._detach(self)
            self._state = RowState.DETACHED
        elif self._state in (RowState.MODIFIED, RowState.DELETED):
            self._current = list(self._original)  # type: ignore[arg-type]
            self._state = RowState.UNCHANGED

    # --- Internals ---

    def _ordinal(self, key: int | str) -> int:
        if isinstance(key, str):
            ordinal = self._table.column_index(key)
            if ordinal is None:
                raise KeyError(f"Column '{key}' does not belong to this row-set")
            return ordinal
        if not 0 <= key < len(self._table.columns):
            raise IndexError(f"Column ordinal {key} is out of range")
        return key

    def _values(self, version: RowVersion, *, strict: bool) -> list[Any] | None:
        if version is RowVersion.DEFAULT:
            if self._proposed is not None:
                values = self._proposed
            elif self._state is RowState.DELETED:
                values = self._original
            else:
                values = self._current
        elif version is RowVersion.CURRENT:
            values = self._current
        elif version is RowVersion.ORIGINAL:
            values = self._original
        else:
            values = self._proposed
        if values is None and strict:
            raise VersionNotFoundError(version.value, self._state.value)
        return values

    def _extend(self) -> None:
        for values in (self._current, self._original, self._proposed):
            if values is not None:
                values.append(None)

    def __repr__(self) -> str:
        values = self._current if self._current is not None else self._original
        return f"Row({self._state.value}, {values})"
