"""Row-set adapters.

RowReader exposes one row as both a DataSource and a DataReceiver.
TableAdapter walks a whole row-set as a source and hands out fresh rows
when the row-set is the destination.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from row_map.core.coerce import coerce
from row_map.core.enums import RowState, RowVersion
from row_map.core.rowset import Row, RowSet


class RowReader:
    """Adapter over a single row, read at an optional version.

    The adapter can be re-pointed at another row of the same row-set by
    assigning ``row``, which lets multi-row operations reuse one instance.
    """

    def __init__(self, row: Row, version: RowVersion | None = None) -> None:
        self.row = row
        self.version = version

    @property
    def table(self) -> RowSet:
        return self.row.table

    # --- DataSource ---

    @property
    def field_count(self) -> int:
        return len(self.row.table.columns)

    def field_name(self, index: int) -> str:
        return self.row.table.columns[index].name

    def get_value(self, index: int, data: Any) -> Any:
        row = data if isinstance(data, Row) else self.row
        return row.get(index, self.version or RowVersion.DEFAULT)

    # --- DataReceiver ---

    def resolve_slot(self, name: str) -> int | None:
        return self.row.table.column_index(name)

    def set_value(self, slot: int, name: str, target: Any, value: Any) -> None:
        row = target if isinstance(target, Row) else self.row
        column = row.table.columns[slot]
        if value is not None and column.data_type is not None:
            value = coerce(value, column.data_type, name)
        row[slot] = value


class TableAdapter:
    """Adapter over a whole row-set.

    As a source it yields rows to read; deleted rows are skipped unless an
    explicit version was requested. As a destination it allocates one new
    row per output record.
    """

    def __init__(self, table: RowSet, version: RowVersion | None = None) -> None:
        self.table = table
        self.version = version

    def source_rows(self) -> Iterator[Row]:
        for row in self.table:
            if self.version is None and row.state is RowState.DELETED:
                continue
            yield row

    def first_row(self) -> Row | None:
        return next(self.source_rows(), None)

    def reader(self, row: Row) -> RowReader:
        return RowReader(row, self.version)

    def new_row(self) -> Row:
        return self.table.new_row()

    def commit_row(self, row: Row) -> Row:
        return self.table.add_row(row)
