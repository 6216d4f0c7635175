"""Contract tests for adapter protocol compliance."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from dataclasses import dataclass

import pytest

from row_map.adapters.cursor import CursorReader
from row_map.adapters.mapping import MappingSource
from row_map.adapters.protocol import DataReceiver, DataSource
from row_map.adapters.rowset import RowReader, TableAdapter
from row_map.core.enums import RowState, RowVersion
from row_map.core.rowset import RowSet
from row_map.mapping.construct import KwargsReceiver
from row_map.mapping.descriptor import get_descriptor


@dataclass
class Part:
    id: int = 0
    name: str = ""


def _read_all(source: DataSource, data: object) -> dict[str, object]:
    return {source.field_name(i): source.get_value(i, data) for i in range(source.field_count)}


class TestRowReaderProtocol:
    def test_implements_both_sides(self, category_table: RowSet) -> None:
        reader = RowReader(category_table[0])
        assert isinstance(reader, DataSource)
        assert isinstance(reader, DataReceiver)

    def test_reads_fields(self, category_table: RowSet) -> None:
        row = category_table[0]
        values = _read_all(RowReader(row), row)
        assert values == {
            "CategoryID": 1,
            "Name": "Beverages",
            "Description": "Soft drinks, coffees, teas",
        }

    def test_reads_version(self, category_table: RowSet) -> None:
        row = category_table[0]
        row["Name"] = "Drinks"
        assert RowReader(row, RowVersion.ORIGINAL).get_value(1, row) == "Beverages"

    def test_resolve_and_set(self, category_table: RowSet) -> None:
        row = category_table[0]
        reader = RowReader(row)
        slot = reader.resolve_slot("categoryid")
        assert slot == 0
        reader.set_value(slot, "CategoryID", row, "42")
        assert row[0] == 42
        assert reader.resolve_slot("missing") is None


class TestTableAdapter:
    def test_skips_deleted_without_version(self, category_table: RowSet) -> None:
        category_table[1].delete()
        assert [r[0] for r in TableAdapter(category_table).source_rows()] == [1, 3]

    def test_includes_deleted_with_version(self, category_table: RowSet) -> None:
        category_table[1].delete()
        adapter = TableAdapter(category_table, RowVersion.ORIGINAL)
        assert len(list(adapter.source_rows())) == 3

    def test_destination_rows(self) -> None:
        adapter = TableAdapter(RowSet(["id"]))
        row = adapter.new_row()
        row["id"] = 1
        assert adapter.commit_row(row).state is RowState.ADDED
        assert len(adapter.table) == 1


class TestDescriptorProtocol:
    def test_implements_both_sides(self) -> None:
        desc = get_descriptor(Part)
        assert isinstance(desc, DataSource)
        assert isinstance(desc, DataReceiver)

    def test_reads_and_writes(self) -> None:
        desc = get_descriptor(Part)
        part = Part(1, "gear")
        assert _read_all(desc, part) == {"id": 1, "name": "gear"}
        desc.set_value(desc.resolve_slot("NAME"), "NAME", part, "cog")  # type: ignore[arg-type]
        assert part.name == "cog"

    def test_kwargs_receiver(self) -> None:
        receiver = KwargsReceiver(get_descriptor(Part))
        assert isinstance(receiver, DataReceiver)
        values: dict[str, object] = {}
        receiver.set_value(receiver.resolve_slot("id"), "id", values, "3")  # type: ignore[arg-type]
        assert values == {"id": 3}


class TestMappingSourceProtocol:
    def test_implements_source(self) -> None:
        row = {"id": 1, "name": "gear"}
        source = MappingSource(row)
        assert isinstance(source, DataSource)
        assert _read_all(source, row) == row


class TestCursorReaderProtocol:
    @pytest.fixture
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        conn = sqlite3.connect(":memory:")
        yield conn.execute("SELECT 1 AS id, 'gear' AS Name UNION ALL SELECT 2, 'cog'")
        conn.close()

    def test_implements_source(self, cursor: sqlite3.Cursor) -> None:
        assert isinstance(CursorReader(cursor), DataSource)

    def test_forward_only(self, cursor: sqlite3.Cursor) -> None:
        reader = CursorReader(cursor)
        assert reader.columns == ["id", "Name"]
        assert reader.read()
        assert reader["name"] == "gear"
        assert reader.read()
        assert reader[0] == 2
        assert not reader.read()
        assert not reader.has_record
        assert not reader.read()

    def test_value_requires_record(self, cursor: sqlite3.Cursor) -> None:
        reader = CursorReader(cursor)
        with pytest.raises(RuntimeError, match="read"):
            reader.get_value(0)

    def test_dict_rows(self) -> None:
        class DictCursor:
            description = (("id",), ("name",))

            def __init__(self) -> None:
                self._rows = [{"id": 7, "name": "bolt"}]

            def fetchone(self) -> dict[str, object] | None:
                return self._rows.pop(0) if self._rows else None

        reader = CursorReader(DictCursor())
        assert reader.read()
        assert _read_all(reader, reader) == {"id": 7, "name": "bolt"}
