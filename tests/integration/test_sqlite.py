"""Integration test for mapping SQLite result sets.

Covers: cursor-to-object lists and dictionaries, row-set snapshots of a
query, change tracking, and writing objects back through plain DB-API
parameters against a real SQLite in-memory database.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import BaseModel

from row_map import (
    CursorReader,
    MapField,
    Mapper,
    RowSet,
    RowState,
    RowVersion,
    map_values,
)

# --- Test models ---


@map_values(ACTIVE="A", INACTIVE="I", default="ACTIVE")
class ProductStatus(Enum):
    ACTIVE = 1
    INACTIVE = 2


@dataclass
class Product:
    id: int = 0
    name: str = ""
    price: float = 0.0
    status: ProductStatus = ProductStatus.ACTIVE
    discontinued: bool = False


@dataclass(frozen=True)
class ProductRef:
    product_id: Annotated[int, MapField("id")]
    title: Annotated[str, MapField("name")]


class ProductModel(BaseModel):
    id: int
    name: str
    price: float


class TestSqliteMapping:
    def test_cursor_to_list(self, sqlite_conn: sqlite3.Connection) -> None:
        mapper = Mapper()
        cursor = sqlite_conn.execute("SELECT * FROM products ORDER BY id")
        products = mapper.to_list(cursor, Product)

        assert [p.name for p in products] == ["Chai", "Chang", "Aniseed Syrup"]
        assert products[1].status is ProductStatus.INACTIVE
        assert products[1].discontinued is True
        assert products[2].status is ProductStatus.ACTIVE

    def test_cursor_to_dictionary(self, sqlite_conn: sqlite3.Connection) -> None:
        mapper = Mapper()
        cursor = sqlite_conn.execute("SELECT id, name FROM products")
        refs = mapper.to_dictionary(cursor, "ID", ProductRef)

        assert sorted(refs) == [1, 2, 3]
        assert refs[2] == ProductRef(2, "Chang")

    def test_row_factory_rows(self, sqlite_conn: sqlite3.Connection) -> None:
        sqlite_conn.row_factory = sqlite3.Row
        mapper = Mapper()
        cursor = sqlite_conn.execute(
            "SELECT id, name, price FROM products WHERE price > ? ORDER BY id", (15,)
        )
        models = mapper.to_list(cursor, ProductModel)

        assert [m.id for m in models] == [1, 2]
        assert models[0].price == 18.0

    def test_to_object_reads_one_record(self, sqlite_conn: sqlite3.Connection) -> None:
        mapper = Mapper()
        cursor = sqlite_conn.execute("SELECT * FROM products ORDER BY id")
        first = mapper.to_object(cursor, Product)
        second = mapper.to_object(cursor, Product)

        assert (first.id, second.id) == (1, 2)

    def test_positioned_reader(self, sqlite_conn: sqlite3.Connection) -> None:
        mapper = Mapper()
        reader = CursorReader(sqlite_conn.execute("SELECT * FROM products WHERE id = 3"))
        assert reader.read()

        product = mapper.to_object(reader, Product)
        assert product.name == "Aniseed Syrup"

    def test_query_snapshot_tracks_changes(self, sqlite_conn: sqlite3.Connection) -> None:
        mapper = Mapper()
        cursor = sqlite_conn.execute("SELECT id, name, price FROM products ORDER BY id")
        snapshot = mapper.to_table(cursor)
        snapshot.accept_changes()
        assert snapshot.column_names == ["id", "name", "price"]

        snapshot[0]["price"] = 20.0
        snapshot[2].delete()

        current = mapper.to_list(snapshot, ProductModel)
        original = mapper.to_list(snapshot, ProductModel, version=RowVersion.ORIGINAL)
        assert [m.price for m in current] == [20.0, 19.0]
        assert [m.price for m in original] == [18.0, 19.0, 10.0]
        assert snapshot[0].state is RowState.MODIFIED

    def test_write_back(self, sqlite_conn: sqlite3.Connection) -> None:
        mapper = Mapper()
        products = [
            Product(10, "Tofu", 23.25, ProductStatus.INACTIVE, False),
            Product(11, "Ikura", 31.0, ProductStatus.ACTIVE, True),
        ]
        table = mapper.to_table(products, RowSet(["id", "name", "price", "status", "discontinued"]))
        sqlite_conn.executemany(
            "INSERT INTO products VALUES (?, ?, ?, ?, ?)",
            [tuple(row.get(c) for c in table.column_names) for row in table],
        )

        cursor = sqlite_conn.execute("SELECT status FROM products WHERE id IN (10, 11) ORDER BY id")
        assert [r[0] for r in cursor.fetchall()] == ["I", "A"]

        reloaded = mapper.to_list(
            sqlite_conn.execute("SELECT * FROM products WHERE id >= 10 ORDER BY id"), Product
        )
        assert reloaded == products
