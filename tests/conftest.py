"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from row_map.core.rowset import RowSet


@pytest.fixture
def category_table() -> RowSet:
    """Accepted three-row category row-set."""
    return RowSet.from_records(
        [("CategoryID", int), ("Name", str), ("Description", str)],
        [
            (1, "Beverages", "Soft drinks, coffees, teas"),
            (2, "Condiments", None),
            (3, "Seafood", "Seaweed and fish"),
        ],
    )


@pytest.fixture
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database with a populated ``products`` table."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(
        """
        CREATE TABLE products (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            price REAL NOT NULL,
            status TEXT,
            discontinued INTEGER NOT NULL DEFAULT 0
        );
        INSERT INTO products VALUES (1, 'Chai', 18.0, 'A', 0);
        INSERT INTO products VALUES (2, 'Chang', 19.0, 'I', 1);
        INSERT INTO products VALUES (3, 'Aniseed Syrup', 10.0, NULL, 0);
        """
    )
    yield conn
    conn.close()
