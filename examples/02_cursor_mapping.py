"""
Example 02: Cursor Mapping

This example demonstrates mapping DB-API cursors to dataclasses, Pydantic models
and dictionaries keyed by a column.
"""

import sqlite3
from dataclasses import dataclass

from pydantic import BaseModel

from row_map import CursorReader, Mapper


@dataclass
class Product:
    """Product model using dataclass"""
    id: int = 0
    name: str = ""
    price: float = 0.0
    discontinued: bool = False


class ProductModel(BaseModel):
    """Product model using Pydantic"""
    id: int
    name: str
    price: float


def main():
    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE products (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            price REAL NOT NULL,
            discontinued INTEGER DEFAULT 0
        )
    """)
    conn.execute("INSERT INTO products (name, price) VALUES ('Chai', 18.0)")
    conn.execute("INSERT INTO products (name, price, discontinued) VALUES ('Chang', 19.0, 1)")
    conn.execute("INSERT INTO products (name, price) VALUES ('Aniseed Syrup', 10.0)")

    mapper = Mapper()

    print("=== Cursor Mapping ===\n")

    # Whole result set
    print("1. Dataclass list:")
    products = mapper.to_list(conn.execute("SELECT * FROM products"), Product)
    for p in products:
        print(f"   - {p.name}: {p.price} (discontinued={p.discontinued})")
    print()

    # Keyed by a column
    print("2. Pydantic dictionary:")
    by_id = mapper.to_dictionary(conn.execute("SELECT * FROM products"), "id", ProductModel)
    print(f"   Keys: {sorted(by_id)}")
    print(f"   by_id[2] = {by_id[2]!r}\n")

    # One record at a time
    print("3. Positioned reader:")
    reader = CursorReader(conn.execute("SELECT * FROM products ORDER BY price"))
    while reader.read():
        product = mapper.to_object(reader, Product)
        print(f"   - {product.name}")

    conn.close()


if __name__ == "__main__":
    main()
