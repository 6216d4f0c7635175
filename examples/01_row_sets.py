"""
Example 01: Row-Set Mapping

This example demonstrates mapping between change-tracked row-sets and dataclasses,
including renamed, nullable and ignored fields and reading older row versions.
"""

from dataclasses import dataclass
from typing import Annotated

from row_map import MapField, MapIgnore, RowSet, RowVersion, to_list, to_table


@dataclass
class Category:
    """Category business object"""
    id: Annotated[int, MapField("CategoryID")] = 0
    name: Annotated[str, MapField("Name")] = ""
    description: Annotated[str, MapField("Description", nullable=True)] = ""
    product_count: Annotated[int, MapIgnore()] = 0


def main():
    table = RowSet.from_records(
        [("CategoryID", int), ("Name", str), ("Description", str)],
        [
            (1, "Beverages", "Soft drinks, coffees, teas"),
            (2, "Condiments", None),
            (3, "Seafood", "Seaweed and fish"),
        ],
    )

    print("=== Row-Set Mapping ===\n")

    # Rows to objects
    print("1. Row-set to objects:")
    categories = to_list(table, Category)
    for c in categories:
        print(f"   - {c.id}: {c.name!r} description={c.description!r}")
    print()

    # Change tracking
    print("2. Versions:")
    table[0]["Name"] = "Drinks"
    table[2].delete()
    current = to_list(table, Category)
    original = to_list(table, Category, version=RowVersion.ORIGINAL)
    print(f"   Current:  {[c.name for c in current]}")
    print(f"   Original: {[c.name for c in original]}\n")

    # Objects back to a row-set
    print("3. Objects to a new row-set:")
    copy = to_table(categories)
    print(f"   Columns: {copy.column_names}")
    for row in copy:
        print(f"   {row}")


if __name__ == "__main__":
    main()
