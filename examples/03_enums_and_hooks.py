"""
Example 03: Enums, Wrappers and Construction Hooks

This example demonstrates enum value tables, nullable wrapper fields and
types that take part in their own construction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from row_map import MapField, MappingContext, map_values, to_list, to_table, to_value


@map_values(ACTIVE="A", SUSPENDED=("S", "X"), default="ACTIVE")
class Status(Enum):
    ACTIVE = 1
    SUSPENDED = 2


class Amount:
    """Nullable wrapper around a number"""

    def __init__(self, value=None):
        self.value = value

    @property
    def is_null(self):
        return self.value is None

    def __repr__(self):
        return "Amount(NULL)" if self.is_null else f"Amount({self.value})"


@dataclass
class Account:
    """Account with an enum status and a wrapped credit limit"""
    id: int = 0
    status: Status = Status.ACTIVE
    credit_limit: Annotated[Any, MapField("Limit", wrapper=Amount)] = None


class AuditedAccount:
    """Account that records who loaded it"""
    id: int = 0
    loaded_by: str = ""

    @classmethod
    def from_mapping(cls, context: MappingContext):
        account = cls()
        account.loaded_by = context.parameters[0]
        return account


def main():
    rows = [
        {"id": 1, "status": "A", "Limit": 500},
        {"id": 2, "status": "X", "Limit": None},
        {"id": 3, "status": None, "Limit": 0},
    ]

    print("=== Enums and Hooks ===\n")

    print("1. Enum and wrapper fields:")
    accounts = to_list(rows, Account)
    for a in accounts:
        print(f"   - {a.id}: {a.status.name} limit={a.credit_limit!r}")
    print()

    print("2. Written back:")
    table = to_table(accounts)
    for row in table:
        print(f"   {row}")
    print()

    print("3. Direct lookups:")
    print(f"   to_value('S', Status) = {to_value('S', Status)}\n")

    print("4. Construction hook:")
    for a in to_list(rows, AuditedAccount, "nightly-import"):
        print(f"   - {a.id} loaded by {a.loaded_by}")


if __name__ == "__main__":
    main()
