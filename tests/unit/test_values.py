"""Unit tests for enum value tables."""

from __future__ import annotations

import threading
from enum import Enum

import pytest

from row_map.core.exceptions import SchemaError, ValueNotMappableError
from row_map.mapping.values import get_value_table, map_values


@map_values(ACTIVE="A", INACTIVE=("I", "X"), default="UNKNOWN")
class Status(Enum):
    ACTIVE = 1
    INACTIVE = 2
    UNKNOWN = 3


@map_values(LOW=1, HIGH=2)
class Priority(Enum):
    LOW = "low"
    HIGH = "high"
    NONE = "none"


class Color(Enum):
    RED = "r"
    GREEN = "g"


@map_values(YES=True, NO=False)
class Flag(Enum):
    YES = 1
    NO = 0


@map_values(MISSING="m")
class Broken(Enum):
    PRESENT = 1


class TestDeclaredTable:
    def test_literal_to_member(self) -> None:
        table = get_value_table(Status)
        assert table.to_member("A") is Status.ACTIVE
        assert table.to_member("X") is Status.INACTIVE

    def test_first_literal_is_written(self) -> None:
        assert get_value_table(Status).to_literal(Status.INACTIVE) == "I"

    def test_unmatched_uses_default(self) -> None:
        assert get_value_table(Status).to_member("Z") is Status.UNKNOWN

    def test_none_uses_default(self) -> None:
        assert get_value_table(Status).to_member(None) is Status.UNKNOWN

    def test_unmatched_without_default_raises(self) -> None:
        with pytest.raises(ValueNotMappableError) as exc_info:
            get_value_table(Priority).to_member(9)
        assert exc_info.value.enum_name == "Priority"
        assert exc_info.value.value == 9

    def test_none_without_default_is_none(self) -> None:
        assert get_value_table(Priority).to_member(None) is None

    def test_undeclared_member_writes_its_value(self) -> None:
        assert get_value_table(Priority).to_literal(Priority.NONE) == "none"

    def test_declared_table_ignores_member_values(self) -> None:
        with pytest.raises(ValueNotMappableError):
            get_value_table(Priority).to_member("low")

    def test_bool_literals_do_not_match_ints(self) -> None:
        table = get_value_table(Flag)
        assert table.to_member(True) is Flag.YES
        with pytest.raises(ValueNotMappableError):
            table.to_member(1)

    def test_member_passes_through(self) -> None:
        assert get_value_table(Status).to_member(Status.ACTIVE) is Status.ACTIVE

    def test_unknown_member_name(self) -> None:
        with pytest.raises(SchemaError, match="MISSING"):
            get_value_table(Broken)


class TestUndeclaredTable:
    def test_by_value(self) -> None:
        assert get_value_table(Color).to_member("r") is Color.RED

    def test_by_name(self) -> None:
        assert get_value_table(Color).to_member("GREEN") is Color.GREEN

    def test_literal_is_value(self) -> None:
        assert get_value_table(Color).to_literal(Color.GREEN) == "g"

    def test_no_match(self) -> None:
        with pytest.raises(ValueNotMappableError):
            get_value_table(Color).to_member("blue")


class TestCaching:
    def test_same_instance(self) -> None:
        assert get_value_table(Status) is get_value_table(Status)

    def test_concurrent_first_use(self) -> None:
        @map_values(ON="1", OFF="0")
        class Switch(Enum):
            ON = True
            OFF = False

        results: list[object] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            results.append(get_value_table(Switch))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
