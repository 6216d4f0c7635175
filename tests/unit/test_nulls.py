"""Unit tests for the logical null predicate and primitive coercion."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

import pytest

from row_map.core.coerce import coerce, is_scalar_type
from row_map.core.exceptions import ConversionError, MappingError
from row_map.core.nulls import is_null


class TestIsNull:
    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "\t\n", datetime.datetime.min, datetime.date.min, 0],
    )
    def test_null_values(self, value: object) -> None:
        assert is_null(value) is True

    @pytest.mark.parametrize(
        "value",
        [" x", "abc", 1, -1, 0.0, Decimal(0), False, True, datetime.date(2024, 1, 1), b""],
    )
    def test_non_null_values(self, value: object) -> None:
        assert is_null(value) is False

    def test_leading_whitespace_is_not_trimmed(self) -> None:
        assert is_null("  a  ") is False


class TestCoerce:
    def test_same_type_returned_as_is(self) -> None:
        value = "abc"
        assert coerce(value, str) is value

    def test_int_to_str(self) -> None:
        assert coerce(100, str) == "100"

    def test_str_to_int_strips(self) -> None:
        assert coerce(" 42 ", int) == 42

    def test_integral_float_to_int(self) -> None:
        assert coerce(3.0, int) == 3
        assert coerce(Decimal("12.00"), int) == 12

    @pytest.mark.parametrize("value", [3.7, Decimal("2.5"), float("inf")])
    def test_fractional_to_int_rejected(self, value: object) -> None:
        with pytest.raises(ConversionError):
            coerce(value, int, "qty")

    def test_float_to_decimal_keeps_repr(self) -> None:
        assert coerce(0.1, Decimal) == Decimal("0.1")

    def test_bool_to_int(self) -> None:
        result = coerce(True, int)
        assert result == 1
        assert type(result) is int

    def test_int_to_bool(self) -> None:
        assert coerce(1, bool) is True
        assert coerce(0, bool) is False

    @pytest.mark.parametrize(("text", "expected"), [("yes", True), ("F", False), ("1", True)])
    def test_str_to_bool(self, text: str, expected: bool) -> None:
        assert coerce(text, bool) is expected

    def test_datetime_to_date(self) -> None:
        value = datetime.datetime(2024, 5, 6, 7, 8)
        result = coerce(value, datetime.date)
        assert result == datetime.date(2024, 5, 6)
        assert type(result) is datetime.date

    def test_iso_string_to_datetime(self) -> None:
        assert coerce("2024-05-06T07:08:00", datetime.datetime) == datetime.datetime(
            2024, 5, 6, 7, 8
        )

    def test_uuid_from_string(self) -> None:
        value = uuid.uuid4()
        assert coerce(str(value), uuid.UUID) == value

    def test_bytes_to_str(self) -> None:
        assert coerce(b"abc", str) == "abc"

    def test_unknown_target_passes_through(self) -> None:
        marker = object()
        assert coerce(marker, list) is marker

    def test_failure_raises_conversion_error(self) -> None:
        with pytest.raises(ConversionError) as exc_info:
            coerce("abc", int, "CategoryID")
        assert exc_info.value.field_name == "CategoryID"
        assert exc_info.value.target == "int"
        assert isinstance(exc_info.value, MappingError)

    def test_bad_bool_literal(self) -> None:
        with pytest.raises(ConversionError):
            coerce("maybe", bool)

    def test_is_scalar_type(self) -> None:
        assert is_scalar_type(int)
        assert is_scalar_type(datetime.date)
        assert not is_scalar_type(list)
