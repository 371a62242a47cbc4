"""Unit tests for the built-in converters."""

from __future__ import annotations

import datetime
import math

import pytest

from entity_mapper.core.builtin_converters import (
    INVALID_DATE,
    InvalidDate,
    convert_any,
    convert_boolean,
    convert_date,
    convert_number,
    convert_string,
    to_datetime,
)
from entity_mapper.core.converter_registry import ConverterRegistry
from entity_mapper.core.sentinels import MISSING

UTC = datetime.timezone.utc


@pytest.fixture()
def registry() -> ConverterRegistry:
    return ConverterRegistry()


class TestNumber:
    @pytest.mark.parametrize("value", [0, None, "", False, MISSING])
    def test_falsy_passes_through(self, value) -> None:
        assert convert_number(value) is value

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("42", 42),
            (" 7 ", 7),
            ("3.5", 3.5),
            ("1e3", 1000.0),
            ("0x1f", 31),
            (12, 12),
            (2.5, 2.5),
            (True, 1),
        ],
    )
    def test_numeric_parse(self, value, expected) -> None:
        assert convert_number(value) == expected

    def test_whitespace_string_is_zero(self) -> None:
        assert convert_number("   ") == 0

    def test_garbage_is_nan(self) -> None:
        assert math.isnan(convert_number("abc"))
        assert math.isnan(convert_number({"a": 1}))

    @pytest.mark.parametrize("value", ["1_000", "1_0.5", "0x_1f"])
    def test_underscore_separators_are_nan(self, value: str) -> None:
        assert math.isnan(convert_number(value))

    def test_via_registry(self, registry: ConverterRegistry) -> None:
        assert registry.convert(0, "number") == 0
        assert registry.convert(None, "number") is None
        assert registry.convert("42", "number") == 42


class TestDate:
    def test_datetime_passes_through(self) -> None:
        now = datetime.datetime.now(UTC)
        assert convert_date(now) is now

    def test_date_passes_through(self) -> None:
        today = datetime.date.today()
        assert convert_date(today) is today

    @pytest.mark.parametrize("value", [None, "", 0, MISSING])
    def test_falsy_passes_through(self, value) -> None:
        assert convert_date(value) is value

    def test_iso_string(self) -> None:
        assert convert_date("2021-03-04T05:06:07Z") == datetime.datetime(
            2021, 3, 4, 5, 6, 7, tzinfo=UTC
        )

    def test_date_only_string_is_utc_midnight(self) -> None:
        assert convert_date("2021-03-04") == datetime.datetime(2021, 3, 4, tzinfo=UTC)

    def test_epoch_milliseconds(self) -> None:
        assert convert_date(86_400_000) == datetime.datetime(1970, 1, 2, tzinfo=UTC)

    def test_invalid_input_gives_sentinel(self) -> None:
        result = convert_date("not a date")
        assert result is INVALID_DATE
        assert isinstance(result, InvalidDate)
        assert not result
        assert repr(result) == "Invalid Date"

    def test_to_datetime_rejects_nan(self) -> None:
        assert to_datetime(float("nan")) is INVALID_DATE


class TestString:
    def test_string_passes_through(self) -> None:
        assert convert_string("abc") == "abc"

    @pytest.mark.parametrize("value", [None, 0, False, MISSING])
    def test_falsy_passes_through(self, value) -> None:
        assert convert_string(value) is value

    @pytest.mark.parametrize(
        "value,expected",
        [(12, "12"), (1.5, "1.5"), (True, "true"), (1.0, "1"), (-3.0, "-3")],
    )
    def test_stringify(self, value, expected) -> None:
        assert convert_string(value) == expected


class TestBoolean:
    @pytest.mark.parametrize("value", ["false", "undefined", "null", "0", ""])
    def test_false_strings(self, value: str) -> None:
        assert convert_boolean(value) is False

    @pytest.mark.parametrize("value", ["yes", "true", "False", "no", " "])
    def test_other_strings_are_true(self, value: str) -> None:
        assert convert_boolean(value) is True

    @pytest.mark.parametrize(
        "value,expected", [(0, False), (1, True), (-3, True), (0.0, False)]
    )
    def test_numbers(self, value, expected) -> None:
        assert convert_boolean(value) is expected

    @pytest.mark.parametrize(
        "value,expected",
        [(None, False), (MISSING, False), ([], False), ({"a": 1}, True), (True, True)],
    )
    def test_truthiness(self, value, expected) -> None:
        assert convert_boolean(value) is expected

    def test_truth_table_via_registry(self, registry: ConverterRegistry) -> None:
        assert registry.convert("false", "boolean") is False
        assert registry.convert("0", "boolean") is False
        assert registry.convert("yes", "boolean") is True
        assert registry.convert(0, "boolean") is False
        assert registry.convert(1, "boolean") is True


class TestAny:
    def test_identity(self) -> None:
        obj = object()
        assert convert_any(obj) is obj
        assert convert_any(MISSING) is MISSING
