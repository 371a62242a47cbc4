"""Unit tests for field helpers."""

from __future__ import annotations

import datetime

import pytest

from entity_mapper.entity import Entity
from entity_mapper.helpers import (
    DEFAULT_DATE,
    format_iso,
    is_object,
    is_populated,
    is_present,
    iso_date,
    looks_like_object_id,
)

OBJECT_ID = "5f1d7a3b9c1e4a2b3c4d5e6f"


class Row:
    def __init__(self, **kwargs) -> None:
        self.__dict__.update(kwargs)


class TestIsoDate:
    def test_datetime_value(self) -> None:
        value = datetime.datetime(2020, 5, 6, 7, 8, 9, 123456, tzinfo=datetime.timezone.utc)
        assert iso_date("at")({"at": value}) == "2020-05-06T07:08:09.123Z"

    def test_naive_datetime_is_utc(self) -> None:
        assert iso_date("at")({"at": datetime.datetime(2020, 1, 1)}) == (
            "2020-01-01T00:00:00.000Z"
        )

    def test_offset_is_normalised(self) -> None:
        assert iso_date("at")({"at": "2020-01-01T02:00:00+02:00"}) == (
            "2020-01-01T00:00:00.000Z"
        )

    def test_nested_path(self) -> None:
        assert iso_date("meta.at")({"meta": {"at": "2021-02-03"}}) == (
            "2021-02-03T00:00:00.000Z"
        )

    @pytest.mark.parametrize("record", [{}, {"at": None}, {"at": ""}, {"at": "junk"}])
    def test_default_date(self, record) -> None:
        assert iso_date("at")(record) == DEFAULT_DATE

    def test_format_iso_for_date(self) -> None:
        assert format_iso(datetime.date(2020, 1, 2)) == "2020-01-02T00:00:00.000Z"

    def test_as_function_rule(self) -> None:
        entity = Entity("E").expose("created", iso_date("createdAt"))
        assert entity.parse({"createdAt": "2020-01-01"}) == {
            "created": "2020-01-01T00:00:00.000Z"
        }


class TestPredicates:
    def test_is_present(self) -> None:
        check = is_present("a.b")
        assert check({"a": {"b": None}})
        assert not check({"a": {}})

    def test_is_object(self) -> None:
        check = is_object("x")
        assert check({"x": {}})
        assert check({"x": []})
        assert check({"x": Row(a=1)})
        assert not check({"x": "text"})
        assert not check({"x": 3})
        assert not check({"x": None})
        assert not check({})

    def test_looks_like_object_id(self) -> None:
        assert looks_like_object_id(OBJECT_ID)
        assert not looks_like_object_id("abc")

    def test_is_populated(self) -> None:
        check = is_populated("owner")
        assert check({"owner": {"_id": OBJECT_ID, "name": "x"}})
        assert not check({"owner": OBJECT_ID})
        assert not check({"owner": None})
        assert not check({})

    def test_is_populated_list(self) -> None:
        check = is_populated("members")
        assert check({"members": [{"name": "a"}]})
        assert check({"members": []})
        assert not check({"members": [{"name": "a"}, OBJECT_ID]})

    def test_as_condition(self) -> None:
        owner = Entity("Owner", {"name": True})
        entity = Entity("E").expose(
            "owner", {"using": owner, "if": is_populated("owner")}
        )
        assert entity.parse({"owner": {"name": "x", "age": 3}}) == {
            "owner": {"name": "x"}
        }
        assert entity.parse({"owner": OBJECT_ID}) == {}
