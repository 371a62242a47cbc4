"""Unit tests for loading entities from definition documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from entity_mapper.core.converter_registry import ConverterRegistry
from entity_mapper.entity import Entity, FrozenEntity
from entity_mapper.exceptions import DefinitionLoadError
from entity_mapper.io import (
    FileLoader,
    load_entities,
    load_entities_from_data,
    load_entities_from_text,
)

DOCUMENT = """
entities:
  User:
    fields:
      id: {type: number}
      name: true
      nick: {get: profile.nickname}
      address: {using: Address}
      tags: {type: [string], default: []}
    discard: [secret]
  Address:
    fields:
      city: true
      zip: {type: string}
    freeze: true
  Admin:
    extends: User
    fields:
      role: {value: admin}
"""


@pytest.fixture()
def entities() -> dict[str, Entity]:
    return load_entities_from_text(DOCUMENT)


class TestLoadFromText:
    def test_entities_in_document_order(self, entities) -> None:
        assert list(entities) == ["User", "Address", "Admin"]

    def test_freeze_flag(self, entities) -> None:
        assert isinstance(entities["Address"], FrozenEntity)
        assert not entities["User"].frozen

    def test_using_is_resolved_to_entity(self, entities) -> None:
        assert entities["User"].mappings["address"].using is entities["Address"]

    def test_parse_with_loaded_entities(self, entities) -> None:
        record = {
            "id": "7",
            "name": "Ada",
            "profile": {"nickname": "ada"},
            "address": {"city": "Rome", "zip": 100, "street": "x"},
            "secret": "s",
            "__v": 1,
            "extra": True,
        }
        assert entities["User"].parse(record) == {
            "id": 7,
            "address": {"city": "Rome", "zip": "100"},
            "extra": True,
            "name": "Ada",
            "nick": "ada",
            "profile": {"nickname": "ada"},
            "tags": [],
        }

    def test_extends(self, entities) -> None:
        admin = entities["Admin"]
        assert admin.name == "Admin"
        assert set(admin.mappings) == {"id", "name", "nick", "address", "tags", "role"}
        assert "role" not in entities["User"].mappings
        assert admin.parse({"id": 1})["role"] == "admin"

    def test_list_of_option_mappings_is_merged(self) -> None:
        text = """
entities:
  A:
    fields:
      n: [{type: number}, {default: 1}]
      m: [{type: string}, {type: number}]
"""
        entity = load_entities_from_text(text)["A"]
        assert entity.mappings["n"].type == "number"
        assert entity.parse({"n": None, "m": "4"}) == {"n": 1, "m": 4}

    def test_registry_is_passed_through(self) -> None:
        registry = ConverterRegistry()
        loaded = load_entities_from_text(
            "entities: {A: {fields: {a: true}}, B: {extends: A}}", registry
        )
        assert loaded["A"].registry is registry
        assert loaded["B"].registry is registry

    def test_logs_loaded_entities(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        load_entities_from_text(DOCUMENT)
        assert any("Loaded 3 entities" in r.message for r in caplog.records)


class TestLoadErrors:
    def test_unknown_using(self) -> None:
        with pytest.raises(DefinitionLoadError, match="unknown entity 'Nope'"):
            load_entities_from_text("entities: {A: {fields: {a: {using: Nope}}}}")

    def test_unknown_extends(self) -> None:
        with pytest.raises(DefinitionLoadError, match="unknown entity 'Nope'"):
            load_entities_from_text("entities: {A: {extends: Nope}}")

    def test_cycle(self) -> None:
        text = """
entities:
  A: {fields: {b: {using: B}}}
  B: {fields: {a: {using: A}}}
"""
        with pytest.raises(DefinitionLoadError, match="Cyclic entity reference: A -> B -> A"):
            load_entities_from_text(text)

    def test_invalid_field_definition(self) -> None:
        with pytest.raises(DefinitionLoadError, match="Invalid entity 'A'"):
            load_entities_from_text("entities: {A: {fields: {'bad name': true}}}")

    def test_false_field(self) -> None:
        with pytest.raises(DefinitionLoadError, match="Invalid definition document"):
            load_entities_from_text("entities: {A: {fields: {a: false}}}")

    def test_unknown_document_keys(self) -> None:
        with pytest.raises(DefinitionLoadError, match="Invalid definition document"):
            load_entities_from_data({"entities": {}, "version": 2})

    def test_missing_entities_key(self) -> None:
        with pytest.raises(DefinitionLoadError):
            load_entities_from_data({})

    def test_top_level_must_be_mapping(self) -> None:
        with pytest.raises(DefinitionLoadError, match="must be a mapping"):
            load_entities_from_text("- a\n- b\n")

    def test_yaml_syntax_error(self) -> None:
        with pytest.raises(DefinitionLoadError, match="Cannot parse"):
            load_entities_from_text("entities: {A: [unclosed")


class TestFileLoading:
    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "entities.yaml"
        path.write_text(DOCUMENT, encoding="utf-8")
        assert list(load_entities(path)) == ["User", "Address", "Admin"]

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "entities.json"
        path.write_text(
            json.dumps({"entities": {"A": {"fields": {"n": {"type": "number"}}}}}),
            encoding="utf-8",
        )
        loaded = load_entities(path)
        assert loaded["A"].parse({"n": "4"}) == {"n": 4}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DefinitionLoadError, match="File not found"):
            load_entities(tmp_path / "nope.yaml")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "entities.txt"
        path.write_text("entities: {}", encoding="utf-8")
        with pytest.raises(DefinitionLoadError, match="Unsupported extension"):
            FileLoader.load(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "entities.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DefinitionLoadError, match="Cannot parse entities.json"):
            FileLoader.load(path)

    def test_json_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "entities.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(DefinitionLoadError, match="must be a mapping"):
            FileLoader.load(path)
