"""Build entities from a definition document (YAML / JSON)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..core.converter_registry import ConverterRegistry
from ..entity import Entity
from ..exceptions import DefinitionError, DefinitionLoadError
from ..models.definition_document import DefinitionDocument, EntityDocument
from .file_loader import FileLoader, parse_yaml_text

logger = logging.getLogger(__name__)


class _EntityResolver:
    """Builds the entities of one document, following using/extends first."""

    def __init__(
        self,
        document: DefinitionDocument,
        registry: ConverterRegistry | None = None,
    ):
        self._declarations = document.entities
        self._registry = registry
        self._built: dict[str, Entity] = {}
        self._in_progress: list[str] = []

    def build_all(self) -> dict[str, Entity]:
        for name in self._declarations:
            self._build(name)
        return {name: self._built[name] for name in self._declarations}

    def _lookup(self, name: Any, referrer: str) -> Entity:
        if not isinstance(name, str) or name not in self._declarations:
            raise DefinitionLoadError(
                f"Entity '{referrer}' references unknown entity '{name}'"
            )
        return self._build(name)

    def _build(self, name: str) -> Entity:
        if name in self._built:
            return self._built[name]

        if name in self._in_progress:
            cycle = " -> ".join(self._in_progress + [name])
            raise DefinitionLoadError(f"Cyclic entity reference: {cycle}")

        self._in_progress.append(name)
        declaration = self._declarations[name]

        if declaration.extends is not None:
            base = self._lookup(declaration.extends, name)
            entity = base.freeze().extend(name)
        else:
            entity = Entity(name, registry=self._registry)

        try:
            entity.define(self._resolve_fields(name, declaration))
            if declaration.discard is not None:
                entity.discard(*declaration.discard)
        except DefinitionError as exc:
            raise DefinitionLoadError(f"Invalid entity '{name}': {exc}") from exc

        if declaration.freeze:
            entity = entity.freeze()

        self._in_progress.pop()
        self._built[name] = entity
        logger.debug(f"Built entity '{name}' ({len(entity.mappings)} fields)")
        return entity

    def _resolve_fields(self, name: str, declaration: EntityDocument) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        for field_name, spec in declaration.fields.items():
            if isinstance(spec, list):
                merged: dict[str, Any] = {}
                for options in spec:
                    merged.update(options)
                fields[field_name] = self._resolve_options(name, merged)
            elif isinstance(spec, Mapping):
                fields[field_name] = self._resolve_options(name, spec)
            else:
                fields[field_name] = spec
        return fields

    def _resolve_options(self, name: str, options: Mapping[str, Any]) -> dict[str, Any]:
        resolved = dict(options)
        if "using" in resolved:
            resolved["using"] = self._lookup(resolved["using"], name)
        return resolved


def load_entities_from_data(
    data: Mapping[str, Any], registry: ConverterRegistry | None = None
) -> dict[str, Entity]:
    """
    Build entities from an already parsed document.

    Args:
        data: Mapping with an ``entities`` key.
        registry: Converter registry handed to every entity.

    Returns:
        Entities by name, in declaration order.

    Raises:
        DefinitionLoadError: If the document is malformed or cannot be resolved
    """
    try:
        document = DefinitionDocument.model_validate(data)
    except ValidationError as exc:
        raise DefinitionLoadError(f"Invalid definition document: {exc}") from exc

    entities = _EntityResolver(document, registry).build_all()
    logger.info(f"Loaded {len(entities)} entities: {', '.join(entities)}")
    return entities


def load_entities_from_text(
    text: str, registry: ConverterRegistry | None = None
) -> dict[str, Entity]:
    """Build entities from YAML (or JSON, a YAML subset) text."""
    return load_entities_from_data(parse_yaml_text(text), registry)


def load_entities(
    path: str | Path, registry: ConverterRegistry | None = None
) -> dict[str, Entity]:
    """Build entities from a ``.yaml`` / ``.yml`` / ``.json`` file."""
    return load_entities_from_data(FileLoader.load(path), registry)
