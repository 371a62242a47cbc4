"""
entity_mapper – declarative mapping of domain records to output dicts.

Entities describe output fields (aliases, renames, constants, computed
values, nested entities) and their types; parsing applies them to records
and coerces every value through a converter registry.
"""

from .core.builtin_converters import INVALID_DATE, register_builtin_converters
from .core.converter_registry import (
    ConverterRegistry,
    can_convert,
    convert,
    define,
    get_converter,
    get_global_registry,
    undefine,
)
from .core.sentinels import MISSING
from .entity import Entity, FrozenEntity, is_entity
from .exceptions import (
    ConverterNotFoundError,
    DefinitionError,
    DefinitionLoadError,
    EntityMapperError,
    FrozenEntityError,
)
from .helpers import DEFAULT_DATE, iso_date, is_object, is_populated, is_present
from .io import load_entities, load_entities_from_text
from .logging_config import configure_logging

__all__ = [
    "DEFAULT_DATE",
    "INVALID_DATE",
    "MISSING",
    "ConverterNotFoundError",
    "ConverterRegistry",
    "DefinitionError",
    "DefinitionLoadError",
    "Entity",
    "EntityMapperError",
    "FrozenEntity",
    "FrozenEntityError",
    "can_convert",
    "configure_logging",
    "convert",
    "define",
    "get_converter",
    "get_global_registry",
    "is_entity",
    "is_object",
    "is_populated",
    "is_present",
    "iso_date",
    "load_entities",
    "load_entities_from_text",
    "register_builtin_converters",
    "undefine",
]
