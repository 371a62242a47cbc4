"""
Mapping engine: applies an entity's field rules to input records.

The engine is stateless; everything it needs comes from the entity
(rules, discard set, converter registry) and the call arguments.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from ..models.field_rule import BaseFieldRule, FunctionRule, GetRule, passthrough_rule
from .objects import is_empty, is_record, own_keys, unwrap
from .paths import set_path
from .protocols import ValueConverter
from .sentinels import MISSING, is_nil

if TYPE_CHECKING:
    from ..entity import Entity

logger = logging.getLogger(__name__)

ID_KEY = "id"
VERSION_KEY = "__v"


def ordered_keys(
    rule_keys: Iterable[str], record: Any, discards: frozenset[str] | None
) -> list[str]:
    """
    Output keys in emission order: ``id`` first, then ascending.

    In discard mode every input field joins the declared ones, minus the
    discard set.
    """
    keys = set(rule_keys)
    if discards is not None:
        keys.update(own_keys(record))
        keys.difference_update(discards)

    ordered = sorted(keys)
    if ID_KEY in keys:
        ordered.remove(ID_KEY)
        ordered.insert(0, ID_KEY)
    return ordered


def parse(
    entity: "Entity",
    data: Any,
    options: Mapping[str, Any] | Any = None,
    converter: ValueConverter | None = None,
) -> Any:
    """
    Map ``data`` through ``entity``.

    ``options`` may also be the converter itself, as in
    ``entity.parse(record, converter)``.
    """
    if is_nil(data) or is_empty(data):
        return data

    record = unwrap(data)

    if callable(options):
        converter = options
    if not isinstance(options, Mapping):
        options = {}

    if isinstance(record, (list, tuple)):
        return [entity.parse(item, options, converter) for item in record]

    mappings = entity.mappings
    discards = entity.discards

    if not mappings and discards is None:
        logger.debug(f"{entity.name} entity has no mappings")
        return record

    if not is_record(record):
        return record

    result: dict[str, Any] = {}
    for key in ordered_keys(mappings.keys(), record, discards):
        rule = mappings.get(key)
        implicit = rule is None
        if implicit:
            rule = passthrough_rule(key)

        if rule.condition is not None and not rule.condition(record, options):
            continue

        value = _resolve_value(entity, key, rule, record, options, converter)
        if value is MISSING:
            continue
        if implicit:
            # input keys are copied as they are, never split on dots
            result[key] = value
        else:
            set_path(result, key, value)

    return result


def _read_raw(
    entity: "Entity",
    key: str,
    rule: BaseFieldRule,
    record: Any,
    options: Mapping[str, Any],
) -> Any:
    if isinstance(rule, FunctionRule):
        try:
            return rule.read(record, key, options)
        except Exception as e:
            logger.error(
                f"Function for field '{key}' of entity '{entity.name}' failed: {e}",
                exc_info=True,
            )
            return None

    value = rule.read(record, key, options)
    if isinstance(rule, GetRule) and value is MISSING:
        logger.debug(
            f"Missing get '{rule.path}' for field '{key}' of entity '{entity.name}'"
        )
    return value


def _resolve_value(
    entity: "Entity",
    key: str,
    rule: BaseFieldRule,
    record: Any,
    options: Mapping[str, Any],
    converter: Any,
) -> Any:
    value = _read_raw(entity, key, rule, record, options)

    default_applied = False
    if is_nil(value) and rule.has_default:
        value = copy.deepcopy(rule.default)
        default_applied = True

    if converter is not None:
        value = converter(value, options)

    if not default_applied and rule.using is not None:
        value = rule.using.parse(value, options, converter)

    try:
        value = entity.registry.convert(value, rule.type, options)
    except Exception as e:
        logger.error(
            f"Cannot convert field '{key}' of entity '{entity.name}' "
            f"to {rule.type!r}: {e}",
            exc_info=True,
        )

    return value
