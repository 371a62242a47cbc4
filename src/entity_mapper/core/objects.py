"""Helpers for treating arbitrary input records as plain data."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sized
from typing import Any

from .sentinels import MISSING

# Accessors tried in order to turn a domain object into plain data
# (pydantic models first, then the common ``to_dict`` convention).
PLAIN_OBJECT_ACCESSORS: tuple[str, ...] = ("model_dump", "to_dict")

_SLOT_INTERNALS = frozenset({"__dict__", "__weakref__"})


def unwrap(value: Any) -> Any:
    """Return the plain representation of ``value`` if it exposes one."""
    for accessor in PLAIN_OBJECT_ACCESSORS:
        method = getattr(value, accessor, None)
        if callable(method) and not isinstance(value, type):
            return method()
    return value


def _declared_slots(value: Any) -> list[str]:
    names: list[str] = []
    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in _SLOT_INTERNALS and name not in names:
                names.append(name)
    return names


def _has_attributes(value: Any) -> bool:
    return hasattr(value, "__dict__") or bool(_declared_slots(value))


def attribute_names(value: Any) -> list[str]:
    """
    Attribute names set on a plain object.

    Dataclass fields come first; otherwise the instance ``__dict__`` and
    any filled ``__slots__`` are read.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [f.name for f in dataclasses.fields(value) if hasattr(value, f.name)]

    names = list(vars(value)) if hasattr(value, "__dict__") else []
    for name in _declared_slots(value):
        if name not in names and hasattr(value, name):
            names.append(name)
    return names


def attributes(value: Any) -> dict[str, Any]:
    """Shallow ``{name: value}`` view of a plain object's attributes."""
    return {name: getattr(value, name) for name in attribute_names(value)}


def is_empty(value: Any) -> bool:
    """
    Whether ``value`` has no enumerable content.

    ``None``, ``MISSING``, empty containers and bare scalars (numbers,
    booleans) are empty; objects are empty when they carry no attributes.
    """
    if value is None or value is MISSING:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    if _has_attributes(value):
        return not attribute_names(value)
    return True


def is_record(value: Any) -> bool:
    """Whether ``value`` can be read field by field (mapping or object)."""
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (str, bytes, bytearray, int, float, complex)):
        return False
    return _has_attributes(value)


def own_keys(value: Any) -> list[str]:
    """Field names carried by a record; private attributes are skipped."""
    if isinstance(value, Mapping):
        return [str(key) for key in value.keys()]
    if _has_attributes(value):
        return [key for key in attribute_names(value) if not key.startswith("_")]
    return []
