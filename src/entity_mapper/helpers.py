"""
Small, pure field helpers for use as function rules or ``if`` conditions.

Each helper takes a field path and returns a callable ``(obj, options)``.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Callable, Mapping
from typing import Any, Final

from .core.builtin_converters import InvalidDate, to_datetime
from .core.objects import is_record
from .core.paths import get_path, has_path
from .core.sentinels import MISSING

DEFAULT_DATE: Final[str] = "1900-01-01T00:00:00.000Z"

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

FieldHelper = Callable[..., Any]


def format_iso(value: datetime.date) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime(
            value.year, value.month, value.day, tzinfo=datetime.timezone.utc
        )
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    value = value.astimezone(datetime.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def iso_date(name: str) -> FieldHelper:
    """Value at ``name`` as an ISO date string, ``DEFAULT_DATE`` otherwise."""

    def read(obj: Any, options: Mapping[str, Any] | None = None) -> str:
        value = get_path(obj, name)
        if not value:
            return DEFAULT_DATE
        parsed = to_datetime(value)
        if isinstance(parsed, InvalidDate):
            return DEFAULT_DATE
        try:
            return format_iso(parsed)
        except (OverflowError, ValueError):
            return DEFAULT_DATE

    return read


def is_present(name: str) -> FieldHelper:
    def check(obj: Any, options: Mapping[str, Any] | None = None) -> bool:
        return has_path(obj, name)

    return check


def is_object(name: str) -> FieldHelper:
    """Whether ``obj[name]`` is a container or an object (not a scalar)."""

    def check(obj: Any, options: Mapping[str, Any] | None = None) -> bool:
        value = get_path(obj, [name])
        if value is MISSING or value is None:
            return False
        if isinstance(value, (Mapping, list, tuple, set)):
            return True
        return is_record(value)

    return check


def looks_like_object_id(value: Any) -> bool:
    return bool(_OBJECT_ID_RE.match(str(value)))


def is_populated(name: str) -> FieldHelper:
    """
    Whether the reference at ``obj[name]`` has been expanded into a document,
    i.e. it is not a bare 24-hex object id (or list of them).
    """

    def check(obj: Any, options: Mapping[str, Any] | None = None) -> bool:
        value = get_path(obj, [name])
        if isinstance(value, (list, tuple)):
            return all(not looks_like_object_id(item) for item in value)
        if value:
            return not looks_like_object_id(value)
        return False

    return check
