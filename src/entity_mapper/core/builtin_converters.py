"""
Built-in type converters: ``number``, ``date``, ``string``, ``boolean``
and ``any``.

Every converter lets falsy input through untouched (except ``boolean``),
so an absent field stays absent after coercion.
"""

from __future__ import annotations

import datetime
import math
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from .converter_registry import ConverterRegistry


class InvalidDate:
    """Result of coercing something that cannot be read as a date."""

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InvalidDate)

    def __hash__(self) -> int:
        return hash(InvalidDate)

    def __repr__(self) -> str:
        return "Invalid Date"


INVALID_DATE: Final = InvalidDate()

_FALSE_STRINGS: Final[frozenset[str]] = frozenset(
    {"false", "undefined", "null", "0", ""}
)


def _parse_number(text: str) -> int | float:
    text = text.strip()
    if not text:
        return 0
    if "_" in text:
        return math.nan
    try:
        return int(text, 0) if text.lower().startswith(("0x", "0o", "0b")) else int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return math.nan


def convert_number(value: Any, context: Any = None) -> Any:
    if not value:
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str):
        return _parse_number(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _from_timestamp(millis: float) -> datetime.datetime | InvalidDate:
    try:
        return datetime.datetime.fromtimestamp(millis / 1000, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE


def to_datetime(value: Any) -> datetime.datetime | datetime.date | InvalidDate:
    """Read ``value`` as a date, yielding ``INVALID_DATE`` when that fails."""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value
    if isinstance(value, bool):
        return _from_timestamp(int(value))
    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value):
            return INVALID_DATE
        return _from_timestamp(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = datetime.datetime.fromisoformat(text)
        except ValueError:
            return INVALID_DATE
        # date-only strings are read as UTC midnight
        if parsed.tzinfo is None and len(text) <= 10:
            parsed = parsed.replace(tzinfo=datetime.timezone.utc)
        return parsed
    return INVALID_DATE


def convert_date(value: Any, context: Any = None) -> Any:
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value
    if not value:
        return value
    return to_datetime(value)


def convert_string(value: Any, context: Any = None) -> Any:
    if isinstance(value, str):
        return value
    if not value:
        return value
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def convert_boolean(value: Any, context: Any = None) -> bool:
    if isinstance(value, str):
        return value not in _FALSE_STRINGS
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return value != 0
    return bool(value)


def convert_any(value: Any, context: Any = None) -> Any:
    return value


BUILTIN_CONVERTERS: Final[dict[str, Any]] = {
    "number": convert_number,
    "date": convert_date,
    "string": convert_string,
    "boolean": convert_boolean,
    "any": convert_any,
}


def register_builtin_converters(registry: "ConverterRegistry") -> None:
    """Install (or reinstall) the built-in converters into ``registry``."""
    for name, converter in BUILTIN_CONVERTERS.items():
        registry.define(name, converter)
