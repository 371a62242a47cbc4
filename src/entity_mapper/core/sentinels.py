"""Marker for values that are absent, as opposed to explicitly ``None``."""

from __future__ import annotations

from typing import Any, Final


class _Missing:
    """Falsy singleton standing for an absent value."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "_Missing":
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING


def is_nil(value: Any) -> bool:
    """True for ``None`` and ``MISSING``."""
    return value is None or value is MISSING
