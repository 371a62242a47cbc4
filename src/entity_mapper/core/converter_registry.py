"""Converter registry for named type coercions."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any

from ..exceptions import ConverterNotFoundError
from .builtin_converters import register_builtin_converters
from .protocols import Converter
from .sentinels import MISSING

logger = logging.getLogger(__name__)

TypeSpec = str | Sequence[str]


def is_array_type(type_spec: Any) -> bool:
    """An array type is a one-element list/tuple holding the element type."""
    return isinstance(type_spec, (list, tuple))


def _is_array_value(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class ConverterRegistry:
    """
    Registry of type converters.

    Maps type names (``"number"``, ``"date"``, ...) to functions of shape
    ``(value, context) -> value``. Registration is last-write-wins and is
    serialised by a lock; lookups are not.
    """

    def __init__(self, with_builtins: bool = True):
        """
        Initialize the registry.

        Args:
            with_builtins: Seed the registry with the built-in converters.
        """
        self._converters: dict[str, Converter] = {}
        self._lock = threading.Lock()
        self._logger = logger.getChild(self.__class__.__name__)

        if with_builtins:
            register_builtin_converters(self)

    def define(self, name: str, converter: Converter) -> None:
        """
        Register a converter for a type name, replacing any previous one.

        Args:
            name: The type name
            converter: Callable ``(value, context) -> value``

        Raises:
            ValueError: If name is empty or converter is not callable
        """
        if not name or not name.strip():
            raise ValueError("Converter type name cannot be empty")

        if not callable(converter):
            raise ValueError(f"Converter for '{name}' must be callable")

        with self._lock:
            if name in self._converters:
                self._logger.warning(f"Overwriting converter for type '{name}'")
            self._converters[name] = converter

        self._logger.info(
            f"Registered converter '{getattr(converter, '__name__', converter)}' "
            f"for type '{name}'"
        )

    def undefine(self, name: str) -> None:
        """Remove the converter for a type name, if registered."""
        with self._lock:
            removed = self._converters.pop(name, None)

        if removed is None:
            self._logger.warning(f"No converter to remove for type '{name}'")

    def can_convert(self, name: str) -> bool:
        """
        Check if a type can be converted.

        Args:
            name: The type name to check

        Returns:
            True if a converter is registered, False otherwise
        """
        return self.get_converter(name) is not None

    def get_converter(self, name: str) -> Converter | None:
        """Return the converter registered for ``name``, or None."""
        return self._converters.get(name)

    def to(self, value: Any, type_name: str, context: Any = None) -> Any:
        """
        Apply the converter for a scalar type name to a single value.

        Raises:
            ConverterNotFoundError: If no converter is registered for the type
        """
        converter = self.get_converter(type_name)
        if converter is None:
            raise ConverterNotFoundError(type_name)
        return converter(value, context)

    def convert(self, value: Any, type_spec: TypeSpec, context: Any = None) -> Any:
        """
        Coerce ``value`` to ``type_spec``.

        ``type_spec`` is either a type name or a one-element list holding
        the element type name. With an array type the result is always a
        list: scalars are wrapped, while ``None``, ``MISSING`` and ``""``
        become ``[]``. A list value is converted element-wise even when the
        type is a plain name.

        Raises:
            ConverterNotFoundError: If no converter is registered for the type
        """
        if is_array_type(type_spec):
            element_type = type_spec[0] if type_spec else "any"
            if not _is_array_value(value):
                if value is None or value is MISSING or value == "":
                    value = []
                else:
                    value = [value]
            return self.convert(list(value), element_type, context)

        if _is_array_value(value):
            return [self.convert(item, type_spec, context) for item in value]

        return self.to(value, type_spec, context)

    def get_available_types(self) -> list[str]:
        """
        Get a list of all registered type names.

        Returns:
            Sorted list of type names
        """
        return sorted(self._converters.keys())

    def clear(self) -> None:
        """Remove every converter, built-ins included."""
        with self._lock:
            self._converters.clear()
        self._logger.info("Cleared all converter registrations")

    def __len__(self) -> int:
        """Return the number of registered converters."""
        return len(self._converters)

    def __contains__(self, name: str) -> bool:
        """Check if a type is registered (supports 'in' operator)."""
        return self.can_convert(name)


# Global converter registry instance
_global_registry = ConverterRegistry()


def get_global_registry() -> ConverterRegistry:
    """Get the global converter registry instance."""
    return _global_registry


def define(name: str, converter: Converter) -> None:
    _global_registry.define(name, converter)


def undefine(name: str) -> None:
    _global_registry.undefine(name)


def can_convert(name: str) -> bool:
    return _global_registry.can_convert(name)


def get_converter(name: str) -> Converter | None:
    return _global_registry.get_converter(name)


def convert(value: Any, type_spec: TypeSpec, context: Any = None) -> Any:
    return _global_registry.convert(value, type_spec, context)
