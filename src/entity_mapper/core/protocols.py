from collections.abc import Mapping
from typing import Any, Protocol


class Converter(Protocol):
    """Defines the contract for a named type conversion."""

    def __call__(self, value: Any, context: Any = None) -> Any:
        """
        Coerce a single (non-sequence) value.

        Args:
            value: The raw value, possibly ``None`` or ``MISSING``.
            context: The options mapping handed to ``parse``, if any.

        Returns:
            The coerced value.
        """
        ...


class ValueConverter(Protocol):
    """Contract for the optional per-call converter passed to ``parse``."""

    def __call__(self, value: Any, options: Mapping[str, Any]) -> Any: ...
