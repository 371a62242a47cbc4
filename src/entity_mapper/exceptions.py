"""
exceptions.py

Typed exception hierarchy shared by the definition, conversion and loading
layers.
"""

from __future__ import annotations

# --------------------------------------------------------------------------- #
#                              Base hierarchy                                 #
# --------------------------------------------------------------------------- #


class EntityMapperError(Exception):
    """
    Root of all errors raised by this package.
    """


class DefinitionError(EntityMapperError, ValueError):
    """
    Raised while an entity is being defined.

    Examples
    --------
    * Field name that is not a string or contains illegal characters
    * Contradictory options (``as`` together with a function, ...)
    * ``using`` target that is not an entity
    * Definitions that are not a mapping
    """


class FrozenEntityError(DefinitionError):
    """
    Raised when a frozen entity is mutated, or a mutable one is extended.
    """


class ConverterNotFoundError(EntityMapperError, LookupError):
    """Raised when no converter is registered for the requested type."""

    def __init__(self, type_name: str):
        super().__init__(f"No type converter defined for '{type_name}'")
        self.type_name = type_name


class DefinitionLoadError(EntityMapperError):
    """
    Raised by the I/O layer when a definition document cannot be read,
    parsed or resolved into entities.

    This typically wraps:
        * Missing file / unsupported extension
        * YAML or JSON syntax errors
        * Pydantic validation failures of the document shape
        * Unknown or cyclic ``using`` / ``extends`` references
    """
