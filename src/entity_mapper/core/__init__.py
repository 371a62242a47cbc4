from .converter_registry import (
    ConverterRegistry,
    can_convert,
    convert,
    define,
    get_converter,
    get_global_registry,
    undefine,
)
from .sentinels import MISSING, is_missing, is_nil

__all__ = [
    "MISSING",
    "ConverterRegistry",
    "can_convert",
    "convert",
    "define",
    "get_converter",
    "get_global_registry",
    "is_missing",
    "is_nil",
    "undefine",
]
