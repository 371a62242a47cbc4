from .expose_options import ExposeOptions, normalize_type
from .field_rule import (
    AliasRule,
    BaseFieldRule,
    FieldAct,
    FieldRule,
    FunctionRule,
    GetRule,
    OmitRule,
    ValueRule,
)

__all__ = [
    "AliasRule",
    "BaseFieldRule",
    "ExposeOptions",
    "FieldAct",
    "FieldRule",
    "FunctionRule",
    "GetRule",
    "OmitRule",
    "ValueRule",
    "normalize_type",
]
