"""
field_rule.py – one rule per exposed output field
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Each act (how the raw value is obtained) is its own frozen model carrying
only the data it needs; ``FieldRule`` is the tagged union over them.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..core.objects import attributes, is_record, unwrap
from ..core.paths import get_path, unset_path
from ..core.sentinels import MISSING

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class FieldAct(str, Enum):
    """How a field rule derives its raw value from the input record."""

    ALIAS = "alias"
    FUNCTION = "function"
    GET = "get"
    VALUE = "value"
    OMIT = "omit"


# ---------------------------------------------------------------------------
# Rule variants
# ---------------------------------------------------------------------------


class BaseFieldRule(BaseModel):
    """Settings shared by every act."""

    type: str | list[str] = Field(
        default="any",
        description=(
            "Converter name, or a one-element list for element-wise "
            "coercion into a list."
        ),
    )
    default: Any = Field(
        default=MISSING,
        description="Substituted when the raw value is None/MISSING.",
    )
    condition: Callable[..., Any] | None = Field(
        default=None,
        description="Predicate (record, options); the field is skipped when false.",
    )
    using: Any = Field(
        default=None,
        description="Entity the raw value is parsed through before coercion.",
    )

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def is_array(self) -> bool:
        return isinstance(self.type, list)

    def read(self, record: Any, key: str, options: Mapping[str, Any]) -> Any:
        """Return the raw value for output field ``key``."""
        raise NotImplementedError


class AliasRule(BaseFieldRule):
    """Read the input at ``path`` (the exposed name, or the source of ``as``)."""

    act: Literal[FieldAct.ALIAS] = FieldAct.ALIAS
    path: str

    def read(self, record: Any, key: str, options: Mapping[str, Any]) -> Any:
        return get_path(record, self.path)


class FunctionRule(BaseFieldRule):
    """Compute the value with a callback ``fn(record, options)``."""

    act: Literal[FieldAct.FUNCTION] = FieldAct.FUNCTION
    fn: Callable[..., Any]

    def read(self, record: Any, key: str, options: Mapping[str, Any]) -> Any:
        return self.fn(record, options)


class GetRule(BaseFieldRule):
    """Read the input at a path other than the output name."""

    act: Literal[FieldAct.GET] = FieldAct.GET
    path: str

    def read(self, record: Any, key: str, options: Mapping[str, Any]) -> Any:
        return get_path(record, self.path)


class ValueRule(BaseFieldRule):
    act: Literal[FieldAct.VALUE] = FieldAct.VALUE
    value: Any

    def read(self, record: Any, key: str, options: Mapping[str, Any]) -> Any:
        return copy.deepcopy(self.value)


class OmitRule(BaseFieldRule):
    """Read the field under its own name and drop ``keys`` from a copy of it."""

    act: Literal[FieldAct.OMIT] = FieldAct.OMIT
    keys: list[str]

    def read(self, record: Any, key: str, options: Mapping[str, Any]) -> Any:
        value = get_path(record, key)
        if not value:
            return value

        plain = unwrap(value)
        if isinstance(plain, Mapping):
            stripped = copy.deepcopy(dict(plain))
        elif is_record(plain):
            stripped = copy.deepcopy(attributes(plain))
        else:
            return value

        for path in self.keys:
            unset_path(stripped, path)
        return stripped


FieldRule = Annotated[
    AliasRule | FunctionRule | GetRule | ValueRule | OmitRule,
    Field(discriminator="act"),
]


def passthrough_rule(key: str) -> AliasRule:
    """Rule used for input fields exposed implicitly in discard mode."""
    return AliasRule(path=key)
