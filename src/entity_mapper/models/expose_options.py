"""Options accepted by ``Entity.expose`` for a single exposure."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.sentinels import MISSING


def normalize_type(type_spec: Any) -> str | list[str]:
    """
    Lower-case a type spec, keeping the one-element list (array) form.

    >>> normalize_type(["Number"])
    ['number']
    """
    if type_spec is None:
        return "any"
    if isinstance(type_spec, (list, tuple)):
        element = type_spec[0] if type_spec else None
        return [normalize_type(element or "any")]
    if not isinstance(type_spec, str):
        raise ValueError(f"'{type_spec}' is not a valid type name")
    return type_spec.lower() or "any"


class ExposeOptions(BaseModel):
    """
    Options of an exposure.

    ``as`` and ``if`` are Python keywords; they may be given either by
    their alias in a mapping (``{"as": "fullname"}``) or as ``as_`` / ``if_``.
    """

    as_: str | None = Field(
        default=None,
        alias="as",
        description="Expose the field under this output name instead.",
    )
    get: str | None = Field(
        default=None,
        description="Path read from the input instead of the exposed name.",
    )
    value: Any = Field(
        default=None,
        description="Constant value. Only honoured when explicitly given.",
    )
    omit: list[str] | None = Field(
        default=None,
        description="Sub-keys removed from the field value.",
    )
    type: str | list[str] = Field(
        default="any",
        description="Converter name, or [name] for list coercion.",
    )
    default: Any = Field(
        default=None,
        description="Fallback for None/MISSING. Only honoured when explicitly given.",
    )
    if_: Callable[..., Any] | None = Field(
        default=None,
        alias="if",
        description="Condition (record, options) deciding whether the field is written.",
    )
    using: Any = Field(
        default=None,
        description="Entity used to parse the field value.",
    )

    model_config = ConfigDict(
        extra="forbid", populate_by_name=True, arbitrary_types_allowed=True
    )

    @field_validator("omit", mode="before")
    @classmethod
    def _omit_as_list(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> str | list[str]:
        return normalize_type(v)

    @field_validator("if_", mode="before")
    @classmethod
    def _condition_is_callable(cls, v: Any) -> Any:
        if v is not None and not callable(v):
            raise ValueError("if condition must be a function")
        return v

    # ----- helpers -----------------------------------------------------------
    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set

    def resolved_default(self) -> Any:
        """Configured default, ``None`` for an explicit MISSING, else MISSING."""
        if not self.has_default:
            return MISSING
        return None if self.default is MISSING else self.default
