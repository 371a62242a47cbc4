"""Shape of a YAML/JSON document declaring entities."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

FieldSpec = bool | dict[str, Any] | list[dict[str, Any]]


class EntityDocument(BaseModel):
    """Declaration of one entity inside a definition document."""

    fields: dict[str, FieldSpec] = Field(
        default_factory=dict,
        description=(
            "Output field name -> true, an options mapping, or a list of them. "
            "'using' names another entity of the same document."
        ),
    )
    discard: list[str] | None = Field(
        default=None,
        description="Enable discard mode, dropping these input fields.",
    )
    extends: str | None = Field(
        default=None,
        description="Entity of the same document whose rules are inherited.",
    )
    freeze: bool = Field(
        default=False,
        description="Load the entity as an immutable FrozenEntity.",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("fields")
    @classmethod
    def _no_false_fields(cls, v: dict[str, FieldSpec]) -> dict[str, FieldSpec]:
        for name, spec in v.items():
            if spec is False:
                raise ValueError(f"Field '{name}' cannot be false; omit it instead")
        return v


class DefinitionDocument(BaseModel):
    """Top-level document: a mapping of entity name to declaration."""

    entities: dict[str, EntityDocument] = Field(
        ..., description="Entities in declaration order."
    )

    model_config = ConfigDict(extra="forbid")
