"""
Entity definitions.

An ``Entity`` is a named table of field rules describing how to turn an
input record into an output dict. It is built with ``define`` / ``expose``
/ ``discard``, can be frozen into an immutable ``FrozenEntity``, and a
frozen entity can be ``extend``-ed into a new mutable one.

Usage::

    user = Entity("User")
    user.expose("id", type="number")
    user.expose("name", {"as": "fullname"})
    user.expose("nickname", get="profile.nick")
    user.expose("kind", value="person")
    user.expose("child", omit=["parent"])
    user.expose("isAdult", lambda obj, opts: obj["age"] >= 18)
    user.expose("address", using=address_entity)
    user.expose("email", if_=lambda obj, opts: opts.get("private"))
    user.parse(record)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .core import engine
from .core.converter_registry import ConverterRegistry, get_global_registry
from .exceptions import DefinitionError, FrozenEntityError
from .models.expose_options import ExposeOptions
from .models.field_rule import (
    AliasRule,
    BaseFieldRule,
    FunctionRule,
    GetRule,
    OmitRule,
    ValueRule,
)

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[a-zA-Z0-9_.]+")


def is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and bool(_NAME_RE.fullmatch(name))


def is_entity(value: Any) -> bool:
    """Check whether ``value`` is an entity (mutable or frozen)."""
    return isinstance(value, Entity)


class Entity:
    """Mutable entity: builds the rule table and parses records with it."""

    def __init__(
        self,
        name: str | None = None,
        definitions: Mapping[str, Any] | None = None,
        *,
        registry: ConverterRegistry | None = None,
    ):
        self._name = name or "UnNamed"
        self._mappings: dict[str, BaseFieldRule] = {}
        self._discards: set[str] | None = None
        self._registry = registry
        self._logger = logger.getChild(self.__class__.__name__)
        self.define(definitions)

    # ----- introspection -----------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def mappings(self) -> Mapping[str, BaseFieldRule]:
        """Read-only view of the rule table, keyed by output field name."""
        return MappingProxyType(self._mappings)

    @property
    def discards(self) -> frozenset[str] | None:
        """Fields dropped in discard mode, or None when discard mode is off."""
        return None if self._discards is None else frozenset(self._discards)

    @property
    def frozen(self) -> bool:
        return False

    @property
    def registry(self) -> ConverterRegistry:
        if self._registry is not None:
            return self._registry
        return get_global_registry()

    @staticmethod
    def is_entity(value: Any) -> bool:
        return is_entity(value)

    # ----- definition --------------------------------------------------------
    def define(self, definitions: Mapping[str, Any] | None) -> "Entity":
        """
        Expose several fields at once.

        Each value is ``True`` (expose as is), an options mapping, a
        function, or a list of trailing ``expose`` arguments.
        """
        if definitions is None:
            return self

        if not isinstance(definitions, Mapping):
            raise DefinitionError(f"'{definitions}' is not a valid object")

        for name, spec in definitions.items():
            if spec is True:
                self.expose(name)
            elif isinstance(spec, (list, tuple)):
                self.expose(name, *spec)
            else:
                self.expose(name, spec)
        return self

    def discard(self, *names: str) -> "Entity":
        """
        Switch to discard mode: expose every input field except ``names``
        (and the version marker ``__v``).
        """
        self._discards = (self._discards or set()) | set(names) | {engine.VERSION_KEY}
        return self

    def expose(self, *args: Any, **kwargs: Any) -> "Entity":
        """
        Add one or more field rules.

        ``expose(*names, [options], [fn], **options)``: only the last
        positional argument may be a function, and the last remaining one
        an options mapping. Several names cannot share ``as`` or a function.

        Raises:
            DefinitionError: On invalid names or contradictory options
        """
        if not args:
            raise DefinitionError("'None' is not a valid field name")

        names = list(args)
        fn: Callable[..., Any] | None = None
        raw_options: dict[str, Any] = {}

        if len(names) > 1:
            if callable(names[-1]):
                fn = names.pop()
            if isinstance(names[-1], Mapping):
                raw_options = dict(names.pop())

        if not names:
            raise DefinitionError("expose requires at least one field name")

        raw_options.update(kwargs)
        options = self._validate_options(raw_options)

        if len(names) > 1:
            if options.as_ is not None:
                raise DefinitionError(
                    "You may not use the :as option on multi-attribute exposures."
                )
            if fn is not None:
                raise DefinitionError(
                    "You may not use function on multi-attribute exposures."
                )

        for name in names:
            output_name, rule = self._build_rule(name, options, fn)
            self._mappings[output_name] = rule
        return self

    def _validate_options(self, raw_options: dict[str, Any]) -> ExposeOptions:
        try:
            options = ExposeOptions.model_validate(raw_options)
        except ValidationError as exc:
            raise DefinitionError(
                f"Invalid expose options for entity '{self._name}': {exc}"
            ) from exc

        if options.using is not None and not is_entity(options.using):
            raise DefinitionError(
                f"{self._name} `using` "
                f"{getattr(options.using, 'name', options.using)} must be an Entity"
            )
        return options

    def _build_rule(
        self, name: Any, options: ExposeOptions, fn: Callable[..., Any] | None
    ) -> tuple[str, BaseFieldRule]:
        if not is_valid_name(name):
            raise DefinitionError(f"'{name}' is not a valid string")
        if options.as_ is not None and fn is not None:
            raise DefinitionError("You can not use the :as option with function.")
        if options.has_value and fn is not None:
            raise DefinitionError("You can not use the :value option with function.")
        if options.has_value and options.as_ is not None:
            raise DefinitionError("You can not use the :value option with :as option.")

        common: dict[str, Any] = {
            "type": options.type,
            "default": options.resolved_default(),
            "condition": options.if_,
            "using": options.using,
        }

        if fn is not None:
            return name, FunctionRule(fn=fn, **common)

        if options.as_ is not None:
            if not is_valid_name(options.as_):
                raise DefinitionError(f"'{options.as_}' is not a valid string")
            return options.as_, AliasRule(path=name, **common)

        if options.get is not None:
            return name, GetRule(path=options.get, **common)

        if options.has_value:
            return name, ValueRule(value=options.value, **common)

        if options.omit is not None:
            return name, OmitRule(keys=options.omit, **common)

        return name, AliasRule(path=name, **common)

    # ----- mutability ----------------------------------------------------------
    def freeze(self) -> "FrozenEntity":
        """Return an immutable snapshot of this entity."""
        return FrozenEntity(
            self._name, self._mappings, self._discards, registry=self._registry
        )

    def extend(self, name: str) -> "Entity":
        raise FrozenEntityError(f"Cannot extend a mutable entity: {self._name}")

    # ----- parsing -------------------------------------------------------------
    def parse(
        self,
        data: Any,
        options: Mapping[str, Any] | Callable[..., Any] | None = None,
        converter: Callable[..., Any] | None = None,
    ) -> Any:
        """
        Map ``data`` (a record, or a list of records) through the rules.

        Args:
            data: Input record; objects exposing ``model_dump()`` or
                ``to_dict()`` are unwrapped first.
            options: Mapping handed to functions, conditions and converters,
                or the converter itself.
            converter: Optional ``(value, options) -> value`` applied to every
                field before nesting and coercion.

        Returns:
            The mapped dict (or list of dicts); empty inputs are returned as is.
        """
        return engine.parse(self, data, options, converter)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self._name!r}, "
            f"fields={sorted(self._mappings)!r})"
        )


class FrozenEntity(Entity):
    """Immutable entity; vary it with ``extend``."""

    def __init__(
        self,
        name: str,
        mappings: Mapping[str, BaseFieldRule],
        discards: set[str] | frozenset[str] | None,
        *,
        registry: ConverterRegistry | None = None,
    ):
        self._name = name
        self._mappings = MappingProxyType(dict(mappings))
        self._discards = None if discards is None else frozenset(discards)
        self._registry = registry
        self._logger = logger.getChild(self.__class__.__name__)
        self._sealed = True

    def __setattr__(self, attr: str, value: Any) -> None:
        if getattr(self, "_sealed", False):
            raise FrozenEntityError(f"Cannot modify frozen entity: {self._name}")
        super().__setattr__(attr, value)

    def __delattr__(self, attr: str) -> None:
        raise FrozenEntityError(f"Cannot modify frozen entity: {self._name}")

    @property
    def frozen(self) -> bool:
        return True

    @property
    def mappings(self) -> Mapping[str, BaseFieldRule]:
        return self._mappings

    @property
    def discards(self) -> frozenset[str] | None:
        return self._discards

    def define(self, definitions: Mapping[str, Any] | None) -> "Entity":
        raise FrozenEntityError(f"Cannot define fields on frozen entity: {self._name}")

    def expose(self, *args: Any, **kwargs: Any) -> "Entity":
        raise FrozenEntityError(f"Cannot expose fields on frozen entity: {self._name}")

    def discard(self, *names: str) -> "Entity":
        raise FrozenEntityError(f"Cannot discard fields on frozen entity: {self._name}")

    def freeze(self) -> "FrozenEntity":
        return self

    def extend(self, name: str) -> Entity:
        """
        Start a new mutable entity named ``name`` from this one's rules.

        Rules are immutable values, so copying the table makes the clone
        fully independent.
        """
        clone = Entity(name, registry=self._registry)
        clone._mappings = dict(self._mappings)
        clone._discards = None if self._discards is None else set(self._discards)
        self._logger.debug(f"Extended entity '{self._name}' into '{name}'")
        return clone
