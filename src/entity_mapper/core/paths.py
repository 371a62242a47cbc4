"""
Dotted-path reading and writing over nested mappings, sequences and objects.

Paths look like ``"profile.name"``, ``"items.0.sku"`` or ``"items[0].sku"``.
When writing, missing intermediate containers are created: a list when the
next segment is a non-negative integer, a dict otherwise.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from .sentinels import MISSING

_TOKEN_RE = re.compile(r"[^.\[\]]+|\[(\d+)\]")
_INDEX_RE = re.compile(r"^(?:0|[1-9]\d*)$")

PathToken = str | int
PathLike = str | Sequence[PathToken]


def parse_path(path: PathLike) -> list[PathToken]:
    """
    Split a path into tokens.

    Bracketed indices become ``int`` tokens; dotted segments stay ``str``
    even when numeric, and are interpreted as indices only when the
    container they address is a sequence.

    >>> parse_path("a.b[0].c")
    ['a', 'b', 0, 'c']
    """
    if not isinstance(path, str):
        return list(path)
    if path == "":
        return [""]

    tokens: list[PathToken] = []
    for match in _TOKEN_RE.finditer(path):
        index = match.group(1)
        tokens.append(int(index) if index is not None else match.group(0))
    return tokens


def is_index(token: PathToken) -> bool:
    if isinstance(token, bool):
        return False
    if isinstance(token, int):
        return token >= 0
    return bool(_INDEX_RE.match(token))


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _child(container: Any, token: PathToken) -> Any:
    if isinstance(container, Mapping):
        if token in container:
            return container[token]
        if isinstance(token, int) and str(token) in container:
            return container[str(token)]
        if isinstance(token, str) and is_index(token) and int(token) in container:
            return container[int(token)]
        return MISSING

    if _is_sequence(container):
        if not is_index(token):
            return MISSING
        index = int(token)
        return container[index] if index < len(container) else MISSING

    if isinstance(token, str) and token:
        return getattr(container, token, MISSING)
    return MISSING


def get_path(obj: Any, path: PathLike, default: Any = MISSING) -> Any:
    """
    Read the value at ``path``, returning ``default`` when any hop is absent.

    A mapping key equal to the whole path wins over the dotted reading.
    """
    if isinstance(path, str) and isinstance(obj, Mapping) and path in obj:
        return obj[path]
    current = obj
    for token in parse_path(path):
        if current is None or current is MISSING:
            return default
        current = _child(current, token)
    return default if current is MISSING else current


def has_path(obj: Any, path: PathLike) -> bool:
    return get_path(obj, path) is not MISSING


def _assign(container: Any, token: PathToken, value: Any) -> None:
    if isinstance(container, list):
        if not is_index(token):
            raise TypeError(f"Cannot set key '{token}' on a list node")
        index = int(token)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
    elif isinstance(container, MutableMapping):
        container[str(token)] = value
    else:
        raise TypeError(
            f"Cannot set key '{token}' on {type(container).__name__} node"
        )


def set_path(target: Any, path: PathLike, value: Any) -> Any:
    """
    Write ``value`` at ``path`` inside ``target`` and return ``target``.

    Intermediate nodes that are missing, or that hold a non-container value,
    are replaced by a fresh list or dict depending on the following segment.
    """
    tokens = parse_path(path)
    current = target

    for position, token in enumerate(tokens[:-1]):
        child = _child(current, token)
        if not isinstance(child, (MutableMapping, list)):
            child = [] if is_index(tokens[position + 1]) else {}
            _assign(current, token, child)
        current = child

    _assign(current, tokens[-1], value)
    return target


def unset_path(target: Any, path: PathLike) -> bool:
    """Remove the value at ``path``; return whether something was removed."""
    tokens = parse_path(path)
    parent = get_path(target, tokens[:-1]) if len(tokens) > 1 else target
    last = tokens[-1]

    if isinstance(parent, MutableMapping):
        for key in (last, str(last)):
            if key in parent:
                del parent[key]
                return True
        return False

    if isinstance(parent, list) and is_index(last) and int(last) < len(parent):
        del parent[int(last)]
        return True

    return False
