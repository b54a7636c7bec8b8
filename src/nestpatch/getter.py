"""Read accessors: ``exists`` and ``get``."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .errors import (
    IndexOutOfBounds,
    KeyNotFound,
    NotAContainer,
    PathNotFound,
    RootKeyOperation,
)
from .model import Missing
from .path import to_path
from .resolver import at


class Projection(Enum):
    Value = "value"
    Key = "key"
    Pair = "pair"


def exists(container: Any, path, check_key: bool = True, check_value: bool = False) -> bool:
    """Return whether *path* exists in *container*.

    - ``check_key``: the final step must resolve
    - ``check_value``: the located value must not be ``None``

    At the root ``check_value`` tests the container itself; ``check_key``
    alone raises ``RootKeyOperation`` there.

    Lookup failures collapse to ``False``; a step that cannot apply to the
    container kind it meets (``TypeMismatch``) still raises.
    """
    path = to_path(path)
    if not path:
        # the root has a value but no key
        if check_value:
            return container is not None
        if check_key:
            raise RootKeyOperation("the root has no key", path)
        return True

    try:
        value = at(container, path).read()
    except (KeyNotFound, IndexOutOfBounds, NotAContainer):
        return False
    if check_value:
        return value is not None
    return True


def get(container: Any, path, mode: Projection | str = Projection.Value, default: Any = Missing) -> Any:
    """Return the value at *path*, its key/index, or a ``(key, value)`` pair.

    Raises ``PathNotFound`` if nothing is there, unless *default* is given
    (value mode only).
    """
    mode = Projection(mode)
    path = to_path(path)
    if not path:
        if mode is not Projection.Value:
            raise RootKeyOperation(f"'{mode.value}' access is undefined at the root", path)
        return container

    if not exists(container, path):
        if default is not Missing and mode is Projection.Value:
            return default
        raise PathNotFound("path does not exist", path)

    slot = at(container, path)
    if mode is Projection.Key:
        return slot.key
    if mode is Projection.Pair:
        return slot.key, slot.read()
    return slot.read()
