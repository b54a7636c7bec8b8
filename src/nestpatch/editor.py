"""Structural edits: add, remove, replace, move, copy, transform.

Every public operation takes ``in_place``. ``False`` (the default) edits a
deep clone and returns it, leaving the caller's container untouched;
``True`` edits the caller's container and returns it. Edits at the root
return the new top-level value, which may be a different object.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .container import Container, wrap
from .errors import (
    IndexOutOfBounds,
    InvalidMoveTarget,
    KeyNotFound,
    NestPatchError,
    NotAContainer,
    ParentNotFound,
    PathNotFound,
    TypeMismatch,
)
from .getter import exists
from .model import Path
from .path import format_pointer, is_prefix, to_path
from .resolver import Slot, at
from .values import deep_clone, is_container, working_copy


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------

def add(container: Any, path, value: Any, in_place: bool = False) -> Any:
    """Insert *value* at *path*; the parent container must already exist.

    Into a sequence the value goes before the addressed position (``"-"``,
    ``"last"`` and an index equal to the length append). Into a mapping the
    key is added or overwritten.
    """
    return _add(working_copy(container, in_place), to_path(path), value)


def remove(container: Any, path, in_place: bool = False) -> Any:
    """Delete the value at *path*. Removing the root returns ``None``."""
    return _remove(working_copy(container, in_place), to_path(path))


def replace(container: Any, path, value: Any, in_place: bool = False) -> Any:
    """Overwrite the existing value at *path*."""
    return _replace(working_copy(container, in_place), to_path(path), value)


def move(container: Any, from_, path, in_place: bool = False) -> Any:
    """Relocate the value at *from_* to *path*.

    The value is removed first; *path* is then resolved against the
    container as it is after the removal.
    """
    return _move(working_copy(container, in_place), to_path(from_), to_path(path))


def copy(container: Any, from_, path, in_place: bool = False) -> Any:
    """Add a deep copy of the value at *from_* at *path*."""
    return _copy(working_copy(container, in_place), to_path(from_), to_path(path))


def transform(container: Any, path, fn: Callable[[Any], Any], in_place: bool = False) -> Any:
    """Replace the value at *path* with ``fn(current_value)``."""
    target = working_copy(container, in_place)
    path = to_path(path)
    return _replace(target, path, fn(_read(target, path)))


# ---------------------------------------------------------------------------
# Working-container implementations
# ---------------------------------------------------------------------------

def _add(target: Any, path: Path, value: Any) -> Any:
    if not path:
        return value
    parent = _parent(target, path)
    parent.insert(parent.insertion_point(path[-1], path), value)
    return target


def _remove(target: Any, path: Path) -> Any:
    if not path:
        if is_container(target):
            target.clear()
        return None
    _existing(target, path).delete()
    return target


def _replace(target: Any, path: Path, value: Any) -> Any:
    if not path:
        return value
    return _existing(target, path).write(value)


def _move(target: Any, from_: Path, path: Path) -> Any:
    _check_destination("move", target, from_, path)
    value = _read(target, from_)
    if from_ == path:
        return target
    target = _remove(target, from_)
    try:
        return _add(target, path, value)
    except NestPatchError:
        # a failed move leaves the container unchanged
        _add(target, from_, value)
        raise


def _copy(target: Any, from_: Path, path: Path) -> Any:
    _check_destination("copy", target, from_, path)
    return _add(target, path, deep_clone(_read(target, from_)))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _existing(target: Any, path: Path) -> Slot:
    if not exists(target, path):
        raise PathNotFound("path does not exist", path)
    return at(target, path)


def _read(target: Any, path: Path) -> Any:
    if not path:
        return target
    return _existing(target, path).read()


def _parent(target: Any, path: Path) -> Container:
    try:
        holder = at(target, path[:-1]).read()
    except (KeyNotFound, IndexOutOfBounds, NotAContainer) as exc:
        raise ParentNotFound("parent does not exist", path) from exc
    box = wrap(holder)
    if box is None:
        raise NotAContainer(f"parent is a {type(holder).__name__}, not a container", path[:-1])
    return box


def _check_destination(op: str, target: Any, from_: Path, path: Path) -> None:
    """Reject a destination inside the value at *from_*.

    Steps are compared as written first, then as the keys they resolve to in
    *target*, so ``"last"`` and ``-1`` name the same list element while
    ``0`` and ``"0"`` stay distinct mapping keys.
    """
    if is_prefix(from_, path) or _resolves_inside(target, from_, path):
        raise InvalidMoveTarget(
            f"cannot {op} {format_pointer(from_)!r} into its own descendant", path
        )


def _resolves_inside(target: Any, from_: Path, path: Path) -> bool:
    if len(path) <= len(from_):
        return False
    try:
        src = at(target, from_)
        dst = at(target, path[: len(from_)])
    except (KeyNotFound, IndexOutOfBounds, NotAContainer, TypeMismatch):
        return False
    if src.container is None or dst.container is None:
        return False
    return (
        dst.container.data is src.container.data
        and type(dst.key) is type(src.key)
        and dst.key == src.key
    )
