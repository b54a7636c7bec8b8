"""Leaf enumeration built on the accessors: ``list_`` and ``flatten``."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .errors import CyclicStructure
from .getter import get
from .model import Index, Key, Kind, Path
from .path import to_path
from .values import kind_of


class LeafView:
    """Restartable, lazy view over the ``(path, leaf)`` pairs under a path.

    Each ``iter()`` walks the structure again, depth-first: mapping keys in
    iteration order, sequence elements in index order.
    """

    def __init__(self, container: Any, path=()) -> None:
        self.path = to_path(path)
        self.start = get(container, self.path)

    def __iter__(self) -> Iterator[tuple[Path, Any]]:
        return _leaves(self.path, self.start, set())

    def __repr__(self) -> str:
        return f"LeafView(path={self.path!r})"


def _leaves(prefix: Path, value: Any, active: set[int]) -> Iterator[tuple[Path, Any]]:
    kind = kind_of(value)
    if kind is None:
        yield prefix, value
        return

    ident = id(value)
    if ident in active:
        raise CyclicStructure("container graph contains a cycle", prefix)
    active.add(ident)
    if kind is Kind.Mapping:
        steps = [(k, Key(k)) for k in list(value)]
    else:
        steps = [(i, Index(i)) for i in range(len(value))]
    for raw, step in steps:
        yield from _leaves(prefix + (raw,), get(value, (step,)), active)
    active.discard(ident)


def list_(container: Any, path=()) -> LeafView:
    """Every leaf under *path* as ``(path_tuple, value)`` pairs."""
    return LeafView(container, path)


def flatten(container: Any, path=()) -> dict[Path, Any]:
    """Map each leaf's full path tuple to its value."""
    return dict(list_(container, path))
