"""Path resolution: ``at`` walks existing structure, ``in_`` builds it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .container import Container, wrap
from .errors import NotAContainer, PathNotFound
from .model import Path
from .path import implies_sequence, to_path


@dataclass(slots=True)
class Slot:
    """The location a path resolves to.

    ``container`` is ``None`` for the root slot; otherwise it wraps the
    parent of the final step and ``key`` is that step resolved to a concrete
    key or index.
    """
    root: Any
    path: Path
    container: Container | None = None
    key: Any = None
    exists: bool = True

    @property
    def is_root(self) -> bool:
        return self.container is None

    def read(self) -> Any:
        if self.container is None:
            return self.root
        if not self.exists:
            raise PathNotFound("no value at path", self.path)
        return self.container.get(self.key)

    def write(self, value: Any) -> Any:
        """Store *value* here and return the (possibly replaced) root."""
        if self.container is None:
            self.root = value
        elif self.exists:
            self.container.set(self.key, value)
        else:
            self.container.insert(self.key, value)
            self.exists = True
        return self.root

    def insert(self, value: Any) -> Any:
        """Insert *value* here, shifting later sequence elements; return the root.

        Against a mapping this is the same as ``write``.
        """
        if self.container is None:
            self.root = value
            return value
        self.container.insert(self.key, value)
        self.exists = True
        return self.root

    def delete(self) -> Any:
        """Remove the value here and return the root (``None`` at the root)."""
        if self.container is None:
            self.root = None
            return None
        if not self.exists:
            raise PathNotFound("no value at path", self.path)
        self.container.delete(self.key)
        self.exists = False
        return self.root


def at(container: Any, path) -> Slot:
    """Resolve *path* against existing structure only.

    Raises ``KeyNotFound``, ``IndexOutOfBounds``, ``TypeMismatch`` or
    ``NotAContainer`` at the first step that cannot be followed.
    """
    return _walk(container, to_path(path), create=False)


def in_(container: Any, path) -> Slot:
    """Resolve *path*, creating missing containers along the way.

    The kind of each created container follows the step that will be
    applied to it: index-like steps create a list, anything else a dict.
    A missing final step gets an empty dict. Existing scalars are never
    replaced.
    """
    return _walk(container, to_path(path), create=True)


def _walk(root: Any, path: Path, create: bool) -> Slot:
    if not path:
        return Slot(root, path)

    current = root
    box: Container | None = None
    key: Any = None
    for i, step in enumerate(path):
        box = wrap(current)
        if box is None:
            raise NotAContainer(f"cannot descend into {type(current).__name__}", path[:i])

        key, found = box.find(step, path[: i + 1], create=create)
        if not found:
            # lookahead: the next step decides what to build
            nxt = path[i + 1] if i + 1 < len(path) else None
            box.insert(key, [] if i + 1 < len(path) and implies_sequence(nxt) else {})
        current = box.get(key)

    return Slot(root, path, box, key)
