"""Document — a root value and the revisions applied to it."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .getter import get
from .model import Operation
from .patch import parse_operations, patch
from .path import format_pointer, to_path
from .setter import set as set_value


@dataclass
class Revision:
    """One applied edit: the root before it and a printable description."""
    before: Any
    label: str


@dataclass
class Document:
    """Holds a root value and supports edits with undo (used by PatchRepl).

    Every edit goes through the copy-first paths, so each revision's
    ``before`` root stays intact and undo simply restores it.
    """

    root: Any = field(default_factory=dict)
    revisions: list[Revision] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Not a dataclass field: last value produced by query() or an edit
        self._last_result: Any = None

    @property
    def last_result(self) -> Any:
        return self._last_result

    # -- Queries --------------------------------------------------------

    def query(self, path) -> Any:
        self._last_result = get(self.root, path)
        return self._last_result

    # -- Edits ----------------------------------------------------------

    def apply(self, operations: Iterable[Operation | Mapping]) -> Any:
        """Apply a patch document as one revision and return the new root."""
        ops = parse_operations(operations)
        new_root = patch(self.root, ops)
        label = "; ".join(_describe(op) for op in ops) or "(empty patch)"
        return self._commit(new_root, label)

    def assign(self, path, value: Any) -> Any:
        """``set`` with auto-vivification, as one revision."""
        new_root = set_value(self.root, path, value)
        return self._commit(new_root, f"set {format_pointer(to_path(path)) or '.'}")

    def undo(self) -> bool:
        """Restore the root from before the last revision."""
        if not self.revisions:
            return False
        self.root = self.revisions.pop().before
        self._last_result = self.root
        return True

    def _commit(self, new_root: Any, label: str) -> Any:
        self.revisions.append(Revision(self.root, label))
        self.root = new_root
        self._last_result = new_root
        return new_root


def _describe(op: Operation) -> str:
    record = op.to_dict()
    if "from" in record:
        return f"{record['op']} {record['from'] or '.'} -> {record['path'] or '.'}"
    return f"{record['op']} {record['path'] or '.'}"
