"""Data model: path steps, container kinds and patch operations."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Union

from .errors import InvalidOperation


# ---------------------------------------------------------------------------
# Missing — singleton for "no value supplied"
# ---------------------------------------------------------------------------

class _MissingType:
    """Sentinel used where ``None`` is a legitimate value."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Missing"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _MissingType:
        return self

    def __deepcopy__(self, memo: dict) -> _MissingType:
        return self


Missing = _MissingType()


# ---------------------------------------------------------------------------
# Kind
# ---------------------------------------------------------------------------

class Kind(Enum):
    Mapping = auto()
    Sequence = auto()


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Key:
    """An explicit mapping key."""
    name: Hashable

    def __post_init__(self) -> None:
        if not isinstance(self.name, Hashable):
            raise InvalidOperation(f"Key needs a hashable name, got {type(self.name).__name__}")

    def __repr__(self) -> str:
        return f"Key({self.name!r})"


@dataclass(frozen=True, slots=True)
class Index:
    """An explicit absolute sequence index."""
    n: int

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 0:
            raise InvalidOperation(f"Index needs a non-negative int, got {self.n!r}")

    def __repr__(self) -> str:
        return f"Index({self.n})"


@dataclass(frozen=True, slots=True)
class FromEnd:
    """An index counted from the end: ``FromEnd(0)`` is the last element."""
    n: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 0:
            raise InvalidOperation(f"FromEnd needs a non-negative int, got {self.n!r}")

    def resolve(self, length: int) -> int:
        return length - 1 - self.n

    def __repr__(self) -> str:
        return f"FromEnd({self.n})"


Step = Union[Key, Index, FromEnd, Hashable]
Path = tuple


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class OpKind(Enum):
    Add = "add"
    Remove = "remove"
    Replace = "replace"
    Move = "move"
    Copy = "copy"
    Test = "test"


_NEEDS_VALUE = frozenset({OpKind.Add, OpKind.Replace, OpKind.Test})
_NEEDS_FROM = frozenset({OpKind.Move, OpKind.Copy})


@dataclass(frozen=True, slots=True)
class Operation:
    """One edit of a patch document.

    ``value`` is ``Missing`` for operations that carry none; ``from_`` is
    ``None`` unless the operation is a ``move`` or ``copy``.
    """
    op: OpKind
    path: Path
    value: Any = Missing
    from_: Path | None = None

    def __post_init__(self) -> None:
        from .path import to_path

        object.__setattr__(self, "path", to_path(self.path))
        if self.from_ is not None:
            object.__setattr__(self, "from_", to_path(self.from_))
        if self.op in _NEEDS_VALUE and self.value is Missing:
            raise InvalidOperation(f"'{self.op.value}' operation requires a value", self.path)
        if self.op in _NEEDS_FROM and self.from_ is None:
            raise InvalidOperation(f"'{self.op.value}' operation requires 'from'", self.path)

    @classmethod
    def from_dict(cls, record: Mapping) -> Operation:
        """Build an Operation from an RFC 6902 record.

        ``path`` and ``from`` may be JSON Pointer strings or step lists.
        """
        if not isinstance(record, Mapping):
            raise InvalidOperation(f"patch operation must be a mapping, got {type(record).__name__}")
        raw_op = record.get("op")
        try:
            op = OpKind(raw_op)
        except ValueError:
            raise InvalidOperation(f"unknown patch operation {raw_op!r}") from None
        if "path" not in record:
            raise InvalidOperation(f"'{op.value}' operation requires 'path'")

        from_ = record["from"] if "from" in record else None
        return cls(op, record["path"], record.get("value", Missing), from_)

    def to_dict(self) -> dict[str, Any]:
        """Render as an RFC 6902 record with JSON Pointer paths."""
        from .path import format_pointer

        out: dict[str, Any] = {"op": self.op.value, "path": format_pointer(self.path)}
        if self.from_ is not None:
            out["from"] = format_pointer(self.from_)
        if self.value is not Missing:
            out["value"] = self.value
        return out
