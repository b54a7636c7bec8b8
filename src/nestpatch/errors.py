"""Error taxonomy for nestpatch.

Every error is a ``NestPatchError`` and also subclasses the closest builtin
exception, so ``except KeyError`` / ``except IndexError`` callers keep working.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _pointer(path: tuple | None) -> str:
    # Local import: path.py imports model.py, which must stay error-free.
    from .path import format_pointer
    return format_pointer(path or ())


class NestPatchError(Exception):
    """Base class for all nestpatch errors."""

    def __init__(self, message: str, path: tuple | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message} (at {_pointer(self.path)!r})"


# ---------------------------------------------------------------------------
# Resolution errors
# ---------------------------------------------------------------------------

class PathNotFound(NestPatchError, LookupError):
    """The target path does not resolve to an existing value."""


class ParentNotFound(NestPatchError, LookupError):
    """The container holding the final step does not exist."""


class KeyNotFound(NestPatchError, KeyError):
    """A mapping has no entry for the requested key."""


class IndexOutOfBounds(NestPatchError, IndexError):
    """A sequence index falls outside the sequence."""


class TypeMismatch(NestPatchError, TypeError):
    """A step cannot be applied to this kind of container."""


class NotAContainer(NestPatchError, TypeError):
    """Tried to descend through a scalar value."""


# ---------------------------------------------------------------------------
# Operation errors
# ---------------------------------------------------------------------------

class RootKeyOperation(NestPatchError, ValueError):
    """Key semantics were requested for the root of a structure."""


class InvalidMoveTarget(NestPatchError, ValueError):
    """A node cannot be moved or copied into its own descendant."""


class ComparisonFailed(NestPatchError, AssertionError):
    """A ``test`` operation found a different value."""

    def __init__(self, message: str, path: tuple | None = None,
                 expected: Any = None, actual: Any = None) -> None:
        super().__init__(message, path)
        self.expected = expected
        self.actual = actual


class InvalidOperation(NestPatchError, ValueError):
    """A step, path or patch record is malformed."""


class CyclicStructure(NestPatchError, ValueError):
    """A container contains itself."""


class PatchOperationFailed(NestPatchError):
    """Wraps the failure of one operation inside ``patch``."""

    def __init__(self, index: int, operation: Any, cause: BaseException) -> None:
        if isinstance(operation, Mapping):
            op_name, path = operation.get("op"), None
        elif hasattr(operation, "op"):
            op_name, path = operation.op.value, operation.path
        else:
            op_name, path = type(operation).__name__, None
        super().__init__(f"patch operation {index} ({op_name}) failed: {cause}", path)
        self.index = index
        self.operation = operation
        self.cause = cause

    def __str__(self) -> str:
        return self.message
