"""Patch engine: apply a batch of operations as one transaction."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from . import editor
from .errors import ComparisonFailed, NestPatchError, PatchOperationFailed
from .getter import get
from .model import Operation, OpKind
from .path import format_pointer, to_path
from .values import deep_clone, values_equal, working_copy

logger = logging.getLogger(__name__)


def check(container: Any, path, value: Any) -> None:
    """Raise ``ComparisonFailed`` unless the value at *path* equals *value*."""
    path = to_path(path)
    actual = get(container, path)
    if not values_equal(actual, value):
        raise ComparisonFailed(
            f"expected {value!r}, found {actual!r}", path, expected=value, actual=actual
        )


def parse_operations(records: Iterable[Operation | Mapping]) -> list[Operation]:
    """Convert a patch document into a list of ``Operation``."""
    return [r if isinstance(r, Operation) else Operation.from_dict(r) for r in records]


def patch(container: Any, operations: Iterable[Operation | Mapping], in_place: bool = False) -> Any:
    """Apply *operations* in order and return the resulting value.

    The first failing operation aborts the patch with
    ``PatchOperationFailed``. Without ``in_place`` all edits happen on one
    private clone, so the caller's container is untouched on failure; with
    ``in_place`` edits made before the failure stay applied.
    """
    work = working_copy(container, in_place)
    for index, raw in enumerate(operations):
        operation = raw
        try:
            if not isinstance(operation, Operation):
                operation = Operation.from_dict(raw)
            logger.debug("patch[%d] %s %s", index, operation.op.value, format_pointer(operation.path))
            work = _apply(work, operation)
        except NestPatchError as exc:
            logger.debug("patch aborted at operation %d: %s", index, exc)
            raise PatchOperationFailed(index, operation, exc) from exc
    return work


def _apply(work: Any, operation: Operation) -> Any:
    op = operation.op
    if op is OpKind.Add:
        return editor.add(work, operation.path, deep_clone(operation.value), in_place=True)
    if op is OpKind.Remove:
        return editor.remove(work, operation.path, in_place=True)
    if op is OpKind.Replace:
        return editor.replace(work, operation.path, deep_clone(operation.value), in_place=True)
    if op is OpKind.Move:
        return editor.move(work, operation.from_, operation.path, in_place=True)
    if op is OpKind.Copy:
        return editor.copy(work, operation.from_, operation.path, in_place=True)
    check(work, operation.path, operation.value)
    return work
