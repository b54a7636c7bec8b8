"""nestpatch — JSON Pointer / JSON Patch style editing of nested containers."""

from .model import Missing, Kind, Key, Index, FromEnd, OpKind, Operation
from .path import LAST, APPEND, to_path, parse_pointer, format_pointer, is_prefix
from .values import kind_of, deep_clone, values_equal
from .resolver import Slot, at, in_
from .getter import Projection, exists, get
from .setter import set
from .editor import add, remove, replace, move, copy, transform
from .patch import check, patch, parse_operations
from .traversal import LeafView, list_, flatten
from .document import Document
from .errors import (
    NestPatchError,
    PathNotFound,
    ParentNotFound,
    KeyNotFound,
    IndexOutOfBounds,
    TypeMismatch,
    NotAContainer,
    RootKeyOperation,
    InvalidMoveTarget,
    ComparisonFailed,
    InvalidOperation,
    CyclicStructure,
    PatchOperationFailed,
)
from .repl import PatchRepl

__all__ = [
    "Missing",
    "Kind",
    "Key",
    "Index",
    "FromEnd",
    "OpKind",
    "Operation",
    "LAST",
    "APPEND",
    "to_path",
    "parse_pointer",
    "format_pointer",
    "is_prefix",
    "kind_of",
    "deep_clone",
    "values_equal",
    "Slot",
    "at",
    "in_",
    "Projection",
    "exists",
    "get",
    "set",
    "add",
    "remove",
    "replace",
    "move",
    "copy",
    "transform",
    "check",
    "patch",
    "parse_operations",
    "LeafView",
    "list_",
    "flatten",
    "Document",
    "NestPatchError",
    "PathNotFound",
    "ParentNotFound",
    "KeyNotFound",
    "IndexOutOfBounds",
    "TypeMismatch",
    "NotAContainer",
    "RootKeyOperation",
    "InvalidMoveTarget",
    "ComparisonFailed",
    "InvalidOperation",
    "CyclicStructure",
    "PatchOperationFailed",
    "PatchRepl",
]
