"""Value helpers: container kind detection, deep cloning and equality."""

from __future__ import annotations

import copy
from collections.abc import MutableMapping, MutableSequence
from typing import Any

from .errors import CyclicStructure
from .model import Kind


def kind_of(value: Any) -> Kind | None:
    """Return the container kind of *value*, or ``None`` for a scalar."""
    if isinstance(value, MutableMapping):
        return Kind.Mapping
    if isinstance(value, MutableSequence) and not isinstance(value, (str, bytearray)):
        return Kind.Sequence
    return None


def is_container(value: Any) -> bool:
    return kind_of(value) is not None


def deep_clone(value: Any) -> Any:
    """Clone the container graph under *value*.

    Mappings and sequences are rebuilt with their own type; leaves are
    passed through ``copy.deepcopy``. Raises ``CyclicStructure`` if a
    container is reached again while it is still being cloned.
    """
    return _clone(value, set())


def working_copy(value: Any, in_place: bool) -> Any:
    """Return the value an edit should mutate: *value* itself or a clone."""
    return value if in_place else deep_clone(value)


def _clone(value: Any, active: set[int]) -> Any:
    kind = kind_of(value)
    if kind is None:
        return copy.deepcopy(value)

    ident = id(value)
    if ident in active:
        raise CyclicStructure("container graph contains a cycle")
    active.add(ident)
    try:
        out = copy.copy(value)
        if kind is Kind.Mapping:
            out.clear()
            for k, v in value.items():
                out[k] = _clone(v, active)
        else:
            out[:] = [_clone(v, active) for v in value]
        return out
    finally:
        active.discard(ident)


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality as JSON sees it.

    Booleans never equal numbers, mappings compare by keys regardless of
    order, sequences compare element-wise.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    ka, kb = kind_of(a), kind_of(b)
    if ka is not kb:
        return False
    if ka is Kind.Mapping:
        if len(a) != len(b):
            return False
        return all(k in b and values_equal(v, b[k]) for k, v in a.items())
    if ka is Kind.Sequence:
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))
    return a == b
