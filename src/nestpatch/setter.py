"""Write accessor: ``set`` with auto-vivification."""

from __future__ import annotations

from typing import Any

from .resolver import in_
from .values import working_copy


def set(container: Any, path, value: Any, in_place: bool = False) -> Any:
    """Store *value* at *path*, creating missing containers on the way.

    Returns the resulting top-level value. At the root that is *value*
    itself, whatever its kind.
    """
    target = working_copy(container, in_place)
    return in_(target, path).write(value)
