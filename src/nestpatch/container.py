"""Container capability interface.

The resolver never inspects dicts or lists directly: it wraps each container
it meets in a ``MappingContainer`` or ``SequenceContainer`` and dispatches on
``kind``. Each wrapper knows how to turn a step into a concrete key or index
and how to read, write, insert and delete at that location.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Any

from .errors import IndexOutOfBounds, KeyNotFound, TypeMismatch
from .model import FromEnd, Index, Key, Kind, Path, Step
from .path import APPEND, as_sequence_step
from .values import kind_of


class Container(ABC):
    kind: Kind

    def __init__(self, data: Any) -> None:
        self.data = data

    def __len__(self) -> int:
        return len(self.data)

    @abstractmethod
    def find(self, step: Step, path: Path, create: bool = False) -> tuple[Any, bool]:
        """Resolve *step* to ``(key_or_index, exists)``.

        With ``create=False`` a missing target raises. With ``create=True`` a
        target that could be created is returned with ``exists=False``.
        *path* is the path up to and including *step*, for error messages.
        """

    @abstractmethod
    def insertion_point(self, step: Step, path: Path) -> Any:
        """Resolve *step* to the location ``add`` inserts at."""

    def get(self, key: Any) -> Any:
        return self.data[key]

    def set(self, key: Any, value: Any) -> None:
        self.data[key] = value

    @abstractmethod
    def insert(self, key: Any, value: Any) -> None:
        ...

    def delete(self, key: Any) -> None:
        del self.data[key]


class MappingContainer(Container):
    kind = Kind.Mapping

    @staticmethod
    def _key(step: Step, path: Path) -> Hashable:
        if isinstance(step, Key):
            return step.name
        if isinstance(step, (Index, FromEnd)):
            raise TypeMismatch(f"cannot apply {step!r} to a mapping", path)
        return step

    def find(self, step: Step, path: Path, create: bool = False) -> tuple[Any, bool]:
        key = self._key(step, path)
        if key in self.data:
            return key, True
        if create:
            return key, False
        raise KeyNotFound(f"key {key!r} not found", path)

    def insertion_point(self, step: Step, path: Path) -> Any:
        return self._key(step, path)

    def insert(self, key: Any, value: Any) -> None:
        self.data[key] = value


class SequenceContainer(Container):
    kind = Kind.Sequence

    @staticmethod
    def _step(step: Step, path: Path) -> Index | FromEnd | str:
        seq = as_sequence_step(step)
        if seq is None:
            raise TypeMismatch(f"cannot apply {step!r} to a sequence", path)
        return seq

    def find(self, step: Step, path: Path, create: bool = False) -> tuple[Any, bool]:
        seq = self._step(step, path)
        length = len(self.data)
        if seq == APPEND:
            if create:
                return length, False
            raise IndexOutOfBounds("'-' does not address an existing element", path)

        idx = seq.n if isinstance(seq, Index) else seq.resolve(length)
        if 0 <= idx < length:
            return idx, True
        if create and isinstance(seq, Index) and idx == length:
            return idx, False
        raise IndexOutOfBounds(f"index {step!r} out of range for length {length}", path)

    def insertion_point(self, step: Step, path: Path) -> int:
        seq = self._step(step, path)
        length = len(self.data)
        if seq == APPEND:
            return length
        # FromEnd(n) inserts after the element it names: "last" appends
        idx = seq.n if isinstance(seq, Index) else length - seq.n
        if not 0 <= idx <= length:
            raise IndexOutOfBounds(f"insert position {step!r} out of range for length {length}", path)
        return idx

    def insert(self, key: Any, value: Any) -> None:
        self.data.insert(key, value)


def wrap(value: Any) -> Container | None:
    """Wrap *value* in its capability interface, or ``None`` for a scalar."""
    kind = kind_of(value)
    if kind is Kind.Mapping:
        return MappingContainer(value)
    if kind is Kind.Sequence:
        return SequenceContainer(value)
    return None
