"""Path normalisation, JSON Pointer conversion and step classification."""

from __future__ import annotations

import re
from collections.abc import Hashable

from .errors import InvalidOperation
from .model import FromEnd, Index, Key, Path, Step

LAST = "last"
APPEND = "-"

_LAST_RE = re.compile(r"^last(?:-(\d+))?$")
_DECIMAL_RE = re.compile(r"^\d+$")


# ---------------------------------------------------------------------------
# JSON Pointer (RFC 6901)
# ---------------------------------------------------------------------------

def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def parse_pointer(pointer: str) -> Path:
    """Split a JSON Pointer into raw string steps.

    ``""`` is the root; every other pointer must start with ``/``.
    Tokens stay strings: the container they are applied to decides whether
    ``"0"`` is a key or an index.
    """
    if pointer == "":
        return ()
    if not pointer.startswith("/"):
        raise InvalidOperation(f"JSON pointer must start with '/': {pointer!r}")
    return tuple(_unescape(part) for part in pointer[1:].split("/"))


def _step_token(step: Step) -> str:
    if isinstance(step, Key):
        return str(step.name)
    if isinstance(step, Index):
        return str(step.n)
    if isinstance(step, FromEnd):
        return LAST if step.n == 0 else f"{LAST}-{step.n}"
    return str(step)


def format_pointer(path: Path) -> str:
    """Render a path as a JSON Pointer string."""
    return "".join("/" + _escape(_step_token(step)) for step in path)


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def to_path(value) -> Path:
    """Normalise *value* into a tuple of steps.

    - ``None``, ``""``, ``()`` and ``[]`` → the root path ``()``
    - a string starting with ``/`` → parsed as a JSON Pointer
    - a list or tuple → tuple of its items
    - anything else (a single key, index or Step) → one-step path
    """
    if value is None:
        return ()
    if isinstance(value, str):
        if value == "" or value.startswith("/"):
            return parse_pointer(value)
        return (value,)
    if isinstance(value, (list, tuple)):
        steps = tuple(value)
    else:
        steps = (value,)
    for step in steps:
        if not isinstance(step, Hashable):
            raise InvalidOperation(f"path step must be hashable, got {type(step).__name__}")
    return steps


# ---------------------------------------------------------------------------
# Step classification
# ---------------------------------------------------------------------------

def as_sequence_step(step: Step) -> Index | FromEnd | str | None:
    """Interpret *step* against a sequence.

    Returns an ``Index``, a ``FromEnd``, ``APPEND`` for ``"-"``, or ``None``
    when the step cannot address a sequence element.
    """
    if isinstance(step, (Index, FromEnd)):
        return step
    if isinstance(step, Key) or isinstance(step, bool):
        return None
    if isinstance(step, int):
        return Index(step) if step >= 0 else FromEnd(-step - 1)
    if isinstance(step, str):
        if step == APPEND:
            return APPEND
        m = _LAST_RE.match(step)
        if m:
            return FromEnd(int(m.group(1) or 0))
        if _DECIMAL_RE.match(step):
            return Index(int(step))
    return None


def implies_sequence(step: Step) -> bool:
    """True when a container created to hold *step* should be a sequence.

    Decimal strings are keys here: only explicit index forms create lists.
    """
    if isinstance(step, (Index, FromEnd)):
        return True
    if isinstance(step, Key) or isinstance(step, bool):
        return False
    if isinstance(step, int):
        return True
    if isinstance(step, str):
        return step == APPEND or bool(_LAST_RE.match(step))
    return False


def _same_step(a: Step, b: Step) -> bool:
    if isinstance(a, (Index, FromEnd)) or isinstance(b, (Index, FromEnd)):
        seq = as_sequence_step(a)
        return seq is not None and seq == as_sequence_step(b)
    # raw steps only match themselves: 0 and "0" are different mapping keys
    ra = a.name if isinstance(a, Key) else a
    rb = b.name if isinstance(b, Key) else b
    return type(ra) is type(rb) and ra == rb


def is_prefix(prefix: Path, path: Path, proper: bool = True) -> bool:
    """Structural prefix test over two step sequences."""
    if len(prefix) > len(path) or (proper and len(prefix) == len(path)):
        return False
    return all(_same_step(a, b) for a, b in zip(prefix, path))
