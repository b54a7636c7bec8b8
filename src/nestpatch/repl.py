"""PatchRepl — interactive editor for a JSON document.

Also provides the ``nestpatch-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any

from .document import Document
from .errors import NestPatchError
from .getter import exists
from .model import Operation, OpKind
from .path import format_pointer
from .traversal import flatten, list_

logger = logging.getLogger(__name__)

_QUERIES = frozenset({"get", "exists", "list", "flatten"})
_VALUE_OPS = frozenset({"add", "replace", "test"})
_FROM_OPS = frozenset({"move", "copy"})


# ---------------------------------------------------------------------------
# PatchRepl class (programmatic use)
# ---------------------------------------------------------------------------

class PatchRepl:
    """Stateful REPL over one Document.

    Usage::

        repl = PatchRepl()
        repl.eval('add /a {"b": {"c": "here"}}')
        repl.eval('add /a/b/d []')
        repl.eval('add /a/b/d/0 "diamond"')
        repl.eval("get /a/b/d/last")   # → "diamond"

        repl.doc.root       # the current document
        repl.doc.undo()     # drop the last edit
        repl.reset()        # start from {}

    Pointers are RFC 6901 strings; ``.`` stands for the root pointer.
    """

    def __init__(self, root: Any = None) -> None:
        self.doc = Document(root={} if root is None else root)

    def eval(self, text: str) -> Any:
        """Run one command and return its result.

        Queries return the value they looked up; edits return the new root.
        """
        command, _, rest = text.strip().partition(" ")
        rest = rest.strip()
        logger.debug("repl command %r", command)

        if command == "get":
            return self.doc.query(_pointer(rest))
        if command == "exists":
            return exists(self.doc.root, _pointer(rest))
        if command == "list":
            return list(list_(self.doc.root, _pointer(rest)))
        if command == "flatten":
            return flatten(self.doc.root, _pointer(rest))
        if command == "set":
            path, raw = _split_value(rest)
            return self.doc.assign(path, json.loads(raw))
        if command == "patch":
            records = json.loads(rest)
            if not isinstance(records, list):
                raise ValueError("a patch document must be a JSON array")
            return self.doc.apply(records)
        if command in _VALUE_OPS:
            path, raw = _split_value(rest)
            return self.doc.apply([Operation(OpKind(command), path, json.loads(raw))])
        if command in _FROM_OPS:
            from_, _, to = rest.partition(" ")
            return self.doc.apply([Operation(OpKind(command), _pointer(to.strip()), from_=_pointer(from_))])
        if command == "remove":
            return self.doc.apply([Operation(OpKind.Remove, _pointer(rest))])
        raise ValueError(f"unknown command {command!r}")

    def reset(self) -> None:
        """Start again from an empty mapping."""
        self.doc = Document()


def _pointer(token: str) -> str:
    if token in ("", "."):
        return ""
    return token


def _split_value(rest: str) -> tuple[str, str]:
    path, _, raw = rest.partition(" ")
    if not raw.strip():
        raise ValueError("expected a pointer followed by a JSON value")
    return _pointer(path), raw.strip()


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Any) -> str:
    """Format a single value as compact JSON."""
    return json.dumps(value, ensure_ascii=False, default=repr)


def _fmt_inspect(value: Any) -> str:
    """Pretty-print a value for :show."""
    return json.dumps(value, ensure_ascii=False, indent=2, default=repr)


def _fmt_leaves(pairs) -> str:
    lines = [f"  {format_pointer(path) or '.'} = {_fmt_inline(v)}" for path, v in pairs]
    return "\n".join(lines) if lines else "  (no leaves)"


def _show_history(repl: PatchRepl, dest: IO[str]) -> None:
    """Print the applied revisions, oldest first."""
    if not repl.doc.revisions:
        print("  (no edits)", file=dest)
        return
    for i, rev in enumerate(repl.doc.revisions, 1):
        print(f"  {i}: {rev.label}", file=dest)


def _print_result(command: str, result: Any, dest: IO[str]) -> None:
    if command in ("list", "flatten"):
        pairs = result.items() if isinstance(result, dict) else result
        print(_fmt_leaves(pairs), file=dest)
    else:
        print(_fmt_inline(result), file=dest)


def _load(repl: PatchRepl, filepath: str) -> None:
    with open(filepath, encoding="utf-8") as fh:
        repl.doc = Document(root=json.load(fh))


def _save(repl: PatchRepl, filepath: str) -> None:
    with open(filepath, "w", encoding="utf-8") as fh:
        json.dump(repl.doc.root, fh, ensure_ascii=False, indent=2)
        fh.write("\n")


def _process_line(repl: PatchRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line or line.startswith("#"):
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":show":
        print(_fmt_inspect(repl.doc.root), file=dest)
        return True

    if line == ":history":
        _show_history(repl, dest)
        return True

    if line == ":undo":
        if not repl.doc.undo():
            print("  (nothing to undo)", file=dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    for prefix, action in ((":load ", _load), (":save ", _save)):
        if line.startswith(prefix):
            filepath = line[len(prefix):].strip()
            try:
                action(repl, filepath)
            except (OSError, ValueError) as exc:
                print(f"Error: '{filepath}': {exc}", file=sys.stderr)
            return True

    # ── Batch file ────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        filepath = line[4:].strip()
        try:
            with open(filepath, encoding="utf-8") as fh:
                for file_line in fh:
                    if not _process_line(repl, file_line.rstrip("\n"), dest):
                        return False
        except OSError as exc:
            print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
        return True

    # ── Queries and edits ─────────────────────────────────────────────────
    command = line.partition(" ")[0]
    try:
        result = repl.eval(line)
    except (NestPatchError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return True
    if command in _QUERIES:
        _print_result(command, result, dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

class _Sink:
    """Where query results go: stdout, or a file opened with ``?>>``."""

    def __init__(self) -> None:
        self.stream: IO[str] = sys.stdout
        self._file: IO[str] | None = None

    def to_file(self, filepath: str) -> None:
        handle = open(filepath, "w", encoding="utf-8")
        self.close()
        self._file = self.stream = handle

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        self.stream = sys.stdout


def _redirect(sink: _Sink, line: str) -> bool:
    """Handle ``?>> file`` / ``?>>``.  Returns False for any other line."""
    if line == "?>>":
        sink.close()
        return True
    if not line.startswith("?>> "):
        return False
    filepath = line[4:].strip()
    try:
        sink.to_file(filepath)
    except OSError as exc:
        print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
    return True


def _input_lines(prompt: str):
    """Yield stripped input lines until EOF; Ctrl-C abandons the current line."""
    while True:
        try:
            yield input(prompt).strip()
        except EOFError:
            print()
            return
        except KeyboardInterrupt:
            print()


def main() -> None:
    """Interactive shell (``nestpatch-repl [file]`` / ``python -m nestpatch.repl``)."""
    repl = PatchRepl()
    sink = _Sink()

    if len(sys.argv) > 1:
        _process_line(repl, f":load {sys.argv[1]}", sink.stream)

    print("nestpatch REPL  (:q to quit  |  :show  :history  :undo  :reset  |  get <ptr>  add <ptr> <json>)")

    try:
        for line in _input_lines("np> "):
            if _redirect(sink, line):
                continue
            if not _process_line(repl, line, sink.stream):
                break
    finally:
        sink.close()


if __name__ == "__main__":
    main()
