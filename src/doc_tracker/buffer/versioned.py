"""Versioned document buffer: content plus linear undo/redo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from doc_tracker.runtime import telemetry

from .content import (
    LINE_TERMINATOR,
    count_lines,
    drop_last_line,
    normalize,
    strip_terminator,
)
from .errors import EmptyDocumentError, EmptyTextError
from .history import HistoryStack


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    line_count: int
    version: int
    undo_depth: int
    redo_depth: int

    @property
    def is_empty(self) -> bool:
        return self.line_count == 0


class VersionedBuffer:
    """Single mutable document with snapshot-based undo/redo.

    Content is held in canonical form: terminator-ended whenever non-empty.
    Every edit other than undo/redo runs through a ``Transaction`` which
    pushes the pre-edit content onto the undo stack and discards the redo
    branch before the new content is installed.

    ``history_depth`` bounds both stacks. Once more edits than that have been
    made, the oldest snapshots are discarded and undoing all the way back to
    the empty initial document is no longer possible. The default (``None``)
    keeps the full history.
    """

    def __init__(
        self,
        *,
        name: str = "document",
        history_depth: Optional[int] = None,
    ) -> None:
        self.name = name
        self.undo_stack = HistoryStack("undo", max_depth=history_depth)
        self.redo_stack = HistoryStack("redo", max_depth=history_depth)
        self.version = 0
        self._content = ""

    # -- edits --

    def insert(self, text: str) -> None:
        if not text:
            raise EmptyTextError()
        with Transaction(self, "insert") as tx:
            tx.commit(self._content + text + LINE_TERMINATOR)

    def delete_last_line(self) -> None:
        if not self._content:
            raise EmptyDocumentError("delete_last_line")
        with Transaction(self, "delete_last_line") as tx:
            tx.commit(drop_last_line(self._content))

    def clear(self) -> None:
        if not self._content:
            raise EmptyDocumentError("clear")
        with Transaction(self, "clear") as tx:
            tx.commit("")

    def replace_content(self, text: str) -> None:
        """Replace the whole document (used by load); undoable like any edit."""

        with Transaction(self, "replace_content") as tx:
            tx.commit(normalize(text))

    # -- history --

    def undo(self) -> None:
        self._travel(self.undo_stack, self.redo_stack)

    def redo(self) -> None:
        self._travel(self.redo_stack, self.undo_stack)

    def _travel(self, source: HistoryStack, target: HistoryStack) -> None:
        with telemetry.span(f"buffer::{source.name}", buffer=self):
            restored = source.pop()
            target.push(self._content)
            self._content = restored
            self.version += 1

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    # -- queries --

    @property
    def raw_content(self) -> str:
        """Canonical content, trailing terminator included."""

        return self._content

    @property
    def is_empty(self) -> bool:
        return not self._content

    def current_content(self) -> str:
        return strip_terminator(self._content)

    def line_count(self) -> int:
        return count_lines(self._content)

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            text=self.current_content(),
            line_count=self.line_count(),
            version=self.version,
            undo_depth=len(self.undo_stack),
            redo_depth=len(self.redo_stack),
        )

    def __repr__(self) -> str:
        return (
            f"VersionedBuffer(name={self.name!r}, version={self.version}, "
            f"lines={self.line_count()}, undo={len(self.undo_stack)}, "
            f"redo={len(self.redo_stack)})"
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Snapshot-then-mutate unit shared by every non-history edit."""

    def __init__(self, buffer: VersionedBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.committed = False
        self._span_cm: Optional[ContextManager[telemetry.Span]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(f"buffer::{self.label}", buffer=self.buffer)
        self._span_cm.__enter__()
        return self

    def commit(self, new_content: str) -> None:
        if self.committed:
            raise RuntimeError(f"Transaction '{self.label}' already committed")
        buffer = self.buffer
        buffer.undo_stack.push(buffer._content)
        buffer.redo_stack.clear()
        buffer._content = new_content
        buffer.version += 1
        self.committed = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["BufferMirror", "Transaction", "VersionedBuffer"]
