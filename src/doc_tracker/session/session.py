"""Session shell owning one buffer and the store it loads from and saves to."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from doc_tracker.buffer import SourceUnavailableError, VersionedBuffer
from doc_tracker.runtime import telemetry
from doc_tracker.storage import ByteStore, FileStore

from .commands import run_command
from .result import SessionBus, SessionResult

EMPTY_PLACEHOLDER = "[Empty Document]"


class Session:
    """Drives a ``VersionedBuffer`` on behalf of a presentation layer.

    Buffer operations run under a single lock so the snapshot-then-mutate
    sequence of an edit is never interleaved with another caller. Errors from
    the buffer and the store propagate as ``DocumentError`` subclasses;
    ``execute`` is the boundary that turns them into ``SessionResult``.
    """

    def __init__(
        self,
        buffer: Optional[VersionedBuffer] = None,
        store: Optional[ByteStore] = None,
        *,
        encoding: str = "utf-8",
        bus: Optional[SessionBus] = None,
    ) -> None:
        self.buffer = buffer or VersionedBuffer()
        self.store: ByteStore = store or FileStore()
        self.encoding = encoding
        self.bus = bus or SessionBus()
        self.running = True
        self._lock = threading.Lock()

    # -- edits --

    def insert(self, text: str) -> None:
        self._apply("insert", lambda: self.buffer.insert(text))

    def delete_last_line(self) -> None:
        self._apply("delete_last_line", self.buffer.delete_last_line)

    def undo(self) -> None:
        self._apply("undo", self.buffer.undo)

    def redo(self) -> None:
        self._apply("redo", self.buffer.redo)

    def clear(self) -> None:
        self._apply("clear", self.buffer.clear)

    def _apply(self, label: str, operation: Callable[[], None]) -> None:
        with self._lock:
            operation()
            mirror = self.buffer.mirror()
        self.bus.emit("document.changed", {"operation": label, "mirror": mirror})

    # -- persistence --

    def load(self, name: str) -> None:
        """Replace the document with the contents of ``name``.

        The source is read and decoded in full before the buffer is touched,
        so a failed load leaves content and history exactly as they were.
        """

        with telemetry.span(
            "session::load", buffer=self.buffer, metadata={"source": name}
        ):
            data = self.store.load_bytes(name)
            try:
                text = data.decode(self.encoding)
            except UnicodeDecodeError as exc:
                raise SourceUnavailableError(
                    f"Cannot decode {name} as {self.encoding}", name=name
                ) from exc
            self._apply("load", lambda: self.buffer.replace_content(text))
        self.bus.emit("document.loaded", name)

    def save(self, name: str) -> None:
        with telemetry.span(
            "session::save", buffer=self.buffer, metadata={"destination": name}
        ):
            with self._lock:
                text = self.buffer.current_content()
            self.store.save_bytes(name, text.encode(self.encoding))
        self.bus.emit("document.saved", name)

    # -- presentation --

    def display(self) -> str:
        with self._lock:
            text = self.buffer.current_content()
            lines = self.buffer.line_count()
        body = text if text else EMPTY_PLACEHOLDER
        return "\n".join(
            [
                "--- Current Document ---",
                body,
                "------------------------",
                f"Total Lines: {lines}",
            ]
        )

    def execute(self, line: str) -> SessionResult:
        result = run_command(self, line)
        telemetry.record_event(
            "session.command",
            level="info" if result.ok else "warning",
            data={"status": result.status, "buffer": self.buffer.name},
        )
        return result

    def close(self) -> None:
        if self.running:
            self.running = False
            self.bus.emit("session.exit", None)


__all__ = ["EMPTY_PLACEHOLDER", "Session"]
