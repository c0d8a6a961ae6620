"""Adapter that wires a Session into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from doc_tracker.buffer import BufferMirror
from doc_tracker.session import Session, SessionResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualSessionAdapter:
    """Submits command lines to a Session and keeps the UI in sync."""

    EVENTS = (
        "document.changed",
        "document.loaded",
        "document.saved",
        "session.error",
        "session.exit",
    )

    def __init__(self, session: Session, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_document()

    def submit(self, line: str) -> SessionResult:
        self._log_state("command ->", line=line)
        result = self.session.execute(line)
        if result.message:
            self.hooks.update_status(result.message)
        self._refresh_document()
        self._log_state(
            "result <-", ok=result.ok, status=result.status, exit=result.exit
        )
        return result

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in self.EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh_document(self) -> None:
        self.hooks.update_document(self.session.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        return {
            "buffer": buffer.name,
            "version": buffer.version,
            "lines": buffer.line_count(),
            "undo": len(buffer.undo_stack),
            "redo": len(buffer.redo_stack),
        }


__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
