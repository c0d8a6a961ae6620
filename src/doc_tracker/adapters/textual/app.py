"""Executable Textual app that hosts a document tracking session."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use doc_tracker.adapters.textual.app"
    ) from exc

from doc_tracker.buffer import BufferMirror, VersionedBuffer, split_lines
from doc_tracker.runtime import telemetry
from doc_tracker.session import EMPTY_PLACEHOLDER, Session, render_menu
from doc_tracker.storage import FileStore

from .controller import TextualSessionAdapter, TextualUIHooks


def create_session(
    *,
    root: Optional[str] = None,
    encoding: str = "utf-8",
    history_depth: Optional[int] = None,
) -> Session:
    """Build a Session over a file store rooted at ``root``."""

    buffer = VersionedBuffer(history_depth=history_depth)
    return Session(buffer, FileStore(root), encoding=encoding)


def render_document(mirror: BufferMirror) -> str:
    if mirror.is_empty:
        return EMPTY_PLACEHOLDER
    lines = split_lines(mirror.text + "\n")
    width = len(str(len(lines)))
    return "\n".join(
        f"{number:>{width}} | {line}" for number, line in enumerate(lines, start=1)
    )


class DocumentTrackerApp(App[None]):
    """Menu-driven Textual UI over a single versioned document."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#document-view {
		width: 3fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#menu-view {
		width: 1fr;
		border: round $surface-lighten-1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+z", "run('undo')", "Undo"),
        ("ctrl+y", "run('redo')", "Redo"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: Session, *, initial_file: Optional[str] = None) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualSessionAdapter | None = None
        self._initial_file = initial_file
        self._document_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._document_widget = Static("", id="document-view", markup=False)
            yield self._document_widget
            with Vertical(id="menu-view"):
                yield Static(render_menu(), markup=False)
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Input(placeholder="command (e.g. insert hello, undo, save notes.txt)")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_document=self._update_document,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualSessionAdapter(self.session, hooks)
        self._update_status("Versioned Document Tracker started")
        if self._initial_file:
            self.action_run(f"load {self._initial_file}")
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        line = event.value
        event.input.value = ""
        self.action_run(line)

    def action_run(self, line: str) -> None:
        if not self.adapter:
            return
        result = self.adapter.submit(line)
        if result.exit:
            self.exit()

    def _update_document(self, mirror: BufferMirror) -> None:
        if self._document_widget:
            self._document_widget.update(render_document(mirror))
        self.sub_title = (
            f"lines {mirror.line_count} | undo {mirror.undo_depth} | "
            f"redo {mirror.redo_depth}"
        )

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            # Multi-line messages (display/help) already show in the panes.
            self._status_widget.update(status.splitlines()[-1] if status else "")

    def _handle_event(self, name: str, payload: object | None) -> None:
        if name == "session.error" and isinstance(payload, Exception):
            self.bell()

    def _log_line(self, line: str) -> None:
        telemetry.record_event("app.trace", level="debug", data={"line": line})


def _env_int(key: str, fallback: Optional[int]) -> Optional[int]:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the versioned document tracker.")
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Document to load at start-up (the load is undoable)",
    )
    parser.add_argument(
        "--root",
        default=os.environ.get("DOC_TRACKER_ROOT"),
        help="Directory relative file names are resolved against",
    )
    parser.add_argument(
        "--encoding",
        default=os.environ.get("DOC_TRACKER_ENCODING", "utf-8"),
        help="Text encoding used for load/save (default: utf-8)",
    )
    parser.add_argument(
        "--history-depth",
        type=int,
        default=_env_int("DOC_TRACKER_HISTORY_DEPTH", None),
        help="Maximum undo/redo snapshots kept (default: unbounded)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=os.environ.get("DOC_TRACKER_LOG_PRESET", "quiet"),
        help="Telemetry preset (default: quiet, keeps the terminal clean)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    session = create_session(
        root=args.root, encoding=args.encoding, history_depth=args.history_depth
    )
    app = DocumentTrackerApp(session, initial_file=args.file)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
