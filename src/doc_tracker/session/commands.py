"""Command-line table mapping menu entries onto session operations."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Dict, Tuple

from doc_tracker.buffer.errors import DocumentError
from doc_tracker.runtime import telemetry

from .result import SessionResult

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .session import Session

CommandHandler = Callable[["Session", str], SessionResult]

# command name, then everything after the single separating whitespace character
_COMMAND_LINE = re.compile(r"\s*(\S+)(?:\s(.*))?", re.DOTALL)

MENU: Tuple[Tuple[str, str, str], ...] = (
    ("1", "insert <text>", "Insert Text"),
    ("2", "delete", "Delete Last Line"),
    ("3", "undo", "Undo"),
    ("4", "redo", "Redo"),
    ("5", "display", "Display Document"),
    ("6", "clear", "Clear Document"),
    ("7", "save <file>", "Save to File"),
    ("8", "load <file>", "Load from File"),
    ("9", "exit", "Exit"),
)


def render_menu() -> str:
    lines = ["Versioned Document Tracker", "-" * 33]
    for number, usage, label in MENU:
        lines.append(f"{number}. {label:<18} {usage}")
    return "\n".join(lines)


def run_command(session: "Session", line: str) -> SessionResult:
    """Parse ``line`` as ``<command> [argument]`` and dispatch it.

    Document errors are reported in the result; they never end the session.
    """

    match = _COMMAND_LINE.match(line.rstrip("\r\n"))
    if match is None:
        return SessionResult(ok=False, status="command_empty", message="Enter a command")
    command, argument = match.group(1), match.group(2) or ""
    handler = _COMMAND_HANDLERS.get(command.lower())
    if handler is None:
        return _unknown_command(session, command)
    try:
        return handler(session, argument)
    except DocumentError as exc:
        telemetry.record_event(
            "session.error", data={"command": command.lower()}, error=exc
        )
        session.bus.emit("session.error", exc)
        return SessionResult(ok=False, status=exc.kind, message=str(exc))


def _unknown_command(session: "Session", command: str) -> SessionResult:
    session.bus.emit("session.error", command)
    return SessionResult(
        ok=False,
        status="unknown_command",
        message=f"Invalid choice '{command}'! Please enter 1-9 or a command name.",
    )


def _missing(what: str) -> SessionResult:
    return SessionResult(
        ok=False, status="missing_argument", message=f"{what} cannot be empty."
    )


def _handle_insert(session: "Session", argument: str) -> SessionResult:
    if not argument:
        return _missing("Text")
    session.insert(argument)
    return SessionResult(ok=True, status="inserted", message="Text inserted.")


def _handle_delete(session: "Session", argument: str) -> SessionResult:
    del argument
    session.delete_last_line()
    return SessionResult(ok=True, status="deleted", message="Last line deleted.")


def _handle_undo(session: "Session", argument: str) -> SessionResult:
    del argument
    session.undo()
    return SessionResult(ok=True, status="undone", message="Undo successful.")


def _handle_redo(session: "Session", argument: str) -> SessionResult:
    del argument
    session.redo()
    return SessionResult(ok=True, status="redone", message="Redo successful.")


def _handle_display(session: "Session", argument: str) -> SessionResult:
    del argument
    return SessionResult(ok=True, status="display", message=session.display())


def _handle_clear(session: "Session", argument: str) -> SessionResult:
    del argument
    session.clear()
    return SessionResult(ok=True, status="cleared", message="Document cleared.")


def _handle_save(session: "Session", argument: str) -> SessionResult:
    argument = argument.strip()
    if not argument:
        return _missing("Filename")
    session.save(argument)
    return SessionResult(
        ok=True, status="saved", message=f"Document saved to {argument}"
    )


def _handle_load(session: "Session", argument: str) -> SessionResult:
    argument = argument.strip()
    if not argument:
        return _missing("Filename")
    session.load(argument)
    return SessionResult(
        ok=True, status="loaded", message=f"Document loaded from {argument}"
    )


def _handle_exit(session: "Session", argument: str) -> SessionResult:
    del argument
    session.close()
    return SessionResult(
        ok=True,
        status="exit",
        message="Thank you for using Document Tracker!",
        exit=True,
    )


def _handle_help(session: "Session", argument: str) -> SessionResult:
    del session, argument
    return SessionResult(ok=True, status="help", message=render_menu())


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "insert": _handle_insert,
    "i": _handle_insert,
    "1": _handle_insert,
    "delete": _handle_delete,
    "d": _handle_delete,
    "2": _handle_delete,
    "undo": _handle_undo,
    "u": _handle_undo,
    "3": _handle_undo,
    "redo": _handle_redo,
    "r": _handle_redo,
    "4": _handle_redo,
    "display": _handle_display,
    "show": _handle_display,
    "5": _handle_display,
    "clear": _handle_clear,
    "6": _handle_clear,
    "save": _handle_save,
    "w": _handle_save,
    "7": _handle_save,
    "load": _handle_load,
    "e": _handle_load,
    "8": _handle_load,
    "exit": _handle_exit,
    "quit": _handle_exit,
    "q": _handle_exit,
    "9": _handle_exit,
    "help": _handle_help,
    "?": _handle_help,
}


__all__ = ["MENU", "render_menu", "run_command"]
