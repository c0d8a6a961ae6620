"""Session shell that drives a VersionedBuffer for a presentation layer."""

from .commands import MENU, render_menu, run_command
from .result import SessionBus, SessionResult
from .session import EMPTY_PLACEHOLDER, Session

__all__ = [
    "EMPTY_PLACEHOLDER",
    "MENU",
    "Session",
    "SessionBus",
    "SessionResult",
    "render_menu",
    "run_command",
]
