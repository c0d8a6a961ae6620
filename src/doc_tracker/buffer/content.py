"""Helpers over document content stored as a single terminator-ended string."""

from __future__ import annotations

from typing import Tuple

LINE_TERMINATOR = "\n"


def normalize(text: str) -> str:
    """Return ``text`` terminator-ended; empty text stays empty."""

    if text and not text.endswith(LINE_TERMINATOR):
        return text + LINE_TERMINATOR
    return text


def strip_terminator(text: str) -> str:
    """Drop a single trailing terminator (presentation form)."""

    if text.endswith(LINE_TERMINATOR):
        return text[: -len(LINE_TERMINATOR)]
    return text


def count_lines(text: str) -> int:
    if not text:
        return 0
    lines = text.count(LINE_TERMINATOR)
    if not text.endswith(LINE_TERMINATOR):
        lines += 1
    return lines


def drop_last_line(text: str) -> str:
    """Remove the final line while keeping the terminators of earlier lines.

    ``"a\\nb\\nc\\n"`` becomes ``"a\\nb\\n"``; a single line becomes ``""``.
    """

    trimmed = strip_terminator(text)
    cut = trimmed.rfind(LINE_TERMINATOR)
    if cut == -1:
        return ""
    return trimmed[: cut + len(LINE_TERMINATOR)]


def split_lines(text: str) -> Tuple[str, ...]:
    if not text:
        return ()
    return tuple(strip_terminator(text).split(LINE_TERMINATOR))


__all__ = [
    "LINE_TERMINATOR",
    "normalize",
    "strip_terminator",
    "count_lines",
    "drop_last_line",
    "split_lines",
]
