"""Snapshot stacks backing linear undo/redo."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import NoHistoryError


class HistoryStack:
    """Ordered sequence of content snapshots with push/pop at the end.

    ``max_depth`` bounds the stack by discarding the oldest snapshot once it
    is exceeded. ``None`` keeps every snapshot.
    """

    def __init__(self, name: str, *, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be a positive integer or None")
        self.name = name
        self.max_depth = max_depth
        self._entries: List[str] = []

    def push(self, snapshot: str) -> None:
        self._entries.append(snapshot)
        if self.max_depth is not None and len(self._entries) > self.max_depth:
            del self._entries[0]

    def pop(self) -> str:
        if not self._entries:
            raise NoHistoryError(self.name)
        return self._entries.pop()

    def peek(self) -> Optional[str]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> Tuple[str, ...]:
        """Oldest-first copy of the stored snapshots."""

        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"HistoryStack(name={self.name!r}, depth={len(self._entries)})"


__all__ = ["HistoryStack"]
