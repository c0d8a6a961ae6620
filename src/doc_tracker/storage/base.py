"""Boundary type for the load/save collaborators a Session talks to."""

from __future__ import annotations

from typing import Protocol


class ByteStore(Protocol):
    """Reads and writes whole documents addressed by name."""

    def load_bytes(self, name: str) -> bytes:
        """Return every byte stored under ``name``.

        Raises ``SourceUnavailableError`` when the source cannot be read.
        """
        ...

    def save_bytes(self, name: str, data: bytes) -> None:
        """Write ``data`` verbatim to ``name``, replacing what was there.

        Raises ``DestinationUnwritableError`` when the write fails.
        """
        ...
