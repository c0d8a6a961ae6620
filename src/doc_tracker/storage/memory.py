"""In-memory store for scripting and tests."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Set

from doc_tracker.buffer.errors import DestinationUnwritableError, SourceUnavailableError


class MemoryStore:
    """Dict-backed ``ByteStore``; names in ``read_only`` refuse writes."""

    def __init__(
        self,
        files: Optional[Mapping[str, bytes]] = None,
        *,
        read_only: Iterable[str] = (),
    ) -> None:
        self._files: Dict[str, bytes] = dict(files or {})
        self.read_only: Set[str] = set(read_only)

    def load_bytes(self, name: str) -> bytes:
        try:
            return self._files[name]
        except KeyError as exc:
            raise SourceUnavailableError(f"File not found: {name}", name=name) from exc

    def save_bytes(self, name: str, data: bytes) -> None:
        if not name or name in self.read_only:
            raise DestinationUnwritableError(
                f"Failed to create file: {name}", name=name
            )
        self._files[name] = bytes(data)

    def get(self, name: str) -> Optional[bytes]:
        return self._files.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._files


__all__ = ["MemoryStore"]
