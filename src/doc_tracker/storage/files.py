"""File-system backed store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from doc_tracker.buffer.errors import DestinationUnwritableError, SourceUnavailableError
from doc_tracker.runtime import telemetry


class FileStore:
    """Loads and saves documents as files, optionally under a root directory."""

    def __init__(self, root: Optional[str | Path] = None) -> None:
        self.root = Path(root) if root is not None else None

    def resolve(self, name: str) -> Path:
        path = Path(name).expanduser()
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        return path

    def load_bytes(self, name: str) -> bytes:
        if not name:
            raise SourceUnavailableError("Filename cannot be empty", name=name)
        path = self.resolve(name)
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise SourceUnavailableError(f"File not found: {name}", name=name) from exc
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot read {name}: {exc.strerror or exc}", name=name
            ) from exc
        telemetry.record_event(
            "store.read", level="debug", data={"path": str(path), "bytes": len(data)}
        )
        return data

    def save_bytes(self, name: str, data: bytes) -> None:
        if not name:
            raise DestinationUnwritableError("Filename cannot be empty", name=name)
        path = self.resolve(name)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise DestinationUnwritableError(
                f"Failed to create file: {name} ({exc.strerror or exc})", name=name
            ) from exc
        telemetry.record_event(
            "store.write", level="debug", data={"path": str(path), "bytes": len(data)}
        )


__all__ = ["FileStore"]
