"""Recoverable error kinds raised by the buffer and its collaborators."""

from __future__ import annotations

from typing import Optional


class DocumentError(RuntimeError):
    """Base class for every error the tracker reports to its caller.

    ``kind`` is a stable identifier a presentation layer can key off.
    """

    kind = "document_error"


class EmptyDocumentError(DocumentError):
    """Raised when delete-last-line or clear runs against empty content."""

    kind = "empty_document"

    def __init__(self, operation: str) -> None:
        super().__init__(f"Document is already empty ({operation})")
        self.operation = operation


class NoHistoryError(DocumentError):
    """Raised by undo/redo when the respective stack holds no snapshot."""

    kind = "no_history"

    def __init__(self, stack: str) -> None:
        action = "redo" if stack == "redo" else "undo"
        super().__init__(f"Nothing to {action}")
        self.stack = stack


class EmptyTextError(DocumentError):
    """Raised when ``insert`` receives an empty string."""

    kind = "empty_text"

    def __init__(self) -> None:
        super().__init__("Cannot insert empty text")


class StorageError(DocumentError):
    """Raised by load/save collaborators; ``name`` is the source or destination."""

    kind = "storage_error"

    def __init__(self, message: str, *, name: Optional[str] = None) -> None:
        super().__init__(message)
        self.name = name


class SourceUnavailableError(StorageError):
    kind = "source_unavailable"


class DestinationUnwritableError(StorageError):
    kind = "destination_unwritable"


__all__ = [
    "DocumentError",
    "EmptyDocumentError",
    "NoHistoryError",
    "EmptyTextError",
    "StorageError",
    "SourceUnavailableError",
    "DestinationUnwritableError",
]
