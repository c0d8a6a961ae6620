"""Versioned in-memory document tracker with linear undo/redo history."""

__all__ = [
    "adapters",
    "buffer",
    "runtime",
    "session",
    "storage",
]

__version__ = "0.1.0"
