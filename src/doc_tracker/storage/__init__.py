"""Load/save collaborators the session hands document bytes to."""

from .base import ByteStore
from .files import FileStore
from .memory import MemoryStore

__all__ = ["ByteStore", "FileStore", "MemoryStore"]
