"""Document content, history stacks and the versioned buffer."""

from .content import (
    LINE_TERMINATOR,
    count_lines,
    drop_last_line,
    normalize,
    split_lines,
    strip_terminator,
)
from .errors import (
    DestinationUnwritableError,
    DocumentError,
    EmptyDocumentError,
    EmptyTextError,
    NoHistoryError,
    SourceUnavailableError,
    StorageError,
)
from .history import HistoryStack
from .versioned import BufferMirror, Transaction, VersionedBuffer

__all__ = [
    "LINE_TERMINATOR",
    "count_lines",
    "drop_last_line",
    "normalize",
    "split_lines",
    "strip_terminator",
    "DocumentError",
    "EmptyDocumentError",
    "EmptyTextError",
    "NoHistoryError",
    "StorageError",
    "SourceUnavailableError",
    "DestinationUnwritableError",
    "HistoryStack",
    "BufferMirror",
    "Transaction",
    "VersionedBuffer",
]
