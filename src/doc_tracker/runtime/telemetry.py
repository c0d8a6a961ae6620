"""Logging for the tracker.

``configure(...)`` -- install handlers from a named preset or the environment
``get_logger(arg)`` -- the ``doc_tracker`` logger or one of its children
``record_event(name, ...)`` -- one structured line per event or reported error
``span(name, ...)`` -- time an operation, with buffer history depths attached

Defaults come from ``DOC_TRACKER_*`` environment variables.
"""

from __future__ import annotations

import logging
import logging.config
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

PREFIX = "DOC_TRACKER_"
LOGGER = "doc_tracker"
PRESETS = ("development", "production", "quiet")

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

_CONFIGURED = False


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(PREFIX + name, default)


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def environ_level() -> int:
    "the level requested through DOC_TRACKER_LOG_LEVEL"
    var = (_env("LOG_LEVEL") or "info").strip().lower()
    try:
        return _LEVELS[var]
    except KeyError as exc:
        raise ValueError(f"Unknown log level '{var}'.") from exc


def _file_handler(path: str, level: int) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "full",
        "level": level,
        "filename": path,
        "maxBytes": 1024**2,
        "backupCount": 3,
        "encoding": "utf-8",
    }


def _handlers(preset: Optional[str]) -> tuple[int, Dict[str, Dict[str, Any]]]:
    console = {
        "class": "logging.StreamHandler",
        "formatter": "brief",
        "stream": "ext://sys.stderr",
    }
    log_file = _env("LOG_FILE") or ""
    key = (preset or "").lower()

    if key == "development":
        level = logging.DEBUG
        handlers = {"console": dict(console, level=level)}
    elif key == "production":
        level = logging.INFO
        handlers = {"file": _file_handler(log_file or "doc_tracker.log", level)}
    elif key == "quiet":
        # the Textual app owns the terminal: never write to the console
        level = environ_level()
        handlers = {"null": {"class": "logging.NullHandler"}}
        if log_file:
            handlers["file"] = _file_handler(log_file, level)
    elif preset is None:
        level = environ_level()
        handlers = {}
        if not _env_flag("DISABLE_CONSOLE"):
            handlers["console"] = dict(console, level=level)
        if log_file:
            handlers["file"] = _file_handler(log_file, level)
    else:
        raise ValueError(f"Unknown preset '{preset}'. Expected one of {PRESETS}.")
    return level, handlers


def configure(*, preset: Optional[str] = None) -> None:
    """Install the ``doc_tracker`` handlers.

    Without ``preset`` the environment decides: ``LOG_LEVEL``, ``LOG_FILE``
    and ``DISABLE_CONSOLE``. Calling again replaces the previous handlers.
    """

    global _CONFIGURED
    level, handlers = _handlers(preset)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "brief": {"format": "%(levelname)s %(name)s: %(message)s"},
                "full": {"format": _FORMAT, "datefmt": "%m/%d/%Y %I:%M:%S %p"},
            },
            "handlers": handlers,
            "loggers": {
                LOGGER: {
                    "level": level,
                    "propagate": False,
                    "handlers": list(handlers),
                }
            },
        }
    )
    _CONFIGURED = True


def get_logger(arg: Optional[str] = None) -> logging.Logger:
    "the tracker logger, or its ``arg`` child"
    if not _CONFIGURED:
        configure()
    return logging.getLogger(LOGGER if arg is None else f"{LOGGER}.{arg}")


def _format_fields(fields: Dict[str, Any]) -> str:
    return " ".join(f"{key}={value!r}" for key, value in fields.items())


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    error: Optional[BaseException] = None,
    logger: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` followed by ``key=value`` pairs.

    A reported ``error`` adds its ``kind`` (``DocumentError`` subclasses carry
    one; other exceptions fall back to the class name) and message, and
    raises the default level to ``warning``.
    """

    fields = dict(data or {})
    if error is not None:
        fields["kind"] = getattr(error, "kind", type(error).__name__)
        fields["error"] = str(error)
        if level == "info":
            level = "warning"
    get_logger(logger).log(
        _LEVELS[level.lower()], "event::%s %s", name, _format_fields(fields)
    )


def _history_fields(buffer: Any) -> Dict[str, Any]:
    return {
        "version": buffer.version,
        "undo_depth": len(buffer.undo_stack),
        "redo_depth": len(buffer.redo_stack),
    }


@dataclass
class Span:
    """Running operation yielded by ``span``."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0


@contextmanager
def span(
    name: str,
    *,
    buffer: Any = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger: Optional[str] = None,
) -> Iterator[Span]:
    """Time an operation and log its outcome.

    With ``buffer`` the closing line carries the buffer name, version and
    undo/redo depths after the operation, so each history transition can be
    followed in the log. An escaping exception is logged through
    ``record_event`` (with its kind) and re-raised.
    """

    fields = dict(metadata or {})
    if buffer is not None:
        fields["buffer"] = buffer.name
    handle = Span(name=name, fields=fields)
    try:
        yield handle
    except Exception as exc:
        if buffer is not None:
            fields.update(_history_fields(buffer))
        record_event(f"{name}::fail", data=fields, error=exc, logger=logger)
        raise
    if buffer is not None:
        fields.update(_history_fields(buffer))
    fields["ms"] = round(handle.elapsed_ms, 3)
    get_logger(logger).debug("span::%s %s", name, _format_fields(fields))


__all__ = [
    "PRESETS",
    "Span",
    "configure",
    "environ_level",
    "get_logger",
    "record_event",
    "span",
]
