"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module owns
the one-time root configuration and the small helpers used to attach
structured fields to DEBUG traces.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_FIELDS = ("event", "component", "action", "outcome", "target")


class _ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields to DEBUG records."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        ctx = getattr(record, "context", None)
        if record.levelno > logging.DEBUG or not ctx:
            return base
        pairs = " ".join(f"{k}={v}" for k, v in ctx.items() if v is not None)
        return f"{base} [{pairs}]" if pairs else base


def _level_from_env() -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.DEFAULT_LOG_LEVEL)
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger once.

    Records always go to stderr so that stdout only carries results.

    Args:
        level: Level name overriding ``LIBRARIAN_LOG_LEVEL``.
        log_file: Optional path of an additional log file.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_librarian", False):
            root.removeHandler(handler)
            handler.close()

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
    stream._librarian = True  # type: ignore[attr-defined]
    root.addHandler(stream)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_ContextFormatter(Constants.LOG_FILE_FORMAT))
        file_handler._librarian = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    if level:
        resolved = logging.getLevelName(str(level).upper())
        root.setLevel(resolved if isinstance(resolved, int) else logging.WARNING)
    else:
        root.setLevel(_level_from_env())


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records of ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record.

    Known fields (event, component, action, outcome, target) come first;
    any other keyword is carried along after them.
    """
    ctx: Dict[str, Any] = {k: fields.pop(k) for k in _CONTEXT_FIELDS if k in fields}
    ctx.update(fields)
    return {"context": ctx}


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
