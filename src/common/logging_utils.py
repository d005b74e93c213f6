"""Centralized logging helpers shared by the CLI and library modules.

The CLI calls configure_logging() once; library modules only create
module-level loggers and use the helpers below for structured DEBUG traces.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stderr is when a record is emitted.

    A plain StreamHandler keeps the stream it was built with, so output sent
    through contextlib.redirect_stderr (or a test runner's capture) would still
    go to the original stderr. The stream is therefore not rebindable:
    setStream() and assignments to ``stream`` have no effect. Use a separate
    handler to log elsewhere.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value) -> None:
        pass


_STDERR_HANDLER: Optional[_StderrHandler] = None


def configure_logging(log_file: Optional[str] = None) -> None:
    """Configure the root logger from the environment.

    The level is read from NPM_RESOLVE_WESL_LOG_LEVEL (default INFO). Messages
    go to stderr so that stdout stays reserved for bundle output.

    Args:
        log_file: Optional path of an additional log file.
    """
    global _STDERR_HANDLER  # pylint: disable=global-statement
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if _STDERR_HANDLER is None:
        _STDERR_HANDLER = _StderrHandler()
        _STDERR_HANDLER.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(_STDERR_HANDLER)
    root.setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(file_handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records of this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record.

    None values are dropped so records only carry meaningful fields.
    """
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed time so far (or total, once the block exited)."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
