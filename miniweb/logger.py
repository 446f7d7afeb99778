"""Timestamped logging to the console and, optionally, to an append-only file."""

from __future__ import annotations

import sys
import time
from enum import IntEnum
from typing import TextIO

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Severity of a log line."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class Logger:
    """Writes ``[timestamp] [LEVEL] message`` lines to stdout and a log file."""

    def __init__(self, filename: str | None = None) -> None:
        self._file: TextIO | None = None
        if filename is not None:
            try:
                self._file = open(filename, "a", encoding="utf-8")
            except OSError:
                print(f"Warning: Could not open log file {filename}", file=sys.stderr)

    @property
    def has_file(self) -> bool:
        """Whether lines are also written to a log file."""
        return self._file is not None

    def log(self, level: LogLevel, message: str) -> None:
        """Write one line at ``level`` to the console and the log file."""
        level = LogLevel(level)
        timestamp = time.strftime(_TIMESTAMP_FORMAT, time.localtime())
        line = f"[{timestamp}] [{level.name}] {message}"
        print(line)
        if self._file is not None:
            self._file.write(line + "\n")
            self._file.flush()

    def close(self) -> None:
        """Close the log file; further lines go to the console only."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


_console_logger = Logger()
_default_logger: Logger | None = None


def init_logger(filename: str) -> Logger:
    """Open ``filename`` as the process-wide log file and return its logger."""
    global _default_logger
    close_logger()
    _default_logger = Logger(filename)
    return _default_logger


def log_message(level: LogLevel, message: str) -> None:
    """Log through the process-wide logger, or to the console if none is open."""
    (_default_logger or _console_logger).log(level, message)


def close_logger() -> None:
    """Close the process-wide log file, if one is open."""
    global _default_logger
    if _default_logger is not None:
        _default_logger.close()
        _default_logger = None