"""Diagnostic logger that counts messages per level and prints them coloured."""

from __future__ import annotations

import sys
from collections import Counter
from enum import IntEnum
from typing import TextIO, Union

from .position import FilePos

__all__ = ["PROJECT_NAME", "PROJECT_VERSION", "LogLevel", "Logger"]

PROJECT_NAME = "oberon0c"
PROJECT_VERSION = "0.0.1"

_WARNING_PREFIX = "\u001b[1m\u001b[95mwarning: \u001b[97m"
_ERROR_PREFIX = "\u001b[1m\u001b[91merror: \u001b[97m"
_RESET = "\u001b[0m"


class LogLevel(IntEnum):
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    QUIET = 5


class Logger:
    """Writes diagnostics at or above ``level``; counts every message logged."""

    def __init__(
        self,
        level: LogLevel = LogLevel.ERROR,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.level = level
        self._out = out
        # A single given stream receives errors as well.
        self._err = err if err is not None else out
        self.warn_as_error = False
        self._counts: Counter[LogLevel] = Counter()

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def _log(
        self,
        level: LogLevel,
        file_name: str,
        msg: str,
        line_no: int = -1,
        char_no: int = -1,
    ) -> None:
        if self.warn_as_error and level == LogLevel.WARNING:
            level = LogLevel.ERROR
        self._counts[level] += 1
        if level < self.level:
            return
        stream = self.err if level == LogLevel.ERROR else self.out
        parts = []
        if file_name:
            location = file_name
            if line_no >= 0:
                location += f":{line_no}"
                if char_no >= 0:
                    location += f":{char_no}"
            parts.append(location + ": ")
        if level == LogLevel.WARNING:
            parts.append(_WARNING_PREFIX)
        elif level == LogLevel.ERROR:
            parts.append(_ERROR_PREFIX)
        parts.append(msg + _RESET + "\n")
        stream.write("".join(parts))
        stream.flush()

    def _log_at(self, level: LogLevel, where: Union[FilePos, str], msg: str) -> None:
        if isinstance(where, FilePos):
            self._log(level, where.file_name, msg, where.line_no, where.char_no)
        else:
            self._log(level, where or PROJECT_NAME, msg)

    def error(self, where: Union[FilePos, str], msg: str) -> None:
        """Log an error at a source position or against a file name."""
        self._log_at(LogLevel.ERROR, where, msg)

    def warning(self, where: Union[FilePos, str], msg: str) -> None:
        """Log a warning at a source position or against a file name."""
        self._log_at(LogLevel.WARNING, where, msg)

    def info(self, msg: str) -> None:
        self._log(LogLevel.INFO, "", msg)

    def debug(self, msg: str) -> None:
        self._log(LogLevel.DEBUG, "", msg)

    def count(self, level: LogLevel) -> int:
        """Number of messages logged at ``level``, shown or not."""
        return self._counts[level]

    @property
    def error_count(self) -> int:
        return self.count(LogLevel.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count(LogLevel.WARNING)