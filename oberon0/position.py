"""Source positions attached to tokens and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["FilePos", "EMPTY_POS"]


@dataclass(frozen=True)
class FilePos:
    """A position in a source file: name, line, column and byte offset."""

    file_name: str = ""
    line_no: int = 0
    char_no: int = 0
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.line_no}:{self.char_no}"


EMPTY_POS = FilePos()