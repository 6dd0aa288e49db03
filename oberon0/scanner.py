"""Scanner that turns an Oberon-0 source file into a stream of tokens."""

from __future__ import annotations

import math
import re
import struct
from collections import deque
from os import PathLike
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from .logger import Logger
from .position import FilePos
from .tokens import (
    BooleanLiteralToken,
    CharLiteralToken,
    DoubleLiteralToken,
    FloatLiteralToken,
    IdentToken,
    IntLiteralToken,
    LongLiteralToken,
    ShortLiteralToken,
    StringLiteralToken,
    Token,
    TokenType,
    UndefinedToken,
)

__all__ = ["ScannerError", "Scanner", "escape", "unescape"]

_WHITESPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset("0123456789")
_NUMBER_CHARS = frozenset("0123456789ABCDEFabcdef")

_KEYWORDS = {
    "DIV": TokenType.OP_DIV,
    "MOD": TokenType.OP_MOD,
    "OR": TokenType.OP_OR,
    "IN": TokenType.OP_IN,
    "IS": TokenType.OP_IS,
    "MODULE": TokenType.KW_MODULE,
    "IMPORT": TokenType.KW_IMPORT,
    "PROCEDURE": TokenType.KW_PROCEDURE,
    "EXTERNAL": TokenType.KW_EXTERNAL,
    "BEGIN": TokenType.KW_BEGIN,
    "END": TokenType.KW_END,
    "RETURN": TokenType.KW_RETURN,
    "LOOP": TokenType.KW_LOOP,
    "EXIT": TokenType.KW_EXIT,
    "WHILE": TokenType.KW_WHILE,
    "DO": TokenType.KW_DO,
    "REPEAT": TokenType.KW_REPEAT,
    "UNTIL": TokenType.KW_UNTIL,
    "FOR": TokenType.KW_FOR,
    "TO": TokenType.KW_TO,
    "BY": TokenType.KW_BY,
    "IF": TokenType.KW_IF,
    "THEN": TokenType.KW_THEN,
    "ELSE": TokenType.KW_ELSE,
    "ELSIF": TokenType.KW_ELSIF,
    "CASE": TokenType.KW_CASE,
    "WITH": TokenType.KW_WITH,
    "VAR": TokenType.KW_VAR,
    "CONST": TokenType.KW_CONST,
    "TYPE": TokenType.KW_TYPE,
    "ARRAY": TokenType.KW_ARRAY,
    "RECORD": TokenType.KW_RECORD,
    "OF": TokenType.KW_OF,
    "POINTER": TokenType.KW_POINTER,
    "NIL": TokenType.KW_NIL,
}
_BOOLEANS = {"TRUE": True, "FALSE": False}

_SINGLE_CHAR = {
    "&": TokenType.OP_AND,
    "*": TokenType.OP_TIMES,
    "/": TokenType.OP_DIVIDE,
    "+": TokenType.OP_PLUS,
    "-": TokenType.OP_MINUS,
    "=": TokenType.OP_EQ,
    "#": TokenType.OP_NEQ,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACK,
    "]": TokenType.RBRACK,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "^": TokenType.CARET,
    "|": TokenType.PIPE,
    "~": TokenType.OP_NOT,
}

# Characters that may be followed by '=' to form a two-character operator.
_WITH_EQUALS = {
    "<": (TokenType.OP_LT, TokenType.OP_LEQ),
    ">": (TokenType.OP_GT, TokenType.OP_GEQ),
    ":": (TokenType.COLON, TokenType.OP_BECOMES),
}

_ESCAPES = {
    "\0": "0",
    "'": "'",
    '"': '"',
    "?": "?",
    "\\": "\\",
    "\a": "a",
    "\b": "b",
    "\f": "f",
    "\n": "n",
    "\r": "r",
    "\t": "t",
    "\v": "v",
}
_UNESCAPES = {code: char for char, code in _ESCAPES.items()}
_ESCAPE_RE = re.compile("[" + re.escape("".join(_ESCAPES)) + "]")
_UNESCAPE_RE = re.compile(r"\\([" + re.escape("".join(_UNESCAPES)) + "])")

_UINT64_MAX = (1 << 64) - 1
_UINT32_MAX = (1 << 32) - 1
_UINT16_MAX = (1 << 16) - 1
_INT32_MAX = (1 << 31) - 1
_INT16_MAX = (1 << 15) - 1


def escape(text: str) -> str:
    """Replace special characters in ``text`` by backslash escape sequences."""
    return _ESCAPE_RE.sub(lambda m: "\\" + _ESCAPES[m.group(0)], text)


def unescape(text: str) -> str:
    """Replace backslash escape sequences in ``text`` by the characters they denote."""
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES[m.group(1)], text)


class ScannerError(Exception):
    """Raised when scanning cannot go on: unreadable file or unterminated construct."""


def _to_single(value: float) -> float | None:
    """Round ``value`` to single precision, or None if it does not fit."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return None


class Scanner:
    """Reads tokens from a source file, with look-ahead and repositioning."""

    def __init__(self, path: Union[str, PathLike], logger: Logger) -> None:
        self.path = Path(path)
        self.logger = logger
        self._name = str(path)
        self._tokens: deque[Token] = deque()
        self._line_no = 1
        self._char_no = 0
        self._ch = "\0"
        self._eof = False
        try:
            self._file: BinaryIO = open(self.path, "rb")
        except OSError:
            logger.error("", f"cannot open file: {self._name}.")
            raise ScannerError(f"cannot open file: {self._name}") from None
        self._read()

    # -- public interface -------------------------------------------------

    def peek(self, advance: bool = False) -> Token:
        """Look at an upcoming token; with ``advance``, scan one more ahead."""
        if not self._tokens:
            self._tokens.append(self._scan_token())
            return self._tokens[-1]
        if advance:
            token = self._tokens[-1]
            self._tokens.append(self._scan_token())
            return token
        return self._tokens[0]

    def next(self) -> Token:
        """Remove and return the current token."""
        if not self._tokens:
            return self._scan_token()
        return self._tokens.popleft()

    def seek(self, pos: FilePos) -> None:
        """Reposition the scanner at the start of the token found at ``pos``."""
        self._file.seek(max(pos.offset - 1, 0))
        self._tokens.clear()
        self._line_no = pos.line_no
        self._char_no = pos.char_no - 1
        self._ch = "\0"
        self._eof = False
        self._read()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> Scanner:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, ending with the end-of-file token."""
        while True:
            token = self.next()
            yield token
            if token.type is TokenType.EOF:
                return

    # -- character level --------------------------------------------------

    def _read(self) -> None:
        if self._ch == "\n":
            self._line_no += 1
            self._char_no = 0
        try:
            data = self._file.read(1)
        except OSError:
            self.logger.error(self._name, "error reading file.")
            raise ScannerError(f"error reading file: {self._name}") from None
        self._char_no += 1
        if data:
            self._ch = data.decode("latin-1")
        else:
            self._eof = True
            self._ch = ""

    def _current(self) -> FilePos:
        return FilePos(self._name, self._line_no, self._char_no, self._file.tell())

    def _fail(self, pos: FilePos, msg: str) -> ScannerError:
        self.logger.error(pos, msg)
        return ScannerError(f"{self._name}:{pos}: {msg}")

    # -- token level ------------------------------------------------------

    def _scan_token(self) -> Token:
        while True:
            while not self._eof and self._ch in _WHITESPACE:
                self._read()
            pos = self._current()
            if self._eof:
                return Token(TokenType.EOF, pos)
            ch = self._ch
            if ch == "_" or (ch.isascii() and ch.isalpha()):
                return self._scan_ident()
            if ch in _DIGITS:
                return self._scan_number()
            if ch == '"':
                return self._scan_string()

            self._read()
            kind = _SINGLE_CHAR.get(ch)
            if kind is not None:
                return Token(kind, pos)
            if ch in _WITH_EQUALS:
                plain, combined = _WITH_EQUALS[ch]
                if self._ch == "=":
                    self._read()
                    return Token(combined, pos, self._current())
                return Token(plain, pos)
            if ch == ".":
                return self._scan_period(pos)
            if ch == "(":
                if self._ch == "*":
                    self._scan_comment(pos)
                    continue
                return Token(TokenType.LPAREN, pos)
            self.logger.error(pos, "bad character.")

    def _scan_period(self, pos: FilePos) -> Token:
        if not self._eof and self._ch == ".":
            self._read()
            if not self._eof and self._ch == ".":
                self._read()
                return Token(TokenType.VARARGS, pos, self._current())
            return Token(TokenType.RANGE, pos, self._current())
        return Token(TokenType.PERIOD, pos, self._current())

    def _scan_comment(self, pos: FilePos) -> None:
        self._read()
        while True:
            while True:
                while not self._eof and self._ch == "(":
                    nested = self._current()
                    self._read()
                    if self._ch == "*":
                        self._scan_comment(nested)
                if self._ch == "*":
                    self._read()
                    break
                if self._eof:
                    raise self._fail(pos, "comment not closed.")
                self._read()
            if self._ch == ")":
                self._read()
                return
            if self._eof:
                raise self._fail(pos, "comment not closed.")

    def _scan_ident(self) -> Token:
        pos = self._current()
        chars = []
        while True:
            chars.append(self._ch)
            self._read()
            ch = self._ch
            if self._eof or not (ch == "_" or (ch.isascii() and ch.isalnum())):
                break
        ident = "".join(chars)
        if ident in _BOOLEANS:
            return BooleanLiteralToken(pos, self._current(), _BOOLEANS[ident])
        kind = _KEYWORDS.get(ident)
        if kind is not None:
            return Token(kind, pos, self._current())
        return IdentToken(pos, self._current(), ident)

    def _scan_number(self) -> Token:
        pos = self._current()
        chars = []
        is_float = False
        while not self._eof and self._ch in _NUMBER_CHARS:
            chars.append(self._ch)
            self._read()
            if self._ch == ".":
                offset = self._file.tell()
                self._read()
                if self._ch == ".":
                    # A range follows: step back so that ".." is scanned next.
                    self._file.seek(offset)
                    self._char_no -= 1
                    break
                chars.append(".")
                is_float = True
            if is_float and self._ch in ("+", "-"):
                chars.append(self._ch)
                self._read()

        is_hex = is_char = False
        if self._ch in ("H", "X"):
            if is_float:
                self.logger.error(pos, "undefined number.")
                token = UndefinedToken(pos, self._ch)
                self._read()
                return token
            is_hex = self._ch == "H"
            is_char = not is_hex
            self._read()

        num = "".join(chars)
        if is_float:
            return self._real_token(pos, num)
        if is_char:
            return self._char_token(pos, num)
        return self._integer_token(pos, num, is_hex)

    def _real_token(self, pos: FilePos, num: str) -> Token:
        text = num.upper()
        index = text.rfind("D")
        if index >= 0:
            text = text[:index] + "E" + text[index + 1 :]
        try:
            value: float | None = float(text)
        except ValueError:
            value = None
        if value is not None and math.isinf(value):
            value = None
        if index < 0 and value is not None:
            single = _to_single(value)
            if single is not None:
                # Too small for single precision but not zero: keep the double.
                if single == 0 and value != 0:
                    return DoubleLiteralToken(pos, self._current(), value)
                return FloatLiteralToken(pos, self._current(), single)
        if value is None:
            self.logger.error(pos, f"invalid floating-point literal: {text}.")
            value = 0.0
        return DoubleLiteralToken(pos, self._current(), value)

    def _char_token(self, pos: FilePos, num: str) -> Token:
        try:
            value = int(num, 16)
        except ValueError:
            value = None
        if value is None or value >= 256:
            self.logger.error(pos, f"invalid character literal: {num}.")
            value = 0
        return CharLiteralToken(pos, self._current(), value)

    def _integer_token(self, pos: FilePos, num: str, is_hex: bool) -> Token:
        is_long = is_int = True
        try:
            value = int(num, 16 if is_hex else 10)
            if value > _UINT64_MAX:
                raise ValueError(num)
        except ValueError:
            self.logger.error(pos, f"invalid integer literal: {num}.")
            value = 0
        else:
            if is_hex:
                # Hexadecimal integers are unsigned.
                is_long = value > _UINT32_MAX
                is_int = value > _UINT16_MAX
            else:
                is_long = value > _INT32_MAX
                is_int = value > _INT16_MAX
        end = self._current()
        if is_long:
            return LongLiteralToken(pos, end, value)
        if is_int:
            return IntLiteralToken(pos, end, value)
        return ShortLiteralToken(pos, end, value)

    def _scan_string(self) -> Token:
        pos = self._current()
        chars = []
        self._read()
        while self._ch != '"':
            if self._eof:
                raise self._fail(pos, 'Missing closing " for string')
            chars.append(self._ch)
            if self._ch == "\\":
                self._read()
                chars.append(self._ch)
            self._read()
        self._read()
        text = unescape("".join(chars))
        if len(text) <= 1:
            return CharLiteralToken(pos, self._current(), ord(text) if text else 0)
        return StringLiteralToken(pos, self._current(), text)