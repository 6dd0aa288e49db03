"""Tokens produced by the scanner."""

from __future__ import annotations

import struct
from dataclasses import replace
from enum import Enum, auto
from typing import Any

from .position import FilePos

__all__ = [
    "TokenType",
    "Token",
    "LiteralToken",
    "BooleanLiteralToken",
    "ShortLiteralToken",
    "IntLiteralToken",
    "LongLiteralToken",
    "FloatLiteralToken",
    "DoubleLiteralToken",
    "StringLiteralToken",
    "CharLiteralToken",
    "IdentToken",
    "UndefinedToken",
]


class TokenType(Enum):
    EOF = auto()
    UNDEF = auto()
    BOOLEAN_LITERAL = auto()
    BYTE_LITERAL = auto()
    CHAR_LITERAL = auto()
    SHORT_LITERAL = auto()
    INT_LITERAL = auto()
    LONG_LITERAL = auto()
    FLOAT_LITERAL = auto()
    DOUBLE_LITERAL = auto()
    STRING_LITERAL = auto()
    CONST_IDENT = auto()
    PERIOD = auto()
    COMMA = auto()
    COLON = auto()
    SEMICOLON = auto()
    RPAREN = auto()
    LPAREN = auto()
    LBRACK = auto()
    RBRACK = auto()
    LBRACE = auto()
    RBRACE = auto()
    CARET = auto()
    VARARGS = auto()
    PIPE = auto()
    RANGE = auto()
    OP_TIMES = auto()
    OP_DIVIDE = auto()
    OP_DIV = auto()
    OP_MOD = auto()
    OP_PLUS = auto()
    OP_MINUS = auto()
    OP_AND = auto()
    OP_OR = auto()
    OP_NOT = auto()
    OP_EQ = auto()
    OP_NEQ = auto()
    OP_LT = auto()
    OP_GT = auto()
    OP_LEQ = auto()
    OP_GEQ = auto()
    OP_BECOMES = auto()
    OP_IN = auto()
    OP_IS = auto()
    KW_MODULE = auto()
    KW_IMPORT = auto()
    KW_PROCEDURE = auto()
    KW_EXTERNAL = auto()
    KW_RETURN = auto()
    KW_BEGIN = auto()
    KW_END = auto()
    KW_IF = auto()
    KW_THEN = auto()
    KW_ELSE = auto()
    KW_ELSIF = auto()
    KW_LOOP = auto()
    KW_EXIT = auto()
    KW_WHILE = auto()
    KW_DO = auto()
    KW_REPEAT = auto()
    KW_UNTIL = auto()
    KW_FOR = auto()
    KW_TO = auto()
    KW_BY = auto()
    KW_CASE = auto()
    KW_WITH = auto()
    KW_ARRAY = auto()
    KW_RECORD = auto()
    KW_CONST = auto()
    KW_TYPE = auto()
    KW_VAR = auto()
    KW_OF = auto()
    KW_POINTER = auto()
    KW_NIL = auto()

    def __str__(self) -> str:
        return _DISPLAY_NAMES.get(self, "undefined token")


_DISPLAY_NAMES = {
    TokenType.EOF: "<eof>",
    TokenType.UNDEF: "<undefined>",
    TokenType.BOOLEAN_LITERAL: "BOOLEAN literal",
    TokenType.BYTE_LITERAL: "BYTE literal",
    TokenType.CHAR_LITERAL: "CHAR literal",
    TokenType.SHORT_LITERAL: "SHORTINT literal",
    TokenType.INT_LITERAL: "INTEGER literal",
    TokenType.LONG_LITERAL: "LONGINT literal",
    TokenType.FLOAT_LITERAL: "REAL literal",
    TokenType.DOUBLE_LITERAL: "LONGREAL literal",
    TokenType.STRING_LITERAL: "STRING literal",
    TokenType.CONST_IDENT: "identifier",
    TokenType.PERIOD: ".",
    TokenType.RANGE: "..",
    TokenType.COMMA: ",",
    TokenType.COLON: ":",
    TokenType.SEMICOLON: ";",
    TokenType.LPAREN: "(",
    TokenType.RPAREN: ")",
    TokenType.LBRACK: "[",
    TokenType.RBRACK: "]",
    TokenType.LBRACE: "{",
    TokenType.RBRACE: "}",
    TokenType.VARARGS: "...",
    TokenType.PIPE: "|",
    TokenType.OP_TIMES: "*",
    TokenType.OP_DIV: "DIV",
    TokenType.OP_MOD: "MOD",
    TokenType.OP_PLUS: "+",
    TokenType.OP_MINUS: "-",
    TokenType.OP_AND: "&",
    TokenType.OP_OR: "OR",
    TokenType.OP_NOT: "~",
    TokenType.OP_EQ: "=",
    TokenType.OP_NEQ: "#",
    TokenType.OP_LT: "<",
    TokenType.OP_GT: ">",
    TokenType.OP_LEQ: "<=",
    TokenType.OP_GEQ: ">=",
    TokenType.OP_BECOMES: ":=",
    TokenType.KW_MODULE: "MODULE",
    TokenType.KW_IMPORT: "IMPORT",
    TokenType.KW_PROCEDURE: "PROCEDURE",
    TokenType.KW_BEGIN: "BEGIN",
    TokenType.KW_END: "END",
    TokenType.KW_IF: "IF",
    TokenType.KW_THEN: "THEN",
    TokenType.KW_ELSE: "ELSE",
    TokenType.KW_ELSIF: "ELSIF",
    TokenType.KW_LOOP: "LOOP",
    TokenType.KW_EXIT: "EXIT",
    TokenType.KW_WHILE: "WHILE",
    TokenType.KW_DO: "DO",
    TokenType.KW_REPEAT: "REPEAT",
    TokenType.KW_UNTIL: "UNTIL",
    TokenType.KW_FOR: "FOR",
    TokenType.KW_TO: "TO",
    TokenType.KW_BY: "BY",
    TokenType.KW_CASE: "CASE",
    TokenType.KW_WITH: "WITH",
    TokenType.KW_ARRAY: "ARRAY",
    TokenType.KW_RECORD: "RECORD",
    TokenType.KW_CONST: "CONST",
    TokenType.KW_TYPE: "TYPE",
    TokenType.KW_VAR: "VAR",
    TokenType.KW_OF: "OF",
    TokenType.KW_EXTERNAL: "EXTERNAL",
    TokenType.KW_RETURN: "RETURN",
    TokenType.KW_NIL: "NIL",
}


def _wrap_signed(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    return value - (1 << bits) if value >> (bits - 1) else value


class Token:
    """A token with its type and the span of source it covers."""

    __slots__ = ("type", "start", "end")

    def __init__(self, type: TokenType, start: FilePos, end: FilePos | None = None) -> None:
        self.type = type
        self.start = start
        # Without an explicit end, the token spans a single character.
        self.end = end if end is not None else replace(start, char_no=start.char_no + 1)

    def __str__(self) -> str:
        return str(self.type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type.name}, {self.start!s}-{self.end!s})"


class LiteralToken(Token):
    """A token carrying a literal value."""

    __slots__ = ("value",)

    def __init__(self, type: TokenType, start: FilePos, end: FilePos | None, value: Any) -> None:
        super().__init__(type, start, end)
        self.value = value

    def _shown_value(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return f"{self.type}: {self._shown_value()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r}, {self.start!s}-{self.end!s})"


class BooleanLiteralToken(LiteralToken):
    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: bool) -> None:
        super().__init__(TokenType.BOOLEAN_LITERAL, start, end, bool(value))

    def __str__(self) -> str:
        return f"{self.type}: {'TRUE' if self.value else 'FALSE'}"


class ShortLiteralToken(LiteralToken):
    """A 16-bit signed integer literal."""

    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: int) -> None:
        super().__init__(TokenType.SHORT_LITERAL, start, end, _wrap_signed(value, 16))


class IntLiteralToken(LiteralToken):
    """A 32-bit signed integer literal."""

    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: int) -> None:
        super().__init__(TokenType.INT_LITERAL, start, end, _wrap_signed(value, 32))


class LongLiteralToken(LiteralToken):
    """A 64-bit signed integer literal."""

    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: int) -> None:
        super().__init__(TokenType.LONG_LITERAL, start, end, _wrap_signed(value, 64))


class FloatLiteralToken(LiteralToken):
    """A single-precision real literal."""

    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: float) -> None:
        single = struct.unpack("<f", struct.pack("<f", value))[0]
        super().__init__(TokenType.FLOAT_LITERAL, start, end, single)

    def _shown_value(self) -> str:
        return f"{self.value:g}"


class DoubleLiteralToken(LiteralToken):
    """A double-precision real literal."""

    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: float) -> None:
        super().__init__(TokenType.DOUBLE_LITERAL, start, end, float(value))

    def _shown_value(self) -> str:
        return f"{self.value:g}"


class StringLiteralToken(LiteralToken):
    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: str) -> None:
        super().__init__(TokenType.STRING_LITERAL, start, end, value)


class CharLiteralToken(LiteralToken):
    """A character literal, held as its byte value."""

    __slots__ = ()

    def __init__(self, start: FilePos, end: FilePos | None, value: int) -> None:
        super().__init__(TokenType.CHAR_LITERAL, start, end, value & 0xFF)

    def _shown_value(self) -> str:
        return chr(self.value)


class IdentToken(Token):
    """An identifier."""

    __slots__ = ("value",)

    def __init__(self, start: FilePos, end: FilePos | None, value: str) -> None:
        super().__init__(TokenType.CONST_IDENT, start, end)
        self.value = value

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"


class UndefinedToken(Token):
    """A character the scanner could not make sense of."""

    __slots__ = ("value",)

    def __init__(self, start: FilePos, value: str) -> None:
        super().__init__(TokenType.UNDEF, start)
        self.value = value

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"