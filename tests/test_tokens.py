import dataclasses

import pytest

from oberon0.position import FilePos
from oberon0.tokens import (
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

POS = FilePos("t.Mod", 2, 4, 10)
END = FilePos("t.Mod", 2, 9, 15)


@pytest.mark.parametrize(
    "token_type, text",
    [
        (TokenType.EOF, "<eof>"),
        (TokenType.UNDEF, "<undefined>"),
        (TokenType.CONST_IDENT, "identifier"),
        (TokenType.RANGE, ".."),
        (TokenType.VARARGS, "..."),
        (TokenType.OP_BECOMES, ":="),
        (TokenType.OP_DIV, "DIV"),
        (TokenType.OP_NEQ, "#"),
        (TokenType.KW_MODULE, "MODULE"),
        (TokenType.LONG_LITERAL, "LONGINT literal"),
        (TokenType.FLOAT_LITERAL, "REAL literal"),
    ],
)
def test_token_type_names(token_type, text):
    assert str(token_type) == text


@pytest.mark.parametrize(
    "token_type",
    [TokenType.CARET, TokenType.OP_DIVIDE, TokenType.OP_IN, TokenType.OP_IS, TokenType.KW_POINTER],
)
def test_unnamed_token_types(token_type):
    assert str(token_type) == "undefined token"


def test_token_default_end_is_next_char():
    comma = Token(TokenType.COMMA, POS)
    assert comma.end == dataclasses.replace(POS, char_no=POS.char_no + 1)
    assert comma.start == POS
    assert str(comma) == ","


def test_token_explicit_end():
    leq = Token(TokenType.OP_LEQ, POS, END)
    assert leq.end == END
    assert leq.type is TokenType.OP_LEQ


def test_ident_token():
    ident = IdentToken(POS, END, "Sort0")
    assert ident.type is TokenType.CONST_IDENT
    assert ident.value == "Sort0"
    assert str(ident) == "identifier: Sort0"


def test_undefined_token():
    undefined = UndefinedToken(POS, "?")
    assert undefined.type is TokenType.UNDEF
    assert undefined.value == "?"
    assert str(undefined) == "<undefined>: ?"
    assert undefined.end.char_no == POS.char_no + 1


def test_boolean_literal():
    true_lit = BooleanLiteralToken(POS, END, True)
    false_lit = BooleanLiteralToken(POS, END, False)
    assert true_lit.type is TokenType.BOOLEAN_LITERAL
    assert true_lit.value is True
    assert str(true_lit).startswith("BOOLEAN literal: ")
    assert str(true_lit).endswith("TRUE")
    assert str(false_lit).endswith("FALSE")


def test_integer_literals_keep_value_and_type():
    assert ShortLiteralToken(POS, END, -5).value == -5
    assert IntLiteralToken(POS, END, 70000).value == 70000
    assert LongLiteralToken(POS, END, 2**40).value == 2**40
    assert IntLiteralToken(POS, END, 42).type is TokenType.INT_LITERAL
    assert str(IntLiteralToken(POS, END, 42)) == "INTEGER literal: 42"


@pytest.mark.parametrize(
    "cls, bits",
    [(ShortLiteralToken, 16), (IntLiteralToken, 32), (LongLiteralToken, 64)],
)
def test_integer_literals_wrap_to_width(cls, bits):
    value = cls(POS, END, 2 ** (bits - 1)).value
    assert value == -(2 ** (bits - 1))
    assert cls(POS, END, 2**bits - 1).value == -1


def test_char_literal_shows_character():
    char_lit = CharLiteralToken(POS, END, ord("x"))
    assert char_lit.value == ord("x")
    assert str(char_lit) == "CHAR literal: x"


def test_string_literal():
    string_lit = StringLiteralToken(POS, END, "hello")
    assert string_lit.value == "hello"
    assert str(string_lit) == "STRING literal: hello"


def test_float_literal_is_single_precision():
    real_lit = FloatLiteralToken(POS, END, 0.1)
    assert real_lit.type is TokenType.FLOAT_LITERAL
    assert abs(real_lit.value - 0.1) < 1e-7
    assert real_lit.value != DoubleLiteralToken(POS, END, 0.1).value


def test_double_literal_keeps_value():
    longreal_lit = DoubleLiteralToken(POS, END, 0.1)
    assert longreal_lit.value == 0.1
    assert str(longreal_lit) == "LONGREAL literal: 0.1"


def test_float_literal_exact_values_print_plainly():
    assert str(FloatLiteralToken(POS, END, 1.5)) == "REAL literal: 1.5"