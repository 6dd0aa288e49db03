# oberon0

The front end of an Oberon-0 compiler. It has a scanner that turns
Oberon-0 source files into tokens. It also has a small logger that
reports diagnostics together with their file positions.

## Installation

```
pip install .
```

## Scanning a file

```python
from oberon0.logger import Logger, LogLevel
from oberon0.scanner import Scanner
from oberon0.tokens import TokenType

logger = Logger()
with Scanner("Sort0.Mod", logger) as scanner:
    for token in scanner:
        print(token.start, token)

print("errors:", logger.count(LogLevel.ERROR))
```

`Scanner(path, logger)` opens the file and reads it one token at a time.
Using the scanner in a `with` block, or calling `close()`, closes the file.

- `next()` removes and returns the current token.
- `peek()` returns the current token and leaves it in place.
- `peek(True)` scans one more token ahead on each call. It returns the
  token that was last in the look-ahead queue.
- `seek(pos)` moves the scanner back to the start of a token, given that
  token's `start` position. It also discards any look-ahead.
- Iterating over a scanner yields the remaining tokens. The last one has
  the type `TokenType.EOF`.

Every token has a `type` (a `TokenType`), plus a `start` and an `end`
(`FilePos`). `str(token)` gives a readable form such as `identifier: x`.

- Keywords and operators get their own token types, for example
  `TokenType.KW_MODULE`, `TokenType.OP_DIV` and `TokenType.OP_BECOMES`.
- Identifiers become an `IdentToken`.
- `TRUE` and `FALSE` become a `BooleanLiteralToken`.

Numbers become the smallest literal token that holds them:

- Decimal integers become `ShortLiteralToken` (up to 32767),
  `IntLiteralToken` (up to 2147483647) or `LongLiteralToken`.
- Integers with an `H` suffix are hexadecimal and unsigned. They become
  `ShortLiteralToken` up to `0FFFFH`, `IntLiteralToken` up to
  `0FFFFFFFFH`, and `LongLiteralToken` above that.
- Hexadecimal numbers with an `X` suffix become a `CharLiteralToken`,
  whose `value` is the byte value.
- Real numbers become a `FloatLiteralToken` when single precision can
  hold them. Otherwise they become a `DoubleLiteralToken`. An exponent
  written with `D` always gives a `DoubleLiteralToken`.
- A real number with an `H` or `X` suffix becomes an `UndefinedToken`.

A quoted string becomes a `StringLiteralToken`. If it holds at most one
character after its escapes are resolved, it becomes a
`CharLiteralToken` instead. Comments `(* ... *)` may be nested.

Some problems cannot be recovered from: a file that cannot be opened or
read, a comment that is never closed, or a string that is never closed.
In these cases the scanner logs an error and raises
`oberon0.scanner.ScannerError`. Smaller problems are logged and scanning
goes on. These include a bad character and an invalid integer, real or
character literal.

## Positions

`oberon0.position.FilePos` is a frozen dataclass. Its fields are
`file_name`, `line_no`, `char_no` and `offset`. `str(pos)` gives
`line:column`. `EMPTY_POS` is the all-default position.

## Logging

```python
from oberon0.logger import Logger, LogLevel
from oberon0.position import FilePos

logger = Logger(LogLevel.WARNING)
logger.warning(FilePos("Test.Mod", 3, 7, 0), "unused variable.")
logger.error("", "no input file.")
print(logger.warning_count, logger.error_count)
```

The constructor is `Logger(level, out, err)`. Errors go to `err` and
other messages go to `out`. The defaults are standard error and standard
output. If only `out` is given, errors go there as well.

A message is printed only when its level is at or above the logger's
`level`. Every message is counted whether or not it is printed; use
`count(level)` to read the counts. `error()` and `warning()` take either
a `FilePos` or a file name. An empty file name is reported as
`oberon0c`. If `warn_as_error` is set, warnings are counted and printed
as errors.

## String escapes

`escape` and `unescape` in `oberon0.scanner` convert between raw text and
its backslash-escaped form, as used in string literals.

## What this package does not do

The package stops at tokens. It does not parse Oberon-0, check types,
or generate or run code. It also has no command-line program.