"""
Lexical analyzer for linecalc.

This module turns one line of input into a lazy stream of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Produces tokens on demand with `current()`, `advance()` and `peek()`.
    LexError: Raised for characters or literals the language does not accept.

Features:
    - Skips any whitespace, including non-ASCII spaces
    - Number literals of the form `digits [. digits] [e digits]`
    - Single-character operators `+ - * / ^ ( ) , =`
    - Command and function keywords, matched in table order by prefix
    - Single-letter variables `a`..`z`

Example:
    >>> lexer = Lexer(CharacterStream("2x"))
    >>> lexer.advance()
    Token(NUMBER, 2.0)
    >>> lexer.peek()
    Token(IDENT, x)
    >>> lexer.current()
    Token(NUMBER, 2.0)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - LexError
    - tokenize
"""

import math
from typing import Any

from linecalc.linecalc_constants import (
    COMMAND_KEYWORDS,
    FUNCTION_KEYWORDS,
    VARIABLE_NAMES,
    token_hashmap,
)

StreamMark = tuple[int, int, int]


class LexError(SyntaxError):
    """Raised when the input contains something that cannot start a token.

    Attributes:
        description (str): What went wrong, without location.
        line (int): Line of the offending character.
        col (int): Column of the offending character.
    """

    def __init__(self, description: str, line: int = 1, col: int = 1):
        super().__init__(f"Syntax error: {description} (col {col})")
        self.description = description
        self.line = line
        self.col = col


class CharacterStream:
    """Cursor over one line of input.

    `peek()` never fails: past the end it returns "". Only `next()` moves the
    cursor, keeping `line` and `column` (both 1-based) in step with it.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1

    def next(self) -> str:
        """Consume one character.

        Raises:
            AssertionError: If the lexer reads past the end of the line.
        """
        char = self.peek()
        if not char:
            raise AssertionError(f"read past end of input at position {self.position}")
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        index = self.position + offset
        return self.source[index] if 0 <= index < len(self.source) else ""

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)

    def starts_with(self, text: str) -> bool:
        return self.source.startswith(text, self.position)

    def mark(self) -> StreamMark:
        """Snapshot the cursor so it can be restored with `reset()`."""
        return self.position, self.line, self.column

    def reset(self, mark: StreamMark) -> None:
        self.position, self.line, self.column = mark


class Token:
    """Represents a single lexical token.

    Attributes:
        type (str): The token type (e.g. 'NUMBER', 'IDENT', 'FUNC', 'EOF').
        value (str | float): The literal value; a float for NUMBER tokens.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str | float, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.type == "EOF":
            return "end of input"
        if self.type == "NUMBER":
            return f"number {self.value!r}"
        return f"'{self.value}'"


def _is_digit(ch: str) -> bool:
    # str.isdigit() accepts superscripts and other scripts that float() rejects
    return ch != "" and "0" <= ch <= "9"


class Lexer:
    """Lexical analyzer for linecalc.

    The Lexer reads from a CharacterStream and keeps exactly one produced token,
    available through `current()`. `advance()` scans the next one, and `peek()`
    scans ahead without moving by snapshotting and restoring the stream.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.current_token = Token("EOF", "EOF", stream.line, stream.column)

    def current(self) -> Token:
        """Returns the last produced token without consuming input."""
        return self.current_token

    def advance(self) -> Token:
        """Consumes input and returns the next token, which becomes current.

        Raises:
            LexError: On an unrecognized character or a malformed number.
        """
        self.current_token = self.next_token()
        return self.current_token

    def peek(self) -> Token:
        """Returns the token after the current one without consuming it."""
        mark = self.stream.mark()
        saved = self.current_token
        try:
            return self.advance()
        finally:
            self.stream.reset(mark)
            self.current_token = saved

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.stream.peek().isspace():
            self.stream.next()

    def scan_digits(self) -> str:
        digits = ""
        while _is_digit(self.stream.peek()):
            digits += self.stream.next()
        return digits

    def scan_number(self, line: int, col: int) -> Token:
        """Scan `digits [. digits] [e digits]` into a NUMBER token.

        The `e` is only an exponent marker when a digit follows it; otherwise it
        is left in the stream for the next token.
        """
        text = self.scan_digits()

        if self.stream.peek() == ".":
            text += self.stream.next()
            decimals = self.scan_digits()
            if not decimals:
                raise LexError("no digits following '.'", line, col)
            text += decimals

        if self.stream.peek() == "e" and _is_digit(self.stream.peek(1)):
            text += self.stream.next()
            text += self.scan_digits()

        value = float(text)
        if not math.isfinite(value):
            raise LexError(f"number literal out of range: {text}", line, col)
        return Token("NUMBER", value, line, col)

    def scan_name(self, line: int, col: int) -> Token:
        """Scan a command keyword, a function keyword, or a one-letter variable."""
        for keyword_type, keywords in (
            ("COMMAND", COMMAND_KEYWORDS),
            ("FUNC", FUNCTION_KEYWORDS),
        ):
            for keyword in keywords:
                if self.stream.starts_with(keyword):
                    for _ in keyword:
                        self.stream.next()
                    return Token(keyword_type, keyword, line, col)

        return Token("IDENT", self.stream.next(), line, col)

    def next_token(self) -> Token:
        """Scans and returns the next Token from the stream.

        Raises:
            LexError: If a malformed token is encountered.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "EOF", line, col)

        ch = self.stream.peek()

        # 1. Number
        if _is_digit(ch) or ch == ".":
            return self.scan_number(line, col)

        # 2. Operator
        if ch in token_hashmap:
            self.stream.next()
            return Token(token_hashmap[ch], ch, line, col)

        # 3. Keyword or variable
        if ch in VARIABLE_NAMES:
            return self.scan_name(line, col)

        # 4. Unknown character
        raise LexError(f"unrecognized character: {ch!r}", line, col)


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole line, returning every token up to and including EOF."""
    lexer = Lexer(CharacterStream(source))
    tokens = [lexer.advance()]
    while tokens[-1].type != "EOF":
        tokens.append(lexer.advance())
    return tokens


__all__ = ["CharacterStream", "LexError", "Lexer", "Token", "token_hashmap", "tokenize"]
