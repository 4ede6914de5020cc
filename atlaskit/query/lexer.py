"""Lexical analysis of filtering expressions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Union

_EOF_CHAR = "\0"


class TokenKind(enum.Enum):
    """Kinds of tokens in a filtering expression."""

    LPAREN = "("
    RPAREN = ")"
    NUMBER = "number"
    STRING = "string"
    FIELD = "field"
    AND = "and"
    OR = "or"
    NOT = "not"
    EQ = "=="
    IEQ = ":="
    NE = "!="
    MATCH = "~"
    NMATCH = "!~"
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    NULL = "null"
    IN = "in"
    STRING_ARRAY = "string_array"
    NUMBER_ARRAY = "number_array"
    EOF = "EOF"


_VALUED = {
    TokenKind.NUMBER,
    TokenKind.STRING,
    TokenKind.FIELD,
    TokenKind.STRING_ARRAY,
    TokenKind.NUMBER_ARRAY,
}

_RESERVED = {
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "not": TokenKind.NOT,
    "null": TokenKind.NULL,
    "eq": TokenKind.EQ,
    "ne": TokenKind.NE,
    "gt": TokenKind.GT,
    "ge": TokenKind.GE,
    "lt": TokenKind.LT,
    "le": TokenKind.LE,
    "match": TokenKind.MATCH,
    "nomatch": TokenKind.NMATCH,
    "in": TokenKind.IN,
    "ieq": TokenKind.IEQ,
}

TokenValue = Union[None, float, str, tuple]


def _format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class Token:
    """A token; literals, fields and arrays carry a value."""

    kind: TokenKind
    value: TokenValue = None

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return _format_number(self.value)
        if self.kind in (TokenKind.STRING, TokenKind.FIELD):
            return self.value
        if self.kind is TokenKind.NUMBER_ARRAY:
            return "[" + " ".join(_format_number(v) for v in self.value) + "]"
        if self.kind is TokenKind.STRING_ARRAY:
            return "[" + " ".join(self.value) + "]"
        return self.kind.value


class UnexpectedSymbolError(ValueError):
    """A symbol that the filtering syntax does not allow at its position."""

    def __init__(self, symbol: str, pos: int) -> None:
        super().__init__(f"Unexpected symbol {symbol} in {pos} position")
        self.symbol = symbol
        self.pos = pos


class UnexpectedTokenError(ValueError):
    """A token that the filtering syntax does not allow at its position."""

    def __init__(self, token: Token) -> None:
        super().__init__(f"Unexpected token {token}")
        self.token = token


class FilteringLexer:
    """Splits a filtering expression into tokens."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._eof = not text
        self._cur = text[0] if text else _EOF_CHAR

    def _advance(self) -> None:
        self._pos += 1
        if self._pos < len(self._text):
            self._cur = self._text[self._pos]
        else:
            self._eof = True
            self._cur = _EOF_CHAR

    def _error(self) -> UnexpectedSymbolError:
        return UnexpectedSymbolError(self._cur, self._pos)

    def _number(self) -> Token:
        chars = [self._cur]
        met_dot = False
        self._advance()
        while not self._eof:
            if self._cur.isdecimal():
                chars.append(self._cur)
            elif not met_dot and self._cur == ".":
                chars.append(self._cur)
                met_dot = True
            else:
                break
            self._advance()
        text = "".join(chars)
        try:
            return Token(TokenKind.NUMBER, float(text))
        except ValueError:
            raise ValueError(f"invalid number {text!r}") from None

    def _string(self) -> Token:
        term = self._cur
        chars = []
        self._advance()
        while True:
            if self._eof:
                raise self._error()
            if self._cur == term:
                self._advance()
                if self._cur != term:
                    break
                # a doubled terminator stands for itself
            chars.append(self._cur)
            self._advance()
        return Token(TokenKind.STRING, "".join(chars))

    def _array(self) -> Token:
        self._advance()
        if self._cur == "]":
            raise self._error()
        if self._cur.isdecimal():
            read, kind = self._number, TokenKind.NUMBER_ARRAY
        elif self._cur in ("'", '"'):
            read, kind = self._string, TokenKind.STRING_ARRAY
        else:
            raise self._error()
        values = []
        while self._cur != "]":
            if self._cur.isspace() or self._cur == ",":
                self._advance()
                continue
            if self._eof:
                raise self._error()
            values.append(read().value)
        self._advance()
        return Token(kind, tuple(values))

    def _field_or_reserved(self) -> Token:
        chars = [self._cur]
        self._advance()
        while not self._eof and (
            self._cur.isdecimal() or self._cur.isalpha() or self._cur in ".-_"
        ):
            chars.append(self._cur)
            self._advance()
        word = "".join(chars)
        kind = _RESERVED.get(word)
        if kind is not None:
            return Token(kind)
        return Token(TokenKind.FIELD, word)

    def _pair(self, single: TokenKind | None, follow: dict[str, TokenKind]) -> Token:
        self._advance()
        kind = follow.get(self._cur)
        if kind is not None:
            self._advance()
            return Token(kind)
        if single is None:
            raise self._error()
        return Token(single)

    def next_token(self) -> Token:
        """Return the next token, or an EOF token at the end of input."""
        while not self._eof:
            c = self._cur
            if c.isspace():
                self._advance()
            elif c == "(":
                self._advance()
                return Token(TokenKind.LPAREN)
            elif c == ")":
                self._advance()
                return Token(TokenKind.RPAREN)
            elif c == "~":
                self._advance()
                return Token(TokenKind.MATCH)
            elif c == "=":
                return self._pair(None, {"=": TokenKind.EQ})
            elif c == "!":
                return self._pair(None, {"=": TokenKind.NE, "~": TokenKind.NMATCH})
            elif c == ">":
                return self._pair(TokenKind.GT, {"=": TokenKind.GE})
            elif c == "<":
                return self._pair(TokenKind.LT, {"=": TokenKind.LE})
            elif c == ":":
                return self._pair(None, {"=": TokenKind.IEQ})
            elif c in ("'", '"'):
                return self._string()
            elif c == "[":
                return self._array()
            elif c.isdecimal():
                return self._number()
            elif c.isalpha():
                return self._field_or_reserved()
            else:
                raise self._error()
        return Token(TokenKind.EOF)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, but not including, the EOF token."""
        while True:
            token = self.next_token()
            if token.kind is TokenKind.EOF:
                return
            yield token