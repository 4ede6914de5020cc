"""Recursive descent parser for filtering expressions.

Grammar::

    expr      : term (OR term)*
    term      : factor (AND factor)*
    factor    : ?NOT (LPAREN expr RPAREN | condition)
    condition : FIELD ((== | !=) (STRING | NUMBER | NULL)
                | (~ | !~) STRING
                | := STRING
                | (> | >= | < | <=) (NUMBER | STRING)
                | IN (STRING_ARRAY | NUMBER_ARRAY))
"""

from __future__ import annotations

from typing import Any, Callable

from atlaskit.query.filtering import (
    Expression,
    Filtering,
    LogicalOperator,
    LogicalType,
    NullCondition,
    NumberArrayCondition,
    NumberArrayConditionType,
    NumberCondition,
    NumberConditionType,
    StringArrayCondition,
    StringArrayConditionType,
    StringCondition,
    StringConditionType,
)
from atlaskit.query.lexer import FilteringLexer, Token, TokenKind, UnexpectedTokenError

_Builder = Callable[[list[str], Any], Expression]


def _string(kind: StringConditionType, negative: bool = False) -> _Builder:
    return lambda path, value: StringCondition(path, value, kind, negative)


def _number(kind: NumberConditionType, negative: bool = False) -> _Builder:
    return lambda path, value: NumberCondition(path, value, kind, negative)


def _null(negative: bool) -> _Builder:
    return lambda path, _value: NullCondition(path, negative)


def _comparison(string_kind: StringConditionType, number_kind: NumberConditionType):
    return {
        TokenKind.NUMBER: _number(number_kind),
        TokenKind.STRING: _string(string_kind),
    }


_CONDITIONS: dict[TokenKind, dict[TokenKind, _Builder]] = {
    TokenKind.EQ: {
        TokenKind.STRING: _string(StringConditionType.EQ),
        TokenKind.NUMBER: _number(NumberConditionType.EQ),
        TokenKind.NULL: _null(False),
    },
    TokenKind.NE: {
        TokenKind.STRING: _string(StringConditionType.EQ, True),
        TokenKind.NUMBER: _number(NumberConditionType.EQ, True),
        TokenKind.NULL: _null(True),
    },
    TokenKind.MATCH: {TokenKind.STRING: _string(StringConditionType.MATCH)},
    TokenKind.NMATCH: {TokenKind.STRING: _string(StringConditionType.MATCH, True)},
    TokenKind.IEQ: {TokenKind.STRING: _string(StringConditionType.IEQ)},
    TokenKind.GT: _comparison(StringConditionType.GT, NumberConditionType.GT),
    TokenKind.GE: _comparison(StringConditionType.GE, NumberConditionType.GE),
    TokenKind.LT: _comparison(StringConditionType.LT, NumberConditionType.LT),
    TokenKind.LE: _comparison(StringConditionType.LE, NumberConditionType.LE),
    TokenKind.IN: {
        TokenKind.STRING_ARRAY: lambda path, values: StringArrayCondition(
            path, list(values), StringArrayConditionType.IN
        ),
        TokenKind.NUMBER_ARRAY: lambda path, values: NumberArrayCondition(
            path, list(values), NumberArrayConditionType.IN
        ),
    },
}


class _Descent:
    """Parsing state for a single expression."""

    def __init__(self, text: str) -> None:
        self._lexer = FilteringLexer(text)
        self.current: Token = self._lexer.next_token()

    def _eat(self) -> None:
        self.current = self._lexer.next_token()

    def _at(self, kind: TokenKind) -> bool:
        return self.current.kind is kind

    def expr(self) -> Expression:
        node = self.term()
        while self._at(TokenKind.OR):
            self._eat()
            node = LogicalOperator(node, self.term(), LogicalType.OR)
        return node

    def term(self) -> Expression:
        node = self.factor()
        while self._at(TokenKind.AND):
            self._eat()
            node = LogicalOperator(node, self.factor(), LogicalType.AND)
        return node

    def factor(self) -> Expression:
        negate = self._at(TokenKind.NOT)
        if negate:
            self._eat()
        if self._at(TokenKind.LPAREN):
            self._eat()
            node = self.expr()
            if not self._at(TokenKind.RPAREN):
                raise UnexpectedTokenError(self.current)
            self._eat()
        else:
            node = self.condition()
        if negate:
            node.is_negative = not node.is_negative
        return node

    def condition(self) -> Expression:
        if not self._at(TokenKind.FIELD):
            raise UnexpectedTokenError(self.current)
        path = self.current.value.split(".")
        self._eat()
        builders = _CONDITIONS.get(self.current.kind)
        if builders is None:
            raise UnexpectedTokenError(self.current)
        self._eat()
        build = builders.get(self.current.kind)
        if build is None:
            raise UnexpectedTokenError(self.current)
        value = self.current.value
        self._eat()
        return build(path, value)


class FilteringParser:
    """Builds a filtering tree from an expression."""

    def parse(self, text: str) -> Filtering | None:
        """Parse ``text``; return None when it holds no expression.

        Raises UnexpectedTokenError or UnexpectedSymbolError on bad syntax.
        """
        state = _Descent(text)
        if state.current.kind is TokenKind.EOF:
            return None
        node = state.expr()
        if state.current.kind is not TokenKind.EOF:
            raise UnexpectedTokenError(state.current)
        return Filtering(node)


def parse_filtering(text: str) -> Filtering | None:
    """Parse a filtering expression with the default parser."""
    return FilteringParser().parse(text)


def apply_filter(obj: Any, text: str) -> bool:
    """Parse ``text`` and evaluate it against ``obj``; an empty filter matches."""
    filtering = parse_filtering(text)
    if filtering is None:
        return True
    return filtering.filter(obj)