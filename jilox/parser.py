"""Recursive descent parser for jilox expressions.

Grammar (precedence low to high):
    expression → equality
    equality   → comparison ( ("!=" | "==") comparison )*
    comparison → term ( (">" | ">=" | "<" | "<=") term )*
    term       → factor ( ("-" | "+") factor )*
    factor     → unary ( ("/" | "*") unary )*
    unary      → ("!" | "-") unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

There is no error recovery: the first malformed token raises ``ParseError``.
Once statements exist, the parser will need to synchronize at statement
boundaries instead.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from jilox.errors import ParseError
from jilox.expr import Binary, Expr, Grouping, Literal, Unary
from jilox.tokens import Token, TokenType

logger = logging.getLogger(__name__)

_LITERAL_KEYWORDS = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NIL: None,
}


class Parser:
    """Parses a token list into a single expression tree."""

    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("Token sequence must end with an EOF token")
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != TokenType.EOF:
            self.pos += 1
        return tok

    def _match(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def parse(self) -> Expr:
        try:
            expr = self.expression()
        except RecursionError:
            raise ParseError.at(self.peek(), "Expression nested too deeply.") from None
        if not self._match(TokenType.EOF):
            raise ParseError.at(self.peek(), "Expected end of expression.")
        logger.debug("Parsed expression from %d tokens", len(self.tokens))
        return expr

    # -- Grammar rules --

    def expression(self) -> Expr:
        return self.equality()

    def _binary(self, operand: Callable[[], Expr], *operators: TokenType) -> Expr:
        """Left-associative fold of ``operand (operator operand)*``."""
        expr = operand()
        while self._match(*operators):
            operator = self.advance()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self._binary(
            self.term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self) -> Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self.advance()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        tok = self.peek()
        if tok.type in (TokenType.NUMBER, TokenType.STRING):
            self.advance()
            return Literal(tok.literal, tok)
        if tok.type in _LITERAL_KEYWORDS:
            self.advance()
            return Literal(_LITERAL_KEYWORDS[tok.type], tok)
        if tok.type == TokenType.LEFT_PAREN:
            self.advance()
            inner = self.expression()
            if not self._match(TokenType.RIGHT_PAREN):
                raise ParseError.at(self.peek(), "Expected closing ).")
            self.advance()
            return Grouping(inner, tok)
        raise ParseError.at(tok, "Expected expression.")


def parse(tokens: List[Token]) -> Expr:
    """Parse ``tokens`` (which must end with EOF) into one expression."""
    return Parser(tokens).parse()
