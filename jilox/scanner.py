"""Scanner: turns source text into a list of tokens.

Scanning stops at the first character that cannot start a token, at an
unterminated string, or at a malformed number; the error is raised as a
``ParseError`` and no partial token list is returned.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from jilox.errors import ParseError
from jilox.tokens import KEYWORDS, Token, TokenType, to_f32

logger = logging.getLogger(__name__)

_SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Operators that turn into their two-character form when followed by '='.
_EQUAL_SUFFIXED = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

_WHITESPACE = " \r\t"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


class Scanner:
    """Single-pass scanner over a source string."""

    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def _at_end(self) -> bool:
        return self.current >= len(self.source)

    def _peek(self, n: int = 0) -> str:
        i = self.current + n
        return self.source[i] if i < len(self.source) else ""

    def _advance(self) -> str:
        ch = self.source[self.current]
        self.current += 1
        return ch

    def _match(self, expected: str) -> bool:
        if self._peek() != expected:
            return False
        self.current += 1
        return True

    def _lexeme(self) -> str:
        return self.source[self.start:self.current]

    def _add_token(self, type_: TokenType, literal: Optional[Union[str, float]] = None) -> None:
        self.tokens.append(Token(type_, self._lexeme(), literal, self.line))

    def _error(self, message: str) -> ParseError:
        return ParseError(self.line, self._lexeme(), message)

    def scan_tokens(self) -> List[Token]:
        while not self._at_end():
            self.start = self.current
            self._scan_token()
        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        logger.debug("Scanned %d tokens over %d line(s)", len(self.tokens), self.line)
        return self.tokens

    def _scan_token(self) -> None:
        ch = self._advance()
        if ch in _SINGLE_CHAR_TOKENS:
            self._add_token(_SINGLE_CHAR_TOKENS[ch])
        elif ch in _EQUAL_SUFFIXED:
            single, double = _EQUAL_SUFFIXED[ch]
            self._add_token(double if self._match("=") else single)
        elif ch == "/":
            if self._match("/"):
                # Comment runs to the end of the line; the newline is left for the main loop.
                while self._peek() not in ("\n", ""):
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif ch in _WHITESPACE:
            pass
        elif ch == "\n":
            self.line += 1
        elif ch == '"':
            self._string()
        elif _is_digit(ch):
            self._number()
        elif _is_alpha(ch):
            self._identifier()
        else:
            raise self._error("Unexpected character.")

    def _string(self) -> None:
        while self._peek() != '"' and not self._at_end():
            if self._peek() == "\n":
                self.line += 1
            self._advance()
        if self._at_end():
            raise self._error("Unterminated string.")
        self._advance()  # closing quote
        self._add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def _number(self) -> None:
        while _is_digit(self._peek()):
            self._advance()
        if self._peek() == ".":
            self._advance()
            if not _is_digit(self._peek()):
                raise self._error("Invalid number.")
            while _is_digit(self._peek()):
                self._advance()
        try:
            value = to_f32(float(self._lexeme()))
        except ValueError:
            raise self._error("Invalid number.")
        self._add_token(TokenType.NUMBER, value)

    def _identifier(self) -> None:
        while _is_alpha(self._peek()) or _is_digit(self._peek()):
            self._advance()
        self._add_token(KEYWORDS.get(self._lexeme(), TokenType.IDENTIFIER))


def scan(source: str) -> List[Token]:
    """Scan ``source`` into tokens, ending with a single EOF token."""
    return Scanner(source).scan_tokens()
