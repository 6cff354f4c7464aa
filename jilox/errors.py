"""Diagnostics shared by the scanner, parser and interpreter.

Every failure in the pipeline is a ``LoxError``. The ``kind`` attribute tells
parse-time problems (including scanning) apart from run-time ones, and each
error remembers the line and lexeme of the token it was raised at.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jilox.tokens import Token


class ErrorKind(Enum):
    PARSE = "Parse error"
    RUNTIME = "Runtime error"


class LoxError(Exception):
    """Base class for all jilox diagnostics."""

    kind: ErrorKind = ErrorKind.PARSE

    def __init__(self, line: int, lexeme: str, message: str):
        self.line = line
        self.lexeme = lexeme
        self.message = message
        super().__init__(f"{self.kind.value}: line {line}, \"{lexeme}\": {message}")

    @classmethod
    def at(cls, token: "Token", message: str) -> "LoxError":
        """Build an error attributed to ``token``."""
        return cls(token.line, token.lexeme, message)


class ParseError(LoxError):
    """Raised for unscannable input and malformed token streams."""

    kind = ErrorKind.PARSE


class LoxRuntimeError(LoxError):
    """Raised when an operator is applied to operands it is not defined for."""

    kind = ErrorKind.RUNTIME
