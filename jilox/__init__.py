"""jilox: scanner, parser and tree-walking evaluator for Lox expressions.

Usage:
    from jilox import scan, parse, interpret

    value = interpret(parse(scan("1 + 2 * 3")))
    # value == 7.0
"""

from jilox.errors import ErrorKind, LoxError, LoxRuntimeError, ParseError
from jilox.expr import Binary, Expr, Grouping, Literal, Unary, print_ast
from jilox.interpreter import Interpreter, interpret
from jilox.parser import Parser, parse
from jilox.scanner import Scanner, scan
from jilox.tokens import Token, TokenType

__all__ = [
    "Binary",
    "ErrorKind",
    "Expr",
    "Grouping",
    "Interpreter",
    "Literal",
    "LoxError",
    "LoxRuntimeError",
    "ParseError",
    "Parser",
    "Scanner",
    "Token",
    "TokenType",
    "Unary",
    "interpret",
    "parse",
    "print_ast",
    "scan",
]
