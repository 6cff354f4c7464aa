"""Expression tree.

Nodes are frozen dataclasses; a parent exclusively owns its children, so a
tree can be evaluated or printed any number of times.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from jilox.tokens import Token, to_f32

LoxValue = Optional[Union[float, str, bool]]


class Expr:
    """Base expression node."""

    token: Token


@dataclass(frozen=True)
class Literal(Expr):
    value: LoxValue
    token: Token


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

    @property
    def token(self) -> Token:
        return self.operator


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    @property
    def token(self) -> Token:
        return self.operator


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr
    token: Token  # the opening parenthesis


def format_number(value: float) -> str:
    """Shortest decimal text that reads back as the same single-precision number."""
    if math.isfinite(value):
        for digits in range(1, 10):
            text = f"{value:.{digits}g}"
            if to_f32(float(text)) == value:
                return text
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def print_ast(expr: Expr) -> str:
    """Render ``expr`` in the canonical parenthesized form.

    ``-123 * (45.67)`` renders as ``( * (-123) (gr 45.67) )``. String
    literals are quoted with backslashes and double quotes escaped.
    """
    if isinstance(expr, Binary):
        return f"( {expr.operator.lexeme} {print_ast(expr.left)} {print_ast(expr.right)} )"
    if isinstance(expr, Unary):
        return f"({expr.operator.lexeme}{print_ast(expr.right)})"
    if isinstance(expr, Grouping):
        return f"(gr {print_ast(expr.expression)})"
    if isinstance(expr, Literal):
        value = expr.value
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            return format_number(value)
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    raise TypeError(f"Unsupported expression node: {type(expr).__name__}")
