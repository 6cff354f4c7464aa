"""Tree-walking evaluator for jilox expressions."""

from __future__ import annotations

import logging
import math
import operator
from enum import Enum
from typing import Callable, Dict

from jilox.errors import LoxRuntimeError
from jilox.expr import Binary, Expr, Grouping, Literal, LoxValue, Unary
from jilox.tokens import TokenType, to_f32

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NIL = "nil"


def kind_of(value: LoxValue) -> ValueKind:
    # bool is checked first: True/False must never count as numbers.
    if value is None:
        return ValueKind.NIL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, float):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    raise TypeError(f"Not a jilox value: {value!r}")


def _divide(left: float, right: float) -> float:
    """IEEE 754 division: a zero divisor yields inf, -inf or nan."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _single(op: Callable[[float, float], float]) -> Callable[[float, float], float]:
    """Round the result of ``op`` to single precision."""
    return lambda left, right: to_f32(op(left, right))


_NUMBER_OPS: Dict[TokenType, Callable[[float, float], LoxValue]] = {
    TokenType.PLUS: _single(operator.add),
    TokenType.MINUS: _single(operator.sub),
    TokenType.STAR: _single(operator.mul),
    TokenType.SLASH: _single(_divide),
    TokenType.EQUAL_EQUAL: operator.eq,
    TokenType.BANG_EQUAL: operator.ne,
    TokenType.GREATER: operator.gt,
    TokenType.GREATER_EQUAL: operator.ge,
    TokenType.LESS: operator.lt,
    TokenType.LESS_EQUAL: operator.le,
}

_STRING_OPS: Dict[TokenType, Callable[[str, str], LoxValue]] = {
    TokenType.PLUS: operator.add,
}

_NIL_OPS: Dict[TokenType, Callable[[None, None], LoxValue]] = {
    TokenType.EQUAL_EQUAL: lambda left, right: True,
    TokenType.BANG_EQUAL: lambda left, right: False,
}

_BINARY_OPS = {
    (ValueKind.NUMBER, ValueKind.NUMBER): _NUMBER_OPS,
    (ValueKind.STRING, ValueKind.STRING): _STRING_OPS,
    (ValueKind.NIL, ValueKind.NIL): _NIL_OPS,
}


class Interpreter:
    """Evaluates expression trees.

    The interpreter keeps no state between calls, so one instance can be
    shared and the same tree evaluated repeatedly with identical results.
    """

    def evaluate(self, expr: Expr) -> LoxValue:
        try:
            return self._evaluate(expr)
        except RecursionError:
            raise LoxRuntimeError.at(expr.token, "Expression nested too deeply.") from None

    def _evaluate(self, expr: Expr) -> LoxValue:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self._evaluate(expr.expression)
        if isinstance(expr, Unary):
            return self._unary(expr)
        if isinstance(expr, Binary):
            return self._binary(expr)
        raise TypeError(f"Unsupported expression node: {type(expr).__name__}")

    def _unary(self, expr: Unary) -> LoxValue:
        right = self._evaluate(expr.right)
        kind = kind_of(right)
        if expr.operator.type == TokenType.MINUS:
            if kind != ValueKind.NUMBER:
                raise LoxRuntimeError.at(expr.operator, f"Operand must be a number, got {kind.value}.")
            return -right
        if expr.operator.type == TokenType.BANG:
            if kind != ValueKind.BOOLEAN:
                raise LoxRuntimeError.at(expr.operator, f"Operand must be a boolean, got {kind.value}.")
            return not right
        raise LoxRuntimeError.at(expr.operator, "Unknown unary operator.")

    def _binary(self, expr: Binary) -> LoxValue:
        left = self._evaluate(expr.left)
        right = self._evaluate(expr.right)
        kinds = (kind_of(left), kind_of(right))
        op = _BINARY_OPS.get(kinds, {}).get(expr.operator.type)
        if op is None:
            raise LoxRuntimeError.at(
                expr.operator,
                f"incompatible types for '{expr.operator.lexeme}': {kinds[0].value} and {kinds[1].value}.",
            )
        return op(left, right)


def interpret(expr: Expr) -> LoxValue:
    """Evaluate ``expr`` and return its value."""
    value = Interpreter().evaluate(expr)
    logger.debug("Evaluated expression to %r", value)
    return value
