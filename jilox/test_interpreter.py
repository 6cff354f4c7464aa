import math

import pytest

from jilox.errors import ErrorKind, LoxRuntimeError
from jilox.expr import Literal, Unary
from jilox.interpreter import Interpreter, ValueKind, kind_of
from jilox.parser import parse
from jilox.scanner import scan
from jilox.tokens import Token, TokenType


def test_arithmetic(evaluate):
    assert evaluate("1 + 2 * 3") == 7.0
    assert evaluate("(1 + 2) * 3") == 9.0
    assert evaluate("7 / 2") == 3.5


def test_left_associative_subtraction(evaluate):
    assert evaluate("1 - 2 - 3") == -4.0


def test_comparisons(evaluate):
    assert evaluate("1 < 2") is True
    assert evaluate("2 <= 2") is True
    assert evaluate("3 > 4") is False
    assert evaluate("3 >= 4") is False
    assert evaluate("3 == 3") is True
    assert evaluate("3 != 3") is False


def test_division_by_zero_is_not_an_error(evaluate):
    assert evaluate("1 / 0") == math.inf
    assert evaluate("-1 / 0") == -math.inf
    assert math.isnan(evaluate("0 / 0"))


def test_string_concatenation(evaluate):
    assert evaluate('"a" + "b"') == "ab"


def test_string_only_supports_plus(evaluate):
    with pytest.raises(LoxRuntimeError):
        evaluate('"a" == "a"')


def test_mixed_types_are_incompatible(evaluate):
    with pytest.raises(LoxRuntimeError) as e:
        evaluate('\n1 +\n"a"')
    assert e.value.kind == ErrorKind.RUNTIME
    assert "incompatible types" in e.value.message
    assert e.value.lexeme == "+"
    assert e.value.line == 2


def test_nil_equality(evaluate):
    assert evaluate("nil == nil") is True
    assert evaluate("nil != nil") is False
    with pytest.raises(LoxRuntimeError):
        evaluate("nil < nil")


def test_booleans_have_no_binary_operators(evaluate):
    with pytest.raises(LoxRuntimeError):
        evaluate("true == true")


def test_unary(evaluate):
    assert evaluate("!true") is False
    assert evaluate("!!true") is True
    assert evaluate("-(2 + 3)") == -5.0
    assert evaluate("--2") == 2.0


@pytest.mark.parametrize("source", ['-"x"', "-true", "-nil", "!1", '!"x"', "!nil"])
def test_unary_type_errors(evaluate, source):
    with pytest.raises(LoxRuntimeError) as e:
        evaluate(source)
    assert e.value.lexeme == source[0]


def test_first_error_wins(evaluate):
    with pytest.raises(LoxRuntimeError) as e:
        evaluate('(-"x") * (1 + true)')
    assert e.value.lexeme == "-"


def test_reevaluation_is_idempotent():
    expr = parse(scan('(1 + 2) * -3 >= 4'))
    interpreter = Interpreter()
    first = interpreter.evaluate(expr)
    assert interpreter.evaluate(expr) == first
    assert first is False


def test_runtime_error_str(evaluate):
    with pytest.raises(LoxRuntimeError) as e:
        evaluate("-nil")
    assert str(e.value).startswith('Runtime error: line 1, "-": ')


def test_kind_of():
    assert kind_of(1.0) == ValueKind.NUMBER
    assert kind_of("s") == ValueKind.STRING
    assert kind_of(False) == ValueKind.BOOLEAN
    assert kind_of(None) == ValueKind.NIL


def test_arithmetic_is_single_precision(evaluate):
    assert evaluate("0.1 + 0.2 == 0.3") is True
    assert evaluate("16777216 + 1") == 16777216.0
    assert evaluate("16777217") == 16777216.0


def test_overflow_past_single_precision_is_inf(evaluate):
    assert evaluate("3000000000000000000000000000000000000 * 1000") == math.inf
    assert evaluate("-3000000000000000000000000000000000000 * 1000") == -math.inf


def test_deeply_nested_tree_is_a_runtime_error():
    minus = Token(TokenType.MINUS, "-", None, 1)
    expr = Literal(1.0, Token(TokenType.NUMBER, "1", 1.0, 1))
    for _ in range(3000):
        expr = Unary(minus, expr)
    with pytest.raises(LoxRuntimeError) as e:
        Interpreter().evaluate(expr)
    assert e.value.message == "Expression nested too deeply."
    assert e.value.lexeme == "-"
