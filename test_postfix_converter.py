import pytest

from calculadora.errors import MismatchedParenthesesError
from calculadora.postfix_converter import to_postfix
from calculadora.tokenizer import tokenize


def postfix(expression):
    return [t.text for t in to_postfix(tokenize(expression))]


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2 + 3 * 4", ["2", "3", "4", "*", "+"]),
        ("10 - 4 - 3", ["10", "4", "-", "3", "-"]),
        ("20 / 4 + 3", ["20", "4", "/", "3", "+"]),
        ("2 ^ 3 * 4", ["2", "3", "^", "4", "*"]),
        ("2 ^ 3 ^ 2", ["2", "3", "2", "^", "^"]),
        ("(2 + 3) * 4", ["2", "3", "+", "4", "*"]),
        ("((2 + 3) * 4) / 2", ["2", "3", "+", "4", "*", "2", "/"]),
        ("10^-2", ["10", "-2", "^"]),
    ],
)
def test_operator_precedence_and_grouping(expression, expected):
    assert postfix(expression) == expected


def test_function_binds_to_following_group():
    assert postfix("sin(30) + 1") == ["30", "sin", "1", "+"]
    assert postfix("2 * sin(30)") == ["2", "30", "sin", "*"]
    assert postfix("sqrt(16) + log(100)") == ["16", "sqrt", "100", "log", "+"]


def test_nested_functions():
    assert postfix("sqrt(ln(e) + 3)") == ["E", "ln", "3", "+", "sqrt"]


def test_constants_pass_through():
    assert postfix("2 * π") == ["2", "PI", "*"]


def test_input_sequence_is_not_mutated():
    tokens = tokenize("(1 + 2) * 3")
    snapshot = list(tokens)
    to_postfix(tokens)
    assert tokens == snapshot


@pytest.mark.parametrize("expression", ["(2 + 3", "2 + 3)", ")(", "sin(1"])
def test_mismatched_parentheses(expression):
    with pytest.raises(MismatchedParenthesesError):
        postfix(expression)
