import math

import pytest

from calculadora.arbitrary_precision_policy import MPMathPolicy
from calculadora.errors import (
    CalculatorError,
    DivisionByZeroError,
    DomainError,
    EmptyExpressionError,
    InvalidCharacterError,
    InvalidExpressionError,
    MismatchedParenthesesError,
    NumericOverflowError,
)
from calculadora.formula_evaluator import (
    FormulaEvaluator,
    apply_function,
    create_evaluator,
    evaluate_postfix,
)
from calculadora.numeric_policy import AngleMode, FloatPolicy
from calculadora.tokenizer import Token, TokenKind


@pytest.fixture(params=["float", "mpmath"])
def evaluator(request):
    """Evaluador en grados con cada una de las dos políticas."""
    policy = FloatPolicy() if request.param == "float" else MPMathPolicy()
    return FormulaEvaluator(policy, AngleMode.DEGREES)


@pytest.fixture
def precise_deg():
    return create_evaluator("deg")


@pytest.fixture
def precise_rad():
    return create_evaluator("rad")


# ── Aritmética (ambas políticas) ─────────────────────────────────

@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2 + 3", 5),
        ("10 - 4", 6),
        ("3 * 4", 12),
        ("15 / 3", 5),
        ("2 + 3 * 4", 14),
        ("20 / 4 + 3", 8),
        ("10 - 4 - 3", 3),
        ("2 ^ 3 * 4", 32),
        ("2 ^ 3 ^ 2", 512),
        ("2 ^ 10", 1024),
        ("(2 + 3) * 4", 20),
        ("2 * (3 + 4)", 14),
        ("((2 + 3) * 4) / 2", 10),
        ("-5 + 3", -2),
        ("5 + -3", 2),
        ("(-5) * 3", -15),
        ("5 - 3", 2),
        ("3 - -2", 5),
        (".5 + .5", 1),
        ("1.5e3 + 1", 1501),
        ("-5", -5),
    ],
)
def test_arithmetic(evaluator, expression, expected):
    assert evaluator.evaluate(expression) == expected


def test_negative_exponent(evaluator):
    assert evaluator.format(evaluator.evaluate("10^-2")) == "0.01"


def test_functions(evaluator):
    assert float(evaluator.evaluate("sqrt(16)")) == pytest.approx(4)
    assert float(evaluator.evaluate("log(100)")) == pytest.approx(2)
    assert float(evaluator.evaluate("ln(e)")) == pytest.approx(1)
    assert float(evaluator.evaluate("sin(90)")) == pytest.approx(1)
    assert float(evaluator.evaluate("cos(0)")) == pytest.approx(1)
    assert float(evaluator.evaluate("tan(45)")) == pytest.approx(1)
    assert float(evaluator.evaluate("2 * sin(30)")) == pytest.approx(1)
    assert float(evaluator.evaluate("sqrt(16) + log(100)")) == pytest.approx(6)


def test_constants(evaluator):
    assert float(evaluator.evaluate("π")) == pytest.approx(math.pi)
    assert float(evaluator.evaluate("pi")) == pytest.approx(math.pi)
    assert float(evaluator.evaluate("e")) == pytest.approx(math.e)
    assert float(evaluator.evaluate("2 * π")) == pytest.approx(2 * math.pi)
    assert float(evaluator.evaluate("e^2")) == pytest.approx(math.exp(2))


@pytest.mark.parametrize(
    "expression, error",
    [
        ("", EmptyExpressionError),
        ("   ", EmptyExpressionError),
        ("2 $ 3", InvalidCharacterError),
        ("(2+3", MismatchedParenthesesError),
        ("2+3)", MismatchedParenthesesError),
        ("2/0", DivisionByZeroError),
        ("0^-1", DivisionByZeroError),
        ("sqrt(-4)", DomainError),
        ("log(0)", DomainError),
        ("ln(-1)", DomainError),
        ("tan(90)", DomainError),
        ("tan(270)", DomainError),
        ("(-8)^(1/3)", DomainError),
        ("2 +", InvalidExpressionError),
        ("2 3", InvalidExpressionError),
        ("2π", InvalidExpressionError),
        ("-π", InvalidExpressionError),
        ("()", InvalidExpressionError),
    ],
)
def test_errors(evaluator, expression, error):
    with pytest.raises(error):
        evaluator.evaluate(expression)


def test_errors_share_base_class(evaluator):
    with pytest.raises(CalculatorError):
        evaluator.evaluate("sqrt(-1)")
    with pytest.raises(ZeroDivisionError):
        evaluator.evaluate("1/0")


def test_log_ignores_angle_mode():
    for mode in ("deg", "rad"):
        for precise in (True, False):
            ev = create_evaluator(mode, precise=precise)
            assert ev.format(ev.evaluate("log(100)")) == "2"


def test_repeated_evaluation_is_idempotent(evaluator):
    first = evaluator.evaluate("sin(30) + sqrt(2) / 3")
    second = evaluator.evaluate("sin(30) + sqrt(2) / 3")
    assert first == second
    assert evaluator.format(first) == evaluator.format(second)


# ── Trigonometría exacta (precisión arbitraria) ──────────────────

def test_sin_pi_is_exactly_zero(precise_rad):
    value = precise_rad.evaluate("sin(π)")
    assert value == 0
    assert precise_rad.format(value) == "0"


def test_cos_180_degrees_is_exactly_minus_one(precise_deg):
    value = precise_deg.evaluate("cos(180)")
    assert value == -1
    assert precise_deg.format(value) == "-1"


@pytest.mark.parametrize(
    "expression, text",
    [
        ("sin(180)", "0"),
        ("cos(90)", "0"),
        ("sin(270)", "-1"),
        ("tan(180)", "0"),
        ("sin(-90)", "-1"),
        ("cos(360)", "1"),
        ("2 * sin(30)", "1"),
    ],
)
def test_canonical_degrees(precise_deg, expression, text):
    assert precise_deg.format(precise_deg.evaluate(expression)) == text


def test_sin_half_pi_radians(precise_rad):
    assert precise_rad.evaluate("sin(π/2)") == 1
    with pytest.raises(DomainError):
        precise_rad.evaluate("tan(π/2)")


def test_float_backend_keeps_rounding_noise():
    ev = create_evaluator("rad", precise=False)
    value = ev.evaluate("sin(π)")
    assert value != 0
    assert abs(value) < 1e-15


# ── Magnitud ─────────────────────────────────────────────────────

def test_large_magnitude_with_enough_precision():
    ev = create_evaluator(precision=110)
    big = ev.evaluate("10^100")
    bumped = ev.evaluate("(10^100) + 1")
    assert bumped != big
    assert ev.format(bumped) == "1" + "0" * 99 + "1"


def test_large_magnitude_with_double_precision():
    ev = create_evaluator(precise=False)
    assert ev.evaluate("(10^100) + 1") == ev.evaluate("10^100")


@pytest.mark.parametrize("expression", ["2^2^2^2^2^2", "10^10^10^10", "(10^60000)*(10^60000)"])
def test_power_towers_overflow_instead_of_running_away(evaluator, expression):
    with pytest.raises(NumericOverflowError):
        evaluator.evaluate(expression)


def test_small_power_tower_still_evaluates(precise_rad):
    assert precise_rad.evaluate("2^2^2^2") == 65536
    assert precise_rad.format(precise_rad.evaluate("2^2^2^2^2")).startswith("2.0035299304068464649790723515602557504478254755697")


@pytest.mark.parametrize("precise", [True, False])
def test_tan_of_large_radian_argument(precise):
    ev = create_evaluator("rad", precise=precise)
    assert float(ev.evaluate("tan(1e20)")) == pytest.approx(math.tan(1e20), rel=1e-9)


# ── Postfija directa ─────────────────────────────────────────────

def test_evaluate_postfix_rejects_malformed_streams():
    policy = FloatPolicy()
    two = Token(TokenKind.NUMBER, "2")
    plus = Token(TokenKind.OPERATOR, "+")
    paren = Token(TokenKind.LEFT_PAREN, "(")
    sqrt = Token(TokenKind.FUNCTION, "sqrt")
    for stream in ([], [plus], [two, plus], [two, two], [two, paren], [sqrt]):
        with pytest.raises(InvalidExpressionError):
            evaluate_postfix(stream, policy, AngleMode.RADIANS)


def test_evaluate_postfix_operand_order():
    policy = FloatPolicy()
    stream = [
        Token(TokenKind.NUMBER, "10"),
        Token(TokenKind.NUMBER, "4"),
        Token(TokenKind.OPERATOR, "-"),
    ]
    assert evaluate_postfix(stream, policy, AngleMode.RADIANS) == 6


def test_apply_function_converts_degrees_only_for_trig():
    policy = FloatPolicy()
    assert apply_function("sin", 90.0, policy, AngleMode.DEGREES) == pytest.approx(1)
    assert apply_function("sin", 90.0, policy, AngleMode.RADIANS) == pytest.approx(math.sin(90))
    assert apply_function("sqrt", 9.0, policy, AngleMode.DEGREES) == 3


def test_evaluator_configuration_is_read_only():
    ev = create_evaluator("rad")
    assert ev.angle_mode is AngleMode.RADIANS
    with pytest.raises(AttributeError):
        ev.angle_mode = AngleMode.DEGREES
    assert isinstance(ev.policy, MPMathPolicy)
    assert isinstance(create_evaluator(precise=False).policy, FloatPolicy)
