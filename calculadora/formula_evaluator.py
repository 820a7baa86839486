"""Evaluación de expresiones: tokens → postfija → valor."""

from __future__ import annotations

import logging

from calculadora.errors import EmptyExpressionError, InvalidExpressionError
from calculadora.numeric_policy import AngleMode, FloatPolicy, NumericPolicy
from calculadora.postfix_converter import to_postfix
from calculadora.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

TRIG_FUNCTIONS = {"sin", "cos", "tan"}
_FUNCTIONS = {
    "sin": "sin",
    "cos": "cos",
    "tan": "tan",
    "log": "log10",
    "ln": "ln",
    "sqrt": "sqrt",
}
_OPERATORS = {
    "+": "add",
    "-": "sub",
    "*": "mul",
    "/": "div",
    "^": "pow",
}


def apply_operator(symbol: str, left, right, policy: NumericPolicy):
    try:
        method = _OPERATORS[symbol]
    except KeyError as exc:
        raise InvalidExpressionError(f"Operador desconocido: {symbol}") from exc
    return getattr(policy, method)(left, right)


def apply_function(name: str, value, policy: NumericPolicy, angle_mode: AngleMode):
    """Aplica una función científica; solo sin/cos/tan dependen del modo angular."""
    try:
        method = _FUNCTIONS[name]
    except KeyError as exc:
        raise InvalidExpressionError(f"Función desconocida: {name}") from exc
    if name in TRIG_FUNCTIONS and angle_mode is AngleMode.DEGREES:
        value = policy.radians(value)
    return getattr(policy, method)(value)


def evaluate_postfix(tokens: list[Token], policy: NumericPolicy, angle_mode: AngleMode):
    """Ejecuta una secuencia postfija con una sola pila de valores.

    Raises:
        InvalidExpressionError: faltan operandos o sobran valores al final.
        DivisionByZeroError, DomainError: propagados desde la política.
    """
    stack = []

    for token in tokens:
        kind = token.kind
        if kind is TokenKind.NUMBER:
            stack.append(policy.parse(token.text))
        elif kind is TokenKind.CONSTANT:
            stack.append(policy.pi() if token.text == "PI" else policy.e())
        elif kind is TokenKind.OPERATOR:
            if len(stack) < 2:
                raise InvalidExpressionError()
            right = stack.pop()
            left = stack.pop()
            stack.append(apply_operator(token.text, left, right, policy))
        elif kind is TokenKind.FUNCTION:
            if not stack:
                raise InvalidExpressionError()
            stack.append(apply_function(token.text, stack.pop(), policy, angle_mode))
        else:
            raise InvalidExpressionError(f"Token inesperado en postfija: {token!r}")

    if len(stack) != 1:
        raise InvalidExpressionError()
    return stack[0]


class FormulaEvaluator:
    """Evalúa expresiones con un modo angular y una política numérica fijos.

    No guarda estado entre llamadas: puede reutilizarse o compartirse entre
    hilos sin sincronización.
    """

    def __init__(self, policy: NumericPolicy, angle_mode=AngleMode.DEGREES):
        self._policy = policy
        self._angle_mode = AngleMode.parse(angle_mode)

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    @property
    def policy(self) -> NumericPolicy:
        return self._policy

    def evaluate(self, expression: str):
        if not expression or not expression.strip():
            raise EmptyExpressionError()

        tokens = tokenize(expression)
        postfix = to_postfix(tokens)
        logger.debug("%r -> postfija %s", expression, " ".join(t.text for t in postfix))
        return evaluate_postfix(postfix, self._policy, self._angle_mode)

    def format(self, value) -> str:
        return self._policy.to_display_string(value)


def create_evaluator(
    angle_mode=AngleMode.DEGREES,
    precise: bool = True,
    precision: int = 50,
) -> FormulaEvaluator:
    """Construye un evaluador con el backend de precisión arbitraria o doble."""
    if precise:
        from calculadora.arbitrary_precision_policy import MPMathPolicy

        policy = MPMathPolicy(precision)
    else:
        policy = FloatPolicy()
    return FormulaEvaluator(policy, angle_mode)
