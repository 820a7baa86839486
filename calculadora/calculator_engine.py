"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine que usa la interfaz: evalúa
expresiones completas (modo expresión) y operaciones inmediatas de botón
(modo básico/científico), devolviendo siempre texto para la pantalla.

Contrato de interfaz:
    - evaluate(expression: str) -> str
    - calculate(first: str, second: str, operation: str | None) -> str
    - calculate_scientific(value: str, operation: str, second: str | None) -> str
    - angle_mode: propiedad 'rad' | 'deg'
"""

from __future__ import annotations

import logging

from calculadora.errors import CalculatorError, DivisionByZeroError, InvalidExpressionError
from calculadora.formula_evaluator import apply_function, apply_operator, create_evaluator
from calculadora.numeric_policy import AngleMode

logger = logging.getLogger(__name__)

BASIC_OPERATIONS = {"+", "-", "*", "/"}
SCIENTIFIC_FUNCTIONS = {"sin", "cos", "tan", "log", "ln", "sqrt"}
POWER_OPERATIONS = {"x^y", "pow"}
CONSTANTS = ("PI", "E")


class CalculatorEngine:
    """Evalúa expresiones matemáticas con funciones científicas."""

    def __init__(self, angle_mode="deg", precise: bool = True, precision: int = 50):
        self._precise = precise
        self._precision = precision
        self._evaluator = create_evaluator(angle_mode, precise, precision)

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._evaluator.angle_mode.value

    @angle_mode.setter
    def angle_mode(self, mode: str):
        # El evaluador es inmutable: se reemplaza por uno nuevo.
        self._evaluator = create_evaluator(mode, self._precise, self._precision)

    @property
    def _policy(self):
        return self._evaluator.policy

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Raises:
            CalculatorError: cualquier error de la expresión o del cálculo.
        """
        try:
            value = self._evaluator.evaluate(expression)
        except CalculatorError as exc:
            logger.debug("Fallo al evaluar %r: %s", expression, exc)
            raise
        return self._evaluator.format(value)

    # ── Operaciones inmediatas ───────────────────────────────────

    def calculate(self, first: str, second: str, operation: str | None) -> str:
        """Aplica una operación binaria de botón; sin operación devuelve ``second``."""
        if operation not in BASIC_OPERATIONS:
            return second
        policy = self._policy
        result = apply_operator(operation, policy.parse(first), policy.parse(second), policy)
        return policy.to_display_string(result)

    def calculate_scientific(
        self,
        value: str,
        operation: str,
        second: str | None = None,
    ) -> str:
        policy = self._policy
        x = policy.parse(value)

        if operation in SCIENTIFIC_FUNCTIONS:
            result = apply_function(operation, x, policy, self._evaluator.angle_mode)
        elif operation == "x^2":
            result = policy.mul(x, x)
        elif operation in POWER_OPERATIONS:
            if second is None:
                raise InvalidExpressionError("Falta el segundo valor de la potencia")
            result = policy.pow(x, policy.parse(second))
        elif operation == "1/x":
            if policy.is_zero(x):
                raise DivisionByZeroError()
            result = policy.div(policy.parse("1"), x)
        elif operation == "e^x":
            result = policy.exp(x)
        elif operation == "10^x":
            result = policy.pow(policy.parse("10"), x)
        else:
            raise InvalidExpressionError(f"Operación desconocida: {operation}")

        return policy.to_display_string(result)

    def constant(self, name: str) -> str:
        if name not in CONSTANTS:
            raise InvalidExpressionError(f"Constante desconocida: {name}")
        policy = self._policy
        return policy.to_display_string(policy.pi() if name == "PI" else policy.e())
