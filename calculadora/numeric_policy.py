"""Políticas numéricas: tipo de valor y operaciones primitivas.

El evaluador no conoce el tipo concreto de los valores; toda la aritmética
pasa por una política. Hay dos implementaciones intercambiables:

    - FloatPolicy: doble precisión con ``math``.
    - MPMathPolicy (arbitrary_precision_policy): precisión arbitraria.
"""

from __future__ import annotations

import enum
import math
import re
from typing import Any, Protocol

from calculadora.errors import (
    DivisionByZeroError,
    DomainError,
    NumericOverflowError,
    ParseError,
)

# Distancia mínima a un múltiplo impar de π/2 para que tan esté definida.
TAN_POLE_TOLERANCE = 1e-10

# Literal decimal con signo y exponente opcionales, sin inf/nan.
NUMBER_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class AngleMode(str, enum.Enum):
    DEGREES = "deg"
    RADIANS = "rad"

    @classmethod
    def parse(cls, mode) -> "AngleMode":
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError as exc:
            raise ValueError("El modo debe ser 'rad' o 'deg'") from exc


class NumericPolicy(Protocol):
    """Capacidades que el evaluador necesita de un backend numérico."""

    def parse(self, text: str) -> Any: ...

    def add(self, left, right): ...

    def sub(self, left, right): ...

    def mul(self, left, right): ...

    def div(self, left, right): ...

    def pow(self, base, exponent): ...

    def sin(self, x): ...

    def cos(self, x): ...

    def tan(self, x): ...

    def log10(self, x): ...

    def ln(self, x): ...

    def sqrt(self, x): ...

    def exp(self, x): ...

    def radians(self, x): ...

    def pi(self): ...

    def e(self): ...

    def is_zero(self, x) -> bool: ...

    def is_negative(self, x) -> bool: ...

    def to_display_string(self, value) -> str: ...


class FloatPolicy:
    """Política de doble precisión basada en ``math``.

    No limpia resultados trigonométricos cercanos a enteros: ``sin(π)``
    devuelve el error de redondeo tal cual.
    """

    @staticmethod
    def _finite(value: float) -> float:
        if math.isinf(value):
            raise NumericOverflowError()
        return value

    # ── Valores ──────────────────────────────────────────────────

    def parse(self, text: str) -> float:
        if not NUMBER_LITERAL.fullmatch(text):
            raise ParseError(text)
        value = float(text)
        if not math.isfinite(value):
            raise ParseError(text)
        return value

    def pi(self) -> float:
        return math.pi

    def e(self) -> float:
        return math.e

    def is_zero(self, x: float) -> bool:
        return x == 0

    def is_negative(self, x: float) -> bool:
        return x < 0

    # ── Aritmética ───────────────────────────────────────────────

    def add(self, left: float, right: float) -> float:
        return self._finite(left + right)

    def sub(self, left: float, right: float) -> float:
        return self._finite(left - right)

    def mul(self, left: float, right: float) -> float:
        return self._finite(left * right)

    def div(self, left: float, right: float) -> float:
        if self.is_zero(right):
            raise DivisionByZeroError()
        return self._finite(left / right)

    def pow(self, base: float, exponent: float) -> float:
        if self.is_zero(base) and exponent < 0:
            raise DivisionByZeroError("Cero elevado a exponente negativo")
        try:
            return self._finite(math.pow(base, exponent))
        except OverflowError as exc:
            raise NumericOverflowError() from exc
        except ValueError as exc:
            raise DomainError("Base negativa con exponente no entero") from exc

    # ── Funciones ────────────────────────────────────────────────

    def radians(self, x: float) -> float:
        return math.radians(x)

    def sin(self, x: float) -> float:
        return math.sin(x)

    def cos(self, x: float) -> float:
        return math.cos(x)

    def tan(self, x: float) -> float:
        remainder = math.fmod(x, math.pi)
        if abs(abs(remainder) - math.pi / 2) < TAN_POLE_TOLERANCE:
            raise DomainError("Indefinido: tan de múltiplo impar de π/2")
        return math.tan(x)

    def log10(self, x: float) -> float:
        if x <= 0:
            raise DomainError("Argumento inválido para logaritmo")
        return math.log10(x)

    def ln(self, x: float) -> float:
        if x <= 0:
            raise DomainError("Argumento inválido para logaritmo natural")
        return math.log(x)

    def sqrt(self, x: float) -> float:
        if x < 0:
            raise DomainError("Argumento inválido para raíz cuadrada")
        return math.sqrt(x)

    def exp(self, x: float) -> float:
        try:
            return math.exp(x)
        except OverflowError as exc:
            raise NumericOverflowError() from exc

    # ── Formato ──────────────────────────────────────────────────

    def to_display_string(self, value: float) -> str:
        if math.isnan(value):
            return "NaN"
        if value == float("inf"):
            return "∞"
        if value == float("-inf"):
            return "-∞"
        if value == int(value) and abs(value) < 1e15:
            return str(int(value))
        return f"{value:.15g}"
