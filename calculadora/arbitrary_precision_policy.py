"""Política numérica de precisión arbitraria basada en mpmath."""

from __future__ import annotations

import re

from calculadora.errors import (
    DivisionByZeroError,
    DomainError,
    NumericOverflowError,
    ParseError,
)
from calculadora.numeric_policy import NUMBER_LITERAL, TAN_POLE_TOLERANCE

try:
    from mpmath import MPContext
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc

# ".0" sobrante de nstr: "2.0" -> "2", "1.0e+100" -> "1e+100".
_REDUNDANT_FRACTION = re.compile(r"\.0(?=e|$)")


class MPMathPolicy:
    """Valores ``mpf`` con un contexto propio de ``precision`` dígitos.

    Cada instancia crea su propio ``MPContext``; la precisión global de
    ``mpmath.mp`` nunca se modifica.
    """

    DEFAULT_PRECISION = 50
    MIN_PRECISION = 20
    GUARD_DIGITS = 10
    # Mayor exponente decimal admitido en un resultado.
    MAX_EXPONENT = 100000

    def __init__(self, precision: int = DEFAULT_PRECISION):
        self._precision = max(self.MIN_PRECISION, precision)
        self._ctx = MPContext()
        self._ctx.dps = self._precision + self.GUARD_DIGITS
        self._pi = self._ctx.mpf(self._ctx.pi)
        self._e = self._ctx.mpf(self._ctx.e)
        self._max_value = self._ctx.mpf(10) ** self.MAX_EXPONENT
        # Tolerancia de los ángulos canónicos: 1e-40 con 50 dígitos.
        self._exact_tolerance = self._ctx.mpf(10) ** -(self._precision - 10)
        # Desde aquí x/π ya no tiene parte fraccionaria representable.
        self._exact_turns_limit = self._ctx.mpf(10) ** (self._precision - 10)

    @property
    def precision(self) -> int:
        return self._precision

    def _bounded(self, value):
        if abs(value) >= self._max_value:
            raise NumericOverflowError()
        return value

    # ── Valores ──────────────────────────────────────────────────

    def parse(self, text: str):
        if not NUMBER_LITERAL.fullmatch(text):
            raise ParseError(text)
        try:
            value = self._ctx.mpf(text)
        except ValueError as exc:
            raise ParseError(text) from exc
        return self._bounded(value)

    def pi(self):
        return self._pi

    def e(self):
        return self._e

    def is_zero(self, x) -> bool:
        return x == 0

    def is_negative(self, x) -> bool:
        return x < 0

    # ── Aritmética ───────────────────────────────────────────────

    def add(self, left, right):
        return self._bounded(left + right)

    def sub(self, left, right):
        return self._bounded(left - right)

    def mul(self, left, right):
        return self._bounded(left * right)

    def div(self, left, right):
        if self.is_zero(right):
            raise DivisionByZeroError()
        return self._bounded(left / right)

    def pow(self, base, exponent):
        if self.is_zero(base):
            if self.is_negative(exponent):
                raise DivisionByZeroError("Cero elevado a exponente negativo")
            return base ** exponent
        if self.is_negative(base) and not self._ctx.isint(exponent):
            raise DomainError("Base negativa con exponente no entero")
        # Exponente decimal estimado del resultado, antes de calcularlo.
        magnitude = abs(exponent * self._ctx.log10(abs(base)))
        if magnitude > self.MAX_EXPONENT:
            raise NumericOverflowError("Resultado fuera de rango")
        return self._bounded(base ** exponent)

    # ── Trigonometría ────────────────────────────────────────────

    def radians(self, x):
        return self._ctx.radians(x)

    def _near_integer(self, value) -> tuple[bool, int]:
        nearest = self._ctx.nint(value)
        return abs(value - nearest) < self._exact_tolerance, int(nearest)

    def _exact_trig(self, name: str, x):
        """Valor cerrado de sin/cos/tan en múltiplos enteros o semienteros de π.

        Devuelve ``None`` si el argumento no es un ángulo canónico.
        """
        turns = x / self._pi
        if abs(turns) >= self._exact_turns_limit:
            return None

        hit, n = self._near_integer(turns)
        if hit:
            if name == "cos":
                return self._ctx.mpf(1 if n % 2 == 0 else -1)
            return self._ctx.mpf(0)

        hit, n = self._near_integer(turns - self._ctx.mpf("0.5"))
        if hit:
            if name == "sin":
                return self._ctx.mpf(1 if n % 2 == 0 else -1)
            if name == "cos":
                return self._ctx.mpf(0)
            raise DomainError("Indefinido: tan de múltiplo impar de π/2")

        return None

    def sin(self, x):
        exact = self._exact_trig("sin", x)
        return exact if exact is not None else self._ctx.sin(x)

    def cos(self, x):
        exact = self._exact_trig("cos", x)
        return exact if exact is not None else self._ctx.cos(x)

    def tan(self, x):
        exact = self._exact_trig("tan", x)
        if exact is not None:
            return exact
        # |cos x| aproxima la distancia al polo más cercano.
        if abs(self._ctx.cos(x)) < TAN_POLE_TOLERANCE:
            raise DomainError("Indefinido: tan de múltiplo impar de π/2")
        return self._ctx.tan(x)

    # ── Logaritmos y raíces ──────────────────────────────────────

    def log10(self, x):
        if x <= 0:
            raise DomainError("Argumento inválido para logaritmo")
        return self._ctx.log10(x)

    def ln(self, x):
        if x <= 0:
            raise DomainError("Argumento inválido para logaritmo natural")
        return self._ctx.ln(x)

    def sqrt(self, x):
        if self.is_negative(x):
            raise DomainError("Argumento inválido para raíz cuadrada")
        return self._ctx.sqrt(x)

    def exp(self, x):
        if abs(x) > self.MAX_EXPONENT * self._ctx.ln(10):
            raise NumericOverflowError("Resultado fuera de rango")
        return self._ctx.exp(x)

    # ── Formato ──────────────────────────────────────────────────

    def to_display_string(self, value) -> str:
        ctx = self._ctx
        if not ctx.isfinite(value):
            if ctx.isnan(value):
                return "NaN"
            return "∞" if value > 0 else "-∞"

        if value == 0:
            return "0"

        if ctx.isint(value) and abs(value) < ctx.mpf(10) ** self._precision:
            return str(int(value))

        return _REDUNDANT_FRACTION.sub("", ctx.nstr(value, n=self._precision))
