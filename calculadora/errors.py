"""Errores de la calculadora.

Todos derivan de ``CalculatorError`` (a su vez ``ValueError``) para que la
interfaz pueda capturarlos en un solo punto y mostrar "Error".
"""


class CalculatorError(ValueError):
    """Error base de evaluación."""


class EmptyExpressionError(CalculatorError):
    def __init__(self):
        super().__init__("Expresión vacía")


class ParseError(CalculatorError):
    """Texto que no es un literal numérico finito."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Número inválido: {text}")


class InvalidCharacterError(CalculatorError):
    """Carácter que no pertenece a ninguna clase de token."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Carácter inválido: {char!r} en la posición {position}")


class MismatchedParenthesesError(CalculatorError):
    def __init__(self):
        super().__init__("Paréntesis desbalanceados")


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    def __init__(self, message: str = "División por cero"):
        super().__init__(message)


class DomainError(CalculatorError):
    """Argumento fuera del dominio de la función."""


class InvalidExpressionError(CalculatorError):
    def __init__(self, message: str = "Expresión inválida"):
        super().__init__(message)


class NumericOverflowError(CalculatorError, OverflowError):
    def __init__(self, message: str = "Resultado demasiado grande"):
        super().__init__(message)
