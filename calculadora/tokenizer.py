"""Análisis léxico de expresiones de la calculadora."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass

from calculadora.errors import InvalidCharacterError

DIGITS = frozenset(string.digits)
OPERATORS = frozenset("+-*/^")
# Orden de prueba: coincidencia más larga primero.
FUNCTION_NAMES = ("sqrt", "sin", "cos", "tan", "log", "ln")


class TokenKind(enum.Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    CONSTANT = "constant"
    LEFT_PAREN = "leftParen"
    RIGHT_PAREN = "rightParen"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r})"


# Tokens tras los cuales un '-' inicia un número negativo.
_UNARY_CONTEXT = {TokenKind.OPERATOR, TokenKind.LEFT_PAREN, TokenKind.FUNCTION}


def _starts_number(text: str, i: int) -> bool:
    if i >= len(text):
        return False
    if text[i] in DIGITS:
        return True
    return text[i] == "." and i + 1 < len(text) and text[i + 1] in DIGITS


def _skip_digits(text: str, i: int) -> int:
    while i < len(text) and text[i] in DIGITS:
        i += 1
    return i


def _scan_number(text: str, start: int) -> int:
    """Devuelve el índice donde termina el literal numérico que empieza en ``start``.

    Acepta dígitos, un único punto decimal y un exponente ``e``/``E`` con
    signo opcional, solo si le sigue al menos un dígito.
    """
    i = _skip_digits(text, start)
    if i < len(text) and text[i] == ".":
        i = _skip_digits(text, i + 1)
    if i < len(text) and text[i] in "eE":
        j = i + 1
        if j < len(text) and text[j] in "+-":
            j += 1
        if j < len(text) and text[j] in DIGITS:
            i = _skip_digits(text, j)
    return i


def _match_function(text: str, i: int) -> str | None:
    for name in FUNCTION_NAMES:
        if text.startswith(name, i):
            return name
    return None


def tokenize(text: str) -> list[Token]:
    """Convierte ``text`` en una lista de tokens.

    Raises:
        InvalidCharacterError: carácter que no inicia ningún token.
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        char = text[i]

        if char.isspace():
            i += 1
            continue

        if _starts_number(text, i):
            end = _scan_number(text, i)
            tokens.append(Token(TokenKind.NUMBER, text[i:end]))
            i = end
            continue

        if text[i:i + 2].lower() == "pi":
            tokens.append(Token(TokenKind.CONSTANT, "PI"))
            i += 2
            continue
        if char == "π":
            tokens.append(Token(TokenKind.CONSTANT, "PI"))
            i += 1
            continue

        if char == "e" and not (i + 1 < n and text[i + 1] in DIGITS):
            tokens.append(Token(TokenKind.CONSTANT, "E"))
            i += 1
            continue

        function_name = _match_function(text, i)
        if function_name:
            tokens.append(Token(TokenKind.FUNCTION, function_name))
            i += len(function_name)
            continue

        if char == "-":
            unary = not tokens or tokens[-1].kind in _UNARY_CONTEXT
            if unary and _starts_number(text, i + 1):
                end = _scan_number(text, i + 1)
                tokens.append(Token(TokenKind.NUMBER, text[i:end]))
                i = end
            else:
                tokens.append(Token(TokenKind.OPERATOR, "-"))
                i += 1
            continue

        if char in OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, char))
        elif char == "(":
            tokens.append(Token(TokenKind.LEFT_PAREN, "("))
        elif char == ")":
            tokens.append(Token(TokenKind.RIGHT_PAREN, ")"))
        else:
            raise InvalidCharacterError(char, i)
        i += 1

    return tokens
