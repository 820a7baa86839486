"""Conversión infija → postfija (algoritmo shunting-yard)."""

from __future__ import annotations

from calculadora.errors import MismatchedParenthesesError
from calculadora.tokenizer import Token, TokenKind

PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "^": 3}
RIGHT_ASSOCIATIVE = {"^"}


def _pops_before(top: Token, incoming: Token) -> bool:
    if top.kind is not TokenKind.OPERATOR:
        return False
    if top.text == incoming.text and incoming.text in RIGHT_ASSOCIATIVE:
        return False
    return PRECEDENCE[top.text] >= PRECEDENCE[incoming.text]


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Reordena una secuencia infija en notación polaca inversa.

    Las funciones quedan en la pila hasta que se cierra el paréntesis que
    las sigue, de modo que se aplican exactamente a ese grupo.

    Raises:
        MismatchedParenthesesError: ``(`` o ``)`` sin pareja.
    """
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        kind = token.kind
        if kind is TokenKind.NUMBER or kind is TokenKind.CONSTANT:
            output.append(token)
        elif kind is TokenKind.FUNCTION or kind is TokenKind.LEFT_PAREN:
            stack.append(token)
        elif kind is TokenKind.OPERATOR:
            while stack and _pops_before(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)
        elif kind is TokenKind.RIGHT_PAREN:
            while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise MismatchedParenthesesError()
            stack.pop()
            if stack and stack[-1].kind is TokenKind.FUNCTION:
                output.append(stack.pop())
        else:
            raise ValueError(f"Token desconocido: {token!r}")

    while stack:
        token = stack.pop()
        if token.kind is TokenKind.LEFT_PAREN:
            raise MismatchedParenthesesError()
        output.append(token)

    return output
