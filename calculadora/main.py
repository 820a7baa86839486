"""Punto de entrada de la calculadora científica en consola."""

import logging
import sys

from calculadora.calculator_engine import CalculatorEngine
from calculadora.errors import CalculatorError


USE_ARBITRARY_PRECISION = True
AP_PRECISION = 50
ANGLE_MODE = "deg"
LOG_LEVEL = logging.WARNING


def run(lines, engine: CalculatorEngine, out=sys.stdout):
    for line in lines:
        expression = line.strip()
        if not expression:
            continue
        try:
            result = engine.evaluate(expression)
        except CalculatorError:
            result = "Error"
        print(result, file=out)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    engine = CalculatorEngine(
        angle_mode=ANGLE_MODE,
        precise=USE_ARBITRARY_PRECISION,
        precision=AP_PRECISION,
    )
    if len(sys.argv) > 1:
        run([" ".join(sys.argv[1:])], engine)
    else:
        run(sys.stdin, engine)


if __name__ == "__main__":
    main()
