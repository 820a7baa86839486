"""Calculadora científica: evaluador de expresiones con precisión doble o arbitraria."""

from calculadora.calculator_engine import CalculatorEngine
from calculadora.formula_evaluator import FormulaEvaluator, create_evaluator
from calculadora.numeric_policy import AngleMode

__all__ = ["AngleMode", "CalculatorEngine", "FormulaEvaluator", "create_evaluator"]
