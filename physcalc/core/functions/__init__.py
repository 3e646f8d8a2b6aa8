"""
Function Core — физические функции времени с производными и интегралами.
"""

from physcalc.core.functions.analytic import Constant, Polynomial, zero_function
from physcalc.core.functions.arith import (
    FunctionProduct,
    FunctionSum,
    SumIntegral,
    add_functions,
    mul_functions,
    sub_functions,
)
from physcalc.core.functions.base import FunctionKind, PCalculus, PFunction
from physcalc.core.functions.integral import (
    AnalyticIntegral,
    DefiniteIntegral,
    IndefiniteIntegral,
    NumericIntegral,
)
from physcalc.core.functions.numeric import NumericDerivative, NumericFunction
from physcalc.core.functions.piecewise import Piecewise, PiecewiseIndefiniteIntegral

__all__ = [
    # Base
    "FunctionKind",
    "PFunction",
    "PCalculus",
    # Analytic
    "Constant",
    "Polynomial",
    "zero_function",
    # Numeric
    "NumericFunction",
    "NumericDerivative",
    # Integrals
    "IndefiniteIntegral",
    "AnalyticIntegral",
    "NumericIntegral",
    "DefiniteIntegral",
    # Piecewise
    "Piecewise",
    "PiecewiseIndefiniteIntegral",
    # Arithmetic
    "FunctionSum",
    "SumIntegral",
    "add_functions",
    "sub_functions",
    "FunctionProduct",
    "mul_functions",
]
