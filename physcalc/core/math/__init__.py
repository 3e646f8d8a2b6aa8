"""
Core math modules для physcalc

Численные примитивы: защитные проверки, мемоизация на сетке, квадратура Ромберга.
"""

# Numerical Safeguards
from physcalc.core.math.numerical_safeguards import (
    is_valid_float,
    round_half_up,
    validate_finite,
    validate_positive,
    validate_positive_int,
)

# Memoization
from physcalc.core.math.memoize import (
    MemoizedFunction,
    MemoizerBase,
    MemoPolicy,
    MemoState,
    NumericMemoizer,
    RangeMemoizer,
    memoize,
)

# Quadrature
from physcalc.core.math.romberg import romberg

__all__ = [
    # Numerical Safeguards — Checks
    "is_valid_float",
    "round_half_up",
    # Numerical Safeguards — Validation
    "validate_finite",
    "validate_positive",
    "validate_positive_int",
    # Memoization
    "MemoizedFunction",
    "MemoizerBase",
    "MemoPolicy",
    "MemoState",
    "NumericMemoizer",
    "RangeMemoizer",
    "memoize",
    # Quadrature
    "romberg",
]
