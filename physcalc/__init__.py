"""
physcalc — dimensionally-checked calculus for physical quantities.

Functions of time carry their units and provide derivatives and integrals,
analytically where a closed form exists and numerically otherwise.
"""

from physcalc.core.config import DEFAULT_NUMERICS, IntegrationMethod, NumericsConfig
from physcalc.core.domain import ValueKind, Vector
from physcalc.core.errors import (
    ConflictingSegment,
    DimensionMismatch,
    InconsistentType,
    InconsistentUnit,
    OutOfRange,
    PhysCalcError,
    SentinelViolation,
    UnitNameConflict,
    UnknownDimension,
    UnknownUnit,
)
from physcalc.core.functions import (
    Constant,
    NumericFunction,
    Piecewise,
    Polynomial,
    add_functions,
    mul_functions,
    sub_functions,
)
from physcalc.core.math import memoize, romberg
from physcalc.core.units import (
    DEFAULT_REGISTRY,
    UnitRegistry,
    create_registry,
    define_alias,
    define_unit,
    get_unit,
    is_unit,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "DEFAULT_NUMERICS",
    "IntegrationMethod",
    "NumericsConfig",
    # Values
    "ValueKind",
    "Vector",
    # Errors
    "PhysCalcError",
    "UnknownDimension",
    "UnknownUnit",
    "UnitNameConflict",
    "DimensionMismatch",
    "InconsistentUnit",
    "InconsistentType",
    "ConflictingSegment",
    "OutOfRange",
    "SentinelViolation",
    # Functions
    "Constant",
    "Polynomial",
    "Piecewise",
    "NumericFunction",
    "add_functions",
    "mul_functions",
    "sub_functions",
    # Numerics
    "memoize",
    "romberg",
    # Units
    "DEFAULT_REGISTRY",
    "UnitRegistry",
    "create_registry",
    "define_unit",
    "define_alias",
    "get_unit",
    "is_unit",
]
