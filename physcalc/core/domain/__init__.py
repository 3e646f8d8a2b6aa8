"""
Domain value objects.

Значения физических функций: скаляры и 3-векторы.
"""

from physcalc.core.domain.values import (
    Value,
    ValueKind,
    Vector,
    add_values,
    negate_value,
    sub_values,
    value_kind,
    zero_value,
)

__all__ = [
    "Value",
    "ValueKind",
    "Vector",
    "add_values",
    "negate_value",
    "sub_values",
    "value_kind",
    "zero_value",
]
