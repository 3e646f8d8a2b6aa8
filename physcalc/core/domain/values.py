"""
Values — значения функций: скаляры и 3-векторы

Функция производит значения одного вида (ValueKind). Интегралы и
суммы комбинируют значения только одного вида; смешение → InconsistentType.
"""

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Union

from physcalc.core.errors import InconsistentType


class ValueKind(str, Enum):
    """Вид значения функции"""

    SCALAR = "scalar"
    VECTOR = "vector"


@dataclass(frozen=True)
class Vector:
    """Неизменяемый 3-вектор"""

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> "Vector":
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, k: float) -> "Vector":
        if not _is_scalar(k):
            return NotImplemented
        return Vector(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Vector":
        if not _is_scalar(k):
            return NotImplemented
        return Vector(self.x / k, self.y / k, self.z / k)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z


Value = Union[float, Vector]


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def value_kind(value: Value) -> ValueKind:
    """
    Вид значения.

    Raises:
        InconsistentType: Значение не скаляр и не Vector
    """
    if _is_scalar(value):
        return ValueKind.SCALAR
    if isinstance(value, Vector):
        return ValueKind.VECTOR
    raise InconsistentType(f"Unsupported value {value!r}")


def zero_value(kind: ValueKind) -> Value:
    return Vector.zero() if kind is ValueKind.VECTOR else 0.0


def add_values(first: Value, *rest: Value) -> Value:
    """
    Сумма значений одного вида.

    Raises:
        InconsistentType: Смешение скаляров и векторов
    """
    kind = value_kind(first)
    total = first
    for value in rest:
        if value_kind(value) is not kind:
            raise InconsistentType(f"Cannot add {value_kind(value).value} to {kind.value}")
        total = total + value
    return total


def sub_values(a: Value, b: Value) -> Value:
    if value_kind(a) is not value_kind(b):
        raise InconsistentType(f"Cannot subtract {value_kind(b).value} from {value_kind(a).value}")
    return a - b


def negate_value(a: Value) -> Value:
    value_kind(a)
    return -a
