"""
Analytic functions — константы и полиномы

Обе формы замкнуты относительно дифференцирования и интегрирования:
- Constant(c)' = 0 (канонический нулевой узел для unit/time)
- ∫ Constant(c) = Polynomial(0, c)
- Polynomial(c0..cn)' = Polynomial(c1, 2 c2, ..., n cn)
- ∫ Polynomial(c0..cn) = Polynomial(0, c0, c1/2, ..., cn/(n+1))

Эквивалентность (для схлопывания сегментов Piecewise):
- Constant ≡ Constant: та же единица и равное значение
- Polynomial ≡ Polynomial: та же единица и равные коэффициенты
  (без хвостовых нулей)
- Constant ≡ Polynomial степени 0 с тем же значением; представителем
  остаётся Constant
"""

from typing import Callable, Dict, Optional, Tuple

from physcalc.core.config import DEFAULT_NUMERICS, NumericsConfig
from physcalc.core.domain.values import Value, ValueKind, Vector, value_kind, zero_value
from physcalc.core.errors import InconsistentType
from physcalc.core.functions.base import FunctionKind, PCalculus, PFunction
from physcalc.core.functions.integral import AnalyticIntegral, IndefiniteIntegral
from physcalc.core.units.unit import Unit


def format_value(value: Value) -> str:
    """LaTeX-форма значения."""
    if isinstance(value, Vector):
        return rf"\left[{value.x:g}, {value.y:g}, {value.z:g}\right]"
    return f"{value:g}"


def _normalize(value: Value) -> Value:
    return float(value) if value_kind(value) is ValueKind.SCALAR else value


class Constant(PCalculus):
    """Постоянная функция f(t) = value."""

    kind = FunctionKind.CONSTANT

    def __init__(
        self,
        value: Value,
        unit: Unit,
        name: Optional[str] = None,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ):
        self.value = _normalize(value)
        self._value_kind = value_kind(self.value)
        super().__init__(unit, name, numerics)

    @property
    def value_kind(self) -> ValueKind:
        return self._value_kind

    def compile(self) -> Callable[[float], Value]:
        value = self.value
        return lambda t: value

    def differentiate(self) -> PCalculus:
        return zero_function(self.derivative_unit, self.value_kind)

    def integrate(self) -> IndefiniteIntegral:
        expression = Polynomial(
            self.integral_unit, zero_value(self.value_kind), self.value, numerics=self.numerics
        )
        return AnalyticIntegral(self, expression)

    def equiv(self, other: PFunction) -> Optional[PFunction]:
        if other is self:
            return self
        if other.unit is not self.unit:
            return None
        if isinstance(other, Constant) and other.value == self.value:
            return self
        if isinstance(other, Polynomial) and other.as_constant_value() == self.value:
            return self
        return None

    def to_descriptor(self, var: str = "t") -> str:
        return format_value(self.value)


class Polynomial(PCalculus):
    """
    f(t) = c0 + c1 t + ... + cn t^n

    Коэффициенты — скаляры или Vector (все одного вида).
    Без коэффициентов — нулевой полином.
    """

    kind = FunctionKind.POLYNOMIAL

    def __init__(
        self,
        unit: Unit,
        *coefficients: Value,
        name: Optional[str] = None,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ):
        coefficients = tuple(_normalize(c) for c in coefficients) or (0.0,)
        kinds = {value_kind(c) for c in coefficients}
        if len(kinds) > 1:
            raise InconsistentType("Polynomial coefficients mix scalars and vectors")
        self.coefficients: Tuple[Value, ...] = coefficients
        self._value_kind = kinds.pop()
        super().__init__(unit, name, numerics)

    @property
    def value_kind(self) -> ValueKind:
        return self._value_kind

    @property
    def degree(self) -> int:
        return len(self.trimmed()) - 1

    def trimmed(self) -> Tuple[Value, ...]:
        """Коэффициенты без хвостовых нулей."""
        zero = zero_value(self.value_kind)
        coefficients = list(self.coefficients)
        while coefficients and coefficients[-1] == zero:
            coefficients.pop()
        return tuple(coefficients)

    def as_constant_value(self) -> Optional[Value]:
        """Значение, если полином постоянный, иначе None."""
        trimmed = self.trimmed()
        if not trimmed:
            return zero_value(self.value_kind)
        if len(trimmed) == 1:
            return trimmed[0]
        return None

    def compile(self) -> Callable[[float], Value]:
        coefficients = self.coefficients[::-1]

        def evaluate(t: float) -> Value:
            # Horner
            acc = coefficients[0]
            for c in coefficients[1:]:
                acc = acc * t + c
            return acc

        return evaluate

    def differentiate(self) -> PCalculus:
        if len(self.coefficients) < 2:
            return zero_function(self.derivative_unit, self.value_kind)
        return Polynomial(
            self.derivative_unit,
            *(c * i for i, c in enumerate(self.coefficients) if i > 0),
            numerics=self.numerics,
        )

    def integrate(self) -> IndefiniteIntegral:
        expression = Polynomial(
            self.integral_unit,
            zero_value(self.value_kind),
            *(c / (i + 1) for i, c in enumerate(self.coefficients)),
            numerics=self.numerics,
        )
        return AnalyticIntegral(self, expression)

    def equiv(self, other: PFunction) -> Optional[PFunction]:
        if other is self:
            return self
        if other.unit is not self.unit:
            return None
        if isinstance(other, Polynomial) and other.trimmed() == self.trimmed():
            return self
        if isinstance(other, Constant) and self.as_constant_value() == other.value:
            return other
        return None

    def to_descriptor(self, var: str = "t") -> str:
        terms = []
        for i, c in enumerate(self.coefficients):
            if c == zero_value(self.value_kind):
                continue
            power = "" if i == 0 else var if i == 1 else f"{var}^{{{i}}}"
            if not power:
                terms.append(format_value(c))
            elif c == 1:
                terms.append(power)
            else:
                terms.append(f"{format_value(c)} {power}")
        if not terms:
            return "0"
        return " + ".join(terms).replace("+ -", "- ")


class _ZeroConstant(Constant):
    """Общий нулевой узел; set_name возвращает переименованную копию."""

    def set_name(self, name: str) -> Constant:
        return Constant(self.value, self.unit, name=name, numerics=self.numerics)


_ZEROS: Dict[Tuple[Unit, ValueKind], Constant] = {}


def zero_function(unit: Unit, kind: ValueKind = ValueKind.SCALAR) -> Constant:
    """
    Канонический нулевой узел для (unit, kind), создаётся один раз.

    Узел разделяется всеми производными констант этой единицы, поэтому
    set_name не меняет его, а возвращает новый Constant.
    """
    key = (unit, kind)
    zero = _ZEROS.get(key)
    if zero is None:
        zero = _ZEROS[key] = _ZeroConstant(zero_value(kind), unit, name="0")
    return zero
