"""
Numeric functions — функции без замкнутой формы

NumericFunction оборачивает произвольную скалярную функцию времени.
Производная — центральная разность NumericDerivative с шагом timestep,
интеграл — NumericIntegral.
"""

from typing import Callable, Optional

from physcalc.core.config import DEFAULT_NUMERICS, NumericsConfig
from physcalc.core.domain.values import Value, ValueKind
from physcalc.core.functions.base import FunctionKind, PCalculus
from physcalc.core.functions.integral import AnalyticIntegral, IndefiniteIntegral, NumericIntegral
from physcalc.core.units.unit import Unit


class NumericFunction(PCalculus):
    """Скалярная функция, заданная вычислителем fn(t)."""

    kind = FunctionKind.NUMERIC

    def __init__(
        self,
        fn: Callable[[float], float],
        unit: Unit,
        name: Optional[str] = None,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ):
        super().__init__(unit, name, numerics)
        self.fn = fn

    @property
    def value_kind(self) -> ValueKind:
        return ValueKind.SCALAR

    def compile(self) -> Callable[[float], float]:
        return self.fn

    def differentiate(self) -> PCalculus:
        return NumericDerivative(self)

    def integrate(self) -> IndefiniteIntegral:
        return NumericIntegral(self)

    def to_descriptor(self, var: str = "t") -> str:
        return f"{self.name}({var})"


class NumericDerivative(PCalculus):
    """
    Центральная разность порядка order от base.

    f'(t) = (source(t + h/2) - source(t - h/2)) / h, h = timestep

    Интеграл восстанавливается аналитически через source.
    """

    kind = FunctionKind.DERIVATIVE

    def __init__(
        self,
        source: PCalculus,
        order: int = 1,
        base: Optional[PCalculus] = None,
        name: Optional[str] = None,
    ):
        super().__init__(source.derivative_unit, name, source.numerics)
        self.source = source
        self.order = order
        self.base = base or source

    @property
    def value_kind(self) -> ValueKind:
        return self.source.value_kind

    def compile(self) -> Callable[[float], Value]:
        f = self.source.f
        h = self.timestep
        return lambda t: (f(t + h / 2) - f(t - h / 2)) / h

    def differentiate(self) -> PCalculus:
        return NumericDerivative(self, self.order + 1, self.base)

    def integrate(self) -> IndefiniteIntegral:
        return AnalyticIntegral(self, self.source)

    def to_descriptor(self, var: str = "t") -> str:
        if self.order == 1:
            op = rf"\dfrac{{d}}{{d{var}}}"
        else:
            op = rf"\dfrac{{d^{{{self.order}}}}}{{d{var}^{{{self.order}}}}}"
        return rf"{op}{{{self.base.to_descriptor(var)}}}"
