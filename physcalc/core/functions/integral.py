"""
Integrals — двухаргументные узлы интегрирования

IndefiniteIntegral(t0, t) = ∫_{t0}^{t} integrand.

- AnalyticIntegral: F(t) - F(t0) по замкнутой первообразной F
- NumericIntegral: трапеции по мемоизированной подынтегральной функции
  или квадратура Ромберга (скалярные функции)
- DefiniteIntegral: одноаргументный узел t -> I(t0, t) с фиксированным t0

Производная неопределённого интеграла — подынтегральная функция.
Повторное интегрирование определено только для AnalyticIntegral.
"""

import logging
import math
from typing import Callable, List, Optional

import numpy as np

from physcalc.core.config import IntegrationMethod, NumericsConfig
from physcalc.core.domain.values import Value, ValueKind
from physcalc.core.errors import InconsistentType
from physcalc.core.functions.base import FunctionKind, PCalculus, PFunction
from physcalc.core.math.memoize import MemoizedFunction, memoize
from physcalc.core.math.romberg import romberg
from physcalc.core.units.unit import Unit

logger = logging.getLogger(__name__)


class IndefiniteIntegral(PFunction):
    """Базовый неопределённый интеграл: f(t0, t)."""

    kind = FunctionKind.INDEFINITE_INTEGRAL
    nargs = 2

    def __init__(
        self,
        integrand: PCalculus,
        unit: Unit,
        name: Optional[str] = None,
        numerics: Optional[NumericsConfig] = None,
    ):
        super().__init__(unit, name, numerics or integrand.numerics)
        self.integrand = integrand

    @property
    def value_kind(self) -> ValueKind:
        return self.integrand.value_kind

    def derivative(self) -> PCalculus:
        return self.integrand

    def integral(self) -> PFunction:
        raise NotImplementedError(f"Integral of {self.name} is not supported")

    def from_(self, t0: float) -> "DefiniteIntegral":
        """Определённый интеграл с нижним пределом t0."""
        return DefiniteIntegral(self, t0)

    def to_descriptor(self, var: str = "t") -> str:
        return rf"\int{{{self.integrand.to_descriptor(var)}}}\,\mathrm{{d}}{var}"


class AnalyticIntegral(IndefiniteIntegral):
    """
    Интеграл по известной первообразной expression.

    f(t0, t) = expression(t) - expression(t0)
    """

    def __init__(self, integrand: PCalculus, expression: PCalculus, name: Optional[str] = None):
        super().__init__(integrand, expression.unit, name)
        self.expression = expression

    def compile(self) -> Callable[[float, float], Value]:
        F = self.expression.f
        return lambda t0, t: F(t) - F(t0)

    def integral(self) -> PFunction:
        return self.expression.integral()

    def to_descriptor(self, var: str = "t") -> str:
        return self.expression.to_descriptor(var)


class NumericIntegral(IndefiniteIntegral):
    """
    Численный интеграл скалярной функции.

    TRAPEZOID: точный интеграл кусочно-линейной интерполяции, которую
    строит RangeMemoizer на сетке memo_stepsize (узлы сетки внутри
    [t0, t] плюс концы отрезка).
    ROMBERG: romberg(integrand, t0, t, romberg_max_steps, romberg_accuracy).

    Мемоизатор создаётся при первом вычислении и принадлежит узлу.
    """

    def __init__(
        self,
        integrand: PCalculus,
        unit: Optional[Unit] = None,
        name: Optional[str] = None,
        numerics: Optional[NumericsConfig] = None,
    ):
        if integrand.value_kind is not ValueKind.SCALAR:
            raise InconsistentType(
                f"Numeric integration requires a scalar integrand, {integrand.name} is "
                f"{integrand.value_kind.value}"
            )
        super().__init__(integrand, unit or integrand.integral_unit, name, numerics)
        self._memo: Optional[MemoizedFunction] = None

    def compile(self) -> Callable[[float, float], float]:
        if self.numerics.integration_method is IntegrationMethod.ROMBERG:
            return self._romberg
        return self._trapezoid

    def _romberg(self, t0: float, t: float) -> float:
        if t == t0:
            return 0.0
        return romberg(
            self.integrand.f,
            t0,
            t,
            self.numerics.romberg_max_steps,
            self.numerics.romberg_accuracy,
        )

    def _trapezoid(self, t0: float, t: float) -> float:
        if t == t0:
            return 0.0
        if t < t0:
            return -self._trapezoid(t, t0)
        if self._memo is None:
            self._memo = memoize(
                self.integrand.f,
                stepsize=self.numerics.memo_stepsize,
                bufsize=self.numerics.memo_bufsize,
            )
        step = self.numerics.memo_stepsize
        first = math.floor(t0 / step) + 1
        last = math.ceil(t / step) - 1
        points: List[float] = [t0, *(k * step for k in range(first, last + 1)), t]
        xs = np.asarray(points, dtype=np.float64)
        ys = np.asarray([self._memo(x) for x in points], dtype=np.float64)
        return float(np.sum((ys[1:] + ys[:-1]) * np.diff(xs)) / 2.0)


class DefiniteIntegral(PCalculus):
    """t -> indefinite(t0, t)"""

    kind = FunctionKind.DEFINITE_INTEGRAL

    def __init__(self, indefinite: IndefiniteIntegral, t0: float, name: Optional[str] = None):
        super().__init__(indefinite.unit, name, indefinite.numerics)
        self.indefinite = indefinite
        self.t0 = t0

    @property
    def value_kind(self) -> ValueKind:
        return self.indefinite.value_kind

    def compile(self) -> Callable[[float], Value]:
        integral = self.indefinite.f
        t0 = self.t0
        return lambda t: integral(t0, t)

    def differentiate(self) -> PCalculus:
        return self.indefinite.integrand

    def integrate(self) -> IndefiniteIntegral:
        return NumericIntegral(self)

    def to_descriptor(self, var: str = "t") -> str:
        return (
            rf"\int_{{{self.t0:g}}}^{{{var}}}{{{self.indefinite.integrand.to_descriptor(var)}}}"
            rf"\,\mathrm{{d}}{var}"
        )
