"""
Function Core — базовые классы физических функций

PFunction — функция с единицей измерения и скомпилированным вычислителем f.
PCalculus — одноаргументная функция времени с лениво вычисляемыми и
кэшируемыми derivative() и integral().

Набор видов узлов закрыт (FunctionKind); каждый вид реализует
differentiate() и integrate(), публичные derivative()/integral()
вычисляют результат один раз.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. derivative().unit is unit / time, integral().unit is unit * time
2. Повторный derivative()/integral() возвращает тот же объект
3. Имя без явного задания генерируется как "<Class>_<n>"
"""

import itertools
from abc import ABC, abstractmethod
from collections import defaultdict
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, ClassVar, DefaultDict, Iterator, Optional

from physcalc.core.config import DEFAULT_NUMERICS, NumericsConfig
from physcalc.core.domain.values import ValueKind
from physcalc.core.units.unit import Unit

if TYPE_CHECKING:
    from physcalc.core.functions.integral import IndefiniteIntegral


class FunctionKind(str, Enum):
    """Виды узлов"""

    CONSTANT = "constant"
    POLYNOMIAL = "polynomial"
    PIECEWISE = "piecewise"
    NUMERIC = "numeric"
    DERIVATIVE = "derivative"
    INDEFINITE_INTEGRAL = "indefinite_integral"
    DEFINITE_INTEGRAL = "definite_integral"
    SUM = "sum"
    PRODUCT = "product"


_NAME_COUNTERS: DefaultDict[str, Iterator[int]] = defaultdict(lambda: itertools.count(1))


def generate_name(prefix: str) -> str:
    return f"{prefix}_{next(_NAME_COUNTERS[prefix])}"


class PFunction(ABC):
    """
    Функция с единицей измерения.

    Attributes:
        unit: Единица значений
        name: Отображаемое имя
        numerics: Параметры численных методов
    """

    kind: ClassVar[FunctionKind]
    nargs: ClassVar[int] = 1

    def __init__(
        self,
        unit: Unit,
        name: Optional[str] = None,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ):
        if not isinstance(unit, Unit):
            raise TypeError(f"unit must be a Unit, got {unit!r}")
        self.unit = unit
        self.name = name or generate_name(type(self).__name__)
        self.numerics = numerics
        self._f: Optional[Callable[..., Any]] = None

    @property
    def timestep(self) -> float:
        return self.numerics.timestep

    @property
    @abstractmethod
    def value_kind(self) -> ValueKind:
        """Вид значений (SCALAR/VECTOR)."""

    @abstractmethod
    def compile(self) -> Callable[..., Any]:
        """Построить вычислитель f."""

    @property
    def f(self) -> Callable[..., Any]:
        if self._f is None:
            self._f = self.compile()
        return self._f

    def __call__(self, *args: float) -> Any:
        return self.f(*args)

    def set_name(self, name: str) -> "PFunction":
        self.name = name
        return self

    def equiv(self, other: "PFunction") -> Optional["PFunction"]:
        """
        Представитель, если other эквивалентна self, иначе None.

        По умолчанию эквивалентна только сама функция.
        """
        return self if other is self else None

    @abstractmethod
    def to_descriptor(self, var: str = "t") -> str:
        """LaTeX-дескриптор выражения."""

    def descriptor_with_unit(self, var: str = "t") -> str:
        return rf"{self.to_descriptor(var)}\ {self.unit.tex}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} [{self.unit.name}]>"


class PCalculus(PFunction):
    """Одноаргументная функция времени с производной и интегралом."""

    def __init__(
        self,
        unit: Unit,
        name: Optional[str] = None,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ):
        super().__init__(unit, name, numerics)
        self._derivative: Optional[PCalculus] = None
        self._integral: Optional["IndefiniteIntegral"] = None

    @property
    def derivative_unit(self) -> Unit:
        return self.unit.divide(self.unit.registry.time)

    @property
    def integral_unit(self) -> Unit:
        return self.unit.multiply(self.unit.registry.time)

    def derivative(self) -> "PCalculus":
        if self._derivative is None:
            self._derivative = self.differentiate()
        return self._derivative

    def integral(self) -> "IndefiniteIntegral":
        if self._integral is None:
            self._integral = self.integrate()
        return self._integral

    @abstractmethod
    def differentiate(self) -> "PCalculus":
        """Производная по времени (вызывается один раз)."""

    @abstractmethod
    def integrate(self) -> "IndefiniteIntegral":
        """Неопределённый интеграл (t0, t) -> ∫ (вызывается один раз)."""
