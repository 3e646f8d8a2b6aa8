"""
Piecewise Composer — кусочно-заданные функции

Сегмент i действует на [start_i, start_{i+1}); последний сегмент
продолжается до +∞. До первой точки разбиения функция не определена.

Добавление сегмента add(t, f):
1. t совпадает с существующей точкой: эквивалентная функция заменяет
   сегмент своим представителем, иначе ConflictingSegment
2. Предыдущий сегмент эквивалентен: новая точка не создаётся
3. Следующий сегмент эквивалентен: его начало переносится на t
4. Иначе вставка

Интеграл сшивает интегралы сегментов по пересечениям с [t0, t].

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. start_times строго возрастают, дубликатов нет
2. Соседние сегменты не эквивалентны
3. Все сегменты имеют единицу и вид значения Piecewise
"""

import logging
import math
from bisect import bisect_left, bisect_right
from typing import Callable, List, Optional, Tuple, Union

from physcalc.core.config import DEFAULT_NUMERICS, NumericsConfig
from physcalc.core.domain.values import (
    Value,
    ValueKind,
    Vector,
    add_values,
    negate_value,
    value_kind,
    zero_value,
)
from physcalc.core.errors import (
    ConflictingSegment,
    InconsistentType,
    InconsistentUnit,
    OutOfRange,
)
from physcalc.core.functions.analytic import Constant, format_value
from physcalc.core.functions.base import FunctionKind, PCalculus
from physcalc.core.functions.integral import IndefiniteIntegral
from physcalc.core.units.unit import Unit

logger = logging.getLogger(__name__)

Segment = Union[PCalculus, float, Vector]


class Piecewise(PCalculus):
    """
    Кусочная функция времени.

    Args:
        unit: Единица всех сегментов
        value_type: SCALAR/VECTOR (по умолчанию атрибут "type" единицы или SCALAR)
    """

    kind = FunctionKind.PIECEWISE

    def __init__(
        self,
        unit: Unit,
        value_type: Optional[ValueKind] = None,
        name: Optional[str] = None,
        numerics: NumericsConfig = DEFAULT_NUMERICS,
    ):
        super().__init__(unit, name, numerics)
        self._value_kind = ValueKind(value_type or unit.attributes.get("type", ValueKind.SCALAR))
        self._starts: List[float] = []
        self._functions: List[PCalculus] = []

    @property
    def value_kind(self) -> ValueKind:
        return self._value_kind

    @property
    def start_times(self) -> Tuple[float, ...]:
        return tuple(self._starts)

    @property
    def functions(self) -> Tuple[PCalculus, ...]:
        return tuple(self._functions)

    def __len__(self) -> int:
        return len(self._starts)

    # -------------------------------------------------------------------------
    # Построение
    # -------------------------------------------------------------------------

    def _coerce(self, f: Segment) -> PCalculus:
        if not isinstance(f, PCalculus):
            try:
                kind = value_kind(f)
            except InconsistentType:
                raise InconsistentType(f"Cannot use {f!r} as a segment of {self.name}") from None
            if kind is not self.value_kind:
                raise InconsistentType(
                    f"{kind.value} value {f!r} in {self.value_kind.value} piecewise {self.name}"
                )
            return Constant(f, self.unit, numerics=self.numerics)
        if f.value_kind is not self.value_kind:
            raise InconsistentType(
                f"{f.value_kind.value} segment {f.name} in {self.value_kind.value} piecewise {self.name}"
            )
        if f.unit is not self.unit:
            raise InconsistentUnit(
                f"Segment {f.name} has unit {f.unit.name}, expected {self.unit.name}"
            )
        return f

    def add(self, t: float, f: Segment) -> "Piecewise":
        """
        Добавить сегмент, начинающийся в t.

        Raises:
            InconsistentType: Вид значения не совпадает
            InconsistentUnit: Единица не совпадает
            ConflictingSegment: В точке t уже есть неэквивалентный сегмент
        """
        fn = self._coerce(f)
        starts, functions = self._starts, self._functions
        idx = bisect_left(starts, t)

        if idx < len(starts) and starts[idx] == t:
            representative = functions[idx].equiv(fn)
            if representative is None:
                raise ConflictingSegment(
                    f"{self.name} already has segment {functions[idx].name} at {t}"
                )
            functions[idx] = representative
        elif idx > 0 and functions[idx - 1].equiv(fn) is not None:
            functions[idx - 1] = functions[idx - 1].equiv(fn)
            logger.debug("%s: segment at %s collapsed into preceding segment", self.name, t)
        elif idx < len(starts) and functions[idx].equiv(fn) is not None:
            functions[idx] = functions[idx].equiv(fn)
            logger.debug("%s: segment start moved from %s to %s", self.name, starts[idx], t)
            starts[idx] = t
        else:
            starts.insert(idx, t)
            functions.insert(idx, fn)

        self._derivative = None
        self._integral = None
        return self

    def at(self, *pairs: Tuple[float, Segment]) -> "Piecewise":
        for t, f in pairs:
            self.add(t, f)
        return self

    def initial(self, f: Segment) -> "Piecewise":
        """Сегмент, действующий с -∞."""
        return self.add(-math.inf, f)

    # -------------------------------------------------------------------------
    # Вычисление
    # -------------------------------------------------------------------------

    def segment_index(self, t: float) -> int:
        """
        Индекс сегмента, содержащего t.

        Raises:
            OutOfRange: t до первой точки разбиения или сегментов нет
        """
        idx = bisect_right(self._starts, t) - 1
        if idx < 0:
            if not self._starts:
                raise OutOfRange(f"{self.name} has no segments")
            raise OutOfRange(f"{self.name} is undefined at {t} (starts at {self._starts[0]})")
        return idx

    def compile(self) -> Callable[[float], Value]:
        def evaluate(t: float) -> Value:
            return self._functions[self.segment_index(t)](t)

        return evaluate

    def differentiate(self) -> PCalculus:
        result = Piecewise(self.derivative_unit, self.value_kind, numerics=self.numerics)
        for start, fn in zip(self._starts, self._functions):
            result.add(start, fn.derivative())
        return result

    def integrate(self) -> IndefiniteIntegral:
        return PiecewiseIndefiniteIntegral(self)

    def to_descriptor(self, var: str = "t") -> str:
        rows = []
        for i, (start, fn) in enumerate(zip(self._starts, self._functions)):
            if i + 1 < len(self._starts):
                cond = rf"{format_value(start)} \le {var} < {format_value(self._starts[i + 1])}"
            else:
                cond = rf"{format_value(start)} \le {var}"
            rows.append(rf"{fn.to_descriptor(var)} & {cond}")
        return r"\begin{cases} " + r" \\ ".join(rows) + r" \end{cases}"


class PiecewiseIndefiniteIntegral(IndefiniteIntegral):
    """
    Интеграл Piecewise: сумма интегралов сегментов по пересечениям.

    Сегменты фиксируются в момент интегрирования.
    """

    def __init__(self, piecewise: Piecewise, name: Optional[str] = None):
        super().__init__(piecewise, piecewise.integral_unit, name)
        self._starts = piecewise.start_times
        self._integrals = tuple(fn.integral() for fn in piecewise.functions)

    def compile(self) -> Callable[[float, float], Value]:
        return self._evaluate

    def _evaluate(self, t0: float, t: float) -> Value:
        if t < t0:
            return negate_value(self._evaluate(t, t0))
        starts = self._starts
        if not starts or t0 < starts[0]:
            raise OutOfRange(f"{self.name} is undefined at {t0}")
        if t == t0:
            return zero_value(self.value_kind)

        total: Optional[Value] = None
        for i, (start, integral) in enumerate(zip(starts, self._integrals)):
            end = starts[i + 1] if i + 1 < len(starts) else t
            lo = max(start, t0)
            hi = min(end, t)
            if lo < hi:
                part = integral(lo, hi)
                total = part if total is None else add_values(total, part)
        return total
