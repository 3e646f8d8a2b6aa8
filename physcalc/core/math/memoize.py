"""
Memoization Buffers — кэширование функции на равномерной сетке

Значения функции вычисляются в узлах сетки шага stepsize и хранятся в
numpy буфере; между узлами используется линейная интерполяция.

Политики:
- RangeMemoizer (EAGER): при выходе за окно [min, max) вычисляются ВСЕ узлы
  между краем окна и запрошенной точкой
- NumericMemoizer (LAZY): вычисляется только запрошенный узел, отсутствие
  значения помечается NaN

Буфер растёт геометрически: добавляется max(capacity, 2 * need) ячеек.
При росте вниз существующие данные сдвигаются вправо, buf_min уменьшается.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. buf_min — время ячейки 0; ячейка n соответствует buf_min + n * stepsize
2. min <= max (после первого запроса); окно выровнено по stepsize
3. Повторный запрос узла внутри окна не вызывает функцию
4. LAZY: функция, вернувшая NaN → SentinelViolation
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np

from physcalc.core.config import MEMO_BUFSIZE, MEMO_EPSILON_DIVISOR, MEMO_STEPSIZE
from physcalc.core.errors import SentinelViolation
from physcalc.core.math.numerical_safeguards import (
    round_half_up,
    validate_positive,
    validate_positive_int,
)

logger = logging.getLogger(__name__)


class MemoPolicy(str, Enum):
    """Политика заполнения буфера"""

    EAGER = "eager"
    LAZY = "lazy"


@dataclass(frozen=True)
class MemoState:
    """
    Снимок состояния мемоизированной функции (для отладки и тестов).

    buffer — копия буфера или None до первого запроса.
    """

    buf_min: float
    min: float
    max: float
    buffer: Optional[np.ndarray]


# =============================================================================
# MEMOIZER BASE
# =============================================================================


class MemoizerBase(ABC):
    """
    Общая логика роста буфера.

    Подклассы определяют new_buffer (начальное заполнение) и read
    (политику заполнения окна).
    """

    def __init__(
        self,
        f: Callable[[float], float],
        stepsize: float = MEMO_STEPSIZE,
        bufsize: int = MEMO_BUFSIZE,
    ):
        self.f = f
        self.stepsize = validate_positive(stepsize, "stepsize")
        self.bufsize = validate_positive_int(bufsize, "bufsize")

    def grow_up(
        self, buffer: np.ndarray, buf_min: float, min_: float, max_: float, t: float
    ) -> Tuple[np.ndarray, float]:
        """Расширение вверх; данные остаются с ячейки 0."""
        need = round_half_up((t - max_) / self.stepsize)
        grow = max(len(buffer), need * 2)
        nbuf = self.new_buffer(len(buffer) + grow)
        nbuf[: len(buffer)] = buffer
        logger.debug("Memo buffer grown up: %d -> %d cells", len(buffer), len(nbuf))
        return nbuf, buf_min

    def grow_down(
        self, buffer: np.ndarray, buf_min: float, min_: float, max_: float, t: float
    ) -> Tuple[np.ndarray, float]:
        """Расширение вниз; данные сдвигаются на grow ячеек, buf_min уменьшается."""
        need = round_half_up((min_ - t) / self.stepsize)
        grow = max(len(buffer), need * 2)
        nbuf = self.new_buffer(len(buffer) + grow)
        nbuf[grow:] = buffer
        logger.debug("Memo buffer grown down: %d -> %d cells", len(buffer), len(nbuf))
        return nbuf, buf_min - grow * self.stepsize

    def new_buffer(self, size: int) -> np.ndarray:
        return np.zeros(size, dtype=np.float64)

    def memo(self) -> "MemoizedFunction":
        """Новая мемоизированная функция с собственным (пустым) буфером."""
        return MemoizedFunction(self)

    def cell(self, cache: "MemoizedFunction", t: float) -> int:
        return round_half_up((t - cache.buf_min) / self.stepsize)

    def start(self, cache: "MemoizedFunction", t: float) -> None:
        """Первый запрос: окно вырождено в точку t."""
        cache.buf_min = cache.min = cache.max = t
        cache.buffer = self.new_buffer(self.bufsize)

    @abstractmethod
    def read(self, cache: "MemoizedFunction", t: float) -> float:
        """Значение в узле сетки t."""


# =============================================================================
# EAGER
# =============================================================================


class RangeMemoizer(MemoizerBase):
    """Заполняет все узлы между окном и запрошенной точкой."""

    def read(self, cache: "MemoizedFunction", t: float) -> float:
        step = self.stepsize
        if cache.buffer is None:
            self.start(cache, t)
        n = self.cell(cache, t)
        if cache.min <= t < cache.max:
            return float(cache.buffer[n])

        if t < cache.min:
            if n < 0:
                cache.buffer, cache.buf_min = self.grow_down(
                    cache.buffer, cache.buf_min, cache.min, cache.max, t
                )
                n = self.cell(cache, t)
            i = 1
            x = cache.min - step
            while x > t - step / 2:
                cache.buffer[self.cell(cache, x)] = self.f(x)
                i += 1
                x = cache.min - i * step
            cache.min = round_half_up(t / step) * step
        else:
            if n >= len(cache.buffer):
                cache.buffer, cache.buf_min = self.grow_up(
                    cache.buffer, cache.buf_min, cache.min, cache.max, t
                )
                n = self.cell(cache, t)
            i = 0
            x = cache.max
            while x < t + step / 2:
                cache.buffer[self.cell(cache, x)] = self.f(x)
                i += 1
                x = cache.max + i * step
            cache.max = round_half_up(t / step + 1) * step
        return float(cache.buffer[n])


# =============================================================================
# LAZY
# =============================================================================


class NumericMemoizer(MemoizerBase):
    """
    Вычисляет только запрошенный узел.

    Пустые ячейки содержат NaN. Функции, возвращающие NaN, лениво
    мемоизировать нельзя: такой результат → SentinelViolation.
    """

    def new_buffer(self, size: int) -> np.ndarray:
        return np.full(size, np.nan, dtype=np.float64)

    def read(self, cache: "MemoizedFunction", t: float) -> float:
        step = self.stepsize
        if cache.buffer is None:
            self.start(cache, t)
        n = self.cell(cache, t)
        if cache.min <= t < cache.max:
            v = cache.buffer[n]
            if not math.isnan(v):
                return float(v)
        elif t < cache.min:
            if n < 0:
                cache.buffer, cache.buf_min = self.grow_down(
                    cache.buffer, cache.buf_min, cache.min, cache.max, t
                )
                n = self.cell(cache, t)
            cache.min = round_half_up(t / step) * step
        else:
            if n >= len(cache.buffer):
                cache.buffer, cache.buf_min = self.grow_up(
                    cache.buffer, cache.buf_min, cache.min, cache.max, t
                )
                n = self.cell(cache, t)
            cache.max = round_half_up(1 + t / step) * step

        x = round_half_up(t / step) * step
        v = self.f(x)
        if math.isnan(v):
            raise SentinelViolation(f"Function returned NaN at {x}")
        cache.buffer[n] = v
        return v


# =============================================================================
# MEMOIZED FUNCTION
# =============================================================================


class MemoizedFunction:
    """
    Мемоизированная функция: f(t) с интерполяцией между узлами сетки.

    Точки в пределах stepsize / MEMO_EPSILON_DIVISOR от узла возвращают
    значение узла без интерполяции.
    """

    def __init__(self, memoizer: MemoizerBase):
        self.memoizer = memoizer
        self.buffer: Optional[np.ndarray] = None
        self.buf_min = 0.0
        self.min = math.inf
        self.max = -math.inf
        self._epsilon = memoizer.stepsize / MEMO_EPSILON_DIVISOR

    def __call__(self, t: float) -> float:
        step = self.memoizer.stepsize
        read = self.memoizer.read
        tl = math.floor(t / step) * step
        tu = math.ceil(t / step) * step
        if abs(t - tl) < self._epsilon:
            return read(self, tl)
        if abs(t - tu) < self._epsilon:
            return read(self, tu)
        vl = read(self, tl)
        vu = read(self, tu)
        return vl + (vu - vl) * (t - tl) / step

    @property
    def state(self) -> MemoState:
        buffer = None if self.buffer is None else self.buffer.copy()
        return MemoState(buf_min=self.buf_min, min=self.min, max=self.max, buffer=buffer)


_POLICIES = {
    MemoPolicy.EAGER: RangeMemoizer,
    MemoPolicy.LAZY: NumericMemoizer,
}


def memoize(
    f: Callable[[float], float],
    stepsize: float = MEMO_STEPSIZE,
    bufsize: int = MEMO_BUFSIZE,
    policy: MemoPolicy = MemoPolicy.EAGER,
) -> MemoizedFunction:
    """
    Мемоизация скалярной функции на сетке stepsize.

    Examples:
        >>> square = memoize(lambda t: t * t, stepsize=0.5, bufsize=4)
        >>> square(1.0)
        1.0
        >>> square(1.25)  # интерполяция между 1.0 и 2.25
        1.625
    """
    return _POLICIES[MemoPolicy(policy)](f, stepsize, bufsize).memo()
