"""
Тесты для мемоизации на сетке

Проверяет:
1. EAGER: заполнение всех узлов между окном и точкой
2. LAZY: вычисление только запрошенных узлов (NaN для пустых)
3. Рост буфера вверх и вниз, сдвиг buf_min
4. Повторные запросы не вызывают функцию
5. Интерполяция между узлами
"""

import math

import numpy as np
import pytest

from physcalc.core.errors import SentinelViolation
from physcalc.core.math.memoize import (
    MemoPolicy,
    NumericMemoizer,
    RangeMemoizer,
    memoize,
)

STEP = 1 / 1024


class CountingMixin:
    """Подсчёт вызовов grow_up / grow_down / new_buffer"""

    def __init__(self, f, stepsize, bufsize):
        self.calls = {"grow_up": 0, "grow_down": 0, "new_buffer": 0}
        super().__init__(f, stepsize, bufsize)

    def grow_up(self, *args):
        self.calls["grow_up"] += 1
        return super().grow_up(*args)

    def grow_down(self, *args):
        self.calls["grow_down"] += 1
        return super().grow_down(*args)

    def new_buffer(self, size):
        self.calls["new_buffer"] += 1
        return super().new_buffer(size)


class CountingRange(CountingMixin, RangeMemoizer):
    pass


class CountingNumeric(CountingMixin, NumericMemoizer):
    pass


class Identity:
    """f(t) = t с журналом аргументов"""

    def __init__(self):
        self.args = []

    def __call__(self, t):
        self.args.append(t)
        return t


def setup(cls):
    fn = Identity()
    memoizer = cls(fn, STEP, 8)
    return memoizer.memo(), fn, memoizer


def expected(size, filled, offset=0):
    """Буфер: 3 + (i - offset) * STEP для i из filled, иначе NaN."""
    return np.array([3 + (i - offset) * STEP if i in filled else math.nan for i in range(size)])


def assert_buffer(memo, expected_buffer):
    assert np.array_equal(memo.state.buffer, expected_buffer, equal_nan=True)


# =============================================================================
# EAGER
# =============================================================================


class TestRangeMemoizer:
    """Тесты RangeMemoizer"""

    def test_initial_state(self):
        memo, _, _ = setup(CountingRange)
        state = memo.state
        assert state.buffer is None
        assert state.buf_min == 0
        assert state.min == math.inf
        assert state.max == -math.inf

    def test_up(self):
        memo, fn, mn = setup(CountingRange)
        t7, t8, t9 = 3 + 7 * STEP, 3 + 8 * STEP, 3 + 9 * STEP

        assert memo(3) == 3
        assert fn.args == [3]
        assert mn.calls == {"grow_up": 0, "grow_down": 0, "new_buffer": 1}
        assert (memo.state.buf_min, memo.state.min, memo.state.max) == (3, 3, 3 + STEP)
        assert list(memo.state.buffer) == [3, 0, 0, 0, 0, 0, 0, 0]

        assert memo(t7) == t7
        assert (memo.state.min, memo.state.max) == (3, t8)
        assert list(memo.state.buffer) == [3 + i * STEP for i in range(8)]

        assert memo(t8) == t8
        assert memo(t8) == t8
        assert memo(t7) == t7
        assert memo(3) == 3
        assert len(fn.args) == 9
        assert mn.calls == {"grow_up": 1, "grow_down": 0, "new_buffer": 2}
        assert (memo.state.buf_min, memo.state.min, memo.state.max) == (3, 3, t9)
        assert list(memo.state.buffer) == [3 + i * STEP if i < 9 else 0 for i in range(16)]

    def test_down(self):
        memo, fn, mn = setup(CountingRange)
        t7, t8 = 3 - 7 * STEP, 3 - 8 * STEP

        assert memo(3) == 3
        assert memo(3) == 3
        assert len(fn.args) == 1

        assert memo(t7) == t7
        state = memo.state
        assert (state.buf_min, state.min, state.max) == (3 - 14 * STEP, t7, 3 + STEP)
        assert list(state.buffer) == (
            [0] * 7 + [3 + i * STEP for i in range(-7, 1)] + [0] * 7
        )

        assert memo(t8) == t8
        assert memo(t8) == t8
        assert memo(t7) == t7
        assert memo(3) == 3
        assert len(fn.args) == 9
        assert mn.calls == {"grow_up": 0, "grow_down": 1, "new_buffer": 2}
        assert (memo.state.buf_min, memo.state.min) == (3 - 14 * STEP, t8)
        assert list(memo.state.buffer) == [
            0 if i < 6 or i > 14 else 3 - (14 - i) * STEP for i in range(22)
        ]

    def test_far_jump_grows_by_twice_need(self):
        memo, fn, _ = setup(CountingRange)
        memo(0)
        memo(20 * STEP)
        # need = 19, grow = max(8, 38)
        assert len(memo.state.buffer) == 46
        assert len(fn.args) == 21


# =============================================================================
# LAZY
# =============================================================================


class TestNumericMemoizer:
    """Тесты NumericMemoizer"""

    def test_up(self):
        memo, fn, mn = setup(CountingNumeric)
        t7, t8, t9 = 3 + 7 * STEP, 3 + 8 * STEP, 3 + 9 * STEP

        assert memo(3) == 3
        assert fn.args == [3]
        assert mn.calls["new_buffer"] == 1
        assert (memo.state.buf_min, memo.state.min, memo.state.max) == (3, 3, 3 + STEP)
        assert_buffer(memo, expected(8, {0}))

        assert memo(t7) == t7
        assert (memo.state.min, memo.state.max) == (3, t8)
        assert_buffer(memo, expected(8, {0, 7}))

        assert memo(t8) == t8
        assert memo(t8) == t8
        assert memo(t7) == t7
        assert memo(3) == 3
        assert len(fn.args) == 3
        assert mn.calls == {"grow_up": 1, "grow_down": 0, "new_buffer": 2}
        assert (memo.state.buf_min, memo.state.min, memo.state.max) == (3, 3, t9)
        assert_buffer(memo, expected(16, {0, 7, 8}))

        # После роста вниз кэш остаётся согласованным
        assert memo(3 - STEP) == 3 - STEP
        assert memo(3 - STEP) == 3 - STEP
        assert memo(3) == 3
        assert len(fn.args) == 4
        assert mn.calls == {"grow_up": 1, "grow_down": 1, "new_buffer": 3}
        state = memo.state
        assert (state.buf_min, state.min, state.max) == (3 - 16 * STEP, 3 - STEP, t9)
        assert_buffer(memo, expected(32, {15, 16, 23, 24}, offset=16))

    def test_down(self):
        memo, fn, mn = setup(CountingNumeric)
        t7, t8 = 3 - 7 * STEP, 3 - 8 * STEP

        assert memo(3) == 3
        assert_buffer(memo, expected(8, {0}))

        assert memo(t7) == t7
        assert (memo.state.buf_min, memo.state.min) == (3 - 14 * STEP, t7)
        assert_buffer(memo, expected(22, {7, 14}, offset=14))

        assert memo(t8) == t8
        assert memo(t8) == t8
        assert memo(t7) == t7
        assert memo(3) == 3
        assert len(fn.args) == 3
        assert mn.calls == {"grow_up": 0, "grow_down": 1, "new_buffer": 2}
        assert memo.state.min == t8
        assert_buffer(memo, expected(22, {6, 7, 14}, offset=14))

    def test_nan_result_rejected(self):
        memo = memoize(lambda t: math.nan, STEP, 8, MemoPolicy.LAZY)
        with pytest.raises(SentinelViolation):
            memo(1.0)

    def test_eager_accepts_nan(self):
        memo = memoize(lambda t: math.nan, STEP, 8, MemoPolicy.EAGER)
        assert math.isnan(memo(1.0))


# =============================================================================
# INTERPOLATION & FACTORY
# =============================================================================


class TestMemoizedFunction:
    """Тесты интерполяции и фабрики memoize"""

    def test_interpolation(self):
        square = memoize(lambda t: t * t, stepsize=0.5, bufsize=4)
        assert square(1.0) == 1.0
        assert square(1.25) == pytest.approx(1.625)

    def test_near_node_uses_node(self):
        calls = []

        def f(t):
            calls.append(t)
            return 2 * t

        memo = memoize(f, 0.5, 4, MemoPolicy.LAZY)
        assert memo(1.0 + 0.5 / 8192) == 2.0
        assert calls == [1.0]

    def test_independent_caches(self):
        memoizer = RangeMemoizer(lambda t: t, STEP, 8)
        a = memoizer.memo()
        b = memoizer.memo()
        a(1.0)
        assert b.state.buffer is None

    def test_policy_from_string(self):
        memo = memoize(lambda t: t, STEP, 8, "lazy")
        assert isinstance(memo.memoizer, NumericMemoizer)

    @pytest.mark.parametrize("stepsize, bufsize", [(0, 8), (-STEP, 8), (STEP, 0)])
    def test_invalid_parameters(self, stepsize, bufsize):
        with pytest.raises(ValueError):
            memoize(lambda t: t, stepsize, bufsize)
