"""
Romberg Quadrature — адаптивное численное интегрирование

Треугольная таблица R(i, j):
    R(0, 0) = (f(a) + f(b)) * h / 2                        (трапеция)
    R(i, 0) = R(i-1, 0) / 2 + h_i * Σ f(a + (2k-1) h_i),  k = 1..2^(i-1)
    R(i, j) = (4^j R(i, j-1) - R(i-1, j-1)) / (4^j - 1)

Каждая строка вычисляет функцию только в 2^(i-1) новых средних точках.
Хранятся только две строки (предыдущая и текущая).

Остановка: i > 1 и |R(i-1, i-1) - R(i, i)| < accuracy → R(i, i).
Если сходимость не достигнута за max_steps строк, возвращается последняя
диагональная оценка (best effort).
"""

import logging
from typing import Callable

import numpy as np

from physcalc.core.config import ROMBERG_ACCURACY, ROMBERG_MAX_STEPS
from physcalc.core.math.numerical_safeguards import (
    validate_finite,
    validate_positive,
    validate_positive_int,
)

logger = logging.getLogger(__name__)


def romberg(
    f: Callable[[float], float],
    a: float,
    b: float,
    max_steps: int = ROMBERG_MAX_STEPS,
    accuracy: float = ROMBERG_ACCURACY,
) -> float:
    """
    Интеграл f на [a, b] методом Ромберга.

    Args:
        f: Скалярная функция
        a: Нижний предел (b < a даёт интеграл со знаком минус)
        b: Верхний предел
        max_steps: Максимум строк таблицы (>= 1)
        accuracy: Порог сходимости (> 0)

    Returns:
        Оценка интеграла

    Raises:
        ValueError: Невалидные пределы или параметры

    Examples:
        >>> romberg(lambda t: 1.0, 3, 7, 1, 0.001)
        4.0
        >>> romberg(lambda t: 2 * t + 1, 3, 7, 8, 0.001)
        44.0
    """
    validate_finite(a, "a")
    validate_finite(b, "b")
    validate_positive_int(max_steps, "max_steps")
    validate_positive(accuracy, "accuracy")

    rp = np.zeros(max_steps, dtype=np.float64)
    rc = np.zeros(max_steps, dtype=np.float64)
    h = b - a
    rp[0] = (f(a) + f(b)) * h * 0.5

    for i in range(1, max_steps):
        h /= 2.0
        c = 0.0
        for k in range(1, (1 << (i - 1)) + 1):
            c += f(a + (2 * k - 1) * h)
        rc[0] = h * c + 0.5 * rp[0]

        for j in range(1, i + 1):
            n_k = 4.0 ** j
            rc[j] = (n_k * rc[j - 1] - rp[j - 1]) / (n_k - 1)

        if i > 1 and abs(rp[i - 1] - rc[i]) < accuracy:
            return float(rc[i])

        rp, rc = rc, rp

    if max_steps > 2:
        logger.debug(
            "Romberg did not converge on [%s, %s] in %d steps (accuracy %s)",
            a, b, max_steps, accuracy,
        )
    return float(rp[max_steps - 1])
