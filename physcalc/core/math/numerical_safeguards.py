"""
Numerical Safeguards — безопасные математические примитивы

Модуль обеспечивает численную устойчивость вычислений над сетками времени:
- Проверка конечности (NaN/Inf) входных параметров
- Валидация положительных шагов и размеров буферов
- Округление к узлу сетки (round half up, как Math.round)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Невалидный параметр шага/размера всегда приводит к ValueError
2. Округление к узлу детерминировано: x.5 округляется вверх и для отрицательных x
"""

import math

# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, что значение является конечным float (не NaN, не Inf).

    Examples:
        >>> is_valid_float(1.0)
        True
        >>> is_valid_float(float('nan'))
        False
        >>> is_valid_float(float('-inf'))
        False
    """
    return math.isfinite(value)


def validate_finite(value: float, name: str = "value") -> float:
    """
    Валидация конечного значения.

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке

    Returns:
        value без изменений

    Raises:
        ValueError: Если value NaN или Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


# =============================================================================
# ВАЛИДАЦИЯ ПАРАМЕТРОВ
# =============================================================================


def validate_positive(value: float, name: str = "value") -> float:
    """
    Валидация положительного конечного значения.

    Raises:
        ValueError: Если value ≤ 0, NaN или Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be finite, got {value}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def validate_positive_int(value: int, name: str = "value") -> int:
    """
    Валидация положительного целого (размеры буферов, число шагов).

    Raises:
        ValueError: Если value не int или value < 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


# =============================================================================
# СЕТКА
# =============================================================================


def round_half_up(value: float) -> int:
    """
    Округление к ближайшему целому, половины вверх.

    В отличие от round() (banker's rounding) round_half_up(-2.5) == -2,
    round_half_up(2.5) == 3. Используется для индексации узлов сетки.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
        >>> round_half_up(1.49)
        1
    """
    return math.floor(value + 0.5)
