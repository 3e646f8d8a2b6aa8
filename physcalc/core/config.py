"""
Numerics Config — параметры численных методов

Константы по умолчанию и неизменяемая модель NumericsConfig, передаваемая
узлам исчисления (шаг дифференцирования/интегрирования, параметры
мемоизации и квадратуры Ромберга).
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field

# =============================================================================
# ЧИСЛЕННЫЕ ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Шаг для численной производной и трапециевидного интегрирования
TIMESTEP: Final[float] = 0.001

# Шаг сетки мемоизатора (степень двойки, узлы точно представимы)
MEMO_STEPSIZE: Final[float] = 1 / 1024

# Начальная ёмкость буфера мемоизатора
MEMO_BUFSIZE: Final[int] = 1024

# Окрестность узла сетки: step / MEMO_EPSILON_DIVISOR
MEMO_EPSILON_DIVISOR: Final[int] = 4096

# Максимальное число строк таблицы Ромберга
ROMBERG_MAX_STEPS: Final[int] = 16

# Порог сходимости диагонали таблицы Ромберга
ROMBERG_ACCURACY: Final[float] = 1e-10


class IntegrationMethod(str, Enum):
    """Метод численного интегрирования для NumericIntegral"""

    TRAPEZOID = "trapezoid"
    ROMBERG = "romberg"


class NumericsConfig(BaseModel):
    """
    Параметры численных методов узла.

    Attributes:
        timestep: Шаг h для (f(t+h/2) - f(t-h/2)) / h и трапеций
        memo_stepsize: Шаг сетки RangeMemoizer интегрируемой функции
        memo_bufsize: Начальная ёмкость буфера
        romberg_max_steps: Максимум строк таблицы Ромберга
        romberg_accuracy: Порог сходимости Ромберга
        integration_method: TRAPEZOID или ROMBERG
    """

    timestep: float = Field(default=TIMESTEP, gt=0)
    memo_stepsize: float = Field(default=MEMO_STEPSIZE, gt=0)
    memo_bufsize: int = Field(default=MEMO_BUFSIZE, ge=1)
    romberg_max_steps: int = Field(default=ROMBERG_MAX_STEPS, ge=1, le=30)
    romberg_accuracy: float = Field(default=ROMBERG_ACCURACY, gt=0)
    integration_method: IntegrationMethod = IntegrationMethod.TRAPEZOID

    model_config = {"frozen": True}


DEFAULT_NUMERICS: Final[NumericsConfig] = NumericsConfig()
