"""
Errors — иерархия исключений physcalc

Все ошибки синхронные и терминальные: нарушение инварианта всегда приводит
к исключению, а не к неверному числу.

ИЕРАРХИЯ:
    PhysCalcError
    ├── UnitError
    │   ├── UnknownDimension
    │   ├── UnknownUnit
    │   ├── UnitNameConflict
    │   └── DimensionMismatch
    ├── FunctionError
    │   ├── InconsistentUnit
    │   ├── InconsistentType
    │   ├── ConflictingSegment
    │   └── OutOfRange
    └── SentinelViolation
"""


class PhysCalcError(Exception):
    """Базовое исключение для всех ошибок physcalc."""
    pass


# =============================================================================
# UNIT ERRORS
# =============================================================================


class UnitError(PhysCalcError):
    """Ошибки алгебры единиц и реестра."""
    pass


class UnknownDimension(UnitError):
    """
    Ключ размерности не является одним из десяти примитивов.

    Возникает в define_unit при term-ключе вроде {"bogus": 1}.
    """
    pass


class UnknownUnit(UnitError):
    """Имя или символ не найдены ни в таблицах, ни через разбор префикса."""
    pass


class UnitNameConflict(UnitError):
    """Имя или символ уже зарегистрированы за другой единицей."""
    pass


class DimensionMismatch(UnitError):
    """
    Сложение/вычитание величин с разными единицами.

    Unit.add допускает только идентичные (interned) единицы.
    """
    pass


# =============================================================================
# FUNCTION ERRORS
# =============================================================================


class FunctionError(PhysCalcError):
    """Ошибки построения и вычисления функций."""
    pass


class InconsistentUnit(FunctionError):
    """Сегмент Piecewise имеет единицу, отличную от единицы Piecewise."""
    pass


class InconsistentType(FunctionError):
    """Вид значения (scalar/vector) не совпадает с ожидаемым."""
    pass


class ConflictingSegment(FunctionError):
    """Неэквивалентная функция добавлена в уже занятую точку разбиения."""
    pass


class OutOfRange(FunctionError):
    """Piecewise запрошен до первой точки разбиения или не имеет сегментов."""
    pass


# =============================================================================
# MEMOIZATION
# =============================================================================


class SentinelViolation(PhysCalcError):
    """
    Ленивый мемоизатор получил NaN от вычисляемой функции.

    NaN используется как маркер "ещё не вычислено", поэтому функция,
    легитимно возвращающая NaN, не может мемоизироваться лениво.
    """
    pass
