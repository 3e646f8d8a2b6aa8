"""
Primitive dimensions — десять базовых размерностей

Каждая единица идентифицируется полным вектором показателей степеней
по этим размерностям в фиксированном каноническом порядке ORDER.
"""

from enum import Enum
from typing import Any, Dict, Final, Mapping, Tuple

from physcalc.core.errors import UnknownDimension


class Primitive(str, Enum):
    """Базовые размерности"""

    TIME = "time"
    MASS = "mass"
    LENGTH = "length"
    CYCLES = "cycles"
    ANGLE = "angle"
    SOLID_ANGLE = "solidAngle"
    CURRENT = "current"
    TEMPERATURE = "temperature"
    AMOUNT = "amount"
    CANDELA = "candela"


# Канонический порядок для ключа и отображения
ORDER: Final[Tuple[Primitive, ...]] = (
    Primitive.MASS,
    Primitive.LENGTH,
    Primitive.ANGLE,
    Primitive.SOLID_ANGLE,
    Primitive.CYCLES,
    Primitive.AMOUNT,
    Primitive.CURRENT,
    Primitive.TEMPERATURE,
    Primitive.TIME,
    Primitive.CANDELA,
)

# Exponent vector type: one int per primitive, in ORDER
UnitKey = Tuple[int, ...]

_LOOKUP: Final[Dict[str, Primitive]] = {
    **{p.value: p for p in Primitive},
    **{p.name.lower(): p for p in Primitive},
}


def to_primitive(term: Any) -> Primitive:
    """
    Нормализация ключа размерности.

    Принимает Primitive, его значение ("solidAngle") или snake-case имя
    ("solid_angle").

    Raises:
        UnknownDimension: Если ключ не распознан
    """
    if isinstance(term, Primitive):
        return term
    if isinstance(term, str):
        found = _LOOKUP.get(term) or _LOOKUP.get(term.lower())
        if found is not None:
            return found
    raise UnknownDimension(f"Invalid primitive type name {term!r} in unit terms")


def make_key(terms: Mapping[Any, int]) -> UnitKey:
    """
    Построение канонического ключа из {primitive: exponent}.

    Отсутствующие размерности имеют показатель 0.

    Raises:
        UnknownDimension: Неизвестная размерность
        ValueError: Показатель не целый
    """
    exponents = dict.fromkeys(ORDER, 0)
    for term, exponent in terms.items():
        primitive = to_primitive(term)
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise ValueError(f"Exponent for {primitive.value} must be an integer, got {exponent!r}")
        exponents[primitive] += exponent
    return tuple(exponents[p] for p in ORDER)


def key_terms(key: UnitKey) -> Dict[Primitive, int]:
    """Ненулевые показатели ключа в каноническом порядке"""
    return {p: e for p, e in zip(ORDER, key) if e != 0}


def combine_keys(a: UnitKey, b: UnitKey, sign: int = 1) -> UnitKey:
    """a + sign * b поэлементно"""
    return tuple(x + sign * y for x, y in zip(a, b))
