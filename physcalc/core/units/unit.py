"""
Unit — interned единица измерения

Единица определяется вектором показателей степеней (UnitKey) по десяти
примитивам. Реестр гарантирует, что для каждого ключа существует ровно
один канонический объект Unit, поэтому совместимость проверяется через
идентичность (is), а не через сравнение структур.

AliasUnit — отдельный объект с тем же ключом, что и у SI-единицы, плюс
аффинное преобразование (scale, offset) в SI.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. a.multiply(b) и a.divide(b) возвращают interned единицу реестра
2. a.add(b) возвращает b только если a is b
3. alias.to_si(alias.from_si(v)) == v (с точностью float)
"""

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple

from physcalc.core.errors import DimensionMismatch
from physcalc.core.math.numerical_safeguards import is_valid_float
from physcalc.core.units.primitives import ORDER, Primitive, UnitKey, combine_keys, key_terms

if TYPE_CHECKING:
    from physcalc.core.units.registry import UnitRegistry


class Unit:
    """
    Каноническая (SI-совместимая) единица.

    Отображаемые поля (name, symbol, var_name, tex) берутся из attributes;
    при их отсутствии имя генерируется из символов примитивов: "m/s",
    "m/s^2", "kg·m^2/s^2".
    """

    def __init__(self, registry: "UnitRegistry", key: UnitKey, attributes: Mapping[str, Any]):
        self.registry = registry
        self.key = key
        self.attributes: Dict[str, Any] = dict(attributes)

    # -------------------------------------------------------------------------
    # Отображение
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.attributes.get("name") or self._generated_name()

    @property
    def symbol(self) -> Optional[str]:
        return self.attributes.get("symbol")

    @property
    def var_name(self) -> Optional[str]:
        return self.attributes.get("var_name")

    @property
    def terms(self) -> Dict[Primitive, int]:
        return key_terms(self.key)

    @property
    def id(self) -> str:
        """Строковая форма полного ключа: "kg^0 m^1 rad^0 ... s^-1 cd^0"."""
        return " ".join(
            f"{self.registry.primitive(p).symbol}^{e}" for p, e in zip(ORDER, self.key)
        )

    @property
    def tex(self) -> str:
        """LaTeX-дескриптор единицы (без стилизации)."""
        explicit = self.attributes.get("tex")
        if explicit:
            return explicit
        if self.symbol:
            return rf"\text{{{self.symbol}}}"
        numerator, denominator = self._split_terms(
            lambda sym, e: rf"\text{{{sym}}}" + (f"^{{{e}}}" if e > 1 else ""),
            r" \cdot ",
        )
        if not denominator:
            return numerator or "1"
        return rf"\dfrac{{{numerator or '1'}}}{{{denominator}}}"

    def _generated_name(self) -> str:
        numerator, denominator = self._split_terms(
            lambda sym, e: sym + (f"^{e}" if e > 1 else ""),
            "·",
            group=True,
        )
        if not denominator:
            return numerator or "1"
        return f"{numerator or '1'}/{denominator}"

    def _split_terms(self, render, sep: str, group: bool = False) -> Tuple[str, str]:
        """Числитель и знаменатель из ненулевых показателей."""
        terms = self.terms
        num = [render(self.registry.primitive(p).symbol, e) for p, e in terms.items() if e > 0]
        den = [render(self.registry.primitive(p).symbol, -e) for p, e in terms.items() if e < 0]
        denominator = sep.join(den)
        if group and len(den) > 1:
            denominator = f"({denominator})"
        return sep.join(num), denominator

    # -------------------------------------------------------------------------
    # SI
    # -------------------------------------------------------------------------

    @property
    def is_alias(self) -> bool:
        return False

    @property
    def si(self) -> "Unit":
        return self

    @property
    def si_scale(self) -> float:
        return self.attributes.get("scale", 1.0)

    @property
    def si_offset(self) -> float:
        return self.attributes.get("offset", 0.0)

    def to_si(self, value: float) -> Tuple[float, "Unit"]:
        return value, self

    def from_si(self, value: float) -> Tuple[float, "Unit"]:
        return value, self

    # -------------------------------------------------------------------------
    # Алгебра
    # -------------------------------------------------------------------------

    def add(self, other: "Unit") -> "Unit":
        """
        Проверка совместимости для сложения/вычитания величин.

        Returns:
            other, если это тот же объект

        Raises:
            DimensionMismatch: Если единицы различны
        """
        if other is not self:
            raise DimensionMismatch(f"Cannot add {other.name} to {self.name}")
        return other

    def multiply(self, other: "Unit") -> "Unit":
        return self.registry.define_key(combine_keys(self.key, other.key, 1))

    def divide(self, other: "Unit") -> "Unit":
        return self.registry.define_key(combine_keys(self.key, other.key, -1))

    def power(self, exponent: int) -> "Unit":
        return self.registry.define_key(tuple(e * exponent for e in self.key))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class PrimitiveUnit(Unit):
    """Единица одного примитива с показателем 1 (second, kilogram, ...)."""

    def __init__(self, registry: "UnitRegistry", key: UnitKey, primitive: Primitive,
                 attributes: Mapping[str, Any]):
        super().__init__(registry, key, attributes)
        self.primitive = primitive


class AliasUnit(Unit):
    """
    Альтернативное имя для SI-единицы с аффинным преобразованием.

    to_si:   v_si = (v * scale + offset) / si_scale - si_offset
    from_si: v    = ((v_si + si_offset) * si_scale - offset) / scale

    У килограмма scale = 1000, поэтому scale массовых алиасов задаётся
    в граммах (gram: scale = 1).
    """

    def __init__(
        self,
        registry: "UnitRegistry",
        name: str,
        symbol: Optional[str],
        attributes: Mapping[str, Any],
        si: Unit,
        scale: float,
        offset: float = 0.0,
    ):
        if not is_valid_float(scale) or scale == 0:
            raise ValueError(f"Alias scale must be finite and non-zero, got {scale}")
        if not is_valid_float(offset):
            raise ValueError(f"Alias offset must be finite, got {offset}")
        super().__init__(
            registry,
            si.key,
            {**attributes, "name": name, "symbol": symbol, "scale": scale, "offset": offset},
        )
        self._si = si

    @property
    def is_alias(self) -> bool:
        return True

    @property
    def si(self) -> Unit:
        return self._si

    @property
    def scale(self) -> float:
        return self.attributes["scale"]

    @property
    def offset(self) -> float:
        return self.attributes["offset"]

    def to_si(self, value: float) -> Tuple[float, Unit]:
        si = self._si
        return (value * self.scale + self.offset) / si.si_scale - si.si_offset, si

    def from_si(self, value: float) -> Tuple[float, Unit]:
        si = self._si
        return ((value + si.si_offset) * si.si_scale - self.offset) / self.scale, self
