"""
Unit Registry — интернирование единиц, имена, алиасы, приставки

Реестр владеет всеми единицами: для каждого вектора показателей (UnitKey)
существует ровно один Unit. Имена регистрируются в нижнем регистре,
символы — с учётом регистра.

Порядок поиска get_unit(name):
1. Имя канонической единицы (без учёта регистра)
2. Символ канонической единицы
3. Имя алиаса (пропускается при si_only)
4. Символ алиаса (пропускается при si_only)
5. Разбор десятичной приставки ("km", "kilometer", "kilo meter")

Реестр не синхронизирован: при конкурентном доступе вызывающий код
оборачивает его в один lock.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from physcalc.core.errors import UnitNameConflict, UnknownUnit
from physcalc.core.units.prefixes import PREFIXES_BY_NAME, PREFIXES_BY_SYMBOL, Prefix, canonicalize
from physcalc.core.units.primitives import ORDER, Primitive, UnitKey, make_key
from physcalc.core.units.unit import AliasUnit, PrimitiveUnit, Unit

logger = logging.getLogger(__name__)


# (primitive, name, symbol, var_name, attributes)
_PRIMITIVE_DEFS = (
    (Primitive.TIME, "second", "s", "t", {"si_base": True}),
    (Primitive.MASS, "kilogram", "kg", "m", {"si_base": True, "scale": 1000}),
    (Primitive.LENGTH, "meter", "m", "l", {"si_base": True}),
    (Primitive.AMOUNT, "mole", "mol", "n", {"si_base": True}),
    (Primitive.CYCLES, "cycle", "cycle", "c", {}),
    (Primitive.ANGLE, "radian", "rad", "𝜃", {"tex": r"\theta"}),
    (Primitive.SOLID_ANGLE, "steridian", "sr", None, {}),
    (Primitive.CURRENT, "ampere", "A", "A", {"si_base": True}),
    (Primitive.TEMPERATURE, "kelvin", "K", "T", {"absolute": True, "si_base": True}),
    (Primitive.CANDELA, "candela", "cd", "c", {"si_base": True}),
)


class UnitRegistry:
    """
    Реестр единиц измерения.

    Создаёт десять примитивов и безразмерную единицу unity. Стандартный
    каталог производных единиц и алиасов устанавливается отдельно
    (см. physcalc.core.units.catalog).
    """

    def __init__(self):
        self._units: Dict[UnitKey, Unit] = {}
        self._named: Dict[str, Unit] = {}
        self._symbols: Dict[str, Unit] = {}
        self._aliases: Dict[str, AliasUnit] = {}
        self._symbol_aliases: Dict[str, AliasUnit] = {}
        self._primitives: Dict[Primitive, PrimitiveUnit] = {}

        for primitive, name, symbol, var_name, attributes in _PRIMITIVE_DEFS:
            key = tuple(1 if p is primitive else 0 for p in ORDER)
            unit = PrimitiveUnit(
                self,
                key,
                primitive,
                {"name": name, "symbol": symbol, "var_name": var_name, **attributes},
            )
            self._units[key] = unit
            self._primitives[primitive] = unit
            self._register(unit, [primitive.value, name], symbol)

        self.unity = self.define_unit({}, {"name": "1", "si_base": True}, "unity")

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    def primitive(self, primitive: Primitive) -> PrimitiveUnit:
        return self._primitives[primitive]

    @property
    def time(self) -> PrimitiveUnit:
        return self._primitives[Primitive.TIME]

    def __contains__(self, name: str) -> bool:
        try:
            self.get_unit(name)
        except UnknownUnit:
            return False
        return True

    # -------------------------------------------------------------------------
    # Определение единиц
    # -------------------------------------------------------------------------

    def define_unit(
        self,
        terms: Mapping[Any, int],
        attributes: Optional[Mapping[str, Any]] = None,
        *names: str,
    ) -> Unit:
        """
        Найти или создать interned единицу для terms.

        Повторный вызов с теми же terms возвращает тот же объект; новые имена
        и ещё не заданные атрибуты добавляются, существующие атрибуты
        не перезаписываются.

        Args:
            terms: {primitive: exponent}, ключи — Primitive или их имена
            attributes: name, symbol, var_name, tex, si_base, ...
            names: Дополнительные имена для поиска

        Returns:
            Interned Unit

        Raises:
            UnknownDimension: Неизвестный примитив в terms
            UnitNameConflict: Имя/символ уже принадлежат другой единице

        Examples:
            >>> reg = UnitRegistry()
            >>> v = reg.define_unit({"length": 1, "time": -1})
            >>> v is reg.define_unit({"time": -1, "length": 1})
            True
        """
        return self._intern(make_key(terms), attributes or {}, names)

    def define_key(self, key: UnitKey) -> Unit:
        """Interned единица по готовому ключу (используется Unit.multiply/divide)."""
        return self._intern(key, {}, ())

    def _intern(self, key: UnitKey, attributes: Mapping[str, Any], names) -> Unit:
        unit = self._units.get(key)
        if unit is None:
            candidate = Unit(self, key, attributes)
            self._register(candidate, [*names, candidate.name], attributes.get("symbol"))
            self._units[key] = candidate
            logger.debug("Defined unit %s", candidate.name)
            return candidate
        self._register(unit, [*names, attributes.get("name") or unit.name], attributes.get("symbol"))
        for attr, value in attributes.items():
            unit.attributes.setdefault(attr, value)
        return unit

    def define_alias(
        self,
        name: str,
        symbol: Optional[str],
        attributes: Optional[Mapping[str, Any]],
        si: Unit,
        scale: float,
        offset: float = 0.0,
        *names: str,
    ) -> AliasUnit:
        """
        Определить алиас SI-единицы с аффинным преобразованием.

        Args:
            name: Имя алиаса ("liter")
            symbol: Символ ("L") или None
            attributes: Дополнительные атрибуты
            si: Каноническая единица
            scale: Множитель (≠ 0)
            offset: Смещение (например, 273.15 для celsius)
            names: Дополнительные имена

        Raises:
            UnitNameConflict: Имя или символ уже заняты
            ValueError: scale равен 0 или не конечен
        """
        if si.is_alias:
            raise ValueError(f"Alias {name!r} must refer to a canonical unit, got alias {si.name}")
        all_names = [name, *names]
        for n in all_names:
            self._check_name(n.lower(), None)
        if symbol:
            self._check_symbol(symbol, None)

        alias = AliasUnit(self, name, symbol, attributes or {}, si, scale, offset)
        for n in all_names:
            self._aliases[n.lower()] = alias
        if symbol:
            self._symbol_aliases[symbol] = alias
        logger.debug("Defined alias %s = %s * %s + %s", name, scale, si.name, offset)
        return alias

    # -------------------------------------------------------------------------
    # Имена
    # -------------------------------------------------------------------------

    def _check_name(self, lower: str, unit: Optional[Unit]) -> None:
        existing = self._named.get(lower) or self._aliases.get(lower)
        if existing is not None and existing is not unit:
            raise UnitNameConflict(f"Name {lower!r} already designates unit {existing.name}")

    def _check_symbol(self, symbol: str, unit: Optional[Unit]) -> None:
        existing = self._symbols.get(symbol) or self._symbol_aliases.get(symbol)
        if existing is not None and existing is not unit:
            raise UnitNameConflict(f"Symbol {symbol!r} already designates unit {existing.name}")

    def _register(self, unit: Unit, names, symbol: Optional[str]) -> None:
        lowered = [n.lower() for n in names if n]
        for n in lowered:
            self._check_name(n, unit)
        if symbol:
            self._check_symbol(symbol, unit)
        for n in lowered:
            self._named[n] = unit
        if symbol:
            self._symbols[symbol] = unit

    # -------------------------------------------------------------------------
    # Поиск
    # -------------------------------------------------------------------------

    def get_unit(self, name: str, si_only: bool = False) -> Unit:
        """
        Поиск единицы по имени или символу.

        Args:
            name: Имя ("meter", без учёта регистра) или символ ("m")
            si_only: Не рассматривать алиасы

        Raises:
            UnknownUnit: Единица не найдена
        """
        lower = name.lower()
        unit: Optional[Unit] = self._named.get(lower) or self._symbols.get(name)
        if unit is None and not si_only:
            unit = self._aliases.get(lower) or self._symbol_aliases.get(name)
        if unit is None:
            unit = self.parse_prefix(name, si_only)
        if unit is None:
            raise UnknownUnit(f"No unit named {name!r}")
        return unit

    def owns(self, value: Any) -> bool:
        """Принадлежит ли value этому реестру."""
        return isinstance(value, Unit) and value.registry is self

    def parse_prefix(self, name: str, si_only: bool = False) -> Optional[AliasUnit]:
        """
        Разбор десятичной приставки.

        Сначала полное имя приставки + имя единицы ("kilometer",
        "kilo-meter"), затем символ приставки + символ единицы ("km", "μm",
        "um"). Уже приставленные единицы повторно не приставляются.
        Найденная комбинация кэшируется как алиас с атрибутом prefixed.

        Returns:
            AliasUnit или None
        """
        text = canonicalize(name)
        lower = text.lower()
        for prefix in PREFIXES_BY_NAME:
            if lower.startswith(prefix.name):
                rest = lower[len(prefix.name):]
                base = self._named.get(rest)
                if base is None and not si_only:
                    base = self._aliases.get(rest)
                # "kilom" не разбирается как символ: совпало имя приставки
                return self._prefixed(prefix, base) if base is not None else None
        for symbol, prefix in PREFIXES_BY_SYMBOL:
            if text.startswith(symbol) and len(text) > len(symbol):
                rest = text[len(symbol):]
                base = self._symbols.get(rest)
                if base is None and not si_only:
                    base = self._symbol_aliases.get(rest)
                if base is not None:
                    return self._prefixed(prefix, base)
        return None

    def _prefixed(self, prefix: Prefix, base: Unit) -> Optional[AliasUnit]:
        if base.attributes.get("prefixed"):
            return None
        alias_name = f"{prefix.name}{base.name}"
        cached = self._aliases.get(alias_name.lower())
        if cached is not None:
            return cached
        if isinstance(base, AliasUnit):
            scale = prefix.factor * base.scale
            offset = base.offset
        else:
            scale = prefix.factor * base.si_scale
            offset = base.si_offset * base.si_scale
        symbol = f"{prefix.symbol}{base.symbol}" if base.symbol else None
        logger.debug("Creating prefixed unit %s from %s", alias_name, base.name)
        return self.define_alias(alias_name, symbol, {"prefixed": True}, base.si, scale, offset)
