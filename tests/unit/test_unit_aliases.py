"""Тесты для алиасов и десятичных приставок.

Coverage:
- define_alias: имена, символы, атрибуты, si_only
- Аффинные преобразования to_si/from_si
- Каталожные алиасы (liter, celsius, gram, tonne, ...)
- Разбор приставок: Mm, μm, um, Mg, mg, kilometer, kilo meter, kilo-meter
- Отказ для kilom и повторных приставок
"""

import pytest

from physcalc.core.errors import DimensionMismatch, UnitNameConflict, UnknownUnit
from physcalc.core.units import create_registry
from physcalc.core.units.prefixes import PREFIXES, canonicalize


@pytest.fixture
def reg():
    return create_registry()


class TestDefineAlias:
    """Тесты пользовательского алиаса."""

    @pytest.fixture
    def alias(self, reg):
        return reg.define_alias(
            "fR0G", "f0GGY", {"bill": "cat"}, reg.get_unit("mass"), 3.5, 2, "PrinceOnTheLam"
        )

    def test_name_and_symbol(self, alias):
        assert alias.name == "fR0G"
        assert alias.symbol == "f0GGY"
        assert alias.is_alias

    def test_lookup(self, reg, alias):
        assert reg.get_unit("fR0G") is alias
        assert reg.get_unit("FR0G") is alias
        assert reg.get_unit("f0GGY") is alias
        assert reg.get_unit("PrinceOnTheLam") is alias

    def test_si_only_skips_alias(self, reg, alias):
        with pytest.raises(UnknownUnit):
            reg.get_unit("fR0G", si_only=True)

    def test_attribute(self, alias):
        assert alias.attributes["bill"] == "cat"

    def test_to_si(self, reg, alias):
        value, unit = alias.to_si(1)
        assert value == pytest.approx(5.5 / 1000)
        assert unit is reg.get_unit("mass")

    def test_from_si(self, alias):
        value, unit = alias.from_si(5.5 / 1000)
        assert value == pytest.approx(1)
        assert unit is alias

    def test_si_is_canonical(self, reg, alias):
        assert alias.si is reg.get_unit("kilogram")
        assert alias.key == reg.get_unit("kilogram").key

    def test_alias_is_not_addable_to_si(self, reg, alias):
        with pytest.raises(DimensionMismatch):
            alias.add(reg.get_unit("kilogram"))

    def test_name_conflict_with_unit(self, reg):
        with pytest.raises(UnitNameConflict):
            reg.define_alias("meter", None, {}, reg.get_unit("length"), 2)

    def test_symbol_conflict_with_alias(self, reg):
        with pytest.raises(UnitNameConflict):
            reg.define_alias("_other_liter_", "L", {}, reg.get_unit("volume"), 0.001)

    def test_zero_scale_rejected(self, reg):
        with pytest.raises(ValueError, match="non-zero"):
            reg.define_alias("_nothing_", None, {}, reg.get_unit("length"), 0)

    def test_alias_of_alias_rejected(self, reg):
        with pytest.raises(ValueError, match="canonical"):
            reg.define_alias("_double_", None, {}, reg.get_unit("liter"), 2)


class TestCatalogAliases:
    """Тесты стандартных алиасов."""

    @pytest.mark.parametrize(
        "name, value, expected",
        [
            ("liter", 2, 0.002),
            ("litre", 1, 0.001),
            ("minute", 2, 120),
            ("hour", 1, 3600),
            ("hr", 2, 7200),
            ("day", 1, 86400),
            ("week", 1, 604800),
            ("inch", 1, 0.0254),
            ("foot", 1, 0.3048),
            ("mile", 1, 1609.344),
            ("hectare", 1, 10000),
            ("gram", 1, 0.001),
            ("tonne", 2, 2000),
            ("angstrom", 1, 1e-10),
        ],
    )
    def test_to_si(self, reg, name, value, expected):
        converted, _ = reg.get_unit(name).to_si(value)
        assert converted == pytest.approx(expected)

    def test_celsius(self, reg):
        celsius = reg.get_unit("°C")
        value, unit = celsius.to_si(0)
        assert value == pytest.approx(273.15)
        assert unit is reg.get_unit("kelvin")
        assert celsius.from_si(373.15)[0] == pytest.approx(100)

    def test_fahrenheit(self, reg):
        fahrenheit = reg.get_unit("fahrenheit")
        assert fahrenheit.to_si(32)[0] == pytest.approx(273.15)
        assert fahrenheit.from_si(373.15)[0] == pytest.approx(212)

    def test_degree_arc(self, reg):
        assert reg.get_unit("°").to_si(180)[0] == pytest.approx(3.141592653589793)

    @pytest.mark.parametrize("name", ["liter", "celsius", "minute", "gram", "mile"])
    def test_roundtrip(self, reg, name):
        alias = reg.get_unit(name)
        si_value, _ = alias.to_si(12.5)
        assert alias.from_si(si_value)[0] == pytest.approx(12.5)

    def test_symbols_case_sensitive(self, reg):
        assert reg.get_unit("t") is reg.get_unit("tonne")
        assert reg.get_unit("T") is reg.get_unit("tesla")
        assert reg.get_unit("h") is reg.get_unit("hour")
        assert reg.get_unit("H") is reg.get_unit("henry")


class TestPrefixCanonicalization:
    """Тесты нормализации текста перед разбором."""

    def test_whitespace_collapsed(self):
        assert canonicalize("foo   bar") == "foo bar"

    @pytest.mark.parametrize("text", ["kilo meter", "kilo-meter", "  kilo   meter "])
    def test_prefix_name_joined(self, text):
        assert canonicalize(text) == "kilometer"

    def test_twenty_prefixes(self):
        assert len(PREFIXES) == 20
        assert {p.symbol for p in PREFIXES} >= {"da", "μ", "k", "M"}


class TestPrefixParsing:
    """Тесты разбора приставок."""

    def test_parse_megameter(self, reg):
        unit = reg.parse_prefix("Mm")
        value, si = unit.to_si(2)
        assert value == pytest.approx(2_000_000)
        assert si is reg.get_unit("length")

    @pytest.mark.parametrize(
        "name, expected, si_name",
        [
            ("Mm", 2_000_000, "length"),
            ("μm", 0.000002, "length"),
            ("um", 0.000002, "length"),
            ("Mg", 2000, "mass"),
            ("mg", 0.000002, "mass"),
            ("kilometer", 2000, "length"),
            ("kilo meter", 2000, "length"),
            ("kilo-meter", 2000, "length"),
            ("km", 2000, "length"),
            ("dam", 20, "length"),
            ("ms", 0.002, "time"),
            ("milliliter", 0.000002, "volume"),
            ("kHz", 2000, "frequency"),
        ],
    )
    def test_get_prefixed(self, reg, name, expected, si_name):
        value, si = reg.get_unit(name).to_si(2)
        assert value == pytest.approx(expected)
        assert si is reg.get_unit(si_name)

    def test_kilom_fails(self, reg):
        with pytest.raises(UnknownUnit):
            reg.get_unit("kilom")

    def test_bare_prefix_fails(self, reg):
        with pytest.raises(UnknownUnit):
            reg.get_unit("k")

    def test_prefixed_alias_cached(self, reg):
        km = reg.get_unit("km")
        assert reg.get_unit("kilometer") is km
        assert reg.get_unit("km") is km
        assert km.name == "kilometer"
        assert km.symbol == "km"
        assert km.attributes["prefixed"] is True

    def test_micro_ascii_and_greek_share_alias(self, reg):
        assert reg.get_unit("um") is reg.get_unit("μm")
        assert reg.get_unit("um").symbol == "μm"

    def test_no_double_prefix(self, reg):
        reg.get_unit("km")
        assert reg.parse_prefix("kkm") is None
        with pytest.raises(UnknownUnit):
            reg.get_unit("kilokilometer")

    def test_si_only_prefix_ignores_alias_base(self, reg):
        assert reg.parse_prefix("mL", si_only=True) is None
        assert reg.parse_prefix("mL") is reg.get_unit("milliliter")

    def test_direct_symbol_wins_over_prefix(self, reg):
        assert reg.get_unit("min") is reg.get_unit("minute")
        assert reg.get_unit("cd") is reg.get_unit("candela")
        assert reg.get_unit("ha") is reg.get_unit("hectare")
