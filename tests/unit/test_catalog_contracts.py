"""
Тесты JSON Schema контракта unit_catalog и загрузки каталога

Проверяет:
1. Meta-validation схемы
2. Стандартный каталог проходит контракт
3. Невалидные каталоги отклоняются (jsonschema и pydantic)
4. Установка каталога в реестр
"""

import json

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from physcalc.core.contracts import SchemaLoader, UnitCatalogValidator, validate_unit_catalog
from physcalc.core.units import UnitRegistry
from physcalc.core.units.catalog import (
    STANDARD_CATALOG_PATH,
    AliasEntry,
    UnitCatalog,
    install_catalog,
    load_catalog,
)


@pytest.fixture
def standard_data():
    with open(STANDARD_CATALOG_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def minimal_catalog():
    return {
        "schema_version": "1.0",
        "units": [{"terms": {"length": 1, "time": -1}, "names": ["speed"]}],
        "aliases": [{"name": "furlong", "si": "meter", "scale": 201.168}],
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    def test_load_unit_catalog_schema(self):
        schema = SchemaLoader().load_schema("unit_catalog")
        assert schema["title"] == "Unit Catalog"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("unit_catalog") is loader.load_schema("unit_catalog")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_schema")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# CONTRACT VALIDATION
# =============================================================================


class TestUnitCatalogContract:
    """Тесты контракта unit_catalog"""

    def test_standard_catalog_valid(self, standard_data):
        validate_unit_catalog(standard_data)

    def test_minimal_catalog_valid(self, minimal_catalog):
        assert UnitCatalogValidator().is_valid(minimal_catalog)

    def test_unknown_primitive_rejected(self, minimal_catalog):
        minimal_catalog["units"][0]["terms"] = {"bogus": 1}
        with pytest.raises(ValidationError):
            validate_unit_catalog(minimal_catalog)

    def test_fractional_exponent_rejected(self, minimal_catalog):
        minimal_catalog["units"][0]["terms"] = {"length": 0.5}
        assert not UnitCatalogValidator().is_valid(minimal_catalog)

    def test_zero_scale_rejected(self, minimal_catalog):
        minimal_catalog["aliases"][0]["scale"] = 0
        with pytest.raises(ValidationError):
            validate_unit_catalog(minimal_catalog)

    def test_unit_without_names_rejected(self, minimal_catalog):
        minimal_catalog["units"][0]["names"] = []
        assert not UnitCatalogValidator().is_valid(minimal_catalog)

    def test_extra_field_rejected(self, minimal_catalog):
        minimal_catalog["aliases"][0]["factor"] = 2
        errors = list(UnitCatalogValidator().iter_errors(minimal_catalog))
        assert len(errors) == 1

    def test_missing_version_rejected(self, minimal_catalog):
        del minimal_catalog["schema_version"]
        with pytest.raises(ValidationError):
            validate_unit_catalog(minimal_catalog)


# =============================================================================
# LOAD & INSTALL
# =============================================================================


class TestCatalogLoading:
    """Тесты загрузки и установки каталога"""

    def test_load_standard(self):
        catalog = load_catalog()
        assert isinstance(catalog, UnitCatalog)
        assert any("joule" == u.name for u in catalog.units)
        assert any("celsius" == a.name for a in catalog.aliases)

    def test_catalog_is_frozen(self):
        catalog = load_catalog()
        with pytest.raises(PydanticValidationError):
            catalog.schema_version = "2.0"

    def test_alias_entry_zero_scale(self):
        with pytest.raises(PydanticValidationError, match="non-zero"):
            AliasEntry(name="x", si="meter", scale=0.0)

    def test_load_custom_file(self, tmp_path, minimal_catalog):
        path = tmp_path / "units.json"
        path.write_text(json.dumps(minimal_catalog), encoding="utf-8")
        catalog = load_catalog(path)
        assert catalog.aliases[0].name == "furlong"

    def test_load_invalid_file(self, tmp_path, minimal_catalog):
        minimal_catalog["units"][0]["terms"] = {"bogus": 1}
        path = tmp_path / "units.json"
        path.write_text(json.dumps(minimal_catalog), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_catalog(path)

    def test_install_into_bare_registry(self, minimal_catalog):
        reg = UnitRegistry()
        install_catalog(reg, UnitCatalog.model_validate(minimal_catalog))
        speed = reg.get_unit("speed")
        assert speed is reg.get_unit("meter").divide(reg.get_unit("second"))
        furlong = reg.get_unit("furlong")
        assert furlong.to_si(1)[0] == pytest.approx(201.168)
        assert furlong.si is reg.get_unit("meter")

    def test_bare_registry_has_only_primitives(self):
        reg = UnitRegistry()
        assert reg.get_unit("meter").name == "meter"
        assert "joule" not in reg
        assert "meter" in reg
