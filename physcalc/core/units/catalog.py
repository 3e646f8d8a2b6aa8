"""
Unit Catalog — стандартные производные единицы и алиасы

Каталог хранится как JSON (data/standard_units.json), проверяется
контрактом unit_catalog.json и затем разбирается в неизменяемые
pydantic модели перед установкой в реестр.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final, List, Optional

from pydantic import BaseModel, Field, field_validator

from physcalc.core.contracts.validators import validate_unit_catalog
from physcalc.core.units.registry import UnitRegistry

logger = logging.getLogger(__name__)

STANDARD_CATALOG_PATH: Final[Path] = Path(__file__).parent / "data" / "standard_units.json"


class UnitEntry(BaseModel):
    """Производная единица каталога"""

    terms: Dict[str, int]
    name: Optional[str] = None
    symbol: Optional[str] = None
    var_name: Optional[str] = None
    names: List[str] = Field(..., min_length=1)
    attributes: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def unit_attributes(self) -> Dict[str, Any]:
        attrs = dict(self.attributes)
        for field in ("name", "symbol", "var_name"):
            value = getattr(self, field)
            if value is not None:
                attrs[field] = value
        return attrs


class AliasEntry(BaseModel):
    """Алиас каталога: name = scale * si + offset"""

    name: str = Field(..., min_length=1)
    symbol: Optional[str] = None
    si: str = Field(..., min_length=1)
    scale: float
    offset: float = 0.0
    names: List[str] = Field(default_factory=list)
    attributes: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("scale")
    @classmethod
    def validate_scale(cls, v: float) -> float:
        if v == 0:
            raise ValueError("scale must be non-zero")
        return v


class UnitCatalog(BaseModel):
    """Каталог единиц"""

    schema_version: str
    units: List[UnitEntry]
    aliases: List[AliasEntry]

    model_config = {"frozen": True}


def load_catalog(path: Optional[Path] = None) -> UnitCatalog:
    """
    Загрузка и валидация каталога.

    Args:
        path: Путь к JSON (по умолчанию стандартный каталог пакета)

    Raises:
        jsonschema.ValidationError: Нарушение контракта unit_catalog
        pydantic.ValidationError: Нарушение модели
    """
    path = path or STANDARD_CATALOG_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    validate_unit_catalog(data)
    return UnitCatalog.model_validate(data)


def install_catalog(registry: UnitRegistry, catalog: UnitCatalog) -> UnitRegistry:
    """
    Установка каталога в реестр: сначала единицы, затем алиасы.

    SI-единица алиаса ищется с si_only=True.
    """
    for entry in catalog.units:
        registry.define_unit(entry.terms, entry.unit_attributes(), *entry.names)
    for alias in catalog.aliases:
        registry.define_alias(
            alias.name,
            alias.symbol,
            alias.attributes,
            registry.get_unit(alias.si, si_only=True),
            alias.scale,
            alias.offset,
            *alias.names,
        )
    logger.debug(
        "Installed unit catalog %s: %d units, %d aliases",
        catalog.schema_version,
        len(catalog.units),
        len(catalog.aliases),
    )
    return registry


def create_registry(with_catalog: bool = True) -> UnitRegistry:
    """Новый изолированный реестр, по умолчанию со стандартным каталогом."""
    registry = UnitRegistry()
    if with_catalog:
        install_catalog(registry, load_catalog())
    return registry
