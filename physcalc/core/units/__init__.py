"""
Units — алгебра размерностей и реестр единиц.

DEFAULT_REGISTRY содержит примитивы и стандартный каталог; функции модуля
(define_unit, define_alias, get_unit) работают с ним. Для изолированной
работы используйте create_registry().
"""

from typing import Any

from physcalc.core.units.catalog import (
    AliasEntry,
    UnitCatalog,
    UnitEntry,
    create_registry,
    install_catalog,
    load_catalog,
)
from physcalc.core.units.prefixes import PREFIXES, Prefix
from physcalc.core.units.primitives import ORDER, Primitive, UnitKey
from physcalc.core.units.registry import UnitRegistry
from physcalc.core.units.unit import AliasUnit, PrimitiveUnit, Unit

DEFAULT_REGISTRY: UnitRegistry = create_registry()

define_unit = DEFAULT_REGISTRY.define_unit
define_alias = DEFAULT_REGISTRY.define_alias
get_unit = DEFAULT_REGISTRY.get_unit


def is_unit(value: Any) -> bool:
    """Является ли value единицей (любого реестра)."""
    return isinstance(value, Unit)


__all__ = [
    # Registry
    "DEFAULT_REGISTRY",
    "UnitRegistry",
    "create_registry",
    "define_unit",
    "define_alias",
    "get_unit",
    "is_unit",
    # Types
    "Unit",
    "PrimitiveUnit",
    "AliasUnit",
    "Primitive",
    "UnitKey",
    "ORDER",
    "Prefix",
    "PREFIXES",
    # Catalog
    "UnitCatalog",
    "UnitEntry",
    "AliasEntry",
    "load_catalog",
    "install_catalog",
]
