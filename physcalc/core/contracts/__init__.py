"""
Contract Validation Module

Модуль для валидации JSON контрактов physcalc.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    UnitCatalogValidator,
    validate_unit_catalog,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "UnitCatalogValidator",
    # Functions
    "validate_unit_catalog",
]
