"""
Metric prefixes — десятичные приставки SI

Порядок PREFIXES_BY_SYMBOL: более длинные символы раньше ("da" перед "d"),
чтобы "dam" разбиралось как дека-метр.
"""

import re
from typing import Dict, Final, Tuple

from pydantic import BaseModel, Field


class Prefix(BaseModel):
    """
    Десятичная приставка.

    Attributes:
        name: Полное имя ("kilo")
        symbol: Символ ("k")
        exponent: Показатель степени 10
    """

    name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    exponent: int

    model_config = {"frozen": True}

    @property
    def factor(self) -> float:
        return 10.0 ** self.exponent


PREFIXES: Final[Tuple[Prefix, ...]] = tuple(
    Prefix(name=name, symbol=symbol, exponent=exponent)
    for name, symbol, exponent in (
        ("yotta", "Y", 24),
        ("zetta", "Z", 21),
        ("exa", "E", 18),
        ("peta", "P", 15),
        ("tera", "T", 12),
        ("giga", "G", 9),
        ("mega", "M", 6),
        ("kilo", "k", 3),
        ("hecto", "h", 2),
        ("deka", "da", 1),
        ("deci", "d", -1),
        ("centi", "c", -2),
        ("milli", "m", -3),
        ("micro", "μ", -6),
        ("nano", "n", -9),
        ("pico", "p", -12),
        ("femto", "f", -15),
        ("atto", "a", -18),
        ("zepto", "z", -21),
        ("yocto", "y", -24),
    )
)

PREFIXES_BY_NAME: Final[Tuple[Prefix, ...]] = tuple(
    sorted(PREFIXES, key=lambda p: len(p.name), reverse=True)
)

# ASCII-замена "u" для "μ"
PREFIX_SYMBOL_ALIASES: Final[Dict[str, str]] = {"u": "μ"}

PREFIXES_BY_SYMBOL: Final[Tuple[Tuple[str, Prefix], ...]] = tuple(
    sorted(
        [(p.symbol, p) for p in PREFIXES]
        + [(alias, next(p for p in PREFIXES if p.symbol == target))
           for alias, target in PREFIX_SYMBOL_ALIASES.items()],
        key=lambda item: len(item[0]),
        reverse=True,
    )
)

RE_WHITESPACE: Final[re.Pattern] = re.compile(r"\s+")

# "kilo meter", "kilo-meter" -> "kilometer"
RE_PREFIX_NAME_CONCAT: Final[re.Pattern] = re.compile(
    r"^(" + "|".join(p.name for p in PREFIXES_BY_NAME) + r")[\s-]+(\S)",
    re.IGNORECASE,
)


def canonicalize(text: str) -> str:
    """Схлопывание пробелов и склейка приставки с именем единицы."""
    text = RE_WHITESPACE.sub(" ", text.strip())
    return RE_PREFIX_NAME_CONCAT.sub(r"\1\2", text)
