"""
Arithmetic — сумма, разность и произведение функций

Перед сложением единицы проверяются через Unit.add (DimensionMismatch),
виды значений должны совпадать (InconsistentType).

Производная и интеграл суммы — сумма производных и интегралов слагаемых
с теми же знаками.

Произведение: единица — Unit.multiply единиц множителей, не более одного
векторного множителя, производная по правилу Лейбница. Интеграл
произведения не поддерживается.
"""

from typing import Callable, List, Optional, Sequence, Tuple, Union

from physcalc.core.domain.values import (
    Value,
    ValueKind,
    add_values,
    negate_value,
    value_kind,
    zero_value,
)
from physcalc.core.errors import InconsistentType
from physcalc.core.functions.analytic import Constant, zero_function
from physcalc.core.functions.base import FunctionKind, PCalculus
from physcalc.core.functions.integral import IndefiniteIntegral

# (sign, function), sign ∈ {+1, -1}
Term = Tuple[int, PCalculus]


def _signed(sign: int, value: Value) -> Value:
    return value if sign > 0 else negate_value(value)


class FunctionSum(PCalculus):
    """Σ sign_i * f_i(t)"""

    kind = FunctionKind.SUM

    def __init__(self, terms: Sequence[Term], name: Optional[str] = None):
        if not terms:
            raise ValueError("FunctionSum requires at least one term")
        for _, fn in terms:
            if not isinstance(fn, PCalculus):
                raise InconsistentType(f"Cannot combine {fn!r} with a function")
        first = terms[0][1]
        unit = first.unit
        for _, fn in terms[1:]:
            unit = unit.add(fn.unit)
            if fn.value_kind is not first.value_kind:
                raise InconsistentType(
                    f"Cannot combine {fn.value_kind.value} {fn.name} with "
                    f"{first.value_kind.value} {first.name}"
                )
        super().__init__(unit, name, first.numerics)
        self.terms: Tuple[Term, ...] = tuple(terms)

    @property
    def value_kind(self) -> ValueKind:
        return self.terms[0][1].value_kind

    def compile(self) -> Callable[[float], Value]:
        evaluators = [(sign, fn.f) for sign, fn in self.terms]
        return lambda t: add_values(*(_signed(sign, f(t)) for sign, f in evaluators))

    def differentiate(self) -> PCalculus:
        return FunctionSum([(sign, fn.derivative()) for sign, fn in self.terms])

    def integrate(self) -> IndefiniteIntegral:
        return SumIntegral(self)

    def to_descriptor(self, var: str = "t") -> str:
        parts = []
        for i, (sign, fn) in enumerate(self.terms):
            text = fn.to_descriptor(var)
            if i == 0:
                parts.append(text if sign > 0 else f"-{text}")
            else:
                parts.append(f"{'+' if sign > 0 else '-'} \\left({text}\\right)")
        return " ".join(parts)


class SumIntegral(IndefiniteIntegral):
    """Σ sign_i * ∫ f_i"""

    def __init__(self, fsum: FunctionSum, name: Optional[str] = None):
        super().__init__(fsum, fsum.integral_unit, name)
        self.parts = tuple((sign, fn.integral()) for sign, fn in fsum.terms)

    def compile(self) -> Callable[[float, float], Value]:
        evaluators = [(sign, integral.f) for sign, integral in self.parts]
        return lambda t0, t: add_values(*(_signed(sign, f(t0, t)) for sign, f in evaluators))


def add_functions(first: PCalculus, *rest: PCalculus) -> FunctionSum:
    """
    Сумма функций.

    Raises:
        DimensionMismatch: Единицы различны
        InconsistentType: Виды значений различны
    """
    return FunctionSum([(1, first), *((1, fn) for fn in rest)])


def sub_functions(a: PCalculus, b: PCalculus) -> FunctionSum:
    """Разность a - b (те же проверки, что и add_functions)."""
    return FunctionSum([(1, a), (-1, b)])


# =============================================================================
# PRODUCT
# =============================================================================

Factor = Union[PCalculus, Value]


def _is_zero(fn: PCalculus) -> bool:
    return isinstance(fn, Constant) and fn.value == zero_value(fn.value_kind)


class FunctionProduct(PCalculus):
    """Π f_i(t); скалярные множители и не более одного векторного."""

    kind = FunctionKind.PRODUCT

    def __init__(self, factors: Sequence[PCalculus], name: Optional[str] = None):
        if not factors:
            raise ValueError("FunctionProduct requires at least one factor")
        for fn in factors:
            if not isinstance(fn, PCalculus):
                raise InconsistentType(f"Cannot multiply {fn!r} with a function")
        vectors = [fn for fn in factors if fn.value_kind is ValueKind.VECTOR]
        if len(vectors) > 1:
            raise InconsistentType(
                f"Cannot multiply vector functions {', '.join(fn.name for fn in vectors)}"
            )
        unit = factors[0].unit
        for fn in factors[1:]:
            unit = unit.multiply(fn.unit)
        super().__init__(unit, name, factors[0].numerics)
        self.factors: Tuple[PCalculus, ...] = tuple(factors)
        self._value_kind = ValueKind.VECTOR if vectors else ValueKind.SCALAR

    @property
    def value_kind(self) -> ValueKind:
        return self._value_kind

    def compile(self) -> Callable[[float], Value]:
        evaluators = [fn.f for fn in self.factors]

        def evaluate(t: float) -> Value:
            acc: Value = 1.0
            for f in evaluators:
                acc = acc * f(t)
            return acc

        return evaluate

    def differentiate(self) -> PCalculus:
        terms: List[PCalculus] = []
        for i, fn in enumerate(self.factors):
            d = fn.derivative()
            if _is_zero(d):
                continue
            terms.append(FunctionProduct([*self.factors[:i], d, *self.factors[i + 1:]]))
        if not terms:
            return zero_function(self.derivative_unit, self.value_kind)
        if len(terms) == 1:
            return terms[0]
        return add_functions(*terms)

    def integrate(self) -> IndefiniteIntegral:
        raise NotImplementedError(f"Integral of product {self.name} is not supported")

    def to_descriptor(self, var: str = "t") -> str:
        parts = []
        for fn in self.factors:
            text = fn.to_descriptor(var)
            parts.append(text if isinstance(fn, Constant) else rf"\left({text}\right)")
        return r" \cdot ".join(parts)


def mul_functions(first: Factor, *rest: Factor) -> FunctionProduct:
    """
    Произведение функций и чисел.

    Числа и Vector оборачиваются в Constant с безразмерной единицей
    реестра первой функции.

    Raises:
        InconsistentType: Множитель не функция и не значение, или два
            векторных множителя
        ValueError: Среди множителей нет ни одной функции
    """
    factors = (first, *rest)
    functions = [f for f in factors if isinstance(f, PCalculus)]
    if not functions:
        raise ValueError("mul_functions requires at least one function")
    unity = functions[0].unit.registry.unity
    wrapped = []
    for f in factors:
        if not isinstance(f, PCalculus):
            value_kind(f)
            f = Constant(f, unity, numerics=functions[0].numerics)
        wrapped.append(f)
    return FunctionProduct(wrapped)
