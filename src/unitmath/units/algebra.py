"""Immutable unit trees and their canonicalising algebra.

A unit is modelled as a :class:`UnitNode`: a symbol raised to a rational
power, optionally decomposed into multiplicative sub-factors. ``N`` defined as
``kg*m/s^2`` is the node ``N^1`` whose children are ``kg^1``, ``m^1`` and
``s^-2``. Nodes never change after construction; every operation below builds
new trees and shares the untouched child tuples.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Iterable, Iterator, List, Tuple

from .. import config
from ..errors import UnitAlgebraError


PowerLike = int | float | str | Decimal | Fraction

_HASH_MASK = (1 << 64) - 1
_SYMBOL_PRIME = 1_000_000_007
_NUMERATOR_PRIME = 1_000_000_009
_DENOMINATOR_PRIME = 1_000_000_021


def to_fraction(value: PowerLike) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError("Unit power must be numeric, got bool")
    if isinstance(value, int):
        return Fraction(value, 1)
    if isinstance(value, float):
        return _from_float(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Unit power must be finite, got {value}")
        return Fraction(value)
    try:
        return Fraction(value.strip())
    except ValueError:
        return _from_float(float(value))


def _from_float(value: float) -> Fraction:
    if not math.isfinite(value):
        raise ValueError(f"Unit power must be finite, got {value}")
    return Fraction(value).limit_denominator(10_000)


def format_power(power: Fraction) -> str:
    """Render ``power`` as ``2``, ``0.5`` or ``(1/3)``."""

    if power.denominator == 1:
        return str(power.numerator)
    denominator = power.denominator
    for prime in (2, 5):
        while denominator % prime == 0:
            denominator //= prime
    if denominator == 1:
        return format(Decimal(power.numerator) / Decimal(power.denominator), "f")
    return f"({power.numerator}/{power.denominator})"


def _structural_hash(symbol: str, power: Fraction, children: Tuple["UnitNode", ...]) -> int:
    value = 1
    for child in children:
        value = (31 * value + child._hash) & _HASH_MASK
    value = (value + _SYMBOL_PRIME * hash(symbol)) & _HASH_MASK
    # hash(-1) == hash(-2) in CPython, so the power is folded in by its terms.
    value = (value + _NUMERATOR_PRIME * power.numerator) & _HASH_MASK
    value = (value + _DENOMINATOR_PRIME * power.denominator) & _HASH_MASK
    return value


@dataclass(frozen=True, eq=False)
class UnitNode:
    """A unit symbol raised to ``power`` with optional sub-factors.

    Equality is decided by the structural hash computed at construction. With
    ``config.STRICT_EQUALITY`` enabled the trees are also compared field by
    field after the hashes agree.
    """

    symbol: str
    power: Fraction = Fraction(1)
    children: Tuple["UnitNode", ...] = ()
    _hash: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "power", to_fraction(self.power))
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, UnitNode):
                raise TypeError(f"Unit children must be UnitNode, got {type(child)}")
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "_hash", _structural_hash(self.symbol, self.power, children))

    # -- Structure --------------------------------------------------------
    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __iter__(self) -> Iterator[UnitNode]:
        return iter(self.children)

    def change_power(self, power: PowerLike) -> UnitNode:
        """Return this unit raised to ``power`` with descendants rescaled."""

        new_power = to_fraction(power)
        if self.power == 0:
            raise UnitAlgebraError(
                f"Cannot change the power of zero-power unit '{self.symbol}'"
            )
        scale = new_power / self.power
        return UnitNode(self.symbol, new_power, _scale_units(self.children, scale))

    def invert(self) -> UnitNode:
        return UnitNode(self.symbol, -self.power, invert_units(self.children))

    def flatten(self) -> UnitNode:
        return UnitNode(self.symbol, self.power, default_order(flatten_units(self)))

    def simplify(self) -> UnitNode:
        return UnitNode(self.symbol, self.power, multiply_units(self.children))

    # -- Operators --------------------------------------------------------
    def __mul__(self, other: UnitNode) -> UnitNode:
        if not isinstance(other, UnitNode):
            return NotImplemented
        if self.symbol == other.symbol and self.is_leaf and other.is_leaf:
            return UnitNode(self.symbol, self.power + other.power)
        units = multiply_units([*_factors(self), *_factors(other)])
        if self.symbol == other.symbol:
            return UnitNode(self.symbol, self.power + other.power, units)
        return UnitNode(aggregate_label(units), 1, units)

    def __truediv__(self, other: UnitNode) -> UnitNode:
        if not isinstance(other, UnitNode):
            return NotImplemented
        return self * other.invert()

    def __pow__(self, exponent: PowerLike) -> UnitNode:
        return self.change_power(self.power * to_fraction(exponent))

    # -- Equality ---------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnitNode):
            return NotImplemented
        if self is other:
            return True
        if self._hash != other._hash:
            return False
        if config.STRICT_EQUALITY:
            return _same_structure(self, other)
        return True

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        if self.power == 0:
            return ""
        if self.power == 1:
            return self.symbol
        return f"{self.symbol}^{format_power(self.power)}"


def _same_structure(lhs: UnitNode, rhs: UnitNode) -> bool:
    if lhs.symbol != rhs.symbol or lhs.power != rhs.power:
        return False
    if len(lhs.children) != len(rhs.children):
        return False
    return all(_same_structure(a, b) for a, b in zip(lhs.children, rhs.children))


def _scale_units(units: Iterable[UnitNode], scale: Fraction) -> Tuple[UnitNode, ...]:
    return tuple(
        UnitNode(u.symbol, u.power * scale, _scale_units(u.children, scale)) for u in units
    )


def _factors(unit: UnitNode) -> Tuple[UnitNode, ...]:
    # A leaf is its own single factor.
    return unit.children or (unit,)


# -- Canonicaliser --------------------------------------------------------
def default_order(units: Iterable[UnitNode]) -> Tuple[UnitNode, ...]:
    """Sort by descending power, then ascending symbol."""

    return tuple(sorted(units, key=lambda u: (-u.power, u.symbol)))


def invert_units(units: Iterable[UnitNode]) -> Tuple[UnitNode, ...]:
    return tuple(UnitNode(u.symbol, -u.power, invert_units(u.children)) for u in units)


def flatten_units(unit: UnitNode) -> Iterator[UnitNode]:
    """Yield the leaves of ``unit`` depth first."""

    if unit.is_leaf:
        yield unit
        return
    for child in unit.children:
        yield from flatten_units(child)


def multiply_units(units: Iterable[UnitNode]) -> Tuple[UnitNode, ...]:
    """Group ``units`` by symbol, summing powers and merging sub-factors."""

    groups: Dict[str, List[UnitNode]] = {}
    for unit in units:
        groups.setdefault(unit.symbol, []).append(unit)

    reduced = []
    for symbol, members in groups.items():
        power = sum((m.power for m in members), Fraction(0))
        children = multiply_units(c for m in members for c in m.children)
        reduced.append(UnitNode(symbol, power, children))
    return default_order(reduced)


def aggregate_label(units: Iterable[UnitNode]) -> str:
    """Join the root renderings of ``units`` with ``*``."""

    return "*".join(text for text in (str(u) for u in units) if text)


DIMENSIONLESS = UnitNode("", 1)


__all__ = [
    "DIMENSIONLESS",
    "UnitNode",
    "aggregate_label",
    "default_order",
    "flatten_units",
    "format_power",
    "invert_units",
    "multiply_units",
    "to_fraction",
]
