"""Values paired with unit trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import sympy as sp

from ..errors import IncompatibleUnitsError
from ..parser.unit_parser import evaluate_expression
from ..units.algebra import DIMENSIONLESS, UnitNode
from ..units.equivalence import dimension_signature, get_common
from ..units.render import UnitDisplayFormat, render


@dataclass(frozen=True)
class UnitValue:
    """A scalar (or symbolic) value carrying a :class:`UnitNode`.

    Values are converted to SymPy so integer and rational arithmetic stays
    exact. Multiplication and division combine the units; addition and
    subtraction need a common unit and raise :class:`IncompatibleUnitsError`
    otherwise.
    """

    value: Any
    unit: UnitNode = DIMENSIONLESS

    def __post_init__(self) -> None:
        if not isinstance(self.value, sp.Basic):
            try:
                object.__setattr__(self, "value", sp.sympify(self.value))
            except (sp.SympifyError, TypeError) as exc:
                raise TypeError(f"Value must be convertible to SymPy, got {self.value!r}") from exc
        if not isinstance(self.unit, UnitNode):
            raise TypeError(f"Unit must be a UnitNode, got {type(self.unit)}")

    @classmethod
    def from_text(
        cls, value: Any, unit_text: str, lookup: Optional[Mapping[str, UnitNode]] = None
    ) -> UnitValue:
        return cls(value, evaluate_expression(unit_text, lookup))

    # -- Arithmetic -------------------------------------------------------
    def __mul__(self, other: Any) -> UnitValue:
        if isinstance(other, UnitValue):
            return UnitValue(self.value * other.value, self.unit * other.unit)
        return UnitValue(self.value * sp.sympify(other), self.unit)

    def __rmul__(self, other: Any) -> UnitValue:
        return UnitValue(sp.sympify(other) * self.value, self.unit)

    def __truediv__(self, other: Any) -> UnitValue:
        if isinstance(other, UnitValue):
            return UnitValue(self.value / other.value, self.unit / other.unit)
        return UnitValue(self.value / sp.sympify(other), self.unit)

    def __rtruediv__(self, other: Any) -> UnitValue:
        return UnitValue(sp.sympify(other) / self.value, self.unit.invert())

    def __pow__(self, exponent: int) -> UnitValue:
        if not isinstance(exponent, int):
            raise TypeError("Exponent must be an integer")
        return UnitValue(self.value**exponent, self.unit**exponent)

    def __neg__(self) -> UnitValue:
        return UnitValue(-self.value, self.unit)

    def __add__(self, other: UnitValue) -> UnitValue:
        if not isinstance(other, UnitValue):
            raise TypeError(f"Cannot add UnitValue and {type(other)}")
        return UnitValue(self.value + other.value, self._common_unit(other, "add"))

    def __sub__(self, other: UnitValue) -> UnitValue:
        if not isinstance(other, UnitValue):
            raise TypeError(f"Cannot subtract {type(other)} from UnitValue")
        return UnitValue(self.value - other.value, self._common_unit(other, "subtract"))

    def _common_unit(self, other: UnitValue, operation: str) -> UnitNode:
        common = get_common(self.unit, other.unit)
        if common is None:
            raise IncompatibleUnitsError(
                f"Cannot {operation} quantities with incompatible units: "
                f"'{render(self.unit, UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED)}' vs "
                f"'{render(other.unit, UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED)}'"
            )
        return common

    # -- Comparison -------------------------------------------------------
    # Equality and ordering agree: both accept any pair of units with a common
    # unit, and values are compared in expanded form.
    def _canonical_value(self) -> sp.Basic:
        return sp.expand(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnitValue):
            return NotImplemented
        if get_common(self.unit, other.unit) is None:
            return False
        return self._canonical_value() == other._canonical_value()

    def __hash__(self) -> int:
        return hash((self._canonical_value(), dimension_signature(self.unit)))

    def _compare(self, other: UnitValue) -> sp.Basic:
        if not isinstance(other, UnitValue):
            raise TypeError(f"Cannot compare UnitValue with {type(other)}")
        self._common_unit(other, "compare")
        return self.value - other.value

    def __lt__(self, other: UnitValue) -> bool:
        return bool(self._compare(other) < 0)

    def __le__(self, other: UnitValue) -> bool:
        return bool(self._compare(other) <= 0)

    def __gt__(self, other: UnitValue) -> bool:
        return bool(self._compare(other) > 0)

    def __ge__(self, other: UnitValue) -> bool:
        return bool(self._compare(other) >= 0)

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        unit_text = render(self.unit, UnitDisplayFormat.FIRST_CHILDREN)
        return f"{self.value} {unit_text}".rstrip()


__all__ = ["UnitValue"]
