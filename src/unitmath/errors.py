"""Exception hierarchy shared by the unit algebra, parser and registry."""

from __future__ import annotations


class UnitMathError(Exception):
    """Base class for all errors raised by :mod:`unitmath`."""


class UnitDefinitionError(UnitMathError, ValueError):
    """Raised when a unit definition line cannot be parsed."""

    def __init__(
        self,
        message: str,
        text: str,
        position: int | None = None,
        *,
        line_no: int | None = None,
    ) -> None:
        pointer = ""
        if position is not None and 0 <= position <= len(text):
            pointer = f"\n{text}\n{' ' * position}^"
        prefix = f"Line {line_no}: " if line_no is not None else ""
        super().__init__(f"{prefix}{message}{pointer}")
        self.message = message
        self.text = text
        self.position = position
        self.line_no = line_no


class UnitAlgebraError(UnitMathError, ArithmeticError):
    """Raised when a unit tree operation is undefined."""


class UnitRegistryError(UnitMathError, KeyError):
    """Raised when a registration conflicts with an existing unit."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class IncompatibleUnitsError(UnitMathError):
    """Raised when quantities with different dimensions are combined."""


__all__ = [
    "UnitMathError",
    "UnitDefinitionError",
    "UnitAlgebraError",
    "UnitRegistryError",
    "IncompatibleUnitsError",
]
