"""Symbolic algebra over physical measurement units."""

__version__ = "0.1.0"

from .core.quantity import UnitValue
from .errors import (
    IncompatibleUnitsError,
    UnitAlgebraError,
    UnitDefinitionError,
    UnitMathError,
    UnitRegistryError,
)
from .parser.unit_parser import evaluate_expression, parse_factor, parse_line, parse_units
from .registry import DEFAULT_LINES, UnitRegistry
from .units import (
    DIMENSIONLESS,
    UnitDisplayFormat,
    UnitNode,
    are_compatible,
    get_common,
    render,
    render_all,
)

__all__ = [
    "DEFAULT_LINES",
    "DIMENSIONLESS",
    "IncompatibleUnitsError",
    "UnitAlgebraError",
    "UnitDefinitionError",
    "UnitDisplayFormat",
    "UnitMathError",
    "UnitNode",
    "UnitRegistry",
    "UnitRegistryError",
    "UnitValue",
    "are_compatible",
    "evaluate_expression",
    "get_common",
    "parse_factor",
    "parse_line",
    "parse_units",
    "render",
    "render_all",
]
