"""Unit tree algebra, equivalence and rendering."""

from .algebra import (
    DIMENSIONLESS,
    UnitNode,
    default_order,
    flatten_units,
    format_power,
    invert_units,
    multiply_units,
)
from .equivalence import are_compatible, dimension_signature, get_common
from .render import UnitDisplayFormat, render, render_all

__all__ = [
    "DIMENSIONLESS",
    "UnitDisplayFormat",
    "UnitNode",
    "are_compatible",
    "default_order",
    "dimension_signature",
    "flatten_units",
    "format_power",
    "get_common",
    "invert_units",
    "multiply_units",
    "render",
    "render_all",
]
