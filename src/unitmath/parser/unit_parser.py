"""Parse unit definition lines such as ``N = kg*m/s^2``.

The grammar is deliberately flat. An expression is split once on ``/`` into
a numerator and a denominator, each side is split on ``*`` into factors and
each factor is ``SYMBOL`` or ``SYMBOL^POWER``. Spaces, tabs and parentheses
are removed before splitting, so ``N/(m^2)`` reads exactly like ``N/m^2``.
Symbols found in the lookup inherit the registered unit's structure; unknown
symbols become new leaves.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from ..errors import UnitDefinitionError
from ..units.algebra import DIMENSIONLESS, UnitNode, invert_units, to_fraction

logger = logging.getLogger(__name__)

Lookup = Mapping[str, UnitNode]

_IGNORED_CHARS = str.maketrans("", "", " \t()")


def parse_factor(text: str, lookup: Optional[Lookup] = None) -> UnitNode:
    """Parse a single factor like ``m^2`` into a :class:`UnitNode`."""

    stripped = text.strip()
    symbol, caret, power_text = stripped.partition("^")
    if symbol == "1":
        symbol = ""

    power = to_fraction(1)
    if caret:
        try:
            power = to_fraction(power_text)
        except (ValueError, ZeroDivisionError):
            raise UnitDefinitionError(
                f"Invalid power '{power_text}'", stripped, len(symbol) + 1
            ) from None

    known = lookup.get(symbol) if lookup is not None else None
    if known is not None:
        return known.change_power(power)
    return UnitNode(symbol, power)


def parse_units(text: str, lookup: Optional[Lookup] = None) -> List[UnitNode]:
    """Parse ``kg*m/s^2`` into the flat list of factors ``[kg, m, s^-2]``.

    Factors after the ``/`` are inverted. Only the first ``/`` is honoured:
    a segment after a second ``/`` is kept in the numerator.
    """

    cleaned = text.translate(_IGNORED_CHARS)
    segments = cleaned.split("/")
    if len(segments) > 2:
        logger.warning(
            "Expression '%s' has %d '/' separators; only the first divides",
            text,
            len(segments) - 1,
        )

    units: List[UnitNode] = []
    for index, segment in enumerate(segments):
        factors = [parse_factor(part, lookup) for part in segment.split("*")]
        if index == 1:
            factors = list(invert_units(factors))
        units.extend(factors)
    return [u for u in units if u.symbol != ""]


def parse_line(line: str, lookup: Optional[Lookup] = None) -> UnitNode:
    """Parse a definition line.

    Accepted shapes are an empty line, a bare symbol (``m^2``), a bare
    expression (``kg*m``) labelled by its own text, and ``SYMBOL = EXPR``.
    """

    parts = [part.strip() for part in line.split("=")]
    if len(parts) > 2:
        raise UnitDefinitionError(
            "Can't have multiple equal signs in a definition",
            line,
            line.index("=", line.index("=") + 1),
        )
    if len(parts) == 2:
        symbol, expression = parts
        return UnitNode(symbol, 1, parse_units(expression, lookup))

    expression = parts[0]
    if "*" in expression or "/" in expression:
        return UnitNode(expression, 1, parse_units(expression, lookup))
    return parse_factor(expression, lookup)


def evaluate_expression(text: str, lookup: Optional[Lookup] = None) -> UnitNode:
    """Combine the factors of ``text`` with the unit operators.

    Unlike :func:`parse_line`, which records the factors as children of a new
    node, ``Pa/N`` here is the quotient ``lookup['Pa'] / lookup['N']``.
    """

    cleaned = text.translate(_IGNORED_CHARS)
    segments = cleaned.split("/")
    if len(segments) > 2:
        logger.warning("Expression '%s' has more than one '/'", text)

    result: Optional[UnitNode] = None
    for index, segment in enumerate(segments):
        for part in segment.split("*"):
            factor = parse_factor(part, lookup)
            if factor.symbol == "":
                continue
            if result is None:
                result = factor.invert() if index == 1 else factor
            elif index == 1:
                result = result / factor
            else:
                result = result * factor
    return result if result is not None else DIMENSIONLESS


__all__ = [
    "Lookup",
    "evaluate_expression",
    "parse_factor",
    "parse_line",
    "parse_units",
]
