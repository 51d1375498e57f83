"""Textual display forms for unit trees."""

from __future__ import annotations

from enum import Enum
from typing import Dict

from .algebra import UnitNode, aggregate_label


class UnitDisplayFormat(str, Enum):
    ROOT_TREE = "root-tree"
    FIRST_CHILDREN = "first-children"
    FLATTENED = "flattened"
    SIMPLIFIED = "simplified"
    FLATTENED_AND_SIMPLIFIED = "flattened-and-simplified"


def render_children(unit: UnitNode) -> str:
    """Render the direct children of ``unit`` as a ``num/den`` fraction."""

    if unit.is_leaf:
        return str(unit)

    positive = sorted((u for u in unit.children if u.power > 0), key=lambda u: -u.power)
    negative = sorted((u for u in unit.children if u.power < 0), key=lambda u: u.power)

    numerator = aggregate_label(positive)
    denominator = aggregate_label(u.invert() for u in negative)
    if len(negative) > 1:
        denominator = f"({denominator})"

    if numerator and denominator:
        return f"{numerator}/{denominator}"
    if denominator:
        return f"1/{denominator}"
    return numerator


def render(unit: UnitNode, fmt: UnitDisplayFormat | str = UnitDisplayFormat.FIRST_CHILDREN) -> str:
    """Render ``unit`` using one of the :class:`UnitDisplayFormat` forms."""

    fmt = UnitDisplayFormat(fmt)
    if fmt is UnitDisplayFormat.ROOT_TREE:
        return str(unit)
    if fmt is UnitDisplayFormat.FIRST_CHILDREN:
        return render_children(unit)
    if fmt is UnitDisplayFormat.FLATTENED:
        return render_children(unit.flatten())
    if fmt is UnitDisplayFormat.SIMPLIFIED:
        return render_children(unit.simplify())
    return render_children(unit.flatten().simplify())


def render_all(unit: UnitNode) -> Dict[str, str]:
    return {fmt.value: render(unit, fmt) for fmt in UnitDisplayFormat}


__all__ = ["UnitDisplayFormat", "render", "render_all", "render_children"]
