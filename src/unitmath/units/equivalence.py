"""Reconcile differently expressed units of the same dimension.

Two quantities may carry trees such as ``N`` and ``J/m`` that denote the same
physical dimension even though neither their symbols nor their nesting match.
:func:`get_common` decides whether such units can be added and returns a
representative unit for the sum.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Optional, Tuple

from .algebra import UnitNode, aggregate_label, default_order, flatten_units, multiply_units

logger = logging.getLogger(__name__)


def _nonzero(units: Iterable[UnitNode]) -> Tuple[UnitNode, ...]:
    return tuple(u for u in units if u.power != 0)


def _wrap(units: Tuple[UnitNode, ...]) -> UnitNode:
    return UnitNode(aggregate_label(units), 1, units)


def dimension_signature(unit: UnitNode) -> Tuple[UnitNode, ...]:
    """Return the fully reduced, non-zero leaves of ``unit``."""

    return _nonzero(multiply_units(flatten_units(unit)))


def get_common(lhs: UnitNode, rhs: UnitNode) -> Optional[UnitNode]:
    """Return a unit representing both ``lhs`` and ``rhs`` or ``None``.

    The checks run from cheapest to most expensive:

    1. identical trees share ``lhs``;
    2. identical leaf sequences after flattening share those leaves;
    3. differing reduced forms mean the units are incompatible;
    4. otherwise the literal shared leaves are kept and the residue of each
       side, which reduces to the same factors, is appended once.
    """

    if lhs == rhs:
        return lhs

    left = default_order(flatten_units(lhs))
    right = default_order(flatten_units(rhs))
    if _wrap(left) == _wrap(right):
        return _wrap(left)

    if _wrap(_nonzero(multiply_units(left))) != _wrap(_nonzero(multiply_units(right))):
        logger.debug("No common unit for '%s' and '%s'", lhs, rhs)
        return None

    left_counts = Counter(left)
    right_counts = Counter(right)
    shared = left_counts & right_counts
    # Both residues reduce to the same factors once the shared leaves are gone.
    residue = _nonzero(multiply_units((left_counts - shared).elements()))
    logger.debug(
        "Reconciled '%s' and '%s' with %d shared leaves",
        lhs,
        rhs,
        sum(shared.values()),
    )
    return _wrap(default_order([*shared.elements(), *residue]))


def are_compatible(lhs: UnitNode, rhs: UnitNode) -> bool:
    return get_common(lhs, rhs) is not None


__all__ = ["are_compatible", "dimension_signature", "get_common"]
