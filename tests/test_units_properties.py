"""Algebraic properties of unit trees."""

from __future__ import annotations

from fractions import Fraction

import hypothesis.strategies as st
from hypothesis import given

from unitmath.units.algebra import DIMENSIONLESS, UnitNode
from unitmath.units.equivalence import dimension_signature, get_common
from unitmath.units.render import UnitDisplayFormat, render

FAS = UnitDisplayFormat.FLATTENED_AND_SIMPLIFIED

powers = st.one_of(
    st.integers(min_value=-3, max_value=3).filter(lambda p: p != 0),
    st.sampled_from([Fraction(1, 2), Fraction(-1, 2)]),
)
leaves = st.builds(UnitNode, st.sampled_from("abcd"), powers)
derived = st.builds(
    UnitNode,
    st.sampled_from("XYZ"),
    st.just(1),
    st.lists(leaves, min_size=1, max_size=3).map(tuple),
)
units = st.one_of(leaves, derived)


@given(units, units)
def test_multiplication_is_commutative(a: UnitNode, b: UnitNode) -> None:
    assert a * b == b * a


@given(leaves, leaves, leaves)
def test_multiplication_of_leaves_is_associative(a: UnitNode, b: UnitNode, c: UnitNode) -> None:
    assert (a * b) * c == a * (b * c)


@given(units, units, units)
def test_grouping_does_not_change_reduced_factors(a: UnitNode, b: UnitNode, c: UnitNode) -> None:
    left = ((a * b) * c).flatten().simplify()
    right = (a * (b * c)).flatten().simplify()
    assert left.children == right.children


@given(units)
def test_dimensionless_is_a_rendering_identity(a: UnitNode) -> None:
    assert render(a * DIMENSIONLESS, FAS) == render(a, FAS)


@given(units)
def test_double_inversion_restores_the_unit(a: UnitNode) -> None:
    assert a.invert().invert() == a


@given(units)
def test_flatten_is_idempotent(a: UnitNode) -> None:
    assert a.flatten().flatten() == a.flatten()


@given(units)
def test_squaring_doubles_every_reduced_power(a: UnitNode) -> None:
    original = {u.symbol: u.power for u in dimension_signature(a)}
    squared = {u.symbol: u.power for u in dimension_signature(a**2)}
    assert squared == {symbol: 2 * power for symbol, power in original.items()}


@given(units, units)
def test_common_unit_exists_exactly_for_matching_dimensions(a: UnitNode, b: UnitNode) -> None:
    common = get_common(a, b)
    assert (common is None) == (dimension_signature(a) != dimension_signature(b))
    if common is not None:
        assert dimension_signature(common) == dimension_signature(a)


@given(units, units)
def test_compatibility_is_symmetric(a: UnitNode, b: UnitNode) -> None:
    assert (get_common(a, b) is None) == (get_common(b, a) is None)


@given(units)
def test_quotient_with_itself_reduces_to_nothing(a: UnitNode) -> None:
    assert dimension_signature(a / a) == ()
