import dataclasses
from decimal import Decimal
from fractions import Fraction

import pytest

from unitmath import config
from unitmath.errors import UnitAlgebraError
from unitmath.units import algebra
from unitmath.units.algebra import (
    UnitNode,
    default_order,
    flatten_units,
    invert_units,
    multiply_units,
)


KG = UnitNode("kg")
M = UnitNode("m")
S = UnitNode("s")
NEWTON = UnitNode("N", 1, (KG, M, UnitNode("s", -2)))
PASCAL = UnitNode("Pa", 1, (NEWTON, UnitNode("m", -2)))


def test_power_is_normalised_to_fraction():
    assert UnitNode("m", 2).power == Fraction(2)
    assert UnitNode("m", "0.5").power == Fraction(1, 2)
    assert UnitNode("m", 0.5).power == Fraction(1, 2)
    assert UnitNode("m", Decimal("1.5")).power == Fraction(3, 2)


def test_root_rendering_of_powers():
    assert str(UnitNode("m")) == "m"
    assert str(UnitNode("m", 2)) == "m^2"
    assert str(UnitNode("m", -2)) == "m^-2"
    assert str(UnitNode("m", Fraction(1, 2))) == "m^0.5"
    assert str(UnitNode("m", Fraction(1, 3))) == "m^(1/3)"
    assert str(UnitNode("m", 0)) == ""


def test_nodes_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        KG.power = Fraction(2)  # type: ignore[misc]


def test_equality_follows_structural_hash():
    assert UnitNode("m", 2) == UnitNode("m", Fraction(2))
    assert hash(UnitNode("m", 2)) == hash(UnitNode("m", Fraction(2)))
    assert UnitNode("N", 1, (KG, M)) != UnitNode("N", 1, (M, KG))
    assert UnitNode("N", 1, (KG, M)) != UnitNode("N", 2, (KG, M))
    assert KG != "kg"


def test_strict_equality_guards_against_hash_collisions(monkeypatch):
    monkeypatch.setattr(algebra, "_structural_hash", lambda *args: 42)
    left = UnitNode("kg")
    right = UnitNode("m", 3)

    monkeypatch.setattr(config, "STRICT_EQUALITY", False)
    assert left == right

    monkeypatch.setattr(config, "STRICT_EQUALITY", True)
    assert left != right
    assert left == UnitNode("kg")


def test_change_power_scales_descendants():
    squared = NEWTON.change_power(2)
    assert squared.power == 2
    assert [c.power for c in squared.children] == [2, 2, -4]
    assert [c.symbol for c in squared.children] == ["kg", "m", "s"]
    assert NEWTON**2 == squared


def test_change_power_of_zero_power_unit_is_rejected():
    with pytest.raises(UnitAlgebraError):
        UnitNode("m", 0).change_power(2)


def test_invert_negates_every_power_and_keeps_order():
    inverted = PASCAL.invert()
    assert inverted.power == -1
    assert [c.power for c in inverted.children] == [-1, 2]
    assert [c.power for c in inverted.children[0].children] == [-1, -1, 2]
    assert inverted.invert() == PASCAL


def test_flatten_yields_leaves_depth_first():
    leaves = list(flatten_units(PASCAL))
    assert leaves == [KG, M, UnitNode("s", -2), UnitNode("m", -2)]
    assert list(flatten_units(KG)) == [KG]


def test_flatten_wraps_leaves_in_default_order():
    flat = PASCAL.flatten()
    assert flat.symbol == "Pa"
    assert flat.children == (KG, M, UnitNode("m", -2), UnitNode("s", -2))


def test_default_order_sorts_by_power_then_symbol():
    units = [UnitNode("s", -2), M, UnitNode("A", 3), KG]
    assert default_order(units) == (UnitNode("A", 3), KG, M, UnitNode("s", -2))


def test_invert_units_preserves_sequence():
    assert invert_units([M, UnitNode("s", -1)]) == (UnitNode("m", -1), S)


def test_multiply_units_groups_and_sums_powers():
    assert multiply_units([M, S, UnitNode("m", 2)]) == (UnitNode("m", 3), S)


def test_multiply_units_merges_nested_children():
    reduced = multiply_units([NEWTON, NEWTON])
    assert reduced == (UnitNode("N", 2, (UnitNode("kg", 2), UnitNode("m", 2), UnitNode("s", -4))),)


def test_simplify_reduces_direct_children_only():
    node = UnitNode("x", 1, (M, PASCAL, M))
    simplified = node.simplify()
    assert simplified.children[0] == UnitNode("m", 2)
    assert simplified.children[1].symbol == "Pa"
    assert len(simplified.children) == 2


def test_multiplying_different_symbols_builds_aggregate_label():
    product = KG * M
    assert product.symbol == "kg*m"
    assert product.power == 1
    assert product.children == (KG, M)


def test_multiplying_same_leaf_adds_powers():
    assert KG * KG == UnitNode("kg", 2)
    assert KG * KG == KG**2


def test_multiplying_same_derived_unit_keeps_symbol():
    squared = NEWTON * NEWTON
    assert squared.symbol == "N"
    assert squared.power == 2
    assert squared.children == (UnitNode("kg", 2), UnitNode("m", 2), UnitNode("s", -4))


def test_division_inverts_the_right_operand():
    velocity = M / S
    assert velocity.symbol == "m*s^-1"
    assert velocity.children == (M, UnitNode("s", -1))


def test_dividing_unit_by_itself_leaves_zero_powers():
    ratio = NEWTON / NEWTON
    assert ratio.power == 0
    assert all(child.power == 0 for child in ratio.flatten().simplify().children)


def test_powers_with_colliding_integer_hashes_are_distinct():
    assert UnitNode("s", -1) != UnitNode("s", -2)
    assert hash(UnitNode("s", -1)) != hash(UnitNode("s", -2))
    hertz = UnitNode("Hz", 1, (UnitNode("s", -1),))
    assert hertz != UnitNode("Hz", 1, (UnitNode("s", -2),))


@pytest.mark.parametrize("value", [float("inf"), float("nan"), "inf", "-infinity", Decimal("Infinity")])
def test_non_finite_powers_are_rejected(value):
    with pytest.raises(ValueError):
        algebra.to_fraction(value)
