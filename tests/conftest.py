"""Shared fixtures for unitmath tests."""

import pytest

from unitmath.registry import UnitRegistry


@pytest.fixture()
def registry() -> UnitRegistry:
    return UnitRegistry.default(include_env=False)
