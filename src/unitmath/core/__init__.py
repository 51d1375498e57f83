"""Quantity layer built on the unit algebra."""

from .quantity import UnitValue

__all__ = ["UnitValue"]
