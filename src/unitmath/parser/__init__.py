"""Parsing package exposing the unit definition parser."""

from .unit_parser import evaluate_expression, parse_factor, parse_line, parse_units

__all__ = ["evaluate_expression", "parse_factor", "parse_line", "parse_units"]
