"""Utility functions for dremap."""

from dremap.utils.amount_parser import parse_amount, parse_optional_amount

__all__ = ["parse_amount", "parse_optional_amount"]
