"""Numeric helpers for wthr.

Every runtime value in wthr is an exact `fractions.Fraction`. This module
contains the few places where that representation meets the outside
world: turning a decimal literal into a fraction without going through a
float, rendering a fraction for `print`, and the truthiness rule used by
`if`.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Any


def parse_decimal(lexeme: str) -> Fraction:
    """Convert a numeric literal such as `12`, `2.5` or `.75` exactly.

    The digits after the decimal point become a power-of-ten denominator,
    so `0.1` is exactly one tenth. Raises ValueError for anything that is
    not digits with at most one decimal point.
    """
    whole, dot, frac = lexeme.partition('.')
    digits = whole + frac
    if not digits or not digits.isdigit() or '.' in frac:
        raise ValueError(f"malformed number {lexeme!r}")
    return Fraction(int(digits), 10 ** len(frac))


def format_number(value: Fraction) -> str:
    """Render a value as the nearest double in positional decimal form.

    Integral values print without a fractional part (`8`, not `8.0`) and
    small or large magnitudes never switch to exponent notation.
    """
    try:
        approx = float(value)
    except OverflowError:
        return 'inf' if value > 0 else '-inf'
    if approx.is_integer():
        return str(int(approx))
    return format(Decimal(repr(approx)), 'f')


def is_truthy(value: Fraction) -> bool:
    return value != 0


def from_bool(flag: bool) -> Fraction:
    return Fraction(1) if flag else Fraction(0)


def type_name(value: Any) -> str:
    """Return the wthr kind name of a runtime value, for error messages."""
    if isinstance(value, Fraction):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    return type(value).__name__
