"""Helpers for converting monetary amounts between major and minor units."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

MINOR_UNITS_PER_MAJOR = 100
# Largest amount a signed 64-bit integer column can hold.
MAX_MINOR_UNITS = 2**63 - 1
MAX_AMOUNT = Decimal(MAX_MINOR_UNITS) / MINOR_UNITS_PER_MAJOR
_ONE = Decimal("1")
_CENT = Decimal("0.01")


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a finite :class:`Decimal` or ``None``.

    Blank strings, unparsable text, ``NaN`` and infinities all yield
    ``None`` so callers only need a single check.
    """

    if value is None:
        return None
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except (InvalidOperation, ValueError):
            return None
    if not number.is_finite():
        return None
    return number


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to an integer count of minor units.

    Rounds half up, so ``Decimal("19.99")`` becomes ``1999`` with no
    floating point drift.
    """

    scaled = amount * MINOR_UNITS_PER_MAJOR
    return int(scaled.quantize(_ONE, rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    """Convert stored minor units back to a two-place major-unit amount."""

    return (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(_CENT)


def format_minor_units(amount: int) -> str:
    return f"{from_minor_units(amount):.2f}"
