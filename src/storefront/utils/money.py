"""Decimal helpers for monetary amounts stored as floats."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Convert a stored amount to a Decimal rounded to the cent."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity: int) -> Decimal:
    return (to_decimal(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value) -> str:
    return f"{to_decimal(value):.2f}"
