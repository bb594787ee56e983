"""Money helpers.

Amounts are stored as floats on aggregates; every arithmetic step that
produces a persisted amount goes through ``Decimal`` and is rounded half-up
to the cent.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def as_decimal(value) -> Decimal:
    """Convert a float/int/str amount to Decimal without binary noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value or 0))


def round_cents(value) -> Decimal:
    return as_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value) -> float:
    """Round an amount half-up to 2 decimals and return it as a float."""
    return float(round_cents(value))


def to_minor_units(value) -> int:
    """Amount in the smallest currency unit (cents), as payment providers expect."""
    return int((round_cents(value) * 100).to_integral_value(rounding=ROUND_HALF_UP))
