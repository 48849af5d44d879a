"""
Money helpers.
"""

from decimal import Decimal, ROUND_HALF_UP

from ..core.enums import Currency


def to_minor_units(amount: Decimal, currency: Currency = Currency.USD) -> int:
    """Convert a decimal amount to integer minor units (cents for usd)."""
    scale = Decimal(10) ** currency.minor_unit_exponent
    return int((amount * scale).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
