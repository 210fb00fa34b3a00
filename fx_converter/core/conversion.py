"""
Conversion arithmetic.

Amounts are handled as Decimal and rounded half-up to cents.
No currency-specific rounding rules apply.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half-up."""
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the two cents
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def convert_amount(amount: Decimal, rate: Union[float, int, str, Decimal]) -> Decimal:
    """Convert an amount using a quoted rate.

    The amount is rounded to cents before multiplying, then the product
    is rounded again. Amounts of any length are computed exactly.

    Args:
        amount: Amount in the base currency
        rate: Units of target currency per unit of base currency

    Returns:
        Converted amount rounded to 2 decimal places
    """
    cents = round_money(amount)
    # str() keeps the rate as quoted rather than its binary float expansion
    quoted = Decimal(str(rate))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(cents.as_tuple().digits) + len(quoted.as_tuple().digits))
        product = cents * quoted
    return round_money(product)
