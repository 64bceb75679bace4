"""Display formatting for margin figures (GBP, percentages)"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

_TWO_DP = Decimal("0.01")

Number = Union[Decimal, float, int]


def _quantize(value: Number) -> Decimal:
    amount = Decimal(str(value))
    with localcontext() as ctx:
        # room for every integer digit plus two decimals
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def format_currency(value: Number) -> str:
    """
    Format an amount as GBP with thousands separators.

    Example:
        Decimal("3066.6667") -> "£3,066.67"
        -2000 -> "-£2,000.00"
    """
    amount = _quantize(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}£{abs(amount):,.2f}"


def format_percentage(value: Number) -> str:
    """33.928... -> '33.93%'"""
    return f"{_quantize(value):.2f}%"
