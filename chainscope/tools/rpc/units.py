"""Conversions from smallest-unit integers to human-scale amounts.

Balances routinely exceed the range a float can hold exactly, so every
conversion parses into ``int`` and divides with ``Decimal``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

WEI_PER_ETHER = 18
WEI_PER_GWEI = 9
LAMPORTS_PER_SOL = 9

Quantity = Union[int, str]


def parse_quantity(value: Quantity) -> int:
    """Parse an int, a decimal string or a ``0x`` hex quantity."""
    if isinstance(value, bool):
        raise ValueError(f"invalid quantity: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text, 10)
    raise ValueError(f"invalid quantity: {value!r}")


def _scale(raw: int, decimals: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(len(str(abs(raw))) + 2, 28)
        return Decimal(raw).scaleb(-decimals)


def _fixed(amount: Decimal, places: int) -> str:
    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(len(amount.as_tuple().digits) + places + 2, 28)
        return str(amount.quantize(exponent, rounding=ROUND_HALF_UP))


def wei_to_ether(value: Quantity) -> str:
    """Convert wei to ether, formatted to 6 decimal places."""
    return _fixed(_scale(parse_quantity(value), WEI_PER_ETHER), 6)


def wei_to_gwei(value: Quantity) -> str:
    """Convert wei to gwei, formatted to 2 decimal places."""
    return _fixed(_scale(parse_quantity(value), WEI_PER_GWEI), 2)


def lamports_to_sol(value: Quantity) -> Decimal:
    return _scale(parse_quantity(value), LAMPORTS_PER_SOL)


def format_sol(value: Decimal) -> str:
    """Render a SOL amount to 4 decimal places."""
    return _fixed(Decimal(value), 4)


def token_amount(raw: Quantity, decimals: int) -> Decimal:
    """Scale a raw SPL/ERC-20 amount by its mint decimals."""
    return _scale(parse_quantity(raw), int(decimals))


def plain_decimal(value: Decimal) -> str:
    """Render without trailing zeros or exponent notation (``1.5``, ``10``)."""
    return format(Decimal(value).normalize(), "f")
