"""
Number formatting helpers shared by the facts list, the share image and the CLI.

Contains:
- Thousands separators
- Whole-million abbreviations ("2,530M")
- Fixed-precision decimals
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Format a number with thousands separators ("1,234,567")."""
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,}"
    return f"{int(value):,}"


def format_millions(value: int) -> str:
    """Abbreviate a large count to whole millions, rounding halves up."""
    millions = (Decimal(value) / Decimal(1_000_000)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    return f"{int(millions):,}M"


def format_fixed(value: float, places: int) -> str:
    """Render ``value`` with exactly ``places`` decimals, rounding halves up."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
