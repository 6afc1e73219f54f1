"""
Decimal helpers for money amounts.

Amounts are carried as Decimal everywhere and only quantized when they
are presented or persisted.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Union

from grouptally.core.config import settings

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without going through binary float."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() gives the shortest repr, e.g. 0.1 -> "0.1"
        return Decimal(str(value))
    return Decimal(value)


def quantum(places: int = None) -> Decimal:
    """Smallest currency unit, e.g. Decimal('0.01') for 2 places."""
    if places is None:
        places = settings.CURRENCY_PLACES
    return Decimal(1).scaleb(-places)


def round_money(value: Number, places: int = None) -> Decimal:
    """Round half-up to the presentation precision."""
    return to_decimal(value).quantize(quantum(places), rounding=ROUND_HALF_UP)


def split_evenly(amount: Number, parts: int, places: int = None) -> List[Decimal]:
    """
    Split an amount into `parts` shares that sum to the rounded amount.

    Each share is the half-up rounded quotient; leftover units (positive or
    negative) are handed out one at a time starting with the first share.
    """
    if parts <= 0:
        raise ValueError("parts must be positive")
    unit = quantum(places)
    total = round_money(amount, places)
    base = round_money(total / parts, places)
    shares = [base] * parts
    remainder = total - base * parts
    step = unit if remainder > 0 else -unit
    i = 0
    while remainder != 0:
        shares[i % parts] += step
        remainder -= step
        i += 1
    return shares


def total(values: Iterable[Number]) -> Decimal:
    """Sum amounts as Decimal."""
    return sum((to_decimal(v) for v in values), Decimal(0))
