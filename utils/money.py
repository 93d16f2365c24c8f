# utils/money.py
"""
Rupee amounts as two-place Decimals.

Every monetary value in billing goes through round2 before it is stored
or compared, so equality checks are exact at the paisa level.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Amount = Union[Decimal, int, float, str]


def to_decimal(value: Amount) -> Decimal:
     """Convert without float artefacts (0.1 -> Decimal('0.1'), not 0.1000000000000000055...)."""
     if isinstance(value, Decimal):
          return value
     if isinstance(value, float):
          return Decimal(repr(value))
     return Decimal(value)


def round2(value: Amount) -> Decimal:
     """Round half-up to two decimal places."""
     return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def is_zero(value: Amount) -> bool:
     """True when the amount is less than one paisa away from zero."""
     return abs(to_decimal(value)) < CENT
