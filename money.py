"""
Exact-cent money helpers for DuoSplit
"""
from __future__ import annotations
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List

from errors import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def parse_amount(value) -> Decimal:
    """
    Convert user or imported input to a non-negative Decimal with two places.
    Floats go through str() so 0.1 stays 0.1.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError("Amount is required.")
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError("Amount is required.")
    try:
        d = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Amount {value!r} is not a valid number.") from None
    if not d.is_finite():
        raise ValidationError(f"Amount {value!r} is not a valid number.")
    if d < 0:
        raise ValidationError("Amount must not be negative.")
    try:
        return d.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # too many digits to hold to the cent
        raise ValidationError(f"Amount {value!r} is too large.") from None


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def split_cents(total_cents: int, n: int) -> List[int]:
    """
    Split total_cents into n installments.
    Every installment gets floor(total / n); the last one also carries the remainder,
    so the parts always sum back to total_cents.
    """
    if n < 1:
        raise ValidationError("Installment count must be at least 1.")
    base, remainder = divmod(total_cents, n)
    parts = [base] * n
    parts[-1] += remainder
    return parts


def is_negligible(value: Decimal) -> bool:
    """True when |value| is under one cent"""
    return abs(value) < CENT
