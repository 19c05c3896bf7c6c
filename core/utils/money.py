"""
Money helpers

All amounts are Decimal. Input may arrive as float, int, str or None
(ERP JSON, form fields), so everything goes through `to_decimal`.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Convert a raw amount into Decimal

    None and blank strings become 0, like an empty form field.

    Args:
        value: raw amount

    Returns:
        Decimal amount

    Raises:
        ValueError: non-numeric or non-finite value
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")
    else:
        text = str(value).strip()
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"Invalid numeric value: {value!r}") from exc

    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value!r}")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places (half up)"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """2 decimal string used in report payloads (e.g. "1500.00")"""
    return str(round_money(value))
