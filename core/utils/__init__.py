"""
Utility package

Decimal money helpers shared by the ledger engine and the adapters.
"""

from core.utils.money import CENT, ZERO, format_money, round_money, to_decimal

__all__ = [
    "CENT",
    "ZERO",
    "to_decimal",
    "round_money",
    "format_money",
]
