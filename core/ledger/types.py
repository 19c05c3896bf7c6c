"""
Double-entry type definitions

Enums and constants used across the ledger engine.
All enums inherit from str so they serialize to JSON as plain strings.
"""

from decimal import Decimal
from enum import Enum


# Debit/credit totals closer than this are considered equal (absorbs rounding noise)
BALANCE_TOLERANCE = Decimal("0.01")

# A transaction touches at least two accounts
MIN_JOURNAL_LINES = 2


class JournalSide(str, Enum):
    """Posting side (debit/credit)"""

    DEBIT = "DEBIT"  # asset/expense increase
    CREDIT = "CREDIT"  # liability/equity/revenue increase


class AccountType(str, Enum):
    """Account type

    Values are the strings stored by the ERP chart of accounts.
    """

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"

    @property
    def normal_side(self) -> JournalSide:
        """Side on which the balance increases"""
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return JournalSide.DEBIT
        return JournalSide.CREDIT


class AccountClassification(str, Enum):
    """Account classification (informational only)"""

    CURRENT = "Current"
    NON_CURRENT = "Non-Current"
    OPERATING = "Operating"
    NON_OPERATING = "Non-Operating"


class ErrorKind(str, Enum):
    """Reasons a candidate journal entry is rejected"""

    MISSING_FIELD = "MissingField"  # date, description or line account absent
    TOO_FEW_LINES = "TooFewLines"
    UNKNOWN_ACCOUNT = "UnknownAccount"
    INVALID_AMOUNT = "InvalidAmount"  # negative or non-numeric debit/credit
    UNBALANCED = "Unbalanced"


class WarningKind(str, Enum):
    """Non-fatal conditions reported next to a result"""

    DANGLING_ACCOUNT_REFERENCE = "DanglingAccountReference"
    UNDATED_ENTRY = "UndatedEntry"
    MIXED_SIDE_LINE = "MixedSideLine"  # one line carries both debit and credit
