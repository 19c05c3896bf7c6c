"""
Ledger data model

Chart-of-accounts entries, journal entries and their lines.
All amounts are Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from core.ledger.types import (
    BALANCE_TOLERANCE,
    AccountClassification,
    AccountType,
    JournalSide,
    WarningKind,
)
from core.utils.money import ZERO, round_money, to_decimal


@dataclass(frozen=True)
class Account:
    """Ledger account

    Attributes:
        id: opaque identifier (ERP documentId)
        code: short unique code used for sorting (e.g. "1000")
        name: display name
        type: account type (decides normal side and report bucket)
        classification: informational classification
        current_balance: denormalized ERP cache, never used for computation
    """

    id: str
    code: str
    name: str
    type: AccountType
    classification: AccountClassification | None = None
    current_balance: Decimal = ZERO


@dataclass(frozen=True)
class JournalLine:
    """Single debit or credit movement within an entry

    Both amounts default to 0. By convention only one of them is non-zero.
    Non-Decimal amounts are converted with `to_decimal` (ValueError if not
    numeric).
    """

    account_id: str | None
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: str = ""

    def __post_init__(self) -> None:
        # int/float/str -> Decimal
        for side in ("debit", "credit"):
            value = getattr(self, side)
            if not isinstance(value, Decimal):
                object.__setattr__(self, side, to_decimal(value))

    @property
    def is_mixed(self) -> bool:
        """Carries a value on both sides"""
        return self.debit != 0 and self.credit != 0


@dataclass(frozen=True)
class JournalEntry:
    """Journal entry (one atomic accounting transaction)

    On a candidate entry `total_debit` / `total_credit` are whatever the
    caller sent and are never trusted. Use `line_totals()` for the real sums.
    """

    entry_date: date | None
    description: str
    lines: tuple[JournalLine, ...] = ()
    reference: str = ""
    id: str | None = None
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO

    def __post_init__(self) -> None:
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))

    def line_totals(self) -> tuple[Decimal, Decimal]:
        """Sum of debits and credits over all lines (full precision)

        Returns:
            (total_debit, total_credit)
        """
        total_debit = sum((line.debit for line in self.lines), ZERO)
        total_credit = sum((line.credit for line in self.lines), ZERO)
        return total_debit, total_credit

    def is_balanced(self, tolerance: Decimal = BALANCE_TOLERANCE) -> bool:
        """Debits equal credits within tolerance (compared at 2 decimals)"""
        total_debit, total_credit = self.line_totals()
        return abs(round_money(total_debit) - round_money(total_credit)) <= tolerance


@dataclass(frozen=True)
class ValidatedEntry(JournalEntry):
    """Entry that passed validation and may be persisted

    Only created by `JournalEntryValidator`. Totals are the engine-derived sums.
    """


@dataclass(frozen=True)
class LedgerWarning:
    """Non-fatal condition found while validating or aggregating

    Attributes:
        kind: warning kind
        message: human readable description
        entry_id: related journal entry (if known)
        account_id: related account reference (if any)
        line_index: position of the line inside the entry (if any)
    """

    kind: WarningKind
    message: str
    entry_id: str | None = None
    account_id: str | None = None
    line_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "entryId": self.entry_id,
            "accountId": self.account_id,
            "lineIndex": self.line_index,
        }


@dataclass(frozen=True)
class AggregatedBalance:
    """Per-account debit/credit sums over a set of entries (derived)"""

    account: Account
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @property
    def normal_balance(self) -> Decimal:
        """Net balance on the account's normal side"""
        if self.account.type.normal_side == JournalSide.DEBIT:
            return self.debit - self.credit
        return self.credit - self.debit

    @property
    def has_activity(self) -> bool:
        return self.debit != 0 or self.credit != 0


@dataclass
class AggregationResult:
    """Ledger aggregation output

    Attributes:
        balances: one entry per referenced account, ordered by code
        warnings: dangling references and skipped entries
        entry_count: number of entries that contributed
    """

    balances: list[AggregatedBalance] = field(default_factory=list)
    warnings: list[LedgerWarning] = field(default_factory=list)
    entry_count: int = 0
