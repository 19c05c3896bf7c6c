"""
Journal entry validator

Checks a candidate entry before it may be posted:
- required fields (date, description)
- at least two lines
- every line references an existing account with non-negative amounts
- total debit == total credit (within 0.01)

Validation never raises for bad input; the outcome is returned as a
ValidationResult value. Only `unwrap()` turns a rejection into an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from core.ledger.models import JournalEntry, LedgerWarning, ValidatedEntry
from core.ledger.registry import AccountRegistry
from core.ledger.types import (
    BALANCE_TOLERANCE,
    MIN_JOURNAL_LINES,
    ErrorKind,
    WarningKind,
)
from core.utils.money import format_money, round_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """Reason a candidate entry was rejected

    Attributes:
        kind: failure kind
        message: human readable description
        field: offending field (entry_date, description, account, debit, credit)
        line_index: offending line position (line-level failures)
        total_debit: rounded total debit (Unbalanced only)
        total_credit: rounded total credit (Unbalanced only)
    """

    kind: ErrorKind
    message: str
    field: str | None = None
    line_index: int | None = None
    total_debit: Decimal | None = None
    total_credit: Decimal | None = None

    @property
    def difference(self) -> Decimal | None:
        """Signed debit - credit difference (Unbalanced only)"""
        if self.total_debit is None or self.total_credit is None:
            return None
        return self.total_debit - self.total_credit

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.field is not None:
            data["field"] = self.field
        if self.line_index is not None:
            data["lineIndex"] = self.line_index
        if self.total_debit is not None and self.total_credit is not None:
            data["totalDebit"] = format_money(self.total_debit)
            data["totalCredit"] = format_money(self.total_credit)
            data["difference"] = format_money(self.difference)
        return data


class EntryRejectedError(Exception):
    """Raised by `ValidationResult.unwrap()` for a rejected entry"""

    def __init__(self, failure: ValidationFailure):
        self.failure = failure
        super().__init__(f"Journal entry rejected [{failure.kind.value}]: {failure.message}")


@dataclass
class ValidationResult:
    """Validation outcome

    Exactly one of `entry` / `failure` is set.
    """

    entry: ValidatedEntry | None = None
    failure: ValidationFailure | None = None
    warnings: list[LedgerWarning] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.failure is None and self.entry is not None

    def unwrap(self) -> ValidatedEntry:
        """Return the validated entry or raise

        Raises:
            EntryRejectedError: validation failed
        """
        if self.failure is not None:
            raise EntryRejectedError(self.failure)
        assert self.entry is not None
        return self.entry


class JournalEntryValidator:
    """Journal entry validator

    Pure function of the candidate plus a read-only account lookup.

    Args:
        registry: chart of accounts used for existence checks
        tolerance: allowed |debit - credit| difference
        min_lines: minimum number of lines per entry

    Usage:
    ```python
    validator = JournalEntryValidator(registry)
    result = validator.validate(candidate)
    if not result.passed:
        print(result.failure.message)
    ```
    """

    def __init__(
        self,
        registry: AccountRegistry,
        tolerance: Decimal = BALANCE_TOLERANCE,
        min_lines: int = MIN_JOURNAL_LINES,
    ):
        self.registry = registry
        self.tolerance = tolerance
        self.min_lines = min_lines

    def validate(self, candidate: JournalEntry) -> ValidationResult:
        """Validate a candidate entry

        Args:
            candidate: entry built by the caller (totals are ignored)

        Returns:
            ValidationResult with a ValidatedEntry (totals recomputed from
            the lines) or the first failure found
        """
        failure = self._check(candidate)
        if failure is not None:
            logger.info(
                f"Journal entry rejected: {failure.kind.value} - {failure.message}",
                extra={"entry_id": candidate.id, "reference": candidate.reference},
            )
            return ValidationResult(failure=failure)

        total_debit, total_credit = candidate.line_totals()
        entry = ValidatedEntry(
            entry_date=candidate.entry_date,
            description=candidate.description,
            lines=candidate.lines,
            reference=candidate.reference,
            id=candidate.id,
            total_debit=total_debit,
            total_credit=total_credit,
        )

        return ValidationResult(entry=entry, warnings=self._collect_warnings(entry))

    def _check(self, candidate: JournalEntry) -> ValidationFailure | None:
        if candidate.entry_date is None:
            return ValidationFailure(
                kind=ErrorKind.MISSING_FIELD,
                message="Entry date is required",
                field="entry_date",
            )

        if not (candidate.description or "").strip():
            return ValidationFailure(
                kind=ErrorKind.MISSING_FIELD,
                message="Description is required",
                field="description",
            )

        if len(candidate.lines) < self.min_lines:
            return ValidationFailure(
                kind=ErrorKind.TOO_FEW_LINES,
                message=f"A journal entry must have at least {self.min_lines} lines",
            )

        for index, line in enumerate(candidate.lines):
            if not line.account_id:
                return ValidationFailure(
                    kind=ErrorKind.MISSING_FIELD,
                    message=f"Line {index + 1}: account is required",
                    field="account",
                    line_index=index,
                )

            if line.account_id not in self.registry:
                return ValidationFailure(
                    kind=ErrorKind.UNKNOWN_ACCOUNT,
                    message=f"Line {index + 1}: unknown account {line.account_id}",
                    field="account",
                    line_index=index,
                )

            for side in ("debit", "credit"):
                amount = getattr(line, side)
                if not amount.is_finite():
                    return ValidationFailure(
                        kind=ErrorKind.INVALID_AMOUNT,
                        message=f"Line {index + 1}: {side} must be a finite number",
                        field=side,
                        line_index=index,
                    )
                if amount < 0:
                    return ValidationFailure(
                        kind=ErrorKind.INVALID_AMOUNT,
                        message=f"Line {index + 1}: {side} must not be negative",
                        field=side,
                        line_index=index,
                    )

        total_debit, total_credit = candidate.line_totals()
        rounded_debit = round_money(total_debit)
        rounded_credit = round_money(total_credit)

        if abs(rounded_debit - rounded_credit) > self.tolerance:
            return ValidationFailure(
                kind=ErrorKind.UNBALANCED,
                message=(
                    f"Debits ({format_money(rounded_debit)}) must equal "
                    f"Credits ({format_money(rounded_credit)})"
                ),
                total_debit=rounded_debit,
                total_credit=rounded_credit,
            )

        return None

    def _collect_warnings(self, entry: JournalEntry) -> list[LedgerWarning]:
        warnings: list[LedgerWarning] = []
        for index, line in enumerate(entry.lines):
            if line.is_mixed:
                warnings.append(LedgerWarning(
                    kind=WarningKind.MIXED_SIDE_LINE,
                    message=f"Line {index + 1} carries both a debit and a credit",
                    entry_id=entry.id,
                    account_id=line.account_id,
                    line_index=index,
                ))
        return warnings
