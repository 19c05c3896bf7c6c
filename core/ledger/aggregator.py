"""
Ledger aggregator

Sums posted journal lines per account over an optional date range.
Authoritative balances always come from here, never from the ERP's cached
`currentBalance`.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from core.ledger.models import (
    AggregatedBalance,
    AggregationResult,
    JournalEntry,
    LedgerWarning,
)
from core.ledger.registry import AccountRegistry
from core.ledger.types import WarningKind
from core.types import DateRange

logger = logging.getLogger(__name__)


class LedgerAggregator:
    """Per-account debit/credit aggregation

    The date filter applies to whole entries: an entry is either in scope
    with all of its lines or excluded entirely. Lines pointing to an account
    that is no longer in the registry are left out and reported as warnings.

    Args:
        registry: chart of accounts used to resolve line references

    Usage:
    ```python
    aggregator = LedgerAggregator(registry)
    result = aggregator.aggregate(entries, DateRange(start, end))
    for balance in result.balances:
        print(balance.account.code, balance.debit, balance.credit)
    ```
    """

    def __init__(self, registry: AccountRegistry):
        self.registry = registry

    def aggregate(
        self,
        entries: Iterable[JournalEntry],
        date_range: DateRange | None = None,
    ) -> AggregationResult:
        """Aggregate entries into per-account balances

        Args:
            entries: posted entries
            date_range: inclusive filter (None = all entries)

        Returns:
            AggregationResult ordered by account code
        """
        date_range = date_range or DateRange()
        sums: dict[str, AggregatedBalance] = {}
        warnings: list[LedgerWarning] = []
        entry_count = 0

        for entry in entries:
            if entry.entry_date is None:
                if date_range.is_bounded:
                    warnings.append(LedgerWarning(
                        kind=WarningKind.UNDATED_ENTRY,
                        message=f"Entry {entry.id or entry.reference} has no date and was skipped",
                        entry_id=entry.id,
                    ))
                    continue
            elif not date_range.contains(entry.entry_date):
                continue

            entry_count += 1

            for index, line in enumerate(entry.lines):
                account = self.registry.get(line.account_id)
                if account is None:
                    warnings.append(self._dangling(entry, index, line.account_id))
                    continue

                current = sums.get(account.id) or AggregatedBalance(account=account)
                sums[account.id] = AggregatedBalance(
                    account=account,
                    debit=current.debit + line.debit,
                    credit=current.credit + line.credit,
                )

        balances = sorted(sums.values(), key=lambda b: b.account.code)

        if warnings:
            logger.warning(
                f"Ledger aggregation finished with {len(warnings)} warning(s)",
                extra={"entry_count": entry_count},
            )

        return AggregationResult(
            balances=balances,
            warnings=warnings,
            entry_count=entry_count,
        )

    def aggregate_as_of(
        self,
        entries: Iterable[JournalEntry],
        cutoff: date,
    ) -> AggregationResult:
        """Aggregate every entry dated on or before `cutoff`"""
        return self.aggregate(entries, DateRange.as_of(cutoff))

    def _dangling(
        self,
        entry: JournalEntry,
        index: int,
        account_id: str | None,
    ) -> LedgerWarning:
        logger.warning(
            f"Dangling account reference: entry={entry.id} line={index} account={account_id}"
        )
        return LedgerWarning(
            kind=WarningKind.DANGLING_ACCOUNT_REFERENCE,
            message=(
                f"Entry {entry.id or entry.reference} line {index + 1} references "
                f"missing account {account_id}; its amounts were excluded"
            ),
            entry_id=entry.id,
            account_id=account_id,
            line_index=index,
        )
