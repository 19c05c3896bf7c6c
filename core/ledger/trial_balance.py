"""
Trial balance

Debit/credit totals per account over a period, with grand totals and a
balanced verdict. If every posted entry passed validation the report is
always balanced; an unbalanced trial balance means the entry store holds
data that bypassed validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from core.ledger.aggregator import LedgerAggregator
from core.ledger.models import JournalEntry, LedgerWarning
from core.ledger.registry import AccountRegistry
from core.ledger.types import BALANCE_TOLERANCE
from core.types import DateRange
from core.utils.money import ZERO, format_money, round_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialBalanceItem:
    """One account row

    Raw debit and credit sums are kept side by side (no netting).
    """

    code: str
    name: str
    debit: Decimal
    credit: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "debit": format_money(self.debit),
            "credit": format_money(self.credit),
        }


@dataclass
class TrialBalanceReport:
    """Trial balance report"""

    items: list[TrialBalanceItem]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool
    period: DateRange = field(default_factory=DateRange)
    warnings: list[LedgerWarning] = field(default_factory=list)

    @property
    def difference(self) -> Decimal:
        """Signed debit - credit difference"""
        return self.total_debit - self.total_credit

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "totalDebit": format_money(self.total_debit),
            "totalCredit": format_money(self.total_credit),
            "difference": format_money(self.difference),
            "isBalanced": self.is_balanced,
            "startDate": self.period.start.isoformat() if self.period.start else None,
            "endDate": self.period.end.isoformat() if self.period.end else None,
            "period": self.period.describe(),
            "warnings": [w.to_dict() for w in self.warnings],
        }


class TrialBalanceGenerator:
    """Trial balance generator

    Args:
        registry: chart of accounts
        entries: posted entries (already fetched)
        tolerance: allowed |total debit - total credit| difference

    Usage:
    ```python
    generator = TrialBalanceGenerator(registry, entries)
    report = generator.generate(date(2026, 1, 1), date(2026, 3, 31))
    ```
    """

    def __init__(
        self,
        registry: AccountRegistry,
        entries: Iterable[JournalEntry],
        tolerance: Decimal = BALANCE_TOLERANCE,
    ):
        self.aggregator = LedgerAggregator(registry)
        self.entries = list(entries)
        self.tolerance = tolerance

    def generate(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TrialBalanceReport:
        """Build the trial balance

        Args:
            start_date: first included date (None = unbounded)
            end_date: last included date (None = unbounded)

        Returns:
            TrialBalanceReport (accounts without activity are omitted)
        """
        period = DateRange(start=start_date, end=end_date)
        result = self.aggregator.aggregate(self.entries, period)

        items = [
            TrialBalanceItem(
                code=balance.account.code,
                name=balance.account.name,
                debit=balance.debit,
                credit=balance.credit,
            )
            for balance in result.balances
            if balance.has_activity
        ]

        total_debit = sum((item.debit for item in items), ZERO)
        total_credit = sum((item.credit for item in items), ZERO)
        is_balanced = abs(round_money(total_debit) - round_money(total_credit)) <= self.tolerance

        if not is_balanced:
            logger.warning(
                f"Trial balance out of balance: debit={format_money(total_debit)} "
                f"credit={format_money(total_credit)} ({period.describe()})"
            )

        return TrialBalanceReport(
            items=items,
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=is_balanced,
            period=period,
            warnings=result.warnings,
        )
