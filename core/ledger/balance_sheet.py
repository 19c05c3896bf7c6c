"""
Balance sheet

Asset / Liability / Equity balances as of a cutoff date and the check of
the accounting equation: Assets = Liabilities + Equity.

Revenue and Expense accounts are not reported; their net effect is assumed
to be closed into Equity by prior closing entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from core.ledger.aggregator import LedgerAggregator
from core.ledger.models import AggregatedBalance, JournalEntry, LedgerWarning
from core.ledger.registry import AccountRegistry
from core.ledger.types import BALANCE_TOLERANCE, AccountType
from core.utils.money import ZERO, format_money, round_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceSheetLine:
    """Account balance on its normal side"""

    code: str
    name: str
    balance: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "balance": format_money(self.balance),
        }


@dataclass
class BalanceSheetReport:
    """Balance sheet report"""

    as_of_date: date
    assets: list[BalanceSheetLine]
    liabilities: list[BalanceSheetLine]
    equity: list[BalanceSheetLine]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    is_balanced: bool
    warnings: list[LedgerWarning] = field(default_factory=list)

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity

    @property
    def difference(self) -> Decimal:
        """Assets - (Liabilities + Equity)"""
        return self.total_assets - self.total_liabilities_and_equity

    def to_dict(self) -> dict[str, Any]:
        return {
            "asOfDate": self.as_of_date.isoformat(),
            "assets": [line.to_dict() for line in self.assets],
            "liabilities": [line.to_dict() for line in self.liabilities],
            "equity": [line.to_dict() for line in self.equity],
            "totalAssets": format_money(self.total_assets),
            "totalLiabilities": format_money(self.total_liabilities),
            "totalEquity": format_money(self.total_equity),
            "totalLiabilitiesAndEquity": format_money(self.total_liabilities_and_equity),
            "isBalanced": self.is_balanced,
            "warnings": [w.to_dict() for w in self.warnings],
        }


def _line(balance: AggregatedBalance) -> BalanceSheetLine:
    # Asset: debit - credit / Liability, Equity: credit - debit
    return BalanceSheetLine(
        code=balance.account.code,
        name=balance.account.name,
        balance=balance.normal_balance,
    )


class BalanceSheetGenerator:
    """Balance sheet generator

    Args:
        registry: chart of accounts
        entries: posted entries (already fetched)
        tolerance: allowed |assets - (liabilities + equity)| difference

    Usage:
    ```python
    generator = BalanceSheetGenerator(registry, entries)
    report = generator.generate(date(2026, 12, 31))
    assert report.is_balanced
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

    def generate(self, as_of_date: date) -> BalanceSheetReport:
        """Build the balance sheet

        Args:
            as_of_date: cutoff date (entries dated on or before are included)

        Returns:
            BalanceSheetReport
        """
        result = self.aggregator.aggregate_as_of(self.entries, as_of_date)

        buckets: dict[AccountType, list[BalanceSheetLine]] = {
            AccountType.ASSET: [],
            AccountType.LIABILITY: [],
            AccountType.EQUITY: [],
        }
        for balance in result.balances:
            bucket = buckets.get(balance.account.type)
            if bucket is not None:
                bucket.append(_line(balance))

        total_assets = sum((line.balance for line in buckets[AccountType.ASSET]), ZERO)
        total_liabilities = sum((line.balance for line in buckets[AccountType.LIABILITY]), ZERO)
        total_equity = sum((line.balance for line in buckets[AccountType.EQUITY]), ZERO)

        difference = round_money(total_assets) - round_money(total_liabilities + total_equity)
        is_balanced = abs(difference) <= self.tolerance

        if not is_balanced:
            logger.warning(
                f"Balance sheet out of balance as of {as_of_date.isoformat()}: "
                f"assets={format_money(total_assets)} "
                f"liabilities+equity={format_money(total_liabilities + total_equity)}"
            )

        return BalanceSheetReport(
            as_of_date=as_of_date,
            assets=buckets[AccountType.ASSET],
            liabilities=buckets[AccountType.LIABILITY],
            equity=buckets[AccountType.EQUITY],
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            total_equity=total_equity,
            is_balanced=is_balanced,
            warnings=result.warnings,
        )
