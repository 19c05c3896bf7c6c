"""
BalanceSheetGenerator tests
"""

from datetime import date
from decimal import Decimal

import pytest

from core.ledger.balance_sheet import BalanceSheetGenerator
from core.ledger.models import Account
from core.ledger.registry import AccountRegistry
from core.ledger.types import AccountClassification, AccountType


@pytest.fixture
def registry_with_equipment(accounts) -> AccountRegistry:
    equipment = Account(
        "acc-equipment", "1500", "Equipment", AccountType.ASSET, AccountClassification.NON_CURRENT
    )
    return AccountRegistry(accounts + [equipment])


class TestBalanceSheet:
    """Accounting equation"""

    def test_capital_then_equipment_purchase(self, registry_with_equipment, make_entry) -> None:
        """Cash 500/Equity 500, Equipment 200/Cash 200 -> Assets 500 = Equity 500"""
        entries = [
            make_entry(date(2026, 1, 1), [("acc-cash", "500", "0"), ("acc-capital", "0", "500")]),
            make_entry(date(2026, 1, 5), [("acc-equipment", "200", "0"), ("acc-cash", "0", "200")]),
        ]

        report = BalanceSheetGenerator(registry_with_equipment, entries).generate(date(2026, 1, 31))

        assets = {line.name: line.balance for line in report.assets}
        assert assets == {"Cash": Decimal("300"), "Equipment": Decimal("200")}
        assert report.total_assets == Decimal("500")
        assert report.total_equity == Decimal("500")
        assert report.total_liabilities == Decimal("0")
        assert report.is_balanced

    def test_cutoff_excludes_later_entries(self, registry, make_entry) -> None:
        entries = [
            make_entry(date(2026, 1, 1), [("acc-cash", "500", "0"), ("acc-capital", "0", "500")]),
            make_entry(date(2026, 3, 1), [("acc-cash", "100", "0"), ("acc-ap", "0", "100")]),
        ]

        report = BalanceSheetGenerator(registry, entries).generate(date(2026, 3, 1))
        earlier = BalanceSheetGenerator(registry, entries).generate(date(2026, 2, 28))

        assert report.total_liabilities == Decimal("100")
        assert earlier.total_liabilities == Decimal("0")
        assert earlier.total_assets == Decimal("500")

    def test_revenue_and_expense_excluded(self, registry, make_entry) -> None:
        """Unclosed income makes the sheet unbalanced"""
        entries = [
            make_entry(date(2026, 1, 1), [("acc-cash", "100", "0"), ("acc-revenue", "0", "100")]),
        ]

        report = BalanceSheetGenerator(registry, entries).generate(date(2026, 12, 31))

        assert report.total_assets == Decimal("100")
        assert report.equity == []
        assert not report.is_balanced
        assert report.difference == Decimal("100")

    def test_liability_normal_balance_positive(self, registry, make_entry) -> None:
        entries = [
            make_entry(date(2026, 1, 1), [("acc-cash", "250", "0"), ("acc-ap", "0", "250")]),
        ]

        report = BalanceSheetGenerator(registry, entries).generate(date(2026, 1, 1))

        assert report.liabilities[0].balance == Decimal("250")
        assert report.total_liabilities_and_equity == Decimal("250")

    def test_netted_out_account_still_listed(self, registry, make_entry) -> None:
        entries = [
            make_entry(date(2026, 1, 1), [("acc-cash", "50", "0"), ("acc-ap", "0", "50")]),
            make_entry(date(2026, 1, 2), [("acc-ap", "50", "0"), ("acc-cash", "0", "50")]),
        ]

        report = BalanceSheetGenerator(registry, entries).generate(date(2026, 1, 2))

        assert [line.balance for line in report.assets] == [Decimal("0")]
        assert report.is_balanced

    def test_empty_ledger(self, registry) -> None:
        report = BalanceSheetGenerator(registry, []).generate(date(2026, 1, 1))

        assert report.assets == report.liabilities == report.equity == []
        assert report.is_balanced

    def test_to_dict(self, registry, make_entry) -> None:
        entries = [
            make_entry(date(2026, 1, 1), [("acc-cash", "500", "0"), ("acc-capital", "0", "500")]),
        ]

        data = BalanceSheetGenerator(registry, entries).generate(date(2026, 6, 30)).to_dict()

        assert data["asOfDate"] == "2026-06-30"
        assert data["assets"] == [{"code": "1000", "name": "Cash", "balance": "500.00"}]
        assert data["totalLiabilitiesAndEquity"] == "500.00"
        assert data["isBalanced"] is True
