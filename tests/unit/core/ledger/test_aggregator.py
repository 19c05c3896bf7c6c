"""
LedgerAggregator tests

Per-account sums, inclusive date filtering and dangling references.
"""

from datetime import date
from decimal import Decimal

import pytest

from core.ledger.aggregator import LedgerAggregator
from core.ledger.types import WarningKind
from core.types import DateRange


@pytest.fixture
def aggregator(registry) -> LedgerAggregator:
    return LedgerAggregator(registry)


class TestAggregate:
    """Per-account sums"""

    def test_sums_per_account(self, aggregator, make_entry) -> None:
        entries = [
            make_entry(date(2026, 1, 1), [("acc-cash", "100", "0"), ("acc-revenue", "0", "100")]),
            make_entry(date(2026, 1, 2), [("acc-rent", "30", "0"), ("acc-cash", "0", "30")]),
        ]

        result = aggregator.aggregate(entries)
        by_code = {b.account.code: b for b in result.balances}

        assert by_code["1000"].debit == Decimal("100")
        assert by_code["1000"].credit == Decimal("30")
        assert by_code["1000"].normal_balance == Decimal("70")
        assert by_code["4000"].normal_balance == Decimal("100")
        assert result.entry_count == 2
        assert result.warnings == []

    def test_ordered_by_code(self, aggregator, make_entry) -> None:
        entries = [make_entry(lines=[("acc-rent", "5", "0"), ("acc-ap", "0", "5")])]

        result = aggregator.aggregate(entries)

        assert [b.account.code for b in result.balances] == ["2000", "5000"]

    def test_untouched_accounts_absent(self, aggregator, make_entry) -> None:
        result = aggregator.aggregate([make_entry()])

        assert {b.account.id for b in result.balances} == {"acc-cash", "acc-revenue"}

    def test_empty(self, aggregator) -> None:
        result = aggregator.aggregate([])

        assert result.balances == []
        assert result.entry_count == 0


class TestDateFilter:
    """Inclusive bounds, whole-entry filtering"""

    @pytest.fixture
    def entries(self, make_entry):
        return [
            make_entry(date(2025, 12, 31), entry_id="before"),
            make_entry(date(2026, 1, 1), entry_id="start"),
            make_entry(date(2026, 1, 31), entry_id="end"),
            make_entry(date(2026, 2, 1), entry_id="after"),
        ]

    def test_boundaries_included(self, aggregator, entries) -> None:
        result = aggregator.aggregate(entries, DateRange(date(2026, 1, 1), date(2026, 1, 31)))

        assert result.entry_count == 2
        cash = next(b for b in result.balances if b.account.id == "acc-cash")
        assert cash.debit == Decimal("200")

    def test_open_start(self, aggregator, entries) -> None:
        result = aggregator.aggregate(entries, DateRange(end=date(2026, 1, 1)))

        assert result.entry_count == 2

    def test_open_end(self, aggregator, entries) -> None:
        result = aggregator.aggregate(entries, DateRange(start=date(2026, 2, 1)))

        assert result.entry_count == 1

    def test_as_of(self, aggregator, entries) -> None:
        result = aggregator.aggregate_as_of(entries, date(2026, 1, 31))

        assert result.entry_count == 3

    def test_undated_entry_skipped_with_warning(self, aggregator, make_entry) -> None:
        entries = [make_entry(None, entry_id="je-x"), make_entry(date(2026, 1, 5))]

        result = aggregator.aggregate(entries, DateRange(start=date(2026, 1, 1)))

        assert result.entry_count == 1
        assert result.warnings[0].kind == WarningKind.UNDATED_ENTRY
        assert result.warnings[0].entry_id == "je-x"

    def test_undated_entry_counted_without_filter(self, aggregator, make_entry) -> None:
        result = aggregator.aggregate([make_entry(None)])

        assert result.entry_count == 1
        assert result.warnings == []


class TestDanglingReferences:
    """Lines pointing to deleted accounts"""

    def test_excluded_and_reported(self, aggregator, make_entry, caplog) -> None:
        entry = make_entry(
            lines=[("acc-cash", "100", "0"), ("acc-deleted", "0", "100")],
            entry_id="je-1",
        )

        with caplog.at_level("WARNING", logger="core.ledger.aggregator"):
            result = aggregator.aggregate([entry])

        assert [b.account.id for b in result.balances] == ["acc-cash"]
        warning = result.warnings[0]
        assert warning.kind == WarningKind.DANGLING_ACCOUNT_REFERENCE
        assert warning.account_id == "acc-deleted"
        assert warning.line_index == 1
        assert "Dangling account reference" in caplog.text
