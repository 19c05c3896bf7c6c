"""
Shared pytest fixtures

Chart of accounts, journal entry factory and a temporary settings file.
"""

import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable

import pytest

from adapters.mock.erp_client import MockErpApiClient
from core.config.loader import Settings
from core.ledger.models import Account, JournalEntry, JournalLine
from core.ledger.registry import AccountRegistry
from core.ledger.types import AccountClassification, AccountType

EntryFactory = Callable[..., JournalEntry]


@pytest.fixture
def temp_dir() -> Path:
    """OS independent temporary directory"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def accounts() -> list[Account]:
    """Small chart of accounts (one or two per type)"""
    return [
        Account("acc-cash", "1000", "Cash", AccountType.ASSET, AccountClassification.CURRENT),
        Account("acc-ar", "1100", "Accounts Receivable", AccountType.ASSET, AccountClassification.CURRENT),
        Account("acc-ap", "2000", "Accounts Payable", AccountType.LIABILITY, AccountClassification.CURRENT),
        Account("acc-capital", "3000", "Owner Capital", AccountType.EQUITY),
        Account("acc-revenue", "4000", "Fuel Sales", AccountType.REVENUE, AccountClassification.OPERATING),
        Account("acc-rent", "5000", "Rent Expense", AccountType.EXPENSE, AccountClassification.OPERATING),
    ]


@pytest.fixture
def registry(accounts: list[Account]) -> AccountRegistry:
    return AccountRegistry(accounts)


@pytest.fixture
def make_entry() -> EntryFactory:
    """Factory: make_entry(date, [(account, debit, credit), ...], ...)"""

    def _make(
        entry_date: date | None = date(2026, 1, 15),
        lines: list[tuple[str | None, str, str]] | None = None,
        description: str = "Test entry",
        entry_id: str | None = None,
        reference: str = "",
    ) -> JournalEntry:
        if lines is None:
            lines = [("acc-cash", "100", "0"), ("acc-revenue", "0", "100")]
        return JournalEntry(
            entry_date=entry_date,
            description=description,
            lines=tuple(
                JournalLine(account_id=a, debit=Decimal(d), credit=Decimal(c))
                for a, d, c in lines
            ),
            reference=reference,
            id=entry_id,
        )

    return _make


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """Temporary settings.yaml"""
    content = """# test settings
erp:
  url: "http://erp.test:1337/"
  api_token: "test_token_abc"
  timeout: 5
  page_size: 50

ledger:
  balance_tolerance: "0.01"
  min_lines: 2

log_level: debug
"""
    path = temp_dir / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def reset_settings():
    """Reset the Settings singleton around a test"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def mock_erp(accounts: list[Account]) -> MockErpApiClient:
    """Mock ERP seeded with the shared chart of accounts"""
    client = MockErpApiClient()
    client.set_accounts(accounts)
    return client
