"""
Double-entry ledger engine

Chart of accounts, journal entry validation, per-account aggregation and
the two financial reports (trial balance, balance sheet).

Usage:
```python
from core.ledger import AccountRegistry, JournalEntryValidator, TrialBalanceGenerator

registry = AccountRegistry(accounts)
validator = JournalEntryValidator(registry)

result = validator.validate(candidate)
if result.passed:
    await erp_client.submit_entry(result.entry)

# Trial balance for Q1
report = TrialBalanceGenerator(registry, entries).generate(
    date(2026, 1, 1), date(2026, 3, 31)
)
```
"""

from core.ledger.aggregator import LedgerAggregator
from core.ledger.balance_sheet import (
    BalanceSheetGenerator,
    BalanceSheetLine,
    BalanceSheetReport,
)
from core.ledger.models import (
    Account,
    AggregatedBalance,
    AggregationResult,
    JournalEntry,
    JournalLine,
    LedgerWarning,
    ValidatedEntry,
)
from core.ledger.registry import AccountRegistry, DuplicateAccountCodeError
from core.ledger.trial_balance import (
    TrialBalanceGenerator,
    TrialBalanceItem,
    TrialBalanceReport,
)
from core.ledger.types import (
    BALANCE_TOLERANCE,
    MIN_JOURNAL_LINES,
    AccountClassification,
    AccountType,
    ErrorKind,
    JournalSide,
    WarningKind,
)
from core.ledger.validator import (
    EntryRejectedError,
    JournalEntryValidator,
    ValidationFailure,
    ValidationResult,
)

__all__ = [
    # Core classes
    "AccountRegistry",
    "JournalEntryValidator",
    "LedgerAggregator",
    "TrialBalanceGenerator",
    "BalanceSheetGenerator",
    # Models
    "Account",
    "JournalEntry",
    "JournalLine",
    "ValidatedEntry",
    "LedgerWarning",
    "AggregatedBalance",
    "AggregationResult",
    "ValidationFailure",
    "ValidationResult",
    "TrialBalanceItem",
    "TrialBalanceReport",
    "BalanceSheetLine",
    "BalanceSheetReport",
    # Errors
    "DuplicateAccountCodeError",
    "EntryRejectedError",
    # Enums
    "AccountType",
    "AccountClassification",
    "JournalSide",
    "ErrorKind",
    "WarningKind",
    # Constants
    "BALANCE_TOLERANCE",
    "MIN_JOURNAL_LINES",
]
