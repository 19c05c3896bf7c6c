"""
Mock ERP client

In-memory ERP used by tests and local runs.
Follows the IErpApiClient Protocol.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from adapters.strapi.models import ensure_persistable
from adapters.strapi.rest_client import StrapiApiError
from core.ledger.models import Account, JournalEntry


@dataclass
class MockErpState:
    """Mock state (kept in memory)"""

    # account id -> Account
    accounts: dict[str, Account] = field(default_factory=dict)

    # entry id -> JournalEntry
    entries: dict[str, JournalEntry] = field(default_factory=dict)

    # (method name, args) in call order
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    # Failure simulation
    fail_next: StrapiApiError | None = None

    entry_counter: int = 0


class MockErpApiClient:
    """Mock ERP client

    Implements IErpApiClient. Writes go through the same "validated entries
    only" gate as the real client.

    Usage:
    ```python
    client = MockErpApiClient()
    client.set_accounts([cash, revenue])

    # Seed an entry that never went through validation
    client.add_entry(raw_entry)

    entry_id = await client.submit_entry(validated)
    assert client.state.calls[-1][0] == "submit_entry"
    ```
    """

    def __init__(self, state: MockErpState | None = None):
        self.state = state or MockErpState()
        self.closed = False

    # -------------------------------------------------------------------------
    # State helpers (tests)
    # -------------------------------------------------------------------------

    def set_accounts(self, accounts: list[Account]) -> None:
        """Replace the chart of accounts"""
        self.state.accounts = {a.id: a for a in accounts}

    def remove_account(self, account_id: str) -> None:
        """Delete an account (leaves dangling references behind)"""
        self.state.accounts.pop(account_id, None)

    def add_entry(self, entry: JournalEntry) -> str:
        """Store an entry as-is, bypassing validation

        Returns:
            id of the stored entry
        """
        entry_id = entry.id or self._next_id()
        self.state.entries[entry_id] = replace(entry, id=entry_id)
        return entry_id

    def set_fail_next(self, message: str = "Mock error", status_code: int | None = 500) -> None:
        """Make the next call fail with StrapiApiError"""
        self.state.fail_next = StrapiApiError(message, status_code)

    def _next_id(self) -> str:
        self.state.entry_counter += 1
        return f"je-{self.state.entry_counter:04d}"

    def _record(self, name: str, *args: Any) -> None:
        self.state.calls.append((name, args))
        if self.state.fail_next is not None:
            error, self.state.fail_next = self.state.fail_next, None
            raise error

    def _require(self, entry_id: str) -> JournalEntry:
        entry = self.state.entries.get(entry_id)
        if entry is None:
            raise StrapiApiError("Not Found", 404)
        return entry

    # -------------------------------------------------------------------------
    # IErpApiClient
    # -------------------------------------------------------------------------

    async def list_accounts(self) -> list[Account]:
        self._record("list_accounts")
        return sorted(self.state.accounts.values(), key=lambda a: a.code)

    async def list_entries(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[JournalEntry]:
        self._record("list_entries", start_date, end_date)
        entries = list(self.state.entries.values())

        # same semantics as the Strapi date filters: undated entries never match
        if start_date:
            entries = [e for e in entries if e.entry_date and e.entry_date >= start_date]
        if end_date:
            entries = [e for e in entries if e.entry_date and e.entry_date <= end_date]

        entries.sort(key=lambda e: e.entry_date or date.min, reverse=True)
        return entries

    async def get_entry(self, entry_id: str) -> JournalEntry:
        self._record("get_entry", entry_id)
        return self._require(entry_id)

    async def submit_entry(self, entry: JournalEntry) -> str:
        ensure_persistable(entry)
        self._record("submit_entry", entry)
        entry_id = self._next_id()
        self.state.entries[entry_id] = replace(entry, id=entry_id)
        return entry_id

    async def update_entry(self, entry_id: str, entry: JournalEntry) -> None:
        ensure_persistable(entry)
        self._record("update_entry", entry_id, entry)
        self._require(entry_id)
        self.state.entries[entry_id] = replace(entry, id=entry_id)

    async def delete_entry(self, entry_id: str) -> None:
        self._record("delete_entry", entry_id)
        self._require(entry_id)
        del self.state.entries[entry_id]

    async def close(self) -> None:
        self.closed = True
