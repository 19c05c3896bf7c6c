"""
Adapter interface definitions

Protocol-based so the ERP client can be injected and swapped for a mock.
Every implementation must follow this Protocol.
"""

from datetime import date
from typing import Protocol, runtime_checkable

from core.ledger.models import Account, JournalEntry


@runtime_checkable
class IErpApiClient(Protocol):
    """ERP (entry store) API client interface

    The ERP owns persistence of accounts and journal entries; the engine
    only reads from it and writes entries that passed validation.
    Amounts are always Decimal.
    """

    # -------------------------------------------------------------------------
    # Chart of accounts
    # -------------------------------------------------------------------------

    async def list_accounts(self) -> list[Account]:
        """Full chart of accounts

        Returns:
            Accounts sorted by code
        """
        ...

    # -------------------------------------------------------------------------
    # Journal entries
    # -------------------------------------------------------------------------

    async def list_entries(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[JournalEntry]:
        """Posted journal entries with their lines

        Args:
            start_date: only entries dated on or after (None = unbounded)
            end_date: only entries dated on or before (None = unbounded)

        Returns:
            Entries, newest first
        """
        ...

    async def get_entry(self, entry_id: str) -> JournalEntry:
        """Single journal entry

        Raises:
            StrapiApiError: entry not found or request failure
        """
        ...

    async def submit_entry(self, entry: JournalEntry) -> str:
        """Create a journal entry

        Args:
            entry: ValidatedEntry returned by the validator

        Returns:
            Identifier assigned by the ERP

        Raises:
            UnvalidatedEntryError: entry did not pass validation
        """
        ...

    async def update_entry(self, entry_id: str, entry: JournalEntry) -> None:
        """Replace an existing journal entry

        Raises:
            UnvalidatedEntryError: entry did not pass validation
        """
        ...

    async def delete_entry(self, entry_id: str) -> None:
        """Delete a journal entry"""
        ...

    async def close(self) -> None:
        """Release connections"""
        ...
