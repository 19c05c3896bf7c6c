"""
Ledger service

Glue between the HTTP surface and the accounting engine: loads the chart of
accounts from the ERP, validates candidates before every write and builds
the reports from freshly fetched entries.
"""

import logging
from datetime import date

from adapters.interfaces import IErpApiClient
from adapters.strapi.rest_client import StrapiApiError
from core.config.loader import LedgerConfig
from core.ledger.balance_sheet import BalanceSheetGenerator, BalanceSheetReport
from core.ledger.models import JournalEntry
from core.ledger.registry import AccountRegistry, DuplicateAccountCodeError
from core.ledger.trial_balance import TrialBalanceGenerator, TrialBalanceReport
from core.ledger.validator import JournalEntryValidator, ValidationResult

logger = logging.getLogger(__name__)


class LedgerService:
    """Ledger service

    Args:
        client: ERP API client
        config: ledger settings (tolerance, minimum lines)
    """

    def __init__(self, client: IErpApiClient, config: LedgerConfig | None = None):
        self.client = client
        self.config = config or LedgerConfig()

    async def load_registry(self) -> AccountRegistry:
        """Chart of accounts snapshot

        Raises:
            StrapiApiError: ERP request failed or returned duplicate account codes
        """
        accounts = await self.client.list_accounts()
        try:
            return AccountRegistry(accounts)
        except DuplicateAccountCodeError as e:
            logger.error(f"ERP chart of accounts is inconsistent: {e}")
            raise StrapiApiError(f"Invalid chart of accounts: {e}") from e

    def _validator(self, registry: AccountRegistry) -> JournalEntryValidator:
        return JournalEntryValidator(
            registry,
            tolerance=self.config.balance_tolerance,
            min_lines=self.config.min_lines,
        )

    # =========================================================================
    # Journal entries
    # =========================================================================

    async def list_entries(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[JournalEntry]:
        """Posted entries, newest first"""
        return await self.client.list_entries(start_date, end_date)

    async def get_entry(self, entry_id: str) -> JournalEntry:
        return await self.client.get_entry(entry_id)

    async def validate(self, candidate: JournalEntry) -> ValidationResult:
        """Validate a candidate against the current chart of accounts"""
        registry = await self.load_registry()
        return self._validator(registry).validate(candidate)

    async def create_entry(self, candidate: JournalEntry) -> tuple[str, ValidationResult]:
        """Validate and post a new entry

        Returns:
            (assigned id, validation result)

        Raises:
            EntryRejectedError: validation failed (nothing is written)
            StrapiApiError: ERP failure
        """
        result = await self.validate(candidate)
        entry = result.unwrap()

        entry_id = await self.client.submit_entry(entry)
        logger.info(
            f"Posted journal entry {entry_id}: {entry.description}",
            extra={"reference": entry.reference, "total": str(entry.total_debit)},
        )
        return entry_id, result

    async def update_entry(self, entry_id: str, candidate: JournalEntry) -> ValidationResult:
        """Validate and replace an existing entry

        Raises:
            EntryRejectedError: validation failed (nothing is written)
            StrapiApiError: ERP failure
        """
        result = await self.validate(candidate)
        entry = result.unwrap()

        await self.client.update_entry(entry_id, entry)
        logger.info(f"Updated journal entry {entry_id}")
        return result

    async def delete_entry(self, entry_id: str) -> None:
        await self.client.delete_entry(entry_id)
        logger.info(f"Deleted journal entry {entry_id}")

    # =========================================================================
    # Reports
    # =========================================================================

    async def trial_balance(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> TrialBalanceReport:
        """Trial balance over an inclusive period

        The date filter is applied by the engine, not by the ERP, so undated
        entries are still reported as warnings.
        """
        registry = await self.load_registry()
        entries = await self.client.list_entries()
        generator = TrialBalanceGenerator(
            registry,
            entries,
            tolerance=self.config.balance_tolerance,
        )
        return generator.generate(start_date, end_date)

    async def balance_sheet(self, as_of_date: date) -> BalanceSheetReport:
        """Balance sheet as of a cutoff date"""
        registry = await self.load_registry()
        entries = await self.client.list_entries()
        generator = BalanceSheetGenerator(
            registry,
            entries,
            tolerance=self.config.balance_tolerance,
        )
        return generator.generate(as_of_date)
