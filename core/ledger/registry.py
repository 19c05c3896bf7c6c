"""
Account registry

Read-only view over the chart of accounts supplied by the ERP.
The engine looks accounts up here; it never creates or edits them.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from core.ledger.models import Account
from core.ledger.types import AccountType

logger = logging.getLogger(__name__)


class DuplicateAccountCodeError(ValueError):
    """Two accounts share the same code"""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Duplicate account code: {code}")


class AccountRegistry:
    """Chart of accounts

    Accounts are kept sorted by code ascending (registry order).

    Args:
        accounts: accounts as returned by the ERP

    Raises:
        DuplicateAccountCodeError: account codes are not unique

    Usage:
    ```python
    registry = AccountRegistry(await client.list_accounts())
    cash = registry.get("acc-cash")
    ```
    """

    def __init__(self, accounts: Iterable[Account]):
        self._by_id: dict[str, Account] = {}
        by_code: dict[str, Account] = {}

        for account in accounts:
            if account.code in by_code:
                raise DuplicateAccountCodeError(account.code)
            by_code[account.code] = account
            self._by_id[account.id] = account

        self._by_code = by_code
        self._ordered = sorted(by_code.values(), key=lambda a: a.code)

        logger.debug(f"Account registry loaded: {len(self._ordered)} accounts")

    def __iter__(self) -> Iterator[Account]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._by_id

    def get(self, account_id: str | None) -> Account | None:
        """Look up an account by id

        Args:
            account_id: account reference (None allowed)

        Returns:
            Account, or None when it does not exist
        """
        if account_id is None:
            return None
        return self._by_id.get(account_id)

    def get_by_code(self, code: str) -> Account | None:
        """Look up an account by code"""
        return self._by_code.get(code)

    def list_accounts(self) -> list[Account]:
        """All accounts sorted by code ascending"""
        return list(self._ordered)

    def of_type(self, account_type: AccountType) -> list[Account]:
        """Accounts of one type, sorted by code"""
        return [a for a in self._ordered if a.type == account_type]
