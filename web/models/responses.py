"""
Response schemas (Pydantic)

Serialization of Web API responses. Money is sent as 2 decimal strings.
"""

from typing import Any

from pydantic import Field

from core.ledger.models import Account, JournalEntry
from core.ledger.registry import AccountRegistry
from core.utils.money import format_money
from web.models.requests import CamelModel


class HealthResponse(CamelModel):
    """Health check response"""

    status: str = Field(default="ok", description="Service status")
    erp_url: str = Field(..., description="ERP base URL in use")
    version: str = Field(..., description="API version")


class WarningResponse(CamelModel):
    """Non-fatal ledger warning"""

    kind: str
    message: str
    entry_id: str | None = None
    account_id: str | None = None
    line_index: int | None = None


class FailureResponse(CamelModel):
    """Validation failure"""

    kind: str
    message: str
    field: str | None = None
    line_index: int | None = None
    total_debit: str | None = None
    total_credit: str | None = None
    difference: str | None = None


class AccountResponse(CamelModel):
    """Chart of accounts entry"""

    id: str
    code: str
    name: str
    type: str
    classification: str | None = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            code=account.code,
            name=account.name,
            type=account.type.value,
            classification=account.classification.value if account.classification else None,
        )


class JournalLineResponse(CamelModel):
    """Journal line with resolved account"""

    account_id: str | None = None
    account_code: str | None = Field(default=None, description="None if the account no longer exists")
    account_name: str | None = None
    debit: str
    credit: str
    description: str = ""


class JournalEntryResponse(CamelModel):
    """Journal entry

    Totals are recomputed from the lines, not the ERP's stored values.
    """

    id: str | None
    entry_date: str | None
    reference: str
    description: str
    total_debit: str
    total_credit: str
    is_balanced: bool
    details: list[JournalLineResponse]

    @classmethod
    def from_entry(cls, entry: JournalEntry, registry: AccountRegistry) -> "JournalEntryResponse":
        total_debit, total_credit = entry.line_totals()
        details = []
        for line in entry.lines:
            account = registry.get(line.account_id)
            details.append(JournalLineResponse(
                account_id=line.account_id,
                account_code=account.code if account else None,
                account_name=account.name if account else None,
                debit=format_money(line.debit),
                credit=format_money(line.credit),
                description=line.description,
            ))
        return cls(
            id=entry.id,
            entry_date=entry.entry_date.isoformat() if entry.entry_date else None,
            reference=entry.reference,
            description=entry.description,
            total_debit=format_money(total_debit),
            total_credit=format_money(total_credit),
            is_balanced=entry.is_balanced(),
            details=details,
        )


class JournalEntryListResponse(CamelModel):
    """Journal entry list"""

    entries: list[JournalEntryResponse]
    total: int
    period: str = Field(..., description="Human readable period label")


class ValidationResponse(CamelModel):
    """Live balance status plus validation verdict"""

    passed: bool
    total_debit: str
    total_credit: str
    difference: str
    is_balanced: bool
    failure: FailureResponse | None = None
    warnings: list[WarningResponse] = Field(default_factory=list)


class EntryWriteResponse(CamelModel):
    """Result of a successful create/update"""

    id: str
    warnings: list[WarningResponse] = Field(default_factory=list)


class TrialBalanceItemResponse(CamelModel):
    code: str
    name: str
    debit: str
    credit: str


class TrialBalanceResponse(CamelModel):
    """Trial balance report"""

    items: list[TrialBalanceItemResponse]
    total_debit: str
    total_credit: str
    difference: str
    is_balanced: bool
    start_date: str | None = None
    end_date: str | None = None
    period: str
    warnings: list[WarningResponse] = Field(default_factory=list)


class BalanceSheetLineResponse(CamelModel):
    code: str
    name: str
    balance: str


class BalanceSheetResponse(CamelModel):
    """Balance sheet report"""

    as_of_date: str
    assets: list[BalanceSheetLineResponse]
    liabilities: list[BalanceSheetLineResponse]
    equity: list[BalanceSheetLineResponse]
    total_assets: str
    total_liabilities: str
    total_equity: str
    total_liabilities_and_equity: str
    is_balanced: bool
    warnings: list[WarningResponse] = Field(default_factory=list)


def warnings_to_response(warnings: list[Any]) -> list[WarningResponse]:
    return [WarningResponse.model_validate(w.to_dict()) for w in warnings]
