"""
Strapi payload mapping

Converts Strapi REST payloads (chart-of-accounts, journal-entries) into
ledger models and back. All amounts go through Decimal.

Strapi v5 identifies documents by `documentId`; numeric `id` is only used
as a fallback for older payloads.
"""

from datetime import date
from typing import Any

from core.ledger.models import Account, JournalEntry, JournalLine, ValidatedEntry
from core.ledger.types import MIN_JOURNAL_LINES, AccountClassification, AccountType
from core.utils.money import to_decimal


class UnvalidatedEntryError(Exception):
    """Write attempted with an entry that did not pass validation"""

    pass


def document_id(data: dict[str, Any]) -> str:
    """Opaque document identifier of a Strapi record"""
    value = data.get("documentId") or data.get("id")
    if value is None:
        raise ValueError("Strapi record has neither documentId nor id")
    return str(value)


def _parse_date(value: Any) -> date | None:
    if not value:
        return None
    # "2026-01-15" or "2026-01-15T00:00:00.000Z"
    return date.fromisoformat(str(value)[:10])


def _account_ref(value: Any) -> str | None:
    """`details[].account` may be populated, a bare id or missing"""
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        # populated relation, possibly wrapped as {"data": {...}}
        inner = value.get("data", value)
        if inner is None:
            return None
        return document_id(inner)
    return str(value)


def account_from_api(data: dict[str, Any]) -> Account:
    """chart-of-accounts record -> Account

    Raises:
        ValueError: unknown account type or malformed fields
        KeyError: required field missing
    """
    classification = data.get("classification")
    return Account(
        id=document_id(data),
        code=str(data["code"]),
        name=data.get("name") or "",
        type=AccountType(data["type"]),
        classification=AccountClassification(classification) if classification else None,
        current_balance=to_decimal(data.get("currentBalance")),
    )


def line_from_api(data: dict[str, Any]) -> JournalLine:
    """journal detail component -> JournalLine"""
    return JournalLine(
        account_id=_account_ref(data.get("account")),
        debit=to_decimal(data.get("debit")),
        credit=to_decimal(data.get("credit")),
        description=data.get("description") or "",
    )


def entry_from_api(data: dict[str, Any]) -> JournalEntry:
    """journal-entries record -> JournalEntry

    Stored totals are carried over as-is; reports never read them.
    """
    return JournalEntry(
        entry_date=_parse_date(data.get("entryDate")),
        description=data.get("description") or "",
        lines=tuple(line_from_api(d) for d in data.get("details") or []),
        reference=data.get("reference") or "",
        id=document_id(data),
        total_debit=to_decimal(data.get("totalDebit")),
        total_credit=to_decimal(data.get("totalCredit")),
    )


def ensure_persistable(entry: JournalEntry) -> ValidatedEntry:
    """Final gate before any write

    Re-checks the ledger invariants on the entry itself, so a hand-built
    or altered ValidatedEntry is refused too.

    Raises:
        UnvalidatedEntryError: entry did not come from the validator, or its
            lines no longer balance
    """
    if not isinstance(entry, ValidatedEntry):
        raise UnvalidatedEntryError(
            "Only entries returned by JournalEntryValidator can be written"
        )
    if entry.entry_date is None:
        raise UnvalidatedEntryError("Entry has no date")
    if len(entry.lines) < MIN_JOURNAL_LINES:
        raise UnvalidatedEntryError(
            f"Entry has {len(entry.lines)} line(s), at least {MIN_JOURNAL_LINES} required"
        )
    if not all(line.debit.is_finite() and line.credit.is_finite() for line in entry.lines):
        raise UnvalidatedEntryError("Entry contains a non-finite amount")
    if (entry.total_debit, entry.total_credit) != entry.line_totals():
        raise UnvalidatedEntryError("Entry totals do not match its lines")
    if not entry.is_balanced():
        raise UnvalidatedEntryError(
            f"Entry is unbalanced: debit={entry.total_debit} credit={entry.total_credit}"
        )
    return entry


def entry_to_api(entry: JournalEntry) -> dict[str, Any]:
    """ValidatedEntry -> request body `data` object

    Amounts are sent as decimal strings so no precision is lost.

    Raises:
        UnvalidatedEntryError: see `ensure_persistable`
    """
    entry = ensure_persistable(entry)
    return {
        "entryDate": entry.entry_date.isoformat(),
        "reference": entry.reference,
        "description": entry.description,
        "totalDebit": str(entry.total_debit),
        "totalCredit": str(entry.total_credit),
        "details": [
            {
                "account": line.account_id,
                "debit": str(line.debit),
                "credit": str(line.credit),
                "description": line.description,
            }
            for line in entry.lines
        ],
    }
