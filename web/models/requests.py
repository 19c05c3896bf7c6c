"""
Request schemas (Pydantic)

Validation of Web API request bodies
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.ledger.models import JournalEntry, JournalLine
from core.ledger.types import ErrorKind
from core.ledger.validator import ValidationFailure
from core.utils.money import ZERO, to_decimal


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JournalLineRequest(CamelModel):
    """One line of a journal entry form

    Amounts arrive as numbers or strings; blank means 0.
    """

    account: str | None = Field(default=None, description="Account id (documentId)")
    debit: str | float | None = Field(default=None, description="Debit amount")
    credit: str | float | None = Field(default=None, description="Credit amount")
    description: str = Field(default="", description="Line memo")


class JournalEntryRequest(CamelModel):
    """Journal entry create/update/validate request"""

    entry_date: date | None = Field(default=None, description="Entry date (YYYY-MM-DD)")
    reference: str = Field(default="", description="External reference")
    description: str = Field(default="", description="Entry description")
    details: list[JournalLineRequest] = Field(default_factory=list, description="Entry lines")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "entryDate": "2026-01-15",
                    "reference": "INV-001",
                    "description": "Cash sale",
                    "details": [
                        {"account": "acc-cash", "debit": 100, "credit": 0},
                        {"account": "acc-revenue", "debit": 0, "credit": 100},
                    ],
                },
            ]
        },
    )

    def to_candidate(self, entry_id: str | None = None) -> tuple[JournalEntry, ValidationFailure | None]:
        """Build the engine candidate

        Non-numeric amounts are counted as 0 and reported as the returned
        failure (first offending line only).

        Returns:
            (candidate, amount failure or None)
        """
        failure: ValidationFailure | None = None
        lines: list[JournalLine] = []

        for index, detail in enumerate(self.details):
            amounts = {}
            for side in ("debit", "credit"):
                try:
                    amounts[side] = to_decimal(getattr(detail, side))
                except ValueError as e:
                    amounts[side] = ZERO
                    if failure is None:
                        failure = ValidationFailure(
                            kind=ErrorKind.INVALID_AMOUNT,
                            message=f"Line {index + 1}: {e}",
                            field=side,
                            line_index=index,
                        )
            lines.append(JournalLine(
                account_id=detail.account or None,
                debit=amounts["debit"],
                credit=amounts["credit"],
                description=detail.description,
            ))

        candidate = JournalEntry(
            entry_date=self.entry_date,
            description=self.description,
            lines=tuple(lines),
            reference=self.reference,
            id=entry_id,
        )
        return candidate, failure
