"""
Web model package

Pydantic schema definitions
"""

from web.models.requests import JournalEntryRequest, JournalLineRequest
from web.models.responses import (
    AccountResponse,
    BalanceSheetResponse,
    EntryWriteResponse,
    FailureResponse,
    HealthResponse,
    JournalEntryListResponse,
    JournalEntryResponse,
    TrialBalanceResponse,
    ValidationResponse,
    WarningResponse,
)

__all__ = [
    # Requests
    "JournalEntryRequest",
    "JournalLineRequest",
    # Responses
    "AccountResponse",
    "BalanceSheetResponse",
    "EntryWriteResponse",
    "FailureResponse",
    "HealthResponse",
    "JournalEntryListResponse",
    "JournalEntryResponse",
    "TrialBalanceResponse",
    "ValidationResponse",
    "WarningResponse",
]
