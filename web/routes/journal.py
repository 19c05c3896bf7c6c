"""
Journal entry routes

Listing, live validation and validated writes of journal entries.
No entry reaches the ERP without passing JournalEntryValidator.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from adapters.strapi.rest_client import StrapiApiError
from core.ledger.editor import compute_balance_status
from core.ledger.validator import EntryRejectedError, ValidationFailure
from core.types import DateRange
from core.utils.money import format_money
from web.dependencies import get_ledger_service
from web.models.requests import JournalEntryRequest
from web.models.responses import (
    EntryWriteResponse,
    FailureResponse,
    JournalEntryListResponse,
    JournalEntryResponse,
    ValidationResponse,
    warnings_to_response,
)
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/journal-entries", tags=["Journal"])


def _erp_error(e: StrapiApiError) -> HTTPException:
    """ERP 404 stays 404, everything else is a bad gateway"""
    if e.status_code == 404:
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


def _rejected(failure: ValidationFailure) -> HTTPException:
    return HTTPException(status_code=422, detail=failure.to_dict())


@router.get("", response_model=JournalEntryListResponse)
async def list_entries(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    service: LedgerService = Depends(get_ledger_service),
) -> JournalEntryListResponse:
    """Posted entries, newest first"""
    try:
        period = DateRange(start=start_date, end=end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        registry = await service.load_registry()
        entries = await service.list_entries(start_date, end_date)
    except StrapiApiError as e:
        raise _erp_error(e)

    return JournalEntryListResponse(
        entries=[JournalEntryResponse.from_entry(e, registry) for e in entries],
        total=len(entries),
        period=period.describe(),
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_entry(
    request: JournalEntryRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> ValidationResponse:
    """Live balance status and validation verdict (nothing is written)"""
    candidate, amount_failure = request.to_candidate()
    status = compute_balance_status(candidate.lines, service.config.balance_tolerance)

    failure = amount_failure
    warnings = []
    if failure is None:
        try:
            result = await service.validate(candidate)
        except StrapiApiError as e:
            raise _erp_error(e)
        failure = result.failure
        warnings = result.warnings

    return ValidationResponse(
        passed=failure is None,
        total_debit=format_money(status.total_debit),
        total_credit=format_money(status.total_credit),
        difference=format_money(status.difference),
        is_balanced=status.is_balanced,
        failure=FailureResponse.model_validate(failure.to_dict()) if failure else None,
        warnings=warnings_to_response(warnings),
    )


@router.get("/{entry_id}", response_model=JournalEntryResponse)
async def get_entry(
    entry_id: str = Path(..., description="Entry id (documentId)"),
    service: LedgerService = Depends(get_ledger_service),
) -> JournalEntryResponse:
    """Single entry with its lines"""
    try:
        registry = await service.load_registry()
        entry = await service.get_entry(entry_id)
    except StrapiApiError as e:
        raise _erp_error(e)

    return JournalEntryResponse.from_entry(entry, registry)


@router.post("", response_model=EntryWriteResponse, status_code=201)
async def create_entry(
    request: JournalEntryRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> EntryWriteResponse:
    """Validate and post a new entry

    422 with the failure when the entry is rejected.
    """
    candidate, amount_failure = request.to_candidate()
    if amount_failure is not None:
        raise _rejected(amount_failure)

    try:
        entry_id, result = await service.create_entry(candidate)
    except EntryRejectedError as e:
        raise _rejected(e.failure)
    except StrapiApiError as e:
        raise _erp_error(e)

    return EntryWriteResponse(id=entry_id, warnings=warnings_to_response(result.warnings))


@router.put("/{entry_id}", response_model=EntryWriteResponse)
async def update_entry(
    request: JournalEntryRequest,
    entry_id: str = Path(..., description="Entry id (documentId)"),
    service: LedgerService = Depends(get_ledger_service),
) -> EntryWriteResponse:
    """Validate and replace an existing entry"""
    candidate, amount_failure = request.to_candidate(entry_id)
    if amount_failure is not None:
        raise _rejected(amount_failure)

    try:
        result = await service.update_entry(entry_id, candidate)
    except EntryRejectedError as e:
        raise _rejected(e.failure)
    except StrapiApiError as e:
        raise _erp_error(e)

    return EntryWriteResponse(id=entry_id, warnings=warnings_to_response(result.warnings))


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(
    entry_id: str = Path(..., description="Entry id (documentId)"),
    service: LedgerService = Depends(get_ledger_service),
) -> None:
    """Delete an entry"""
    try:
        await service.delete_entry(entry_id)
    except StrapiApiError as e:
        raise _erp_error(e)
