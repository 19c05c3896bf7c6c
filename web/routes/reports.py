"""
Financial report routes

GET /api/reports/trial-balance - debit/credit totals per account over a period
GET /api/reports/balance-sheet - Assets = Liabilities + Equity as of a date
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from adapters.strapi.rest_client import StrapiApiError
from web.dependencies import get_ledger_service
from web.models.responses import BalanceSheetResponse, TrialBalanceResponse
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("/trial-balance", response_model=TrialBalanceResponse)
async def get_trial_balance(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    service: LedgerService = Depends(get_ledger_service),
) -> TrialBalanceResponse:
    """Trial balance (both bounds optional, inclusive)"""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")

    try:
        report = await service.trial_balance(start_date, end_date)
    except StrapiApiError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return TrialBalanceResponse.model_validate(report.to_dict())


@router.get("/balance-sheet", response_model=BalanceSheetResponse)
async def get_balance_sheet(
    as_of_date: date | None = Query(default=None, alias="asOfDate"),
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceSheetResponse:
    """Balance sheet as of a date (defaults to today)"""
    try:
        report = await service.balance_sheet(as_of_date or date.today())
    except StrapiApiError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return BalanceSheetResponse.model_validate(report.to_dict())
