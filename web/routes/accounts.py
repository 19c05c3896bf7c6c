"""
Chart of accounts routes

Read-only listing of the accounts journal lines can reference.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from adapters.strapi.rest_client import StrapiApiError
from core.ledger.types import AccountType
from web.dependencies import get_ledger_service
from web.models.responses import AccountResponse
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api", tags=["Accounts"])


@router.get("/accounts", response_model=list[AccountResponse])
async def list_accounts(
    account_type: AccountType | None = Query(default=None, alias="type"),
    service: LedgerService = Depends(get_ledger_service),
) -> list[AccountResponse]:
    """Chart of accounts sorted by code (optionally one type only)"""
    try:
        registry = await service.load_registry()
    except StrapiApiError as e:
        raise HTTPException(status_code=502, detail=str(e))

    accounts = registry.of_type(account_type) if account_type else registry.list_accounts()
    return [AccountResponse.from_account(a) for a in accounts]
