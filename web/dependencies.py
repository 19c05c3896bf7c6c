"""
Dependency injection

Dependency management with FastAPI's Depends.
"""

from fastapi import Depends, HTTPException

from adapters.interfaces import IErpApiClient
from core.config.loader import Settings, get_settings
from web.services.ledger_service import LedgerService


def get_app_settings() -> Settings:
    """Application settings"""
    return get_settings()


# =========================================================================
# ERP client (created in the app lifespan)
# =========================================================================

_erp_client: IErpApiClient | None = None


def set_erp_client(client: IErpApiClient | None) -> None:
    """Register the process-wide ERP client

    Called from the app lifespan (or by tests with a mock).

    Args:
        client: ERP client instance (None to clear)
    """
    global _erp_client
    _erp_client = client


def get_erp_client() -> IErpApiClient:
    """Registered ERP client

    Raises:
        HTTPException: 503 when no client was registered
    """
    if _erp_client is None:
        raise HTTPException(status_code=503, detail="ERP client is not initialized")
    return _erp_client


def get_erp_client_or_none() -> IErpApiClient | None:
    """Registered ERP client, or None before startup"""
    return _erp_client


def get_ledger_service(
    client: IErpApiClient = Depends(get_erp_client),
    settings: Settings = Depends(get_app_settings),
) -> LedgerService:
    """LedgerService bound to the ERP client and ledger settings"""
    return LedgerService(client, settings.ledger)
