"""
Health check endpoint

GET /health - server status
"""

from fastapi import APIRouter, Depends

from core.config.loader import Settings
from web.dependencies import get_app_settings
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """Server status

    Returns:
        HealthResponse: status, ERP url, version
    """
    return HealthResponse(
        status="ok",
        erp_url=settings.erp.url,
        version="1.0.0",
    )
