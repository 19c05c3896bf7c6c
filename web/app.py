"""
FastAPI application

Router registration and app setup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config.loader import get_settings
from core.logging import setup_logging
from web.routes import accounts, health, journal, reports

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """App lifecycle: ERP client setup and teardown"""
    from adapters.strapi.rest_client import StrapiApiError, StrapiRestClient
    from web.dependencies import get_erp_client_or_none, set_erp_client

    settings = get_settings()
    setup_logging("web", settings.log_level)
    client = None

    # Tests may register a mock before startup
    if get_erp_client_or_none() is None:
        client = StrapiRestClient.from_config(settings.erp)

        if not client.api_token and settings.erp.has_credentials:
            try:
                await client.login(settings.erp.identifier, settings.erp.password)
            except StrapiApiError as e:
                logger.warning(f"Web: ERP login failed, continuing without token: {e}")

        set_erp_client(client)
        logger.info(f"Web: ERP client ready ({settings.erp.url})")

    yield

    if client is not None:
        await client.close()
        set_erp_client(None)
        logger.info("Web: ERP client closed")


app = FastAPI(
    title="RefuelOS Ledger API",
    description="Double-entry journal validation and financial reports",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS (development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================================
# API routers
# =========================================================================

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(journal.router)
app.include_router(reports.router)
