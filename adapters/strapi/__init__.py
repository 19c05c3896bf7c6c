"""
Strapi adapter package

REST client and payload mapping for the ERP backend.
"""

from adapters.strapi.models import (
    UnvalidatedEntryError,
    ensure_persistable,
    account_from_api,
    entry_from_api,
    entry_to_api,
)
from adapters.strapi.rest_client import StrapiApiError, StrapiRestClient

__all__ = [
    "StrapiRestClient",
    "StrapiApiError",
    "UnvalidatedEntryError",
    "ensure_persistable",
    "account_from_api",
    "entry_from_api",
    "entry_to_api",
]
