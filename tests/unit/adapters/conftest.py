"""
Adapter test fixtures

Strapi payload samples and client fixtures.
"""

from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio

from adapters.strapi.rest_client import StrapiRestClient


# -------------------------------------------------------------------------
# Strapi payload samples
# -------------------------------------------------------------------------

@pytest.fixture
def account_records() -> list[dict[str, Any]]:
    """chart-of-accounts records as returned by Strapi v5"""
    return [
        {
            "id": 1,
            "documentId": "acc-cash",
            "code": "1000",
            "name": "Cash",
            "type": "Asset",
            "classification": "Current",
            "currentBalance": 1234.5,
        },
        {
            "id": 4,
            "documentId": "acc-revenue",
            "code": "4000",
            "name": "Fuel Sales",
            "type": "Revenue",
            "classification": "Operating",
            "currentBalance": None,
        },
    ]


@pytest.fixture
def entry_record() -> dict[str, Any]:
    """journal-entries record with populated detail accounts"""
    return {
        "id": 11,
        "documentId": "je-abc",
        "entryDate": "2026-01-15",
        "reference": "INV-001",
        "description": "Cash sale",
        "totalDebit": 100,
        "totalCredit": 100,
        "details": [
            {
                "id": 21,
                "debit": 100,
                "credit": 0,
                "description": "till",
                "account": {"documentId": "acc-cash", "code": "1000", "name": "Cash"},
            },
            {
                "id": 22,
                "debit": None,
                "credit": "100.00",
                "description": None,
                "account": {"documentId": "acc-revenue", "code": "4000", "name": "Fuel Sales"},
            },
        ],
    }


# -------------------------------------------------------------------------
# Clients
# -------------------------------------------------------------------------

@pytest_asyncio.fixture
async def strapi_client() -> AsyncGenerator[StrapiRestClient, None]:
    """Strapi client with a static token and a small page size"""
    client = StrapiRestClient(
        base_url="http://erp.test:1337/",
        api_token="test_token",
        page_size=2,
    )
    yield client
    await client.close()
