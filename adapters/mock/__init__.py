"""
Mock adapters

In-memory implementations for tests.
Protocol compliant, so they can replace the real clients.
"""

from adapters.mock.erp_client import MockErpApiClient, MockErpState

__all__ = [
    "MockErpApiClient",
    "MockErpState",
]
