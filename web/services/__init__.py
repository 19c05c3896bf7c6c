"""
Web service package

Business logic behind the routes
"""

from web.services.ledger_service import LedgerService

__all__ = [
    "LedgerService",
]
