"""
Adapter layer

Integration with external services (the ERP backend).
Protocol-based interfaces so a mock can be swapped in.
"""

from adapters.interfaces import IErpApiClient

__all__ = [
    # Interfaces
    "IErpApiClient",
]
