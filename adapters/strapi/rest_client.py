"""
Strapi REST API client

Talks to the ERP backend (Strapi) that stores the chart of accounts and the
journal entries. Bearer-token authentication, paginated reads, and writes
that only accept entries which passed validation.
"""

import logging
from datetime import date
from typing import Any

import httpx

from adapters.strapi.models import (
    account_from_api,
    document_id,
    entry_from_api,
    entry_to_api,
)
from core.config.loader import ErpConfig
from core.constants import Defaults, StrapiEndpoints
from core.ledger.models import Account, JournalEntry

logger = logging.getLogger(__name__)


class StrapiApiError(Exception):
    """Strapi API error

    Attributes:
        status_code: HTTP status (None for transport or payload errors)
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StrapiRestClient:
    """Strapi REST API client

    Implements the IErpApiClient Protocol.

    Args:
        base_url: Strapi server URL (without the /api prefix)
        api_token: static API token or JWT (None = anonymous until login)
        timeout: HTTP request timeout (seconds)
        page_size: page size used for list queries

    Usage:
    ```python
    client = StrapiRestClient("http://localhost:1337", api_token="xxx")
    accounts = await client.list_accounts()
    entries = await client.list_entries(start_date=date(2026, 1, 1))
    await client.close()
    ```
    """

    def __init__(
        self,
        base_url: str = StrapiEndpoints.DEFAULT_URL,
        api_token: str | None = None,
        timeout: float = Defaults.REQUEST_TIMEOUT_SEC,
        page_size: int = Defaults.PAGE_SIZE,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self.page_size = page_size
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: ErpConfig) -> "StrapiRestClient":
        """Build a client from the `erp` settings section"""
        return cls(
            base_url=config.url,
            api_token=config.api_token,
            timeout=config.timeout,
            page_size=config.page_size,
        )

    async def _ensure_client(self) -> httpx.AsyncClient:
        """HTTP client (lazy init)"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Run an API request

        Args:
            method: HTTP method
            path: path below /api (e.g. /journal-entries)
            params: query parameters
            body: JSON body

        Returns:
            Response JSON ({} for empty bodies)

        Raises:
            StrapiApiError: non-2xx response or transport failure
        """
        client = await self._ensure_client()
        url = f"{self.base_url}{StrapiEndpoints.API_PREFIX}{path}"

        try:
            response = await client.request(
                method,
                url,
                params=params,
                json=body,
                headers=self._headers(),
            )
        except httpx.RequestError as e:
            logger.error(f"Strapi request error: {method} {path} - {e}")
            raise StrapiApiError(str(e)) from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(
                f"Strapi API error: {response.status_code} - {message}",
                extra={"method": method, "path": path},
            )
            raise StrapiApiError(message, response.status_code)

        if not response.content:
            return {}
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """`error.message` from the body, else `Error <status>: <reason>`"""
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])

        return f"Error {response.status_code}: {response.reason_phrase}"

    async def _get_all_pages(
        self,
        path: str,
        params: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Follow `meta.pagination` until every page is read"""
        records: list[dict[str, Any]] = []
        page = 1

        while True:
            query = {
                **params,
                "pagination[page]": page,
                "pagination[pageSize]": self.page_size,
            }
            payload = await self._request("GET", path, params=query)
            records.extend(payload.get("data") or [])

            pagination = (payload.get("meta") or {}).get("pagination") or {}
            page_count = int(pagination.get("pageCount") or 1)
            if page >= page_count:
                return records
            page += 1

    # =========================================================================
    # Authentication
    # =========================================================================

    async def login(self, identifier: str, password: str) -> str:
        """Log in with local credentials and keep the issued JWT

        Returns:
            JWT string

        Raises:
            StrapiApiError: invalid credentials or missing token
        """
        data = await self._request(
            "POST",
            StrapiEndpoints.LOGIN,
            body={"identifier": identifier, "password": password},
        )
        token = data.get("jwt")
        if not token:
            raise StrapiApiError("Login response did not contain a token")

        self.api_token = token
        logger.info(f"Logged in to Strapi as {identifier}")
        return token

    # =========================================================================
    # Chart of accounts
    # =========================================================================

    async def list_accounts(self) -> list[Account]:
        """Full chart of accounts, sorted by code"""
        records = await self._get_all_pages(
            StrapiEndpoints.ACCOUNTS,
            {"sort": "code:ASC"},
        )
        try:
            return [account_from_api(r) for r in records]
        except (KeyError, ValueError) as e:
            raise StrapiApiError(f"Malformed chart-of-accounts record: {e}") from e

    # =========================================================================
    # Journal entries
    # =========================================================================

    async def list_entries(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[JournalEntry]:
        """Journal entries with their lines, newest first

        Args:
            start_date: only entries dated on or after (None = unbounded)
            end_date: only entries dated on or before (None = unbounded)
        """
        params: dict[str, Any] = {
            "populate[details][populate]": "account",
            "sort": "entryDate:DESC",
        }
        if start_date:
            params["filters[entryDate][$gte]"] = start_date.isoformat()
        if end_date:
            params["filters[entryDate][$lte]"] = end_date.isoformat()

        records = await self._get_all_pages(StrapiEndpoints.JOURNAL_ENTRIES, params)
        try:
            return [entry_from_api(r) for r in records]
        except (KeyError, ValueError) as e:
            raise StrapiApiError(f"Malformed journal entry record: {e}") from e

    async def get_entry(self, entry_id: str) -> JournalEntry:
        """Single journal entry with its lines

        Raises:
            StrapiApiError: not found (status 404) or request failure
        """
        payload = await self._request(
            "GET",
            f"{StrapiEndpoints.JOURNAL_ENTRIES}/{entry_id}",
            params={"populate[details][populate]": "account"},
        )
        try:
            return entry_from_api(payload["data"])
        except (KeyError, TypeError, ValueError) as e:
            raise StrapiApiError(f"Malformed journal entry record: {e}") from e

    async def submit_entry(self, entry: JournalEntry) -> str:
        """Create a journal entry

        Args:
            entry: ValidatedEntry returned by the validator

        Returns:
            documentId of the created entry

        Raises:
            UnvalidatedEntryError: entry did not pass validation
            StrapiApiError: request failure
        """
        body = {"data": entry_to_api(entry)}
        payload = await self._request("POST", StrapiEndpoints.JOURNAL_ENTRIES, body=body)
        try:
            entry_id = document_id(payload.get("data") or {})
        except ValueError as e:
            raise StrapiApiError(f"Create response without document id: {e}") from e
        logger.info(
            f"Journal entry created: {entry_id}",
            extra={"reference": entry.reference},
        )
        return entry_id

    async def update_entry(self, entry_id: str, entry: JournalEntry) -> None:
        """Replace an existing journal entry

        Raises:
            UnvalidatedEntryError: entry did not pass validation
            StrapiApiError: request failure
        """
        body = {"data": entry_to_api(entry)}
        await self._request(
            "PUT",
            f"{StrapiEndpoints.JOURNAL_ENTRIES}/{entry_id}",
            body=body,
        )
        logger.info(f"Journal entry updated: {entry_id}")

    async def delete_entry(self, entry_id: str) -> None:
        """Delete a journal entry"""
        await self._request("DELETE", f"{StrapiEndpoints.JOURNAL_ENTRIES}/{entry_id}")
        logger.info(f"Journal entry deleted: {entry_id}")
