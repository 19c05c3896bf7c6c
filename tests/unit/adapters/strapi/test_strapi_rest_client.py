"""
Strapi REST client tests

StrapiRestClient HTTP requests (httpx mocked).
"""

from datetime import date
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from adapters.strapi.models import UnvalidatedEntryError
from adapters.strapi.rest_client import StrapiApiError, StrapiRestClient
from core.config.loader import ErpConfig
from core.ledger.validator import JournalEntryValidator


def make_response(
    status_code: int = 200,
    payload: Any = None,
    reason: str = "OK",
) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = reason
    if payload is None:
        response.content = b""
        response.json.side_effect = ValueError("no body")
    else:
        response.content = b"{...}"
        response.json.return_value = payload
    return response


def page(data: list[dict[str, Any]], page_no: int, page_count: int) -> dict[str, Any]:
    return {
        "data": data,
        "meta": {"pagination": {"page": page_no, "pageSize": 2, "pageCount": page_count}},
    }


def patch_http(client: StrapiRestClient, *responses: MagicMock):
    """Patch _ensure_client to return an AsyncMock http client"""
    http_client = AsyncMock()
    http_client.request.side_effect = list(responses)
    return patch.object(client, "_ensure_client", AsyncMock(return_value=http_client)), http_client


class TestClientSetup:
    """Construction and headers"""

    def test_from_config(self) -> None:
        config = ErpConfig(url="http://erp:1337", api_token="tok", timeout=3.0, page_size=10)

        client = StrapiRestClient.from_config(config)

        assert client.base_url == "http://erp:1337"
        assert client.api_token == "tok"
        assert client.timeout == 3.0
        assert client.page_size == 10

    def test_bearer_header(self) -> None:
        assert StrapiRestClient(api_token="abc")._headers()["Authorization"] == "Bearer abc"
        assert "Authorization" not in StrapiRestClient()._headers()

    @pytest.mark.asyncio
    async def test_lazy_client_and_close(self) -> None:
        client = StrapiRestClient()

        http_client = await client._ensure_client()

        assert isinstance(http_client, httpx.AsyncClient)
        assert await client._ensure_client() is http_client

        await client.close()
        assert client._client is None


class TestRequests:
    """Reads"""

    @pytest.mark.asyncio
    async def test_list_accounts_all_pages(self, strapi_client, account_records) -> None:
        patcher, http_client = patch_http(
            strapi_client,
            make_response(payload=page(account_records[:1], 1, 2)),
            make_response(payload=page(account_records[1:], 2, 2)),
        )

        with patcher:
            accounts = await strapi_client.list_accounts()

        assert [a.code for a in accounts] == ["1000", "4000"]
        assert http_client.request.await_count == 2

        method, url = http_client.request.call_args_list[0].args
        params = http_client.request.call_args_list[1].kwargs["params"]
        headers = http_client.request.call_args_list[0].kwargs["headers"]
        assert method == "GET"
        assert url == "http://erp.test:1337/api/chart-of-accounts"
        assert params["sort"] == "code:ASC"
        assert params["pagination[page]"] == 2
        assert params["pagination[pageSize]"] == 2
        assert headers["Authorization"] == "Bearer test_token"

    @pytest.mark.asyncio
    async def test_list_entries_filters(self, strapi_client, entry_record) -> None:
        patcher, http_client = patch_http(
            strapi_client,
            make_response(payload=page([entry_record], 1, 1)),
        )

        with patcher:
            entries = await strapi_client.list_entries(date(2026, 1, 1), date(2026, 1, 31))

        params = http_client.request.call_args.kwargs["params"]
        assert params["filters[entryDate][$gte]"] == "2026-01-01"
        assert params["filters[entryDate][$lte]"] == "2026-01-31"
        assert params["populate[details][populate]"] == "account"
        assert params["sort"] == "entryDate:DESC"
        assert entries[0].id == "je-abc"
        assert entries[0].lines[0].debit == Decimal("100")

    @pytest.mark.asyncio
    async def test_list_entries_without_filters(self, strapi_client) -> None:
        patcher, http_client = patch_http(strapi_client, make_response(payload={"data": []}))

        with patcher:
            entries = await strapi_client.list_entries()

        params = http_client.request.call_args.kwargs["params"]
        assert entries == []
        assert not any(key.startswith("filters") for key in params)

    @pytest.mark.asyncio
    async def test_get_entry(self, strapi_client, entry_record) -> None:
        patcher, http_client = patch_http(strapi_client, make_response(payload={"data": entry_record}))

        with patcher:
            entry = await strapi_client.get_entry("je-abc")

        assert entry.description == "Cash sale"
        assert http_client.request.call_args.args[1].endswith("/api/journal-entries/je-abc")

    @pytest.mark.asyncio
    async def test_malformed_record(self, strapi_client) -> None:
        bad = {"documentId": "x", "code": "1", "name": "?", "type": "Nonsense"}
        patcher, _ = patch_http(strapi_client, make_response(payload=page([bad], 1, 1)))

        with patcher, pytest.raises(StrapiApiError, match="Malformed"):
            await strapi_client.list_accounts()


class TestErrors:
    """Error mapping"""

    @pytest.mark.asyncio
    async def test_error_message_from_body(self, strapi_client) -> None:
        body = {"data": None, "error": {"status": 403, "name": "ForbiddenError", "message": "Forbidden"}}
        patcher, _ = patch_http(strapi_client, make_response(403, body, "Forbidden"))

        with patcher, pytest.raises(StrapiApiError) as exc_info:
            await strapi_client.list_accounts()

        assert str(exc_info.value) == "Forbidden"
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_error_without_body(self, strapi_client) -> None:
        patcher, _ = patch_http(strapi_client, make_response(500, None, "Internal Server Error"))

        with patcher, pytest.raises(StrapiApiError) as exc_info:
            await strapi_client.delete_entry("je-1")

        assert str(exc_info.value) == "Error 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self, strapi_client) -> None:
        http_client = AsyncMock()
        http_client.request.side_effect = httpx.ConnectError("connection refused")

        with patch.object(strapi_client, "_ensure_client", AsyncMock(return_value=http_client)):
            with pytest.raises(StrapiApiError) as exc_info:
                await strapi_client.list_entries()

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_error_logged(self, strapi_client, caplog) -> None:
        patcher, _ = patch_http(strapi_client, make_response(404, None, "Not Found"))

        with caplog.at_level("ERROR", logger="adapters.strapi.rest_client"):
            with patcher, pytest.raises(StrapiApiError):
                await strapi_client.get_entry("missing")

        assert "Strapi API error: 404" in caplog.text


class TestWrites:
    """Writes only accept validated entries"""

    @pytest.mark.asyncio
    async def test_submit_entry(self, strapi_client, registry, make_entry) -> None:
        entry = JournalEntryValidator(registry).validate(make_entry()).unwrap()
        patcher, http_client = patch_http(
            strapi_client,
            make_response(200, {"data": {"id": 3, "documentId": "je-new"}}),
        )

        with patcher:
            entry_id = await strapi_client.submit_entry(entry)

        assert entry_id == "je-new"
        method, url = http_client.request.call_args.args
        body = http_client.request.call_args.kwargs["json"]
        assert method == "POST"
        assert url == "http://erp.test:1337/api/journal-entries"
        assert body["data"]["totalDebit"] == "100"
        assert len(body["data"]["details"]) == 2

    @pytest.mark.asyncio
    async def test_update_entry(self, strapi_client, registry, make_entry) -> None:
        entry = JournalEntryValidator(registry).validate(make_entry()).unwrap()
        patcher, http_client = patch_http(strapi_client, make_response(200, {"data": {}}))

        with patcher:
            await strapi_client.update_entry("je-abc", entry)

        method, url = http_client.request.call_args.args
        assert method == "PUT"
        assert url.endswith("/journal-entries/je-abc")

    @pytest.mark.asyncio
    async def test_unvalidated_entry_never_sent(self, strapi_client, make_entry) -> None:
        patcher, http_client = patch_http(strapi_client)

        with patcher, pytest.raises(UnvalidatedEntryError):
            await strapi_client.submit_entry(make_entry())

        http_client.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_entry(self, strapi_client) -> None:
        patcher, http_client = patch_http(strapi_client, make_response(204, None, "No Content"))

        with patcher:
            await strapi_client.delete_entry("je-abc")

        assert http_client.request.call_args.args[0] == "DELETE"


class TestLogin:
    """Local auth"""

    @pytest.mark.asyncio
    async def test_login_sets_token(self) -> None:
        client = StrapiRestClient()
        patcher, http_client = patch_http(client, make_response(200, {"jwt": "jwt-123", "user": {}}))

        with patcher:
            token = await client.login("admin", "secret")

        assert token == "jwt-123"
        assert client.api_token == "jwt-123"
        assert http_client.request.call_args.kwargs["json"] == {
            "identifier": "admin",
            "password": "secret",
        }
        assert http_client.request.call_args.args[1].endswith("/api/auth/local")

    @pytest.mark.asyncio
    async def test_login_without_token(self) -> None:
        client = StrapiRestClient()
        patcher, _ = patch_http(client, make_response(200, {"user": {}}))

        with patcher, pytest.raises(StrapiApiError):
            await client.login("admin", "secret")
