"""Unit tests for HydraClient (crudgen.resource.client).

Tests cover:
- HydraClient.__init__
- HydraClient.fetch_parameters (success, no search block, custom prefix,
  connect error, timeout, HTTP error, malformed payloads)
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from crudgen.resource.client import HydraClient, MetadataFetchError
from crudgen.resource.models import Resource


def _mock_client(payload=None, *, side_effect=None) -> AsyncMock:
    mock_response = MagicMock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = MagicMock()

    mock_client = AsyncMock()
    if side_effect is not None:
        mock_client.get = AsyncMock(side_effect=side_effect)
    else:
        mock_client.get = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


COLLECTION = {
    "@id": "/books",
    "hydra:member": [],
    "hydra:search": {
        "@type": "hydra:IriTemplate",
        "hydra:template": "/books{?title,author,author[],order[title]}",
        "hydra:mapping": [
            {"variable": "title", "property": "title", "required": False},
            {"variable": "author", "property": "author", "required": False},
            {"variable": "author[]", "property": "author", "required": False},
            {"variable": "order[title]", "property": "title", "required": False},
            {"variable": "q", "required": True},
        ],
    },
}


# ---------------------------------------------------------------------------
# HydraClient.__init__
# ---------------------------------------------------------------------------


class TestHydraClientInit:
    @pytest.mark.unit
    def test_defaults(self):
        client = HydraClient()
        assert client.base_url == ""
        assert client.timeout == 30
        assert client.hydra_prefix == "hydra:"

    @pytest.mark.unit
    def test_trailing_slash_stripped(self):
        client = HydraClient("https://localhost/", timeout=5)
        assert client.base_url == "https://localhost"
        assert client.timeout == 5


# ---------------------------------------------------------------------------
# HydraClient.fetch_parameters
# ---------------------------------------------------------------------------


class TestFetchParameters:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, book_without_parameters):
        mock_client = _mock_client(COLLECTION)

        with patch("httpx.AsyncClient", return_value=mock_client):
            params = await HydraClient("https://localhost").fetch_parameters(
                book_without_parameters
            )

        assert [p.variable for p in params] == [
            "title", "author", "author[]", "order[title]", "q",
        ]
        assert params[0].range == "http://www.w3.org/2001/XMLSchema#string"
        assert params[1].range is None
        assert params[4].property is None
        assert params[4].required is True
        mock_client.get.assert_awaited_once_with("https://localhost/books")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_url_fallback(self):
        mock_client = _mock_client({"hydra:member": []})
        resource = Resource(name="books", title="Book")

        with patch("httpx.AsyncClient", return_value=mock_client):
            params = await HydraClient("https://localhost").fetch_parameters(resource)

        assert params == []
        mock_client.get.assert_awaited_once_with("/books")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_custom_prefix(self, book_without_parameters):
        payload = {"search": {"mapping": [{"variable": "title", "property": "title"}]}}
        mock_client = _mock_client(payload)

        with patch("httpx.AsyncClient", return_value=mock_client):
            params = await HydraClient(hydra_prefix="").fetch_parameters(
                book_without_parameters
            )

        assert [p.variable for p in params] == ["title"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_connect_error(self, book_without_parameters):
        mock_client = _mock_client(side_effect=httpx.ConnectError("Connection refused"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(MetadataFetchError, match="Cannot connect") as exc_info:
                await HydraClient("https://localhost").fetch_parameters(book_without_parameters)

        assert exc_info.value.resource == "books"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self, book_without_parameters):
        mock_client = _mock_client(side_effect=httpx.TimeoutException("timed out"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(MetadataFetchError, match="timed out after 30s"):
                await HydraClient("https://localhost").fetch_parameters(book_without_parameters)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_http_error(self, book_without_parameters):
        mock_resp = MagicMock()
        mock_resp.status_code = 404
        mock_client = _mock_client(
            side_effect=httpx.HTTPStatusError("Not Found", request=MagicMock(), response=mock_resp)
        )

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(MetadataFetchError, match="HTTP 404"):
                await HydraClient("https://localhost").fetch_parameters(book_without_parameters)

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            ["not", "an", "object"],
            {"hydra:search": "nope"},
            {"hydra:search": {"hydra:mapping": {"variable": "title"}}},
            {"hydra:search": {"hydra:mapping": [{"property": "title"}]}},
            {"hydra:search": {"hydra:mapping": ["title"]}},
            {"hydra:search": {"hydra:mapping": [{"variable": "title", "property": "title"}, None]}},
        ],
    )
    async def test_malformed_payload(self, payload, book_without_parameters):
        mock_client = _mock_client(payload)

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(MetadataFetchError, match="Malformed"):
                await HydraClient("https://localhost").fetch_parameters(book_without_parameters)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_json(self, book_without_parameters):
        mock_client = _mock_client()
        mock_client.get.return_value.json.side_effect = ValueError("Expecting value")

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(MetadataFetchError, match="Malformed"):
                await HydraClient("https://localhost").fetch_parameters(book_without_parameters)
