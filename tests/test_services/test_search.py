"""Tests for the Algolia search client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from game_catalog.errors import UpstreamError
from game_catalog.services.search import AlgoliaSearchClient

SAMPLE_SEARCH_RESPONSE = {
    "hits": [
        {
            "objectID": "42",
            "title": "The Legend of Zelda: Breath of the Wild",
            "genre": "Adventure",
            "platforms": ["Switch"],
            "metascore": 97,
        },
        {
            "objectID": "43",
            "title": "Zelda II",
            "genre": "Adventure",
            "platforms": ["NES"],
            "metascore": None,
        },
    ],
    "nbHits": 2,
    "page": 0,
    "query": "zelda",
}


@pytest.fixture
def search_client() -> AlgoliaSearchClient:
    """Create a search client for testing."""
    return AlgoliaSearchClient(app_id="TESTAPP", api_key="test-search-key")


class TestAlgoliaSearchClientInit:
    """Tests for search client initialization."""

    def test_base_url_derived_from_app_id(self, search_client: AlgoliaSearchClient) -> None:
        assert search_client.base_url == "https://TESTAPP-dsn.algolia.net/1"

    def test_custom_base_url(self) -> None:
        client = AlgoliaSearchClient(
            app_id="TESTAPP", api_key="key", base_url="https://search.example.test/1/"
        )
        assert client.base_url == "https://search.example.test/1"

    def test_default_headers(self, search_client: AlgoliaSearchClient) -> None:
        headers = search_client.default_headers
        assert headers["X-Algolia-Application-Id"] == "TESTAPP"
        assert headers["X-Algolia-API-Key"] == "test-search-key"

    def test_from_settings(self, settings) -> None:
        client = AlgoliaSearchClient.from_settings(settings)
        assert client.is_configured
        assert client.index_name == "videogames"


class TestSearch:
    """Tests for searching the index."""

    async def test_search_success(self, search_client: AlgoliaSearchClient) -> None:
        mock_response = httpx.Response(200, json=SAMPLE_SEARCH_RESPONSE)

        with patch.object(search_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            hits = await search_client.search("zelda")

            assert len(hits) == 2
            assert hits[0]["objectID"] == "42"

            call_args = mock_client.request.call_args
            assert call_args.kwargs["method"] == "GET"
            assert call_args.kwargs["url"] == "indexes/videogames"
            assert call_args.kwargs["params"] == {"query": "zelda"}

    async def test_search_not_configured(self) -> None:
        client = AlgoliaSearchClient(app_id="", api_key="")

        with pytest.raises(UpstreamError, match="not configured"):
            await client.search("zelda")

    async def test_search_http_error(self, search_client: AlgoliaSearchClient) -> None:
        mock_response = httpx.Response(403, json={"message": "Invalid API key"})

        with patch.object(search_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            with pytest.raises(UpstreamError) as exc_info:
                await search_client.search("zelda")

            assert exc_info.value.status_code == 500
            assert "HTTP 403" in str(exc_info.value)

    async def test_search_timeout(self, search_client: AlgoliaSearchClient) -> None:
        with patch.object(search_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.side_effect = httpx.TimeoutException("timed out")
            mock_get_client.return_value = mock_client

            with pytest.raises(UpstreamError, match="timed out"):
                await search_client.search("zelda")

    async def test_search_connection_error(self, search_client: AlgoliaSearchClient) -> None:
        with patch.object(search_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.side_effect = httpx.ConnectError("connection refused")
            mock_get_client.return_value = mock_client

            with pytest.raises(UpstreamError, match="request failed"):
                await search_client.search("zelda")

    async def test_search_invalid_json(self, search_client: AlgoliaSearchClient) -> None:
        mock_response = httpx.Response(200, content=b"<html>oops</html>")

        with patch.object(search_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            with pytest.raises(UpstreamError, match="invalid JSON"):
                await search_client.search("zelda")

    async def test_search_missing_hits(self, search_client: AlgoliaSearchClient) -> None:
        mock_response = httpx.Response(200, json={"nbHits": 0})

        with patch.object(search_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            with pytest.raises(UpstreamError, match="unexpected response"):
                await search_client.search("zelda")


class TestClientLifecycle:
    """Tests for HTTP client management."""

    async def test_close_without_client(self, search_client: AlgoliaSearchClient) -> None:
        await search_client.close()
        assert search_client._client is None

    async def test_context_manager_closes_client(
        self, search_client: AlgoliaSearchClient
    ) -> None:
        async with search_client:
            assert search_client._client is not None
            assert not search_client._client.is_closed

        assert search_client._client is None
