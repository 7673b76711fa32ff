"""Tests for the blob store client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from game_catalog.errors import UpstreamError
from game_catalog.services.blobs import BlobStoreClient


@pytest.fixture
def blob_store() -> BlobStoreClient:
    """Create a blob store client for testing."""
    return BlobStoreClient(
        base_url="https://blobs.example.test/store/",
        token="test-blob-token",
        public_url="https://cdn.example.test/",
    )


class TestBlobStoreClientInit:
    """Tests for blob store client initialization."""

    def test_default_headers(self, blob_store: BlobStoreClient) -> None:
        assert blob_store.default_headers["Authorization"] == "Bearer test-blob-token"

    def test_public_url_defaults_to_base_url(self) -> None:
        client = BlobStoreClient(base_url="https://blobs.example.test/store", token="t")
        url = client.get_public_url("games/a.jpg")
        assert url == "https://blobs.example.test/store/games/a.jpg"

    def test_public_url_quotes_key(self, blob_store: BlobStoreClient) -> None:
        url = blob_store.get_public_url("games/1-my cover.jpg")
        assert url == "https://cdn.example.test/games/1-my%20cover.jpg"

    def test_not_configured(self) -> None:
        assert not BlobStoreClient(base_url="", token="").is_configured


class TestUpload:
    """Tests for uploading blobs."""

    async def test_upload_returns_public_url(self, blob_store: BlobStoreClient) -> None:
        mock_response = httpx.Response(204)

        with patch.object(blob_store, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            url = await blob_store.upload("games/1-cover.jpg", b"jpeg-bytes", "image/jpeg")

            assert url == "https://cdn.example.test/games/1-cover.jpg"

            call_args = mock_client.request.call_args
            assert call_args.kwargs["method"] == "PUT"
            assert call_args.kwargs["url"] == "games/1-cover.jpg"
            assert call_args.kwargs["content"] == b"jpeg-bytes"
            assert call_args.kwargs["headers"]["Content-Type"] == "image/jpeg"

    async def test_upload_prefers_url_from_store(self, blob_store: BlobStoreClient) -> None:
        mock_response = httpx.Response(200, json={"url": "https://signed.example.test/abc"})

        with patch.object(blob_store, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            url = await blob_store.upload("games/1-cover.jpg", b"jpeg-bytes", "image/jpeg")

            assert url == "https://signed.example.test/abc"

    async def test_upload_http_error(self, blob_store: BlobStoreClient) -> None:
        mock_response = httpx.Response(401, json={"error": "bad token"})

        with patch.object(blob_store, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            with pytest.raises(UpstreamError, match="HTTP 401"):
                await blob_store.upload("games/1-cover.jpg", b"jpeg-bytes", "image/jpeg")

    async def test_upload_not_configured(self) -> None:
        client = BlobStoreClient(base_url="", token="")

        with pytest.raises(UpstreamError, match="not configured"):
            await client.upload("games/1-cover.jpg", b"jpeg-bytes")
