"""Blob store client for game cover images."""

from urllib.parse import quote

from game_catalog.config import Settings
from game_catalog.errors import UpstreamError
from game_catalog.services.base import BaseAPIClient


class BlobStoreClient(BaseAPIClient):
    """Uploads blobs over HTTP and returns their public URL.

    Objects are written with ``PUT {base_url}/{key}`` using bearer token
    authentication.
    """

    service_name = "Blob store"

    def __init__(
        self,
        base_url: str,
        token: str,
        public_url: str = "",
        timeout: float = 30.0,
    ) -> None:
        """Initialize the blob store client.

        Args:
            base_url: Upload endpoint for the store.
            token: Bearer token for write access.
            public_url: Base URL blobs are served from. Defaults to base_url.
            timeout: Request timeout in seconds.
        """
        self._token = token
        super().__init__(base_url=base_url, timeout=timeout)
        self.public_url = (public_url or base_url).rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "BlobStoreClient":
        return cls(
            base_url=settings.blob_store_url,
            token=settings.blob_store_token,
            public_url=settings.blob_public_url,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self._token)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers including Bearer token authentication."""
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }

    def get_public_url(self, key: str) -> str:
        return f"{self.public_url}/{quote(key)}"

    async def upload(
        self,
        key: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Store a blob publicly under ``key``.

        Returns:
            The public URL of the stored blob. A ``url`` returned by the store
            takes precedence over the configured public base URL.

        Raises:
            UpstreamError: If the store is not configured or the upload fails.
        """
        if not self.is_configured:
            raise UpstreamError("Blob store is not configured")

        data = await self.put(
            f"/{quote(key)}",
            content=content,
            headers={"Content-Type": content_type},
        )
        url = data.get("url")
        if isinstance(url, str) and url:
            return url
        return self.get_public_url(key)
