"""Algolia search index client service."""

from typing import Any

from game_catalog.config import Settings
from game_catalog.errors import UpstreamError
from game_catalog.services.base import BaseAPIClient


class AlgoliaSearchClient(BaseAPIClient):
    """Client for keyword search over the hosted Algolia games index.

    The index is kept in sync out of band; this client only reads from it.
    """

    service_name = "Search index"

    def __init__(
        self,
        app_id: str,
        api_key: str,
        index_name: str = "videogames",
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the Algolia client.

        Args:
            app_id: Algolia application ID.
            api_key: Search-only API key.
            index_name: Name of the games index.
            base_url: Override for the DSN host, derived from app_id by default.
            timeout: Request timeout in seconds.
        """
        self._app_id = app_id
        self._api_key = api_key
        self.index_name = index_name
        base = base_url or (f"https://{app_id}-dsn.algolia.net/1" if app_id else "")
        super().__init__(base_url=base, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AlgoliaSearchClient":
        return cls(
            app_id=settings.algolia_app_id,
            api_key=settings.algolia_api_key,
            index_name=settings.algolia_index_name,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._app_id and self._api_key)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers including Algolia credentials."""
        return {
            "X-Algolia-Application-Id": self._app_id,
            "X-Algolia-API-Key": self._api_key,
            "Accept": "application/json",
        }

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Search the games index.

        Args:
            query: Free-text search query.

        Returns:
            The raw hits, in the index's relevance order.

        Raises:
            UpstreamError: If the index is not configured or the request fails.
        """
        if not self.is_configured:
            raise UpstreamError("Search index is not configured")

        data = await self.get(f"/indexes/{self.index_name}", params={"query": query})
        hits = data.get("hits")
        if not isinstance(hits, list):
            raise UpstreamError("Search index returned an unexpected response")
        return hits
