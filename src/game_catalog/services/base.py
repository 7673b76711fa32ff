"""Shared HTTP plumbing for the search index and blob store clients."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from game_catalog.errors import UpstreamError

logger = logging.getLogger(__name__)

JSONObject = dict[str, Any]


class BaseAPIClient(ABC):
    """Lazily-connected JSON client for one upstream service.

    Transport failures, HTTP error statuses and unreadable bodies all
    surface as UpstreamError. Requests are never retried.
    """

    service_name: str = "upstream"

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        """Set up the client without opening a connection.

        Args:
            base_url: Root URL every endpoint is resolved against.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def default_headers(self) -> dict[str, str]:
        """Headers sent with every request, credentials included."""
        ...

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the shared connection pool, opening it on first use."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.default_headers,
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Release the connection pool if one is open."""
        client, self._client = self._client, None
        if client is not None and not client.is_closed:
            await client.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> JSONObject:
        """Send one request and decode its JSON object body.

        Args:
            method: HTTP verb.
            endpoint: Path relative to ``base_url``.
            params: Query string parameters.
            headers: Extra headers on top of ``default_headers``.
            content: Raw request body.

        Returns:
            The decoded body, or an empty dict for an empty body.

        Raises:
            UpstreamError: If the service cannot be reached or answers with
                an error status or a body that is not a JSON object.
        """
        client = await self._get_client()

        try:
            response = await client.request(
                method=method,
                url=endpoint.lstrip("/"),
                params=params,
                headers=headers,
                content=content,
            )
        except httpx.TimeoutException as e:
            logger.warning("%s %s %s timed out: %s", self.service_name, method, endpoint, e)
            raise UpstreamError(f"{self.service_name} request timed out") from e
        except httpx.RequestError as e:
            logger.warning("%s %s %s failed: %s", self.service_name, method, endpoint, e)
            raise UpstreamError(f"{self.service_name} request failed") from e

        return self._decode(response)

    def _decode(self, response: httpx.Response) -> JSONObject:
        if response.is_error:
            logger.warning(
                "%s answered %s: %s",
                self.service_name,
                response.status_code,
                response.text[:200],
            )
            raise UpstreamError(f"{self.service_name} returned HTTP {response.status_code}")

        if not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f"{self.service_name} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise UpstreamError(f"{self.service_name} returned an unexpected response")
        return data

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> JSONObject:
        return await self._request("GET", endpoint, params=params)

    async def put(
        self,
        endpoint: str,
        content: bytes,
        headers: dict[str, str] | None = None,
    ) -> JSONObject:
        return await self._request("PUT", endpoint, headers=headers, content=content)

    async def __aenter__(self) -> "BaseAPIClient":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
