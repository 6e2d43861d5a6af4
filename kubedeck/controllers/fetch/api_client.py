"""HTTP client for the cluster API.

Used by the fetch engine for URL based view definitions. The base URL is the
live API base (usually a local ``kubectl proxy``), so requests carry no
credentials of their own.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from kubedeck.constants.timeouts import API_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Base exception for cluster API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiConnectionError(ApiClientError):
    """Raised when the API base cannot be reached."""


class ClusterApiClient:
    """Thin httpx wrapper returning response bodies as text."""

    def __init__(
        self,
        timeout: float = API_REQUEST_TIMEOUT,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional transport override, mainly for tests.
        """
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    def _build_client(self, **kwargs: Any) -> httpx.Client:
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.Client(timeout=httpx.Timeout(self.timeout), **kwargs)

    def _build_async_client(self, **kwargs: Any) -> httpx.AsyncClient:
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), **kwargs)

    @property
    def client(self) -> httpx.Client:
        """Get or create the blocking HTTP client."""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.debug("Cluster API client closed")

    @staticmethod
    def _check(response: httpx.Response) -> str:
        if response.status_code >= 400:
            raise ApiClientError(
                f"{response.request.method} {response.request.url} returned "
                f"{response.status_code}: {response.text.strip()}",
                status_code=response.status_code,
            )
        return response.text

    def get_text(self, url: str) -> str:
        """GET ``url`` and return the body.

        Raises:
            ApiConnectionError: The API base is unreachable, timed out or dropped
                the connection.
            ApiClientError: The API answered with an error status.
        """
        try:
            response = self.client.get(url)
        except httpx.TransportError as exc:
            raise ApiConnectionError(f"Cannot reach {url}: {exc}") from exc
        return self._check(response)

    async def aget_text(self, url: str) -> str:
        """Async variant of :meth:`get_text`."""
        try:
            async with self._build_async_client() as client:
                response = await client.get(url)
        except httpx.TransportError as exc:
            raise ApiConnectionError(f"Cannot reach {url}: {exc}") from exc
        return self._check(response)


__all__ = [
    "ApiClientError",
    "ApiConnectionError",
    "ClusterApiClient",
]
