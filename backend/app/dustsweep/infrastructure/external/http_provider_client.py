"""httpx-based provider client for explorer, RPC and index endpoints.

Every call is bounded by `asyncio.wait_for`, which cancels the in-flight
request when the deadline passes. Timeouts, connection errors, non-2xx
statuses and unparseable bodies all come back as a failed ProviderResult.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from app.dustsweep.application.exceptions import DecodeError, TransportError
from app.dustsweep.application.interfaces.provider_client import ProviderClient, ProviderResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpProviderClient(ProviderClient):
    """ProviderClient implementation backed by a shared httpx AsyncClient.

    Attributes:
        _client: httpx AsyncClient reused for every call of one request.
        _owns_client: Whether close() should close the AsyncClient.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the provider client.

        Args:
            client: Optional pre-built AsyncClient (e.g., with a mock transport).
            timeout: Transport-level timeout for the AsyncClient it creates.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            follow_redirects=True,
        )

    async def call(
        self,
        endpoint: str,
        payload: Optional[Any] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> ProviderResult:
        """Issue a GET (no payload) or JSON POST with a hard deadline."""
        try:
            response = await asyncio.wait_for(self._send(endpoint, payload), timeout=timeout)
        except asyncio.TimeoutError:
            logger.debug(f"Timeout after {timeout}s calling {endpoint}")
            return ProviderResult.failure(endpoint, TransportError(endpoint, "timeout"))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Transport error calling {endpoint}: {e}")
            return ProviderResult.failure(
                endpoint, TransportError(endpoint, type(e).__name__)
            )

        status = response.status_code
        if not response.is_success:
            logger.debug(f"HTTP {status} from {endpoint}")
            return ProviderResult.failure(
                endpoint,
                TransportError(endpoint, f"HTTP {status}", status_code=status),
                status_code=status,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.debug(f"Malformed JSON from {endpoint}: {e}")
            return ProviderResult.failure(
                endpoint, DecodeError(endpoint, "malformed JSON"), status_code=status
            )

        return ProviderResult.success(endpoint, data, status_code=status)

    async def _send(self, endpoint: str, payload: Optional[Any]) -> httpx.Response:
        if payload is None:
            return await self._client.get(endpoint)
        return await self._client.post(endpoint, json=payload)

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpProviderClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
