"""Provider client interface for single outbound JSON requests."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from app.dustsweep.application.exceptions import ProviderError


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one outbound call: parsed JSON data or a typed error.

    Attributes:
        endpoint: The URL that was called.
        data: Decoded JSON body on success.
        error: TransportError or DecodeError on failure.
        status_code: HTTP status, when a response was received.
    """

    endpoint: str
    data: Any = None
    error: Optional[ProviderError] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, endpoint: str, data: Any, status_code: int = 200) -> "ProviderResult":
        return cls(endpoint=endpoint, data=data, status_code=status_code)

    @classmethod
    def failure(
        cls,
        endpoint: str,
        error: ProviderError,
        status_code: Optional[int] = None,
    ) -> "ProviderResult":
        return cls(endpoint=endpoint, error=error, status_code=status_code)


class ProviderClient(ABC):
    """Abstract base class for outbound request transports.

    Implementations enforce a hard per-call timeout and convert timeouts,
    network failures, non-2xx statuses and unparseable bodies into a
    failed ProviderResult instead of raising. They never retry: only the
    caller knows whether another endpoint should be tried.
    """

    @abstractmethod
    async def call(
        self,
        endpoint: str,
        payload: Optional[Any] = None,
        timeout: float = 10.0,
    ) -> ProviderResult:
        """Issue one request.

        Args:
            endpoint: Absolute URL to call.
            payload: JSON body to POST; when None a GET is issued.
            timeout: Hard limit in seconds for the whole call.

        Returns:
            A ProviderResult carrying either data or a typed error.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
