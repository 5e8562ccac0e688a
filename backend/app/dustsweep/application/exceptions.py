"""Application-layer exceptions for scan error handling.

Only InvalidAddressError ever reaches a client as an error status. The
provider errors describe why one outbound call produced no data; they are
carried inside ProviderResult values or caught at the chain-strategy
boundary, never propagated to fail sibling chains.
"""

from typing import Optional


class ApplicationError(Exception):
    """Base class for all application-layer exceptions."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidAddressError(ApplicationError):
    """Raised when a wallet address is missing or syntactically invalid."""

    def __init__(self, address: Optional[str], family: str) -> None:
        if address:
            message = f"valid {family} address required"
        else:
            message = "addr required"
        super().__init__(message=message, code="INVALID_ADDRESS")
        self.address = address
        self.family = family


class ProviderError(ApplicationError):
    """Base class for failures of a single outbound data source."""

    def __init__(self, endpoint: str, reason: str, code: str) -> None:
        super().__init__(message=f"{endpoint}: {reason}", code=code)
        self.endpoint = endpoint
        self.reason = reason


class TransportError(ProviderError):
    """Raised when a call times out, fails on the network or returns non-2xx."""

    def __init__(
        self,
        endpoint: str,
        reason: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(endpoint, reason, code="TRANSPORT_ERROR")
        self.status_code = status_code

    @property
    def is_timeout(self) -> bool:
        return self.reason == "timeout"


class DecodeError(ProviderError):
    """Raised when a response body cannot be interpreted."""

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(endpoint, reason, code="DECODE_ERROR")


class AbiDecodeError(DecodeError):
    """Raised when an ABI-encoded contract return value is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__("abi", reason)


class ChainScanError(ApplicationError):
    """Raised inside a chain strategy when its data source is unusable."""

    def __init__(self, chain_slug: str, reason: str) -> None:
        super().__init__(
            message=f"{chain_slug}: {reason}",
            code="CHAIN_SCAN_FAILED",
        )
        self.chain_slug = chain_slug
        self.reason = reason
