"""EVM JSON-RPC client for raw ERC-20 contract reads.

A chain's RPC endpoints are alternates serving the same chain state, so
each read walks the endpoint list in order and stops at the first
endpoint that returns a decodable answer. A decoded zero balance is such
an answer: remaining endpoints are not consulted.
"""

import logging
from typing import Callable, Optional, Sequence, TypeVar

from app.dustsweep.application.exceptions import AbiDecodeError
from app.dustsweep.application.interfaces.provider_client import ProviderClient
from app.dustsweep.infrastructure.external.abi import (
    DECIMALS_SELECTOR,
    SYMBOL_SELECTOR,
    balance_of_calldata,
    decode_decimals,
    decode_string,
    decode_uint256,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CALL_TIMEOUT_SECONDS = 5.0
DEFAULT_METADATA_TIMEOUT_SECONDS = 3.0

class EvmRpcClient:
    """Issues `eth_call` reads through a ProviderClient.

    Attributes:
        _provider: Transport used for every JSON-RPC request.
        _call_timeout: Deadline for balance reads.
        _metadata_timeout: Deadline for decimals/symbol reads.
    """

    def __init__(
        self,
        provider: ProviderClient,
        call_timeout: float = DEFAULT_CALL_TIMEOUT_SECONDS,
        metadata_timeout: float = DEFAULT_METADATA_TIMEOUT_SECONDS,
    ) -> None:
        self._provider = provider
        self._call_timeout = call_timeout
        self._metadata_timeout = metadata_timeout

    async def eth_call(
        self,
        rpc_url: str,
        to: str,
        data: str,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        """Run one `eth_call` against the latest block.

        Returns:
            The hex result, or None on transport failure, JSON-RPC error,
            or an empty (`0x`) result.
        """
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "eth_call",
            "params": [{"to": to, "data": data}, "latest"],
        }
        result = await self._provider.call(
            rpc_url, payload, timeout=timeout or self._call_timeout
        )
        if not result.ok:
            logger.debug(f"eth_call to {to} via {rpc_url} failed: {result.error}")
            return None

        body = result.data
        if not isinstance(body, dict) or body.get("error"):
            return None

        value = body.get("result")
        if not isinstance(value, str) or value in ("", "0x"):
            return None
        return value

    async def balance_of(
        self,
        rpc_urls: Sequence[str],
        token: str,
        wallet: str,
    ) -> Optional[int]:
        """Read `balanceOf(wallet)` on `token`.

        Returns:
            The raw integer balance from the first endpoint that answered
            (zero included), or None if no endpoint answered.
        """
        return await self._first_decoded(
            rpc_urls, token, balance_of_calldata(wallet), decode_uint256, self._call_timeout
        )

    async def read_decimals(self, rpc_urls: Sequence[str], token: str) -> Optional[int]:
        """Read `decimals()` on `token`."""
        return await self._first_decoded(
            rpc_urls, token, DECIMALS_SELECTOR, decode_decimals, self._metadata_timeout
        )

    async def read_symbol(self, rpc_urls: Sequence[str], token: str) -> Optional[str]:
        """Read `symbol()` on `token`."""
        return await self._first_decoded(
            rpc_urls, token, SYMBOL_SELECTOR, decode_string, self._metadata_timeout
        )

    async def _first_decoded(
        self,
        rpc_urls: Sequence[str],
        token: str,
        data: str,
        decoder: Callable[[str], T],
        timeout: float,
    ) -> Optional[T]:
        for rpc_url in rpc_urls:
            value = await self.eth_call(rpc_url, token, data, timeout)
            if value is None:
                continue
            try:
                return decoder(value)
            except AbiDecodeError as e:
                logger.debug(f"Undecodable result from {token} via {rpc_url}: {e}")
        return None
