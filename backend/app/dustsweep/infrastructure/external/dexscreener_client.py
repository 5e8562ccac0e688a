"""DexScreener client: DEX-pair index for token discovery and metadata.

DexScreener is public and unauthenticated. Two endpoints are used:
- /latest/dex/search?q={chain}: pairs ranked by the index, used to list
  top-liquidity tokens on chains without a bulk explorer
- /tokens/v1/{chain}/{addr,addr,...}: pairs for up to 30 token addresses,
  used to resolve symbol/name for addresses no other source knows

All lookups are best effort: a failed call yields an empty result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from app.dustsweep.application.interfaces.provider_client import ProviderClient
from app.dustsweep.application.interfaces.solana_sources import MintMetadataSource
from app.dustsweep.domain.entities.solana import MintMetadata
from app.dustsweep.domain.entities.token import TokenMetadata

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.dexscreener.com"
DEFAULT_TIMEOUT_SECONDS = 8.0

# Upper bound on addresses per /tokens/v1 request
MAX_ADDRESSES_PER_LOOKUP = 30


@dataclass(frozen=True)
class IndexedToken:
    """A token seen in the DEX-pair index.

    Attributes:
        address: Token contract (or mint) address as reported.
        symbol: Ticker symbol reported by the index.
        name: Display name reported by the index.
        liquidity_usd: Liquidity of the best pair the token appeared in.
    """

    address: str
    symbol: Optional[str]
    name: Optional[str]
    liquidity_usd: float = 0.0

    @property
    def metadata(self) -> TokenMetadata:
        return TokenMetadata(symbol=self.symbol or None, name=self.name or None)


class DexScreenerClient:
    """Best-effort client for the DexScreener public API."""

    def __init__(
        self,
        provider: ProviderClient,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._provider = provider
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def top_tokens(self, chain_id: str, limit: int = 100) -> list[IndexedToken]:
        """List tokens paired on `chain_id`, highest liquidity first.

        Both sides of every pair count; each address appears once, with
        the liquidity of its best pair.

        Args:
            chain_id: DexScreener chain identifier (e.g., "mantle").
            limit: Maximum number of tokens to return.

        Returns:
            Up to `limit` tokens, or an empty list on any failure.
        """
        url = f"{self._base_url}/latest/dex/search?q={chain_id}"
        result = await self._provider.call(url, timeout=self._timeout)
        if not result.ok:
            logger.warning(f"DEX index unavailable for {chain_id}: {result.error}")
            return []

        pairs = result.data.get("pairs") if isinstance(result.data, dict) else None
        if not isinstance(pairs, list):
            return []

        best: dict[str, IndexedToken] = {}
        for pair in pairs:
            if not isinstance(pair, dict) or pair.get("chainId") != chain_id:
                continue
            liquidity = _liquidity_usd(pair)
            for side in ("baseToken", "quoteToken"):
                token = _indexed_token(pair.get(side), liquidity)
                if token is None:
                    continue
                key = token.address.lower()
                if key not in best or best[key].liquidity_usd < liquidity:
                    best[key] = token

        ranked = sorted(best.values(), key=lambda t: t.liquidity_usd, reverse=True)
        return ranked[:limit]

    async def lookup_tokens(
        self,
        chain_id: str,
        addresses: Sequence[str],
    ) -> dict[str, IndexedToken]:
        """Resolve base-token metadata for up to 30 addresses.

        Args:
            chain_id: DexScreener chain identifier (e.g., "solana").
            addresses: Token addresses; at most MAX_ADDRESSES_PER_LOOKUP.

        Returns:
            Mapping of address (as requested) to the first pair's base
            token; empty on failure.
        """
        if not addresses:
            return {}
        if len(addresses) > MAX_ADDRESSES_PER_LOOKUP:
            raise ValueError(
                f"At most {MAX_ADDRESSES_PER_LOOKUP} addresses per lookup, got {len(addresses)}"
            )

        url = f"{self._base_url}/tokens/v1/{chain_id}/{','.join(addresses)}"
        result = await self._provider.call(url, timeout=self._timeout)
        if not result.ok:
            logger.warning(f"DEX pair lookup failed on {chain_id}: {result.error}")
            return {}
        if not isinstance(result.data, list):
            return {}

        requested = {a.lower(): a for a in addresses}
        found: dict[str, IndexedToken] = {}
        for pair in result.data:
            if not isinstance(pair, dict):
                continue
            token = _indexed_token(pair.get("baseToken"), _liquidity_usd(pair))
            if token is None:
                continue
            original = requested.get(token.address.lower())
            if original is not None and original not in found:
                found[original] = token
        return found


def _liquidity_usd(pair: dict[str, Any]) -> float:
    liquidity = pair.get("liquidity")
    if not isinstance(liquidity, dict):
        return 0.0
    try:
        return float(liquidity.get("usd") or 0.0)
    except (TypeError, ValueError):
        return 0.0


def _indexed_token(raw: Any, liquidity: float) -> Optional[IndexedToken]:
    if not isinstance(raw, dict):
        return None
    address = raw.get("address")
    if not isinstance(address, str) or not address:
        return None
    return IndexedToken(
        address=address,
        symbol=raw.get("symbol"),
        name=raw.get("name"),
        liquidity_usd=liquidity,
    )


class SolanaPairIndex(MintMetadataSource):
    """Mint metadata from the DEX-pair index (at most 30 mints per call)."""

    def __init__(self, client: DexScreenerClient, chain_id: str = "solana") -> None:
        self._client = client
        self._chain_id = chain_id

    async def lookup_mints(self, mints: Sequence[str]) -> dict[str, MintMetadata]:
        tokens = await self._client.lookup_tokens(self._chain_id, mints)
        return {
            mint: MintMetadata(symbol=token.symbol, name=token.name)
            for mint, token in tokens.items()
        }
