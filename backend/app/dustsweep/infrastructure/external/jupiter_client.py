"""Jupiter token-list client for Solana mint metadata.

One GET resolves every mint at once:
    https://tokens.jup.ag/tokens?tags=verified,community,unknown&mint=a,b,c
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from app.dustsweep.application.interfaces.provider_client import ProviderClient
from app.dustsweep.application.interfaces.solana_sources import MintMetadataSource
from app.dustsweep.domain.entities.solana import MintMetadata

logger = logging.getLogger(__name__)

DEFAULT_TOKENS_URL = "https://tokens.jup.ag/tokens"
DEFAULT_TIMEOUT_SECONDS = 8.0
DEFAULT_TAGS = ("verified", "community", "unknown")


@dataclass(frozen=True)
class JupiterToken:
    """Verified-index entry for one mint."""

    address: str
    symbol: Optional[str]
    name: Optional[str]
    logo_uri: Optional[str] = None


class JupiterClient(MintMetadataSource):
    """Best-effort client for the Jupiter verified-token index."""

    def __init__(
        self,
        provider: ProviderClient,
        tokens_url: str = DEFAULT_TOKENS_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._provider = provider
        self._tokens_url = tokens_url
        self._timeout = timeout

    async def lookup(self, mints: Sequence[str]) -> dict[str, JupiterToken]:
        """Resolve metadata for a batch of mints in one request.

        Returns:
            Mapping of mint to JupiterToken for the mints the index knows;
            empty on failure.
        """
        if not mints:
            return {}

        url = f"{self._tokens_url}?tags={','.join(DEFAULT_TAGS)}&mint={','.join(mints)}"
        result = await self._provider.call(url, timeout=self._timeout)
        if not result.ok:
            logger.warning(f"Jupiter token lookup failed: {result.error}")
            return {}
        if not isinstance(result.data, list):
            return {}

        wanted = set(mints)
        found: dict[str, JupiterToken] = {}
        for entry in result.data:
            if not isinstance(entry, dict):
                continue
            address = entry.get("address")
            if address in wanted:
                found[address] = JupiterToken(
                    address=address,
                    symbol=entry.get("symbol"),
                    name=entry.get("name"),
                    logo_uri=entry.get("logoURI") or None,
                )
        return found

    async def lookup_mints(self, mints: Sequence[str]) -> dict[str, MintMetadata]:
        tokens = await self.lookup(mints)
        return {
            mint: MintMetadata(symbol=token.symbol, name=token.name, image=token.logo_uri)
            for mint, token in tokens.items()
        }
