"""Token metadata resolution across tiered sources.

Sources are consulted cheapest first and only while a field is still
missing:

1. metadata embedded in the payload that reported the balance
2. the chain's curated KnownToken list
3. the DEX-pair index (a hint supplied by the caller, otherwise a lookup)
4. raw `decimals()` / `symbol()` contract calls over the chain's RPCs

Unresolved decimals default to 18 and unresolved symbols to "UNK".
Results are memoized per resolver instance, and one instance serves one
scan request.
"""

import logging
from typing import Optional

from app.dustsweep.domain.entities.chain import ChainDescriptor
from app.dustsweep.domain.entities.token import TokenMetadata
from app.dustsweep.infrastructure.external.dexscreener_client import DexScreenerClient
from app.dustsweep.infrastructure.external.evm_rpc_client import EvmRpcClient

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 18
DEFAULT_SYMBOL = "UNK"
DEFAULT_NAME = "Unknown"


class TokenMetadataResolver:
    """Resolves symbol/name/decimals for contracts, memoized per request.

    Attributes:
        _rpc: Client for raw contract reads (last-resort tier).
        _index: Optional DEX-pair index client (third tier).
        _cache: Resolved metadata keyed by (chain slug, lower-cased address).
    """

    def __init__(
        self,
        rpc_client: EvmRpcClient,
        index_client: Optional[DexScreenerClient] = None,
    ) -> None:
        self._rpc = rpc_client
        self._index = index_client
        self._cache: dict[tuple[str, str], TokenMetadata] = {}

    async def resolve(
        self,
        chain: ChainDescriptor,
        address: str,
        embedded: Optional[TokenMetadata] = None,
        hint: Optional[TokenMetadata] = None,
    ) -> TokenMetadata:
        """Resolve complete metadata for one contract.

        Args:
            chain: Chain the contract lives on.
            address: Contract address in any letter case.
            embedded: Metadata carried by the balance payload itself.
            hint: Metadata already obtained from the DEX-pair index.

        Returns:
            Metadata with every field set (defaults applied).
        """
        key = (chain.slug, address.lower())
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        metadata = embedded or TokenMetadata()

        known = chain.find_known_token(address)
        if known is not None:
            metadata = metadata.merged_with(
                TokenMetadata(symbol=known.symbol, name=known.name, decimals=known.decimals)
            )

        if not metadata.is_complete:
            metadata = metadata.merged_with(hint)
            if metadata.symbol is None and hint is None:
                metadata = metadata.merged_with(await self._lookup_index(chain, address))

        if chain.rpc_urls and (metadata.decimals is None or metadata.symbol is None):
            metadata = metadata.merged_with(await self._read_contract(chain, address, metadata))

        resolved = TokenMetadata(
            symbol=metadata.symbol or DEFAULT_SYMBOL,
            name=metadata.name or metadata.symbol or DEFAULT_NAME,
            decimals=metadata.decimals if metadata.decimals is not None else DEFAULT_DECIMALS,
        )
        self._cache[key] = resolved
        return resolved

    async def _lookup_index(self, chain: ChainDescriptor, address: str) -> Optional[TokenMetadata]:
        if self._index is None:
            return None
        found = await self._index.lookup_tokens(chain.index_id, [address])
        token = found.get(address)
        return token.metadata if token is not None else None

    async def _read_contract(
        self,
        chain: ChainDescriptor,
        address: str,
        current: TokenMetadata,
    ) -> TokenMetadata:
        decimals = current.decimals
        if decimals is None:
            decimals = await self._rpc.read_decimals(chain.rpc_urls, address)
        symbol = current.symbol
        if symbol is None:
            symbol = await self._rpc.read_symbol(chain.rpc_urls, address)
        if decimals is None or symbol is None:
            logger.debug(f"Contract reads left {chain.slug}:{address} partially unresolved")
        return TokenMetadata(symbol=symbol, decimals=decimals)
