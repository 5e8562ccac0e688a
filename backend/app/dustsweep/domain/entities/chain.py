"""Chain configuration entities: how each chain's balances are discovered."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProviderKind(Enum):
    """Balance-discovery approach available for a chain.

    EXPLORER:
        - A block explorer returns every token balance for an address in one call
        - Token metadata and exchange rates arrive embedded in the payload
        - Results pass through the spam classifier

    RPC_KNOWN:
        - No bulk explorer; only the curated token list is probed
        - One balanceOf call per curated token, RPC endpoints tried in order

    RPC_DISCOVERY:
        - Curated list merged with a DEX-pair index of top-liquidity tokens
        - balanceOf calls fanned out in bounded batches
    """

    EXPLORER = "explorer"
    RPC_KNOWN = "rpc-known"
    RPC_DISCOVERY = "rpc-discovery"


@dataclass(frozen=True)
class KnownToken:
    """A curated, high-confidence token on one chain.

    Attributes:
        address: Contract address (compared case-insensitively).
        symbol: Ticker symbol.
        decimals: Number of decimal places used by the contract.
        name: Optional display name.
    """

    address: str
    symbol: str
    decimals: int
    name: Optional[str] = None

    def matches(self, address: str) -> bool:
        """Check whether this token lives at the given contract address."""
        return self.address.lower() == address.lower()


@dataclass(frozen=True)
class ChainDescriptor:
    """Immutable description of one EVM chain and its data sources.

    Attributes:
        name: Display name (e.g., "Ethereum").
        slug: Short identifier (e.g., "ethereum").
        provider_kind: Which discovery strategy applies to this chain.
        explorer_url: Base URL of the bulk-balance explorer, if any.
        rpc_urls: RPC endpoints, tried in order until one answers.
        known_tokens: Curated token list for this chain.
        index_chain_id: Chain identifier used by the DEX-pair index
            (defaults to the slug).
    """

    name: str
    slug: str
    provider_kind: ProviderKind
    explorer_url: Optional[str] = None
    rpc_urls: tuple[str, ...] = ()
    known_tokens: tuple[KnownToken, ...] = ()
    index_chain_id: Optional[str] = None

    @property
    def index_id(self) -> str:
        """Chain identifier to use against the DEX-pair index."""
        return self.index_chain_id or self.slug

    def find_known_token(self, address: str) -> Optional[KnownToken]:
        """Look up a curated token by contract address.

        Args:
            address: Contract address in any letter case.

        Returns:
            The matching KnownToken, or None if the address is not curated.
        """
        for token in self.known_tokens:
            if token.matches(address):
                return token
        return None
