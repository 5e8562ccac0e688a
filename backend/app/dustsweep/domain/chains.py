"""Supported EVM chains and their balance-discovery configuration.

This module is the source of truth for:
- Which chains a wallet scan covers
- Which discovery strategy each chain uses
- The curated token lists probed on chains without a bulk explorer

Chains with a Blockscout instance use the explorer-bulk strategy, since one
call returns every token balance. Chains without one fall back to RPC
probing: either the curated list alone or the curated list merged with a
DEX-pair index of top-liquidity tokens.
"""

from typing import Optional

from app.dustsweep.domain.entities.chain import ChainDescriptor, KnownToken, ProviderKind

# ==============================================================================
# EXPLORER-BULK CHAINS (Blockscout, no API key)
# ==============================================================================

EXPLORER_CHAINS: tuple[ChainDescriptor, ...] = (
    ChainDescriptor(
        name="Ethereum",
        slug="ethereum",
        provider_kind=ProviderKind.EXPLORER,
        explorer_url="https://eth.blockscout.com",
    ),
    ChainDescriptor(
        name="Arbitrum",
        slug="arbitrum",
        provider_kind=ProviderKind.EXPLORER,
        explorer_url="https://arbitrum.blockscout.com",
    ),
    ChainDescriptor(
        name="Base",
        slug="base",
        provider_kind=ProviderKind.EXPLORER,
        explorer_url="https://base.blockscout.com",
    ),
    ChainDescriptor(
        name="Optimism",
        slug="optimism",
        provider_kind=ProviderKind.EXPLORER,
        explorer_url="https://optimism.blockscout.com",
    ),
    ChainDescriptor(
        name="Polygon",
        slug="polygon",
        provider_kind=ProviderKind.EXPLORER,
        explorer_url="https://polygon.blockscout.com",
    ),
    ChainDescriptor(
        name="BSC",
        slug="bsc",
        provider_kind=ProviderKind.EXPLORER,
        explorer_url="https://bsc.blockscout.com",
    ),
    ChainDescriptor(
        name="Blast",
        slug="blast",
        provider_kind=ProviderKind.EXPLORER,
        explorer_url="https://blast.blockscout.com",
    ),
)

# ==============================================================================
# RPC CHAINS (no bulk explorer)
# ==============================================================================

RPC_CHAINS: tuple[ChainDescriptor, ...] = (
    ChainDescriptor(
        name="Mantle",
        slug="mantle",
        provider_kind=ProviderKind.RPC_DISCOVERY,
        rpc_urls=("https://rpc.mantle.xyz",),
        known_tokens=(
            KnownToken("0x09bc4e0d864854c6afb6eb9a9cdf58ac190d0df9", "USDC", 6, "USD Coin"),
            KnownToken("0x201eba5cc46d216ce6dc03f6a759e8e766e956ae", "USDT", 6, "Tether USD"),
            KnownToken("0x78c1b0c915c4faa5fffa6cabf0219da63d7f4cb8", "WMNT", 18, "Wrapped Mantle"),
        ),
        index_chain_id="mantle",
    ),
    ChainDescriptor(
        name="Merlin",
        slug="merlinchain",
        provider_kind=ProviderKind.RPC_KNOWN,
        rpc_urls=("https://rpc.merlinchain.io",),
        known_tokens=(
            KnownToken("0x480e158395cc5b41e5584347c495584ca2caf78d", "MERL", 8),
            KnownToken("0xb880fd278198bd590252621d4cd071b1842e9bcd", "M-BTC", 18),
            KnownToken("0x5c46bff4b38dc1eae09c5bac65f31a150b940064", "MERL", 18),
        ),
    ),
)

DEFAULT_CHAINS: tuple[ChainDescriptor, ...] = EXPLORER_CHAINS + RPC_CHAINS


def get_chain(slug: str) -> Optional[ChainDescriptor]:
    """Look up a configured chain by slug (case-insensitive)."""
    slug = slug.lower()
    for chain in DEFAULT_CHAINS:
        if chain.slug == slug:
            return chain
    return None


def get_chains_by_kind(kind: ProviderKind) -> list[ChainDescriptor]:
    """List configured chains that use the given discovery strategy."""
    return [chain for chain in DEFAULT_CHAINS if chain.provider_kind == kind]
