# Ports for external integrations (ProviderClient, ChainStrategy, Solana sources)

from .chain_strategy import ChainStrategy
from .provider_client import ProviderClient, ProviderResult
from .solana_sources import MintMetadataSource, SolanaAccountSource

__all__ = [
    "ChainStrategy",
    "MintMetadataSource",
    "ProviderClient",
    "ProviderResult",
    "SolanaAccountSource",
]
