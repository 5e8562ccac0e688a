# Domain layer - pure scanning rules, no framework dependencies

from app.dustsweep.domain.chains import (
    DEFAULT_CHAINS,
    EXPLORER_CHAINS,
    RPC_CHAINS,
    get_chain,
    get_chains_by_kind,
)
from app.dustsweep.domain.entities.chain import ChainDescriptor, KnownToken, ProviderKind

__all__ = [
    # Chain entities and enums
    "ChainDescriptor",
    "KnownToken",
    "ProviderKind",
    # Chain registry
    "DEFAULT_CHAINS",
    "EXPLORER_CHAINS",
    "RPC_CHAINS",
    "get_chain",
    "get_chains_by_kind",
]
