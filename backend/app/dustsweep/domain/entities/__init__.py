"""Domain entities for the dust-sweep scanner.

This module exports the core entities used throughout the domain layer.
"""

from app.dustsweep.domain.entities.aggregation import AggregationResult, ChainScanReport
from app.dustsweep.domain.entities.chain import ChainDescriptor, KnownToken, ProviderKind
from app.dustsweep.domain.entities.solana import MintMetadata, SolanaTokenAccount, SolanaTokenRecord
from app.dustsweep.domain.entities.token import CandidateToken, TokenMetadata, TokenRecord

__all__ = [
    "AggregationResult",
    "CandidateToken",
    "ChainDescriptor",
    "ChainScanReport",
    "KnownToken",
    "MintMetadata",
    "ProviderKind",
    "SolanaTokenAccount",
    "SolanaTokenRecord",
    "TokenMetadata",
    "TokenRecord",
]
