"""Ports for the Solana balance and mint-metadata sources."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from app.dustsweep.domain.entities.solana import MintMetadata, SolanaTokenAccount


class SolanaAccountSource(ABC):
    """Account-model queries against a Solana node.

    Both methods return None on failure so callers can distinguish an
    unreachable node from an empty wallet.
    """

    @abstractmethod
    async def get_balance(self, address: str) -> Optional[float]:
        """Native balance in SOL."""
        ...

    @abstractmethod
    async def get_token_accounts(
        self,
        address: str,
        program_id: str,
    ) -> Optional[list[SolanaTokenAccount]]:
        """Token accounts owned by `address` under one token program."""
        ...


class MintMetadataSource(ABC):
    """Best-effort lookup of symbol/name/image for a batch of mints."""

    @abstractmethod
    async def lookup_mints(self, mints: Sequence[str]) -> dict[str, MintMetadata]:
        """Resolve the mints this source knows; empty on failure."""
        ...
