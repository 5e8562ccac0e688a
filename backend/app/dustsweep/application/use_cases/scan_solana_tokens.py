"""Use case for reading a Solana wallet's SOL and SPL token holdings.

Implements the Solana collector by orchestrating:
- Address validation (no I/O for malformed input)
- Concurrent native-balance and token-account queries for both token
  programs
- Merge-by-mint of the returned accounts
- Best-effort metadata decoration: verified index first, DEX-pair index
  for whatever is still unnamed
"""

import asyncio
import logging
from typing import Optional, Sequence

from app.dustsweep.application.dto.token_dto import SolanaTokenDTO, SolanaTokensDTO
from app.dustsweep.application.exceptions import InvalidAddressError
from app.dustsweep.application.interfaces.solana_sources import (
    MintMetadataSource,
    SolanaAccountSource,
)
from app.dustsweep.domain.entities.solana import (
    TOKEN_2022_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    MintMetadata,
    SolanaTokenRecord,
)
from app.dustsweep.domain.services.balance import DEFAULT_DUST_THRESHOLD
from app.dustsweep.domain.services.solana_merge import merge_token_accounts
from app.dustsweep.domain.value_objects.wallet_address import SolanaAddress

logger = logging.getLogger(__name__)

DEFAULT_METADATA_BATCH_SIZE = 30


class ScanSolanaTokensUseCase:
    """Application service for a single Solana wallet scan."""

    def __init__(
        self,
        accounts: SolanaAccountSource,
        verified_index: Optional[MintMetadataSource] = None,
        pair_index: Optional[MintMetadataSource] = None,
        dust_threshold: float = DEFAULT_DUST_THRESHOLD,
        metadata_batch_size: int = DEFAULT_METADATA_BATCH_SIZE,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts: Source of native balance and token accounts.
            verified_index: Primary mint metadata source, queried once.
            pair_index: Fallback metadata source for mints still unnamed,
                queried in batches of `metadata_batch_size`.
            dust_threshold: Minimum per-account ui-amount to keep.
            metadata_batch_size: Mints per fallback lookup.
        """
        self._accounts = accounts
        self._verified_index = verified_index
        self._pair_index = pair_index
        self._dust_threshold = dust_threshold
        self._metadata_batch_size = metadata_batch_size

    async def execute(self, address: Optional[str]) -> SolanaTokensDTO:
        """Scan the wallet.

        Args:
            address: Base58 wallet address as supplied by the caller.

        Returns:
            SolanaTokensDTO; `error` names the queries that failed, if any.

        Raises:
            InvalidAddressError: If the address is missing or malformed.
        """
        wallet = self.validate_address(address)

        sol_balance, legacy, extensions = await asyncio.gather(
            self._accounts.get_balance(wallet.value),
            self._accounts.get_token_accounts(wallet.value, TOKEN_PROGRAM_ID),
            self._accounts.get_token_accounts(wallet.value, TOKEN_2022_PROGRAM_ID),
        )

        failed = [
            name
            for name, value in (
                ("balance", sol_balance),
                ("token accounts", legacy),
                ("token-2022 accounts", extensions),
            )
            if value is None
        ]

        all_accounts = (legacy or []) + (extensions or [])
        merged = merge_token_accounts(all_accounts, self._dust_threshold)
        records = list(merged.values())
        await self._decorate(records)

        logger.info(
            f"Solana scan complete: {len(records)} mints from {len(all_accounts)} accounts"
        )
        return SolanaTokensDTO(
            sol_balance=sol_balance or 0.0,
            tokens=[SolanaTokenDTO.from_record(r) for r in records],
            total_accounts=len(all_accounts),
            error=f"failed to fetch {', '.join(failed)}" if failed else None,
        )

    @staticmethod
    def validate_address(address: Optional[str]) -> SolanaAddress:
        """Validate the wallet address before any network I/O."""
        if not address:
            raise InvalidAddressError(address, "Solana")
        try:
            return SolanaAddress(address)
        except ValueError as e:
            raise InvalidAddressError(address, "Solana") from e

    async def _decorate(self, records: Sequence[SolanaTokenRecord]) -> None:
        """Fill symbol/name/image in place; failures leave fields unset."""
        if not records:
            return

        by_mint = {r.mint: r for r in records}
        if self._verified_index is not None:
            found = await self._lookup(self._verified_index, list(by_mint))
            _apply(by_mint, found)

        if self._pair_index is None:
            return
        unnamed = [mint for mint, r in by_mint.items() if not r.is_named]
        for i in range(0, len(unnamed), self._metadata_batch_size):
            batch = unnamed[i : i + self._metadata_batch_size]
            found = await self._lookup(self._pair_index, batch)
            _apply(by_mint, found)

    @staticmethod
    async def _lookup(
        source: MintMetadataSource,
        mints: list[str],
    ) -> dict[str, MintMetadata]:
        try:
            return await source.lookup_mints(mints)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Mint metadata lookup failed: {e}")
            return {}


def _apply(by_mint: dict[str, SolanaTokenRecord], found: dict[str, MintMetadata]) -> None:
    for mint, metadata in found.items():
        record = by_mint.get(mint)
        if record is None or record.is_named:
            continue
        record.symbol = metadata.symbol or None
        record.name = metadata.name or None
        record.image = record.image or metadata.image
