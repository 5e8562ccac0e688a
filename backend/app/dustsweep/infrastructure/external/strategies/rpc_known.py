"""Curated-RPC strategy: probe only the chain's KnownToken list.

Used on chains without a bulk explorer. Each curated token gets one
`balanceOf` read; its RPC endpoints are tried in order and the first
definitive answer, zero included, ends the search for that token.
"""

import asyncio
import logging
from typing import Optional

from app.dustsweep.application.exceptions import ChainScanError
from app.dustsweep.application.interfaces.chain_strategy import ChainStrategy
from app.dustsweep.domain.entities.chain import ChainDescriptor, KnownToken, ProviderKind
from app.dustsweep.domain.entities.token import CandidateToken, TokenRecord
from app.dustsweep.domain.services.balance import is_dust, normalize_balance
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress
from app.dustsweep.infrastructure.external.strategies.context import ScanContext

logger = logging.getLogger(__name__)


class CuratedRpcStrategy(ChainStrategy):
    """Checks curated tokens one `balanceOf` call at a time per token."""

    def __init__(self, chain: ChainDescriptor, context: ScanContext) -> None:
        super().__init__(chain)
        self._context = context

    @property
    def provider_kind(self) -> ProviderKind:
        return ProviderKind.RPC_KNOWN

    async def scan(self, wallet: EvmAddress) -> list[TokenRecord]:
        if not self.chain.rpc_urls:
            raise ChainScanError(self.chain.slug, "no RPC endpoints configured")

        candidates = await asyncio.gather(
            *(self._check_token(token, wallet) for token in self.chain.known_tokens)
        )
        records = [
            TokenRecord.from_candidate(c, self.chain) for c in candidates if c is not None
        ]
        logger.info(
            f"{self.chain.name}: {len(records)}/{len(self.chain.known_tokens)} curated tokens held"
        )
        return records

    async def _check_token(self, token: KnownToken, wallet: EvmAddress) -> Optional[CandidateToken]:
        raw = await self._context.rpc.balance_of(self.chain.rpc_urls, token.address, wallet.value)
        if not raw:
            return None

        balance = normalize_balance(raw, token.decimals)
        if is_dust(balance, self._context.dust_threshold):
            return None

        metadata = await self._context.resolver.resolve(self.chain, token.address)
        return CandidateToken(
            contract_address=token.address,
            balance=balance,
            decimals=token.decimals,
            symbol=metadata.symbol,
            name=metadata.name,
        )
