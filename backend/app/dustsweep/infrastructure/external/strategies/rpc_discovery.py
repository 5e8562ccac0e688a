"""Discovery-RPC strategy: curated list plus top-liquidity index tokens.

The curated addresses are merged with up to `discovery_limit` addresses
from the DEX-pair index, deduplicated, and balance-checked in sequential
batches of concurrent `balanceOf` calls. This is not a multicall: each
address is one `eth_call`, and the batch size bounds how many are in
flight against one RPC endpoint. Metadata for held tokens comes from the
curated list or the index first, contract reads only as a last resort.
"""

import asyncio
import logging
from typing import Optional

from app.dustsweep.application.exceptions import ChainScanError
from app.dustsweep.application.interfaces.chain_strategy import ChainStrategy
from app.dustsweep.domain.entities.chain import ChainDescriptor, ProviderKind
from app.dustsweep.domain.entities.token import CandidateToken, TokenMetadata, TokenRecord
from app.dustsweep.domain.services.balance import is_dust, normalize_balance
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress
from app.dustsweep.infrastructure.external.strategies.context import ScanContext, chunks

logger = logging.getLogger(__name__)


class DiscoveryRpcStrategy(ChainStrategy):
    """Probes curated and index-discovered tokens in bounded batches."""

    def __init__(self, chain: ChainDescriptor, context: ScanContext) -> None:
        super().__init__(chain)
        self._context = context

    @property
    def provider_kind(self) -> ProviderKind:
        return ProviderKind.RPC_DISCOVERY

    async def scan(self, wallet: EvmAddress) -> list[TokenRecord]:
        if not self.chain.rpc_urls:
            raise ChainScanError(self.chain.slug, "no RPC endpoints configured")

        addresses, hints = await self._collect_addresses()
        held = await self._check_balances(addresses, wallet)

        records: list[TokenRecord] = []
        for batch in chunks(list(held), self._context.rpc_batch_size):
            candidates = await asyncio.gather(
                *(self._to_candidate(address, held[address], hints.get(address.lower()))
                  for address in batch)
            )
            records.extend(
                TokenRecord.from_candidate(c, self.chain) for c in candidates if c is not None
            )

        logger.info(
            f"{self.chain.name}: {len(records)} tokens held out of {len(addresses)} probed"
        )
        return records

    async def _collect_addresses(self) -> tuple[list[str], dict[str, TokenMetadata]]:
        """Merge curated and index addresses, curated first, unique by lower-case."""
        indexed = await self._context.index.top_tokens(
            self.chain.index_id, limit=self._context.discovery_limit
        )

        addresses: list[str] = []
        hints: dict[str, TokenMetadata] = {}
        seen: set[str] = set()

        for token in self.chain.known_tokens:
            key = token.address.lower()
            if key not in seen:
                seen.add(key)
                addresses.append(token.address)

        for token in indexed[: self._context.discovery_limit]:
            key = token.address.lower()
            hints.setdefault(key, token.metadata)
            if key not in seen:
                seen.add(key)
                addresses.append(token.address)

        return addresses, hints

    async def _check_balances(self, addresses: list[str], wallet: EvmAddress) -> dict[str, int]:
        """Return raw balances of the addresses the wallet holds."""
        held: dict[str, int] = {}
        for batch in chunks(addresses, self._context.rpc_batch_size):
            balances = await asyncio.gather(
                *(self._context.rpc.balance_of(self.chain.rpc_urls, address, wallet.value)
                  for address in batch)
            )
            for address, raw in zip(batch, balances):
                if raw:
                    held[address] = raw
        return held

    async def _to_candidate(
        self,
        address: str,
        raw: int,
        hint: Optional[TokenMetadata],
    ) -> Optional[CandidateToken]:
        metadata = await self._context.resolver.resolve(self.chain, address, hint=hint)
        balance = normalize_balance(raw, metadata.decimals)
        if is_dust(balance, self._context.dust_threshold):
            return None
        return CandidateToken(
            contract_address=address,
            balance=balance,
            decimals=metadata.decimals,
            symbol=metadata.symbol,
            name=metadata.name,
        )
