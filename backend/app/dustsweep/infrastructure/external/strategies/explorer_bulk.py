"""Explorer-bulk strategy: one Blockscout call lists every token balance.

Endpoint: {explorer}/api/v2/addresses/{wallet}/token-balances
Each entry carries the raw value plus the token's symbol, name, decimals,
standard tag, exchange rate and icon. Zero balances, NFTs, dust and spam
are dropped. Entries whose embedded decimals already mark them as dust are
dropped before any metadata lookup; the rest are resolved concurrently in
batches of `rpc_batch_size`.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

from app.dustsweep.application.exceptions import ChainScanError
from app.dustsweep.application.interfaces.chain_strategy import ChainStrategy
from app.dustsweep.domain.entities.chain import ChainDescriptor, ProviderKind
from app.dustsweep.domain.entities.token import (
    NON_FUNGIBLE_STANDARDS,
    CandidateToken,
    TokenMetadata,
    TokenRecord,
)
from app.dustsweep.domain.services.balance import is_dust, normalize_balance
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress
from app.dustsweep.infrastructure.external.strategies.context import ScanContext, chunks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ExplorerEntry:
    """One non-zero fungible balance as reported by the explorer."""

    address: str
    value: Any
    embedded: TokenMetadata
    token: dict


class ExplorerBulkStrategy(ChainStrategy):
    """Discovers balances from a block explorer's bulk endpoint."""

    def __init__(self, chain: ChainDescriptor, context: ScanContext) -> None:
        super().__init__(chain)
        if not chain.explorer_url:
            raise ValueError(f"{chain.slug} has no explorer URL")
        self._context = context

    @property
    def provider_kind(self) -> ProviderKind:
        return ProviderKind.EXPLORER

    async def scan(self, wallet: EvmAddress) -> list[TokenRecord]:
        url = f"{self.chain.explorer_url.rstrip('/')}/api/v2/addresses/{wallet.value}/token-balances"
        result = await self._context.provider.call(url, timeout=self._context.explorer_timeout)
        if not result.ok:
            raise ChainScanError(self.chain.slug, f"explorer unavailable ({result.error})")
        if not isinstance(result.data, list):
            raise ChainScanError(self.chain.slug, "explorer returned an unexpected payload")

        entries = []
        for raw_entry in result.data:
            entry = self._parse_entry(raw_entry)
            if entry is not None:
                entries.append(entry)

        records: list[TokenRecord] = []
        spam_count = 0
        for batch in chunks(entries, self._context.rpc_batch_size):
            candidates = await asyncio.gather(*(self._to_candidate(e) for e in batch))
            for candidate in candidates:
                if candidate is None:
                    continue
                if self._context.spam_classifier.is_spam(candidate):
                    spam_count += 1
                    continue
                records.append(TokenRecord.from_candidate(candidate, self.chain))

        logger.info(
            f"{self.chain.name}: {len(records)} tokens from explorer "
            f"({spam_count} spam skipped)"
        )
        return records

    def _parse_entry(self, entry: Any) -> Optional[_ExplorerEntry]:
        """Pre-filter one explorer entry without any outbound call."""
        if not isinstance(entry, dict):
            return None
        token = entry.get("token") or {}
        value = entry.get("value")
        if not value or value == "0":
            return None

        if token.get("type") in NON_FUNGIBLE_STANDARDS:
            return None

        address = token.get("address_hash") or token.get("address")
        if not address:
            return None

        embedded = TokenMetadata(
            symbol=_clean_text(token.get("symbol")),
            name=_clean_text(token.get("name")),
            decimals=_parse_decimals(token.get("decimals")),
        )
        if embedded.decimals is not None:
            balance = normalize_balance(value, embedded.decimals)
            if is_dust(balance, self._context.dust_threshold):
                return None

        return _ExplorerEntry(address=address, value=value, embedded=embedded, token=token)

    async def _to_candidate(self, entry: _ExplorerEntry) -> Optional[CandidateToken]:
        """Resolve metadata for a surviving entry, or None if it turns out to be dust."""
        metadata = await self._context.resolver.resolve(
            self.chain, entry.address, embedded=entry.embedded
        )

        balance = normalize_balance(entry.value, metadata.decimals)
        if is_dust(balance, self._context.dust_threshold):
            return None

        return CandidateToken(
            contract_address=entry.address,
            balance=balance,
            decimals=metadata.decimals,
            symbol=metadata.symbol,
            name=metadata.name,
            exchange_rate=_parse_exchange_rate(entry.token.get("exchange_rate")),
            token_type=entry.token.get("type"),
            icon_url=entry.token.get("icon_url") or None,
        )


def _clean_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _parse_decimals(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_exchange_rate(value: Any) -> Optional[float]:
    """Parse the explorer's USD rate; absent, "None" and garbage all mean unpriced."""
    if value is None or value == "None" or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
