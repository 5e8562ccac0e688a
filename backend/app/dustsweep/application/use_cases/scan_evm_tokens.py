"""Use case for discovering a wallet's token balances across EVM chains.

Implements the aggregation pipeline by orchestrating:
- Address validation (no I/O for malformed input)
- Concurrent fan-out over every ChainStrategy, each behind its own
  failure boundary
- Cross-chain deduplication by (chain, contract address)
- Source labelling and per-chain diagnostics
"""

import asyncio
import logging
from typing import Optional, Sequence

from app.dustsweep.application.dto.token_dto import EvmTokensDTO
from app.dustsweep.application.exceptions import InvalidAddressError
from app.dustsweep.application.interfaces.chain_strategy import ChainStrategy
from app.dustsweep.domain.entities.aggregation import AggregationResult, ChainScanReport
from app.dustsweep.domain.services.token_deduplicator import deduplicate_records
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress

logger = logging.getLogger(__name__)

ALL_FAILED_MESSAGE = "all chain providers failed"


class ScanEvmTokensUseCase:
    """Application service aggregating token balances over EVM chains.

    Strategies are launched together and the use case waits for all of
    them to settle. Reports are consumed in strategy order, not completion
    order, so when two chains report the same key the earlier-configured
    strategy always wins deduplication.
    """

    def __init__(self, strategies: Sequence[ChainStrategy]) -> None:
        """Initialize the use case with its chain strategies.

        Args:
            strategies: One strategy per chain, in priority order.
        """
        self._strategies = list(strategies)

    async def execute(self, address: Optional[str]) -> EvmTokensDTO:
        """Execute the multi-chain scan.

        Args:
            address: Wallet address as supplied by the caller.

        Returns:
            EvmTokensDTO with deduplicated tokens and diagnostics.

        Raises:
            InvalidAddressError: If the address is missing or malformed.
        """
        wallet = self.validate_address(address)
        result = await self.aggregate(wallet)
        return EvmTokensDTO.from_result(result)

    @staticmethod
    def validate_address(address: Optional[str]) -> EvmAddress:
        """Validate the wallet address before any network I/O."""
        if not address:
            raise InvalidAddressError(address, "EVM")
        try:
            return EvmAddress(address)
        except ValueError as e:
            raise InvalidAddressError(address, "EVM") from e

    async def aggregate(self, wallet: EvmAddress) -> AggregationResult:
        """Fan out over all strategies and merge their records."""
        reports = await asyncio.gather(
            *(self._scan_isolated(strategy, wallet) for strategy in self._strategies)
        )

        records = deduplicate_records(
            record for report in reports for record in report.records
        )
        error = None
        if reports and all(report.failed for report in reports):
            error = ALL_FAILED_MESSAGE

        failed = sum(1 for report in reports if report.failed)
        logger.info(
            f"EVM scan complete: {len(records)} tokens across {len(reports)} chains "
            f"({failed} failed)"
        )
        return AggregationResult(
            records=records,
            source=self._source_label(reports),
            reports=list(reports),
            error=error,
        )

    async def _scan_isolated(self, strategy: ChainStrategy, wallet: EvmAddress) -> ChainScanReport:
        """Run one strategy; any failure becomes an empty, error-tagged report."""
        try:
            records = await strategy.scan(wallet)
            return ChainScanReport(chain=strategy.chain, records=records)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Scan failed on {strategy.chain.name}: {e}")
            return ChainScanReport(chain=strategy.chain, error=str(e) or type(e).__name__)

    @staticmethod
    def _source_label(reports: Sequence[ChainScanReport]) -> str:
        """Join the provider kinds that contributed records, in order."""
        kinds: list[str] = []
        for report in reports:
            kind = report.chain.provider_kind.value
            if report.records and kind not in kinds:
                kinds.append(kind)
        return "+".join(kinds) if kinds else "none"
