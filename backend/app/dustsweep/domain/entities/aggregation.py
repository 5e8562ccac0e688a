"""Aggregation result entities for a multi-chain EVM scan."""

from dataclasses import dataclass, field
from typing import Optional

from app.dustsweep.domain.entities.chain import ChainDescriptor
from app.dustsweep.domain.entities.token import TokenRecord


@dataclass
class ChainScanReport:
    """Outcome of one chain strategy within an aggregation.

    Attributes:
        chain: The chain that was scanned.
        records: Token records the strategy produced (empty on failure).
        error: Failure message when the strategy did not complete.
    """

    chain: ChainDescriptor
    records: list[TokenRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class AggregationResult:
    """Deduplicated token records across all chains plus scan diagnostics.

    Attributes:
        records: Records unique by (chain, lower-cased contract address).
        source: Label of the acquisition path(s) that produced the records.
        reports: Per-chain scan outcomes, in registry order.
        error: Diagnostic message when the scan produced nothing usable.
    """

    records: list[TokenRecord]
    source: str
    reports: list[ChainScanReport] = field(default_factory=list)
    error: Optional[str] = None
