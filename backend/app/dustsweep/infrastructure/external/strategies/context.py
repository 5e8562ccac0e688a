"""Per-request collaborators shared by every chain strategy."""

from dataclasses import dataclass, field
from typing import Iterable, Sequence, TypeVar

from app.dustsweep.application.interfaces.provider_client import ProviderClient
from app.dustsweep.domain.services.balance import DEFAULT_DUST_THRESHOLD
from app.dustsweep.domain.services.spam_classifier import SpamClassifier
from app.dustsweep.infrastructure.external.dexscreener_client import DexScreenerClient
from app.dustsweep.infrastructure.external.evm_rpc_client import EvmRpcClient
from app.dustsweep.infrastructure.external.token_metadata_resolver import TokenMetadataResolver


@dataclass
class ScanContext:
    """Collaborators and tunables for one EVM aggregation request.

    Attributes:
        provider: Transport for explorer requests.
        rpc: Raw contract-call client.
        resolver: Token metadata resolver, memoized for this request.
        index: DEX-pair index client for discovery.
        spam_classifier: Policy applied to explorer-reported tokens.
        dust_threshold: Minimum human-scaled balance to report.
        explorer_timeout: Deadline for the bulk explorer request.
        rpc_batch_size: Concurrent calls per batch (balanceOf probes, metadata resolution).
        discovery_limit: Maximum index tokens merged into discovery.
    """

    provider: ProviderClient
    rpc: EvmRpcClient
    resolver: TokenMetadataResolver
    index: DexScreenerClient
    spam_classifier: SpamClassifier = field(default_factory=SpamClassifier)
    dust_threshold: float = DEFAULT_DUST_THRESHOLD
    explorer_timeout: float = 10.0
    rpc_batch_size: int = 20
    discovery_limit: int = 100


T = TypeVar("T")


def chunks(items: Sequence[T], size: int) -> Iterable[Sequence[T]]:
    """Split `items` into consecutive slices of at most `size`."""
    for i in range(0, len(items), size):
        yield items[i : i + size]
