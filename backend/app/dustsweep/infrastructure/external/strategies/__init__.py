"""Chain strategies and the factory selecting one per provider kind."""

from typing import Callable, Iterable, Optional

from app.dustsweep.application.interfaces.chain_strategy import ChainStrategy
from app.dustsweep.domain.entities.chain import ChainDescriptor, ProviderKind
from app.dustsweep.infrastructure.external.strategies.context import ScanContext
from app.dustsweep.infrastructure.external.strategies.explorer_bulk import ExplorerBulkStrategy
from app.dustsweep.infrastructure.external.strategies.rpc_discovery import DiscoveryRpcStrategy
from app.dustsweep.infrastructure.external.strategies.rpc_known import CuratedRpcStrategy

StrategyFactory = Callable[[ChainDescriptor, ScanContext], ChainStrategy]

STRATEGY_FACTORIES: dict[ProviderKind, StrategyFactory] = {
    ProviderKind.EXPLORER: ExplorerBulkStrategy,
    ProviderKind.RPC_KNOWN: CuratedRpcStrategy,
    ProviderKind.RPC_DISCOVERY: DiscoveryRpcStrategy,
}


def create_strategy(chain: ChainDescriptor, context: ScanContext) -> ChainStrategy:
    """Build the strategy matching a chain's provider kind.

    Raises:
        ValueError: If no strategy exists for the chain's provider kind.
    """
    factory = STRATEGY_FACTORIES.get(chain.provider_kind)
    if factory is None:
        raise ValueError(f"Unsupported provider kind: {chain.provider_kind}")
    return factory(chain, context)


def create_strategies(
    chains: Iterable[ChainDescriptor],
    context: ScanContext,
    only: Optional[Iterable[str]] = None,
) -> list[ChainStrategy]:
    """Create one strategy per configured chain, preserving chain order.

    Args:
        chains: Chain descriptors, in scan-priority order.
        context: Per-request collaborators shared by the strategies.
        only: Optional chain slugs to restrict the scan to.

    Returns:
        Strategies in the same order as `chains`.
    """
    selected = {slug.lower() for slug in only} if only is not None else None
    return [
        create_strategy(chain, context)
        for chain in chains
        if selected is None or chain.slug in selected
    ]


__all__ = [
    "STRATEGY_FACTORIES",
    "CuratedRpcStrategy",
    "DiscoveryRpcStrategy",
    "ExplorerBulkStrategy",
    "ScanContext",
    "create_strategies",
    "create_strategy",
]
