"""Chain strategy interface for per-chain balance discovery."""

from abc import ABC, abstractmethod

from app.dustsweep.domain.entities.chain import ChainDescriptor, ProviderKind
from app.dustsweep.domain.entities.token import TokenRecord
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress


class ChainStrategy(ABC):
    """Abstract base class for balance-discovery strategies.

    Each strategy (explorer-bulk, curated RPC, discovery RPC) is bound to
    one ChainDescriptor and knows how to turn that chain's data source
    into filtered TokenRecords for a wallet.
    """

    def __init__(self, chain: ChainDescriptor) -> None:
        self._chain = chain

    @property
    def chain(self) -> ChainDescriptor:
        """Return the chain this strategy scans."""
        return self._chain

    @property
    @abstractmethod
    def provider_kind(self) -> ProviderKind:
        """Return the discovery approach this strategy implements."""
        ...

    @abstractmethod
    async def scan(self, wallet: EvmAddress) -> list[TokenRecord]:
        """Discover the wallet's non-dust token balances on this chain.

        Args:
            wallet: Validated EVM wallet address.

        Returns:
            Token records above the dust threshold.

        Raises:
            ChainScanError: If the chain's data source is unusable. Any
                exception is isolated to this chain by the caller.
        """
        ...
