"""Token entities produced while scanning EVM chains."""

from dataclasses import dataclass
from typing import Optional

from app.dustsweep.domain.entities.chain import ChainDescriptor

NON_FUNGIBLE_STANDARDS = frozenset({"ERC-721", "ERC-1155"})


@dataclass(frozen=True)
class TokenMetadata:
    """Possibly partial symbol/name/decimals for a contract.

    Every field may be unresolved; `merged_with` fills the gaps from a
    lower-priority source without overwriting what is already known.
    """

    symbol: Optional[str] = None
    name: Optional[str] = None
    decimals: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.symbol is not None and self.name is not None and self.decimals is not None

    def merged_with(self, fallback: Optional["TokenMetadata"]) -> "TokenMetadata":
        """Return a copy with missing fields taken from `fallback`."""
        if fallback is None:
            return self
        return TokenMetadata(
            symbol=self.symbol if self.symbol is not None else fallback.symbol,
            name=self.name if self.name is not None else fallback.name,
            decimals=self.decimals if self.decimals is not None else fallback.decimals,
        )


@dataclass
class CandidateToken:
    """A token balance found mid-pipeline, before filtering.

    Attributes:
        contract_address: Token contract address.
        balance: Human-scaled balance (raw / 10^decimals).
        decimals: Decimal places of the token.
        symbol: Ticker symbol, if known.
        name: Display name, if known.
        exchange_rate: USD price per token reported by the source.
        token_type: Token standard tag (e.g., "ERC-20", "ERC-721").
        icon_url: Logo URL reported by the source.
    """

    contract_address: str
    balance: float
    decimals: int
    symbol: Optional[str] = None
    name: Optional[str] = None
    exchange_rate: Optional[float] = None
    token_type: Optional[str] = None
    icon_url: Optional[str] = None

    @property
    def usd_value(self) -> Optional[float]:
        """Position value in USD, when the source supplied a positive rate."""
        if self.exchange_rate is None or self.exchange_rate <= 0:
            return None
        return self.balance * self.exchange_rate


@dataclass(frozen=True)
class TokenRecord:
    """A normalized, filtered token balance ready for output.

    Attributes:
        symbol: Ticker symbol ("UNK" when unresolved).
        name: Display name (falls back to the symbol).
        chain: Chain display name.
        chain_slug: Chain short identifier.
        balance: Human-scaled balance, always above the dust threshold.
        contract_address: Lower-cased contract address.
        decimals: Decimal places of the token.
        logo_url: Optional logo URL.
    """

    symbol: str
    name: str
    chain: str
    chain_slug: str
    balance: float
    contract_address: str
    decimals: int
    logo_url: Optional[str] = None

    @classmethod
    def from_candidate(cls, candidate: CandidateToken, chain: ChainDescriptor) -> "TokenRecord":
        """Build the output record for a candidate found on `chain`.

        Unresolved symbols become "UNK"; the name falls back to the symbol
        and then to "Unknown".
        """
        return cls(
            symbol=candidate.symbol or "UNK",
            name=candidate.name or candidate.symbol or "Unknown",
            chain=chain.name,
            chain_slug=chain.slug,
            balance=candidate.balance,
            contract_address=candidate.contract_address.lower(),
            decimals=candidate.decimals,
            logo_url=candidate.icon_url,
        )

    @property
    def dedup_key(self) -> tuple[str, str]:
        return (self.chain, self.contract_address.lower())
