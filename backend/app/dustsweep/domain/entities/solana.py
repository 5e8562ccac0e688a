"""Solana account-model entities."""

from dataclasses import dataclass
from typing import Optional

# Legacy SPL token program and the token-extensions program
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"


@dataclass(frozen=True)
class SolanaTokenAccount:
    """One SPL token account owned by the wallet.

    Attributes:
        mint: Mint address of the token held in this account.
        ui_amount: Human-scaled amount held in this account.
        decimals: Decimal places of the mint, when reported.
    """

    mint: str
    ui_amount: float
    decimals: Optional[int] = None


@dataclass
class SolanaTokenRecord:
    """A wallet's total holding of one mint, summed across accounts.

    Attributes:
        mint: Mint address.
        amount: Accumulated ui-amount across every account of this mint.
        decimals: Decimals of the first account seen for the mint.
        symbol: Ticker symbol, when a metadata source resolved it.
        name: Display name, when a metadata source resolved it.
        image: Logo URL, when a metadata source supplied one.
    """

    mint: str
    amount: float
    decimals: int
    symbol: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None

    @property
    def is_named(self) -> bool:
        return bool(self.symbol)


@dataclass(frozen=True)
class MintMetadata:
    """Display metadata for a mint from an external index."""

    symbol: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
