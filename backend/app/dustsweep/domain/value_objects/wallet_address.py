"""Wallet address value objects for the two supported chain families."""

import re
from dataclasses import dataclass

_EVM_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")

# Base58 alphabet excludes 0, O, I and l
_SOLANA_PATTERN = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")


@dataclass(frozen=True)
class EvmAddress:
    """Immutable value object representing a validated EVM account address.

    Attributes:
        value: The address as supplied (0x followed by 40 hex characters).
    """

    value: str

    def __post_init__(self) -> None:
        """Validate address syntax after initialization."""
        if not _EVM_PATTERN.fullmatch(self.value):
            raise ValueError(f"Invalid EVM address: {self.value}")


@dataclass(frozen=True)
class SolanaAddress:
    """Immutable value object representing a validated Solana account address.

    Attributes:
        value: Base58-encoded public key, 32 to 44 characters long.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate address syntax after initialization."""
        if not _SOLANA_PATTERN.fullmatch(self.value):
            raise ValueError(f"Invalid Solana address: {self.value}")
