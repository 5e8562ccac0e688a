"""Application use cases for orchestrating domain logic."""

from app.dustsweep.application.use_cases.scan_evm_tokens import ScanEvmTokensUseCase
from app.dustsweep.application.use_cases.scan_solana_tokens import ScanSolanaTokensUseCase

__all__ = [
    "ScanEvmTokensUseCase",
    "ScanSolanaTokensUseCase",
]
