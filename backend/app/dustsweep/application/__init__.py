"""Application layer - use cases and orchestration.

This layer contains:
- DTOs: response models for the scan endpoints
- Interfaces: ports implemented by the infrastructure layer
- Use Cases: the EVM aggregator and the Solana collector
- Exceptions: Application-level error types
"""

from app.dustsweep.application.dto import (
    ChainReportDTO,
    EvmTokensDTO,
    SolanaTokenDTO,
    SolanaTokensDTO,
    TokenRecordDTO,
)
from app.dustsweep.application.exceptions import (
    AbiDecodeError,
    ApplicationError,
    ChainScanError,
    DecodeError,
    InvalidAddressError,
    ProviderError,
    TransportError,
)
from app.dustsweep.application.use_cases import (
    ScanEvmTokensUseCase,
    ScanSolanaTokensUseCase,
)

__all__ = [
    # DTOs
    "TokenRecordDTO",
    "ChainReportDTO",
    "EvmTokensDTO",
    "SolanaTokenDTO",
    "SolanaTokensDTO",
    # Use Cases
    "ScanEvmTokensUseCase",
    "ScanSolanaTokensUseCase",
    # Exceptions
    "ApplicationError",
    "InvalidAddressError",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "AbiDecodeError",
    "ChainScanError",
]
