"""Data transfer objects for application layer."""

from app.dustsweep.application.dto.token_dto import (
    ChainReportDTO,
    EvmTokensDTO,
    SolanaTokenDTO,
    SolanaTokensDTO,
    TokenRecordDTO,
)

__all__ = [
    # EVM DTOs
    "TokenRecordDTO",
    "ChainReportDTO",
    "EvmTokensDTO",
    # Solana DTOs
    "SolanaTokenDTO",
    "SolanaTokensDTO",
]
