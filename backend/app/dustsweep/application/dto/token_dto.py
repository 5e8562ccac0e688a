"""Data Transfer Objects for wallet scan API responses.

These DTOs represent the external contract consumed by the dust-sweep
frontend. Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.dustsweep.domain.entities.aggregation import AggregationResult, ChainScanReport
from app.dustsweep.domain.entities.solana import SolanaTokenRecord
from app.dustsweep.domain.entities.token import TokenRecord


class TokenRecordDTO(BaseModel):
    """A non-dust EVM token balance."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(description="Token symbol ('UNK' when unresolved)")
    name: str = Field(description="Token display name")
    chain: str = Field(description="Chain display name (e.g., 'Ethereum')")
    chain_slug: str = Field(serialization_alias="chainSlug", description="Chain short identifier")
    balance: float = Field(description="Human-scaled balance (raw / 10^decimals)")
    contract_address: str = Field(
        serialization_alias="contractAddress",
        description="Lower-cased token contract address",
    )
    decimals: int = Field(description="Token decimal places")
    logo_url: Optional[str] = Field(default=None, serialization_alias="logoUrl", description="Token logo URL")

    @classmethod
    def from_record(cls, record: TokenRecord) -> "TokenRecordDTO":
        return cls(
            symbol=record.symbol,
            name=record.name,
            chain=record.chain,
            chain_slug=record.chain_slug,
            balance=record.balance,
            contract_address=record.contract_address,
            decimals=record.decimals,
            logo_url=record.logo_url,
        )


class ChainReportDTO(BaseModel):
    """Per-chain scan diagnostics."""

    chain: str = Field(description="Chain display name")
    slug: str = Field(description="Chain short identifier")
    provider: str = Field(description="Discovery strategy used for the chain")
    found: int = Field(description="Number of token records the chain produced")
    error: Optional[str] = Field(default=None, description="Failure message if the strategy failed")

    @classmethod
    def from_report(cls, report: ChainScanReport) -> "ChainReportDTO":
        return cls(
            chain=report.chain.name,
            slug=report.chain.slug,
            provider=report.chain.provider_kind.value,
            found=len(report.records),
            error=report.error,
        )


class EvmTokensDTO(BaseModel):
    """Response for an EVM multi-chain wallet scan.

    Returned with HTTP 200 even when some or all providers failed; the
    `error` field carries the diagnostic in that case.
    """

    tokens: list[TokenRecordDTO] = Field(default_factory=list, description="Deduplicated token balances")
    source: str = Field(description="Acquisition path(s) that produced the tokens")
    chains: list[ChainReportDTO] = Field(default_factory=list, description="Per-chain scan diagnostics")
    error: Optional[str] = Field(default=None, description="Diagnostic message on failure")

    @classmethod
    def from_result(cls, result: AggregationResult) -> "EvmTokensDTO":
        return cls(
            tokens=[TokenRecordDTO.from_record(r) for r in result.records],
            source=result.source,
            chains=[ChainReportDTO.from_report(r) for r in result.reports],
            error=result.error,
        )


class SolanaTokenDTO(BaseModel):
    """A wallet's merged holding of one SPL mint."""

    model_config = ConfigDict(populate_by_name=True)

    mint: str = Field(description="Mint address")
    amount: float = Field(description="ui-amount summed across all accounts of the mint")
    decimals: int = Field(description="Mint decimal places")
    symbol: Optional[str] = Field(default=None, description="Token symbol, if resolved")
    name: Optional[str] = Field(default=None, description="Token name, if resolved")
    image: Optional[str] = Field(default=None, serialization_alias="img", description="Token logo URL")

    @classmethod
    def from_record(cls, record: SolanaTokenRecord) -> "SolanaTokenDTO":
        return cls(
            mint=record.mint,
            amount=record.amount,
            decimals=record.decimals,
            symbol=record.symbol,
            name=record.name,
            image=record.image,
        )


class SolanaTokensDTO(BaseModel):
    """Response for a Solana wallet scan."""

    sol_balance: float = Field(default=0.0, serialization_alias="solBalance", description="Native SOL balance")
    tokens: list[SolanaTokenDTO] = Field(default_factory=list, description="Merged SPL token holdings")
    total_accounts: int = Field(
        default=0,
        serialization_alias="totalAccounts",
        description="Token accounts returned across both token programs",
    )
    error: Optional[str] = Field(default=None, description="Diagnostic message on partial failure")
