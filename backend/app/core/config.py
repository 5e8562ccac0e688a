"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.dustsweep.domain.services.spam_classifier import (
    DEFAULT_PHISHING_PATTERNS,
    DEFAULT_URL_PATTERNS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Cross-origin allow-list, matched by prefix; the first entry is the fallback
    cors_allowed_origins: list[str] = Field(
        default=[
            "https://arthurdex.com",
            "https://woofi-dustsweep.vercel.app",
            "http://localhost",
        ]
    )

    # Balance filtering
    dust_threshold: float = Field(default=0.000001)

    # Spam heuristics
    spam_max_position_usd: float = Field(default=10_000_000)
    spam_max_unpriced_balance: float = Field(default=1_000_000)
    spam_url_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_URL_PATTERNS))
    spam_phishing_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PHISHING_PATTERNS)
    )

    # Outbound call timeouts (seconds)
    explorer_timeout_seconds: float = Field(default=10.0)
    rpc_timeout_seconds: float = Field(default=5.0)
    metadata_timeout_seconds: float = Field(default=3.0)
    index_timeout_seconds: float = Field(default=8.0)
    solana_rpc_timeout_seconds: float = Field(default=10.0)

    # Fan-out sizing
    rpc_batch_size: int = Field(default=20)
    discovery_token_limit: int = Field(default=100)
    solana_metadata_batch_size: int = Field(default=30)

    # Public endpoints (no credentials required)
    solana_rpc_url: str = Field(default="https://api.mainnet-beta.solana.com")
    jupiter_tokens_url: str = Field(default="https://tokens.jup.ag/tokens")
    dexscreener_base_url: str = Field(default="https://api.dexscreener.com")

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
