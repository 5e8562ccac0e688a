"""Request-scoped dependencies for the scan routers.

Every request gets its own HttpProviderClient (closed when the response
is sent) and its own TokenMetadataResolver, so memoized metadata never
leaks between wallets.
"""

from collections.abc import AsyncGenerator, Iterable
from typing import Optional

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.dustsweep.application.interfaces.provider_client import ProviderClient
from app.dustsweep.application.use_cases.scan_evm_tokens import ScanEvmTokensUseCase
from app.dustsweep.application.use_cases.scan_solana_tokens import ScanSolanaTokensUseCase
from app.dustsweep.domain.chains import DEFAULT_CHAINS
from app.dustsweep.domain.services.spam_classifier import SpamClassifier, SpamPolicy
from app.dustsweep.domain.value_objects.origin_policy import OriginPolicy
from app.dustsweep.infrastructure.external.dexscreener_client import (
    DexScreenerClient,
    SolanaPairIndex,
)
from app.dustsweep.infrastructure.external.evm_rpc_client import EvmRpcClient
from app.dustsweep.infrastructure.external.http_provider_client import HttpProviderClient
from app.dustsweep.infrastructure.external.jupiter_client import JupiterClient
from app.dustsweep.infrastructure.external.solana_rpc_client import SolanaRpcClient
from app.dustsweep.infrastructure.external.strategies import ScanContext, create_strategies
from app.dustsweep.infrastructure.external.token_metadata_resolver import TokenMetadataResolver


def get_origin_policy(settings: Settings = Depends(get_settings)) -> OriginPolicy:
    """Materialize the configured cross-origin allow-list."""
    return OriginPolicy(tuple(settings.cors_allowed_origins))


async def get_provider_client() -> AsyncGenerator[ProviderClient, None]:
    """FastAPI dependency yielding an HTTP provider client.

    Yields:
        ProviderClient: closed once the request has been served.
    """
    async with HttpProviderClient() as client:
        yield client


def build_spam_classifier(settings: Settings) -> SpamClassifier:
    return SpamClassifier(
        SpamPolicy(
            url_patterns=tuple(settings.spam_url_patterns),
            phishing_patterns=tuple(settings.spam_phishing_patterns),
            max_position_usd=settings.spam_max_position_usd,
            max_unpriced_balance=settings.spam_max_unpriced_balance,
        )
    )


def build_evm_use_case(
    provider: ProviderClient,
    settings: Settings,
    only: Optional[Iterable[str]] = None,
) -> ScanEvmTokensUseCase:
    """Wire every configured chain strategy around one provider client.

    Args:
        provider: Transport shared by all strategies of the request.
        settings: Application settings with timeouts and tunables.
        only: Optional chain slugs to restrict the scan to.

    Returns:
        ScanEvmTokensUseCase over DEFAULT_CHAINS, in registry order.
    """
    rpc = EvmRpcClient(
        provider,
        call_timeout=settings.rpc_timeout_seconds,
        metadata_timeout=settings.metadata_timeout_seconds,
    )
    index = DexScreenerClient(
        provider,
        base_url=settings.dexscreener_base_url,
        timeout=settings.index_timeout_seconds,
    )
    context = ScanContext(
        provider=provider,
        rpc=rpc,
        resolver=TokenMetadataResolver(rpc, index),
        index=index,
        spam_classifier=build_spam_classifier(settings),
        dust_threshold=settings.dust_threshold,
        explorer_timeout=settings.explorer_timeout_seconds,
        rpc_batch_size=settings.rpc_batch_size,
        discovery_limit=settings.discovery_token_limit,
    )
    return ScanEvmTokensUseCase(create_strategies(DEFAULT_CHAINS, context, only=only))


def build_solana_use_case(provider: ProviderClient, settings: Settings) -> ScanSolanaTokensUseCase:
    """Wire the Solana RPC node and both mint metadata indexes."""
    index = DexScreenerClient(
        provider,
        base_url=settings.dexscreener_base_url,
        timeout=settings.metadata_timeout_seconds,
    )
    return ScanSolanaTokensUseCase(
        accounts=SolanaRpcClient(
            provider,
            rpc_url=settings.solana_rpc_url,
            timeout=settings.solana_rpc_timeout_seconds,
        ),
        verified_index=JupiterClient(
            provider,
            tokens_url=settings.jupiter_tokens_url,
            timeout=settings.index_timeout_seconds,
        ),
        pair_index=SolanaPairIndex(index),
        dust_threshold=settings.dust_threshold,
        metadata_batch_size=settings.solana_metadata_batch_size,
    )


def get_evm_use_case(
    provider: ProviderClient = Depends(get_provider_client),
    settings: Settings = Depends(get_settings),
) -> ScanEvmTokensUseCase:
    return build_evm_use_case(provider, settings)


def get_solana_use_case(
    provider: ProviderClient = Depends(get_provider_client),
    settings: Settings = Depends(get_settings),
) -> ScanSolanaTokensUseCase:
    return build_solana_use_case(provider, settings)


def cors_headers(policy: OriginPolicy, origin: str | None) -> dict[str, str]:
    """Cross-origin headers sent with every scan response."""
    return {
        "Access-Control-Allow-Origin": policy.resolve(origin),
        "Access-Control-Allow-Methods": "GET",
    }
