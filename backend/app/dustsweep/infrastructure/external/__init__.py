# External clients - HTTP transport, EVM RPC, DexScreener, Jupiter, Solana RPC

from .dexscreener_client import DexScreenerClient, SolanaPairIndex
from .evm_rpc_client import EvmRpcClient
from .http_provider_client import HttpProviderClient
from .jupiter_client import JupiterClient
from .solana_rpc_client import SolanaRpcClient
from .token_metadata_resolver import TokenMetadataResolver

__all__ = [
    "DexScreenerClient",
    "EvmRpcClient",
    "HttpProviderClient",
    "JupiterClient",
    "SolanaPairIndex",
    "SolanaRpcClient",
    "TokenMetadataResolver",
]
