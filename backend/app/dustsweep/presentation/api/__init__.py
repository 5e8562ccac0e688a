# FastAPI routers - EVM tokens, Solana tokens, health
from app.dustsweep.presentation.api import evm_tokens, health, solana_tokens

__all__ = ["health", "evm_tokens", "solana_tokens"]
