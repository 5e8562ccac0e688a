"""Solana JSON-RPC client for native and SPL token balances."""

import logging
from typing import Any, Optional

from app.dustsweep.application.interfaces.provider_client import ProviderClient
from app.dustsweep.application.interfaces.solana_sources import SolanaAccountSource
from app.dustsweep.domain.entities.solana import SolanaTokenAccount

logger = logging.getLogger(__name__)

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_TIMEOUT_SECONDS = 10.0

LAMPORTS_PER_SOL = 1_000_000_000


class SolanaRpcClient(SolanaAccountSource):
    """Queries a Solana RPC node through a ProviderClient.

    Methods return None when the node could not be reached or answered
    with an error, so callers can tell "failed" from "empty".
    """

    def __init__(
        self,
        provider: ProviderClient,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._provider = provider
        self._rpc_url = rpc_url
        self._timeout = timeout

    async def _request(self, method: str, params: list[Any]) -> Optional[Any]:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        result = await self._provider.call(self._rpc_url, payload, timeout=self._timeout)
        if not result.ok:
            logger.warning(f"Solana {method} failed: {result.error}")
            return None
        body = result.data
        if not isinstance(body, dict) or "error" in body:
            error = body.get("error") if isinstance(body, dict) else "unexpected payload"
            logger.warning(f"Solana {method} returned an error: {error}")
            return None
        return body.get("result")

    async def get_balance(self, address: str) -> Optional[float]:
        """Native balance in SOL (lamports / 1e9), or None on failure."""
        result = await self._request("getBalance", [address])
        if not isinstance(result, dict):
            return None
        lamports = result.get("value") or 0
        try:
            return int(lamports) / LAMPORTS_PER_SOL
        except (TypeError, ValueError):
            return None

    async def get_token_accounts(
        self,
        address: str,
        program_id: str,
    ) -> Optional[list[SolanaTokenAccount]]:
        """Token accounts owned by `address` under one token program.

        Returns:
            Parsed accounts (malformed entries skipped), or None on failure.
        """
        result = await self._request(
            "getTokenAccountsByOwner",
            [address, {"programId": program_id}, {"encoding": "jsonParsed"}],
        )
        if not isinstance(result, dict):
            return None
        entries = result.get("value") or []
        accounts = []
        for entry in entries:
            account = _parse_token_account(entry)
            if account is not None:
                accounts.append(account)
        return accounts


def _parse_token_account(entry: Any) -> Optional[SolanaTokenAccount]:
    """Extract mint, ui-amount and decimals from a jsonParsed account."""
    try:
        info = entry["account"]["data"]["parsed"]["info"]
        mint = info["mint"]
        token_amount = info["tokenAmount"]
    except (KeyError, TypeError):
        return None
    if not isinstance(mint, str) or not isinstance(token_amount, dict):
        return None

    ui_amount_text = token_amount.get("uiAmountString")
    try:
        if ui_amount_text is not None:
            ui_amount = float(ui_amount_text)
        else:
            ui_amount = float(token_amount.get("uiAmount") or 0)
    except (TypeError, ValueError):
        return None

    decimals = token_amount.get("decimals")
    return SolanaTokenAccount(
        mint=mint,
        ui_amount=ui_amount,
        decimals=int(decimals) if isinstance(decimals, int) else None,
    )
