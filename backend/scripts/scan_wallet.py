#!/usr/bin/env python
"""Smoke-test script that scans a wallet against the live public endpoints.

Run from the backend directory:
    python -m scripts.scan_wallet 0xYourWallet

Restrict the EVM scan to some chains, or list them by discovery strategy:
    python -m scripts.scan_wallet 0xYourWallet --chain base --chain mantle
    python -m scripts.scan_wallet --list-chains

Solana wallets are detected from the address format:
    python -m scripts.scan_wallet 9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin
"""

import argparse
import asyncio
import logging
import sys

# Add parent to path for imports
sys.path.insert(0, ".")

from app.core.config import get_settings
from app.dustsweep.application.exceptions import InvalidAddressError
from app.dustsweep.domain.chains import DEFAULT_CHAINS, get_chain, get_chains_by_kind
from app.dustsweep.domain.entities.chain import ProviderKind
from app.dustsweep.infrastructure.external import HttpProviderClient
from app.dustsweep.presentation.api.dependencies import (
    build_evm_use_case,
    build_solana_use_case,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def list_chains() -> None:
    """Print configured chains grouped by discovery strategy."""
    for kind in ProviderKind:
        chains = get_chains_by_kind(kind)
        print(f"\n{kind.value} ({len(chains)})")
        for chain in chains:
            print(f"  {chain.slug:<14} {chain.name}")


async def scan_evm(address: str, slugs: list[str]) -> None:
    """Scan an EVM wallet on all (or the selected) chains."""
    print("\n" + "=" * 50)
    print(f"EVM scan: {address}")
    print("=" * 50)

    settings = get_settings()
    async with HttpProviderClient() as provider:
        use_case = build_evm_use_case(provider, settings, only=slugs or None)
        result = await use_case.execute(address)

    for report in result.chains:
        marker = "✗" if report.error else "✓"
        detail = report.error or f"{report.found} tokens"
        print(f"  {marker} {report.chain:<10} [{report.provider}] {detail}")

    print(f"\nSource: {result.source}")
    for token in result.tokens:
        print(f"  {token.chain:<10} {token.symbol:<10} {token.balance:>20,.6f}  {token.contract_address}")
    if result.error:
        print(f"\nError: {result.error}")


async def scan_solana(address: str) -> None:
    """Scan a Solana wallet for SOL and SPL tokens."""
    print("\n" + "=" * 50)
    print(f"Solana scan: {address}")
    print("=" * 50)

    settings = get_settings()
    async with HttpProviderClient() as provider:
        result = await build_solana_use_case(provider, settings).execute(address)

    print(f"\n  SOL: {result.sol_balance:,.9f}")
    print(f"  Token accounts: {result.total_accounts}")
    for token in result.tokens:
        label = token.symbol or token.mint[:8]
        print(f"  {label:<12} {token.amount:>20,.6f}  {token.mint}")
    if result.error:
        print(f"\nError: {result.error}")


async def main():
    """Main scan runner."""
    parser = argparse.ArgumentParser(description="Scan a wallet for token balances")
    parser.add_argument("address", nargs="?", help="EVM (0x...) or Solana (base58) address")
    parser.add_argument(
        "--chain",
        action="append",
        default=[],
        help="Restrict the EVM scan to this chain slug (repeatable)",
    )
    parser.add_argument("--list-chains", action="store_true", help="List configured chains")

    args = parser.parse_args()

    if args.list_chains:
        list_chains()
        return
    if not args.address:
        parser.error("address is required")

    unknown = [slug for slug in args.chain if get_chain(slug) is None]
    if unknown:
        known = ", ".join(chain.slug for chain in DEFAULT_CHAINS)
        parser.error(f"unknown chain(s): {', '.join(unknown)} (known: {known})")

    try:
        if args.address.startswith("0x"):
            await scan_evm(args.address, [slug.lower() for slug in args.chain])
        else:
            await scan_solana(args.address)
    except InvalidAddressError as e:
        print(f"\n✗ {e.message}")
        sys.exit(2)
    except Exception as e:
        logger.exception(f"Scan failed with error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
