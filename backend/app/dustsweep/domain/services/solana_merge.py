"""Merge Solana token accounts into one record per mint."""

from typing import Iterable

from app.dustsweep.domain.entities.solana import SolanaTokenAccount, SolanaTokenRecord
from app.dustsweep.domain.services.balance import DEFAULT_DUST_THRESHOLD, is_dust

# Decimals reported by SPL mints when an account omits them
DEFAULT_SPL_DECIMALS = 6


def merge_token_accounts(
    accounts: Iterable[SolanaTokenAccount],
    dust_threshold: float = DEFAULT_DUST_THRESHOLD,
) -> dict[str, SolanaTokenRecord]:
    """Sum ui-amounts of accounts that hold the same mint.

    Accounts below the dust threshold are dropped before merging. The
    decimals of the first account seen for a mint are kept.

    Args:
        accounts: Token accounts from every token program, in query order.
        dust_threshold: Minimum per-account ui-amount to keep.

    Returns:
        Mapping of mint address to merged record, in first-seen order.
    """
    merged: dict[str, SolanaTokenRecord] = {}
    for account in accounts:
        if is_dust(account.ui_amount, dust_threshold):
            continue
        record = merged.get(account.mint)
        if record is None:
            decimals = account.decimals if account.decimals is not None else DEFAULT_SPL_DECIMALS
            merged[account.mint] = SolanaTokenRecord(
                mint=account.mint,
                amount=account.ui_amount,
                decimals=decimals,
            )
        else:
            record.amount += account.ui_amount
    return merged
