"""Domain services implementing the scanning rules.

These are pure functions and classes with no infrastructure dependencies:
- normalize_balance / is_dust: raw amount scaling and dust filtering
- SpamClassifier / SpamPolicy: explorer token spam heuristics
- deduplicate_records: first-seen-wins merge across chain strategies
- merge_token_accounts: Solana merge-by-mint
"""

from app.dustsweep.domain.services.balance import (
    DEFAULT_DUST_THRESHOLD,
    is_dust,
    normalize_balance,
    parse_raw_balance,
)
from app.dustsweep.domain.services.solana_merge import merge_token_accounts
from app.dustsweep.domain.services.spam_classifier import SpamClassifier, SpamPolicy
from app.dustsweep.domain.services.token_deduplicator import deduplicate_records

__all__ = [
    "DEFAULT_DUST_THRESHOLD",
    "SpamClassifier",
    "SpamPolicy",
    "deduplicate_records",
    "is_dust",
    "merge_token_accounts",
    "normalize_balance",
    "parse_raw_balance",
]
