"""Spam classifier domain service for explorer-reported tokens.

Explorers list every token ever sent to an address, including scam
airdrops whose symbol or name advertises a phishing site. The classifier
is a pure predicate over a resolved CandidateToken; its pattern lists and
value thresholds live in a SpamPolicy so they can be tuned from settings
without touching the aggregation pipeline.
"""

import re
from dataclasses import dataclass

from app.dustsweep.domain.entities.token import CandidateToken

DEFAULT_URL_PATTERNS: tuple[str, ...] = (
    r"https?:",
    r"www\.",
    r"\.com",
    r"\.io",
    r"\.xyz",
    r"\.cc",
    r"\.top",
    r"\.app",
    r"\.org",
    r"\.net",
    r"\.icu",
    r"\.finance",
    r"\.markets",
    r"\.promo",
)

DEFAULT_PHISHING_PATTERNS: tuple[str, ...] = (
    "claim",
    "airdrop",
    "bridge for",
    "visit ",
    "access ",
)

_DOLLAR_AMOUNT = re.compile(r"\$[\d,]+")
_CYRILLIC = re.compile("[\u0400-\u04FF]")


@dataclass(frozen=True)
class SpamPolicy:
    """Tunable spam heuristics.

    Attributes:
        url_patterns: Regexes for embedded URLs and common TLDs.
        phishing_patterns: Literal bait phrases (matched case-insensitively).
        max_position_usd: A priced position above this USD value is spam.
        max_unpriced_balance: An unpriced balance above this is spam.
    """

    url_patterns: tuple[str, ...] = DEFAULT_URL_PATTERNS
    phishing_patterns: tuple[str, ...] = DEFAULT_PHISHING_PATTERNS
    max_position_usd: float = 10_000_000
    max_unpriced_balance: float = 1_000_000


class SpamClassifier:
    """Pure predicate deciding whether a token record is spam.

    Text heuristics run on the lower-cased "symbol name" concatenation:
    embedded URLs or TLDs, phishing bait phrases, dollar amounts in the
    name and Cyrillic homoglyphs. Value heuristics flag priced positions
    worth implausibly much and unpriced balances that look like fabricated
    airdrops.
    """

    def __init__(self, policy: SpamPolicy | None = None) -> None:
        self._policy = policy or SpamPolicy()
        self._url_re = self._compile(self._policy.url_patterns)
        self._phishing_re = self._compile(
            tuple(re.escape(p) for p in self._policy.phishing_patterns)
        )

    @staticmethod
    def _compile(patterns: tuple[str, ...]) -> re.Pattern[str] | None:
        if not patterns:
            return None
        return re.compile("|".join(patterns), re.IGNORECASE)

    def is_spam(self, candidate: CandidateToken) -> bool:
        """Classify a candidate token.

        Args:
            candidate: Token with metadata and balance already resolved.

        Returns:
            True if any text or value heuristic flags the token.
        """
        return self._has_spam_text(candidate) or self._has_implausible_value(candidate)

    def _has_spam_text(self, candidate: CandidateToken) -> bool:
        symbol = (candidate.symbol or "").strip()
        name = (candidate.name or "").strip()
        combined = f"{symbol} {name}".lower()

        if self._url_re is not None and self._url_re.search(combined):
            return True
        if self._phishing_re is not None and self._phishing_re.search(combined):
            return True
        if _DOLLAR_AMOUNT.search(name):
            return True
        return bool(_CYRILLIC.search(symbol + name))

    def _has_implausible_value(self, candidate: CandidateToken) -> bool:
        usd_value = candidate.usd_value
        if usd_value is not None:
            return usd_value > self._policy.max_position_usd
        if candidate.exchange_rate is None:
            return candidate.balance > self._policy.max_unpriced_balance
        return False
