"""Balance normalization and dust filtering.

Raw balances arrive as decimal strings (explorer payloads) or hex words
(RPC results) in the token's smallest unit. They are parsed as
arbitrary-precision integers before scaling so that integer-representable
amounts convert exactly; floating-point parsing is only a fallback.
"""

import math
from typing import Optional, Union

DEFAULT_DUST_THRESHOLD = 0.000001

RawValue = Union[str, int, float, None]


def parse_raw_balance(value: RawValue) -> Optional[int]:
    """Parse a raw on-chain amount as an integer.

    Accepts Python ints, decimal strings and 0x-prefixed hex strings.

    Returns:
        The integer amount, or None when the value is absent or not an
        integer literal.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        if text.lower().startswith("0x"):
            return int(text, 16) if len(text) > 2 else None
        return int(text)
    except ValueError:
        return None


def normalize_balance(value: RawValue, decimals: int) -> Optional[float]:
    """Scale a raw amount to its human-readable value.

    Integer parsing is tried first, and `int / int` true division rounds
    correctly, so "1000000" with 6 decimals is exactly 1.0. Non-integer
    inputs fall back to float parsing.

    Args:
        value: Raw amount in the token's smallest unit.
        decimals: Decimal places of the token.

    Returns:
        The scaled balance, or None when the value cannot be parsed or the
        result is not finite.
    """
    raw = parse_raw_balance(value)
    try:
        if raw is not None:
            balance = raw / 10**decimals
        elif value is None:
            return None
        else:
            balance = float(value) / 10**decimals
    except (ValueError, TypeError, OverflowError):
        return None

    if not math.isfinite(balance):
        return None
    return balance


def is_dust(balance: Optional[float], threshold: float = DEFAULT_DUST_THRESHOLD) -> bool:
    """Check whether a balance is too small (or invalid) to report.

    Zero, negative, NaN and infinite balances all count as dust.
    """
    if balance is None or not math.isfinite(balance):
        return True
    return balance < threshold or balance <= 0
