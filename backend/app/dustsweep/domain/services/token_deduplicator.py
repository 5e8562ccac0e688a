"""Cross-source deduplication of token records."""

from typing import Iterable

from app.dustsweep.domain.entities.token import TokenRecord


def deduplicate_records(records: Iterable[TokenRecord]) -> list[TokenRecord]:
    """Collapse records sharing (chain, lower-cased contract address).

    The first record seen for each key wins; relative order of the
    survivors is preserved.
    """
    seen: set[tuple[str, str]] = set()
    unique: list[TokenRecord] = []
    for record in records:
        key = record.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique
