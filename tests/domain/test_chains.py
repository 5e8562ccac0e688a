"""Tests for the chain registry and chain entities."""

from app.dustsweep.domain.chains import DEFAULT_CHAINS, get_chain, get_chains_by_kind
from app.dustsweep.domain.entities.chain import ProviderKind
from app.dustsweep.domain.entities.token import CandidateToken, TokenMetadata, TokenRecord


def test_slugs_are_unique() -> None:
    slugs = [chain.slug for chain in DEFAULT_CHAINS]
    assert len(slugs) == len(set(slugs))


def test_every_chain_has_a_data_source() -> None:
    for chain in DEFAULT_CHAINS:
        if chain.provider_kind == ProviderKind.EXPLORER:
            assert chain.explorer_url
        else:
            assert chain.rpc_urls
            assert chain.known_tokens


def test_get_chain_is_case_insensitive() -> None:
    assert get_chain("MANTLE").name == "Mantle"
    assert get_chain("unknown") is None


def test_chains_by_kind() -> None:
    discovery = get_chains_by_kind(ProviderKind.RPC_DISCOVERY)
    assert [chain.slug for chain in discovery] == ["mantle"]
    assert all(c.provider_kind == ProviderKind.EXPLORER for c in get_chains_by_kind(ProviderKind.EXPLORER))


def test_index_id_defaults_to_slug() -> None:
    assert get_chain("merlinchain").index_id == "merlinchain"
    assert get_chain("mantle").index_id == "mantle"


def test_find_known_token_ignores_case() -> None:
    mantle = get_chain("mantle")
    token = mantle.find_known_token("0x09BC4E0D864854C6AFB6EB9A9CDF58AC190D0DF9")
    assert token is not None
    assert token.symbol == "USDC"
    assert mantle.find_known_token("0x" + "0" * 40) is None


class TestTokenRecordFromCandidate:
    """Fallbacks applied when building output records."""

    def test_name_falls_back_to_symbol(self) -> None:
        candidate = CandidateToken(contract_address="0xABC", balance=1.0, decimals=18, symbol="FOO")
        record = TokenRecord.from_candidate(candidate, get_chain("base"))

        assert record.name == "FOO"
        assert record.contract_address == "0xabc"
        assert record.chain == "Base"
        assert record.chain_slug == "base"

    def test_unresolved_symbol(self) -> None:
        candidate = CandidateToken(contract_address="0xabc", balance=1.0, decimals=18)
        record = TokenRecord.from_candidate(candidate, get_chain("base"))

        assert record.symbol == "UNK"
        assert record.name == "Unknown"


def test_metadata_merge_keeps_known_fields() -> None:
    primary = TokenMetadata(symbol="USDC", decimals=None)
    merged = primary.merged_with(TokenMetadata(symbol="XXX", name="USD Coin", decimals=6))

    assert merged == TokenMetadata(symbol="USDC", name="USD Coin", decimals=6)
    assert merged.is_complete
    assert primary.merged_with(None) is primary
