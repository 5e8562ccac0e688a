"""Unit tests for ScanSolanaTokensUseCase."""

from unittest.mock import AsyncMock

import pytest

from app.dustsweep.application.exceptions import InvalidAddressError
from app.dustsweep.application.use_cases.scan_solana_tokens import ScanSolanaTokensUseCase
from app.dustsweep.domain.entities.solana import (
    TOKEN_2022_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    MintMetadata,
    SolanaTokenAccount,
)

WALLET = "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
PYUSD = "2b1kV6DkPAnxd5ixfnxCpjxmKwqjjaYmCZfHsFu24GXo"


def make_accounts_source(
    balance=1.5,
    legacy=None,
    extensions=None,
) -> AsyncMock:
    """Create a mock account source keyed by token program."""
    source = AsyncMock()
    source.get_balance.return_value = balance
    by_program = {
        TOKEN_PROGRAM_ID: [] if legacy is None else legacy,
        TOKEN_2022_PROGRAM_ID: [] if extensions is None else extensions,
    }
    source.get_token_accounts.side_effect = lambda address, program_id: by_program[program_id]
    return source


@pytest.fixture
def verified_index() -> AsyncMock:
    mock = AsyncMock()
    mock.lookup_mints.return_value = {}
    return mock


@pytest.fixture
def pair_index() -> AsyncMock:
    mock = AsyncMock()
    mock.lookup_mints.return_value = {}
    return mock


class TestScanSolanaTokens:
    """Tests for the Solana collector."""

    @pytest.mark.asyncio
    async def test_merges_accounts_across_programs(self, verified_index, pair_index) -> None:
        accounts = make_accounts_source(
            legacy=[
                SolanaTokenAccount(mint=USDC, ui_amount=0.3, decimals=6),
                SolanaTokenAccount(mint=BONK, ui_amount=0.0000001, decimals=5),
            ],
            extensions=[SolanaTokenAccount(mint=USDC, ui_amount=0.2, decimals=6)],
        )
        use_case = ScanSolanaTokensUseCase(accounts, verified_index, pair_index)

        result = await use_case.execute(WALLET)

        assert result.sol_balance == 1.5
        assert result.total_accounts == 3
        assert [t.mint for t in result.tokens] == [USDC]
        assert result.tokens[0].amount == pytest.approx(0.5)
        assert result.tokens[0].decimals == 6
        assert result.error is None

    @pytest.mark.asyncio
    async def test_verified_index_then_pair_fallback(self, verified_index, pair_index) -> None:
        accounts = make_accounts_source(
            legacy=[
                SolanaTokenAccount(mint=USDC, ui_amount=10.0, decimals=6),
                SolanaTokenAccount(mint=BONK, ui_amount=1000.0, decimals=5),
            ]
        )
        verified_index.lookup_mints.return_value = {
            USDC: MintMetadata(symbol="USDC", name="USD Coin", image="https://img/usdc.png")
        }
        pair_index.lookup_mints.return_value = {
            BONK: MintMetadata(symbol="Bonk", name="Bonk"),
            USDC: MintMetadata(symbol="WRONG", name="Wrong"),
        }
        use_case = ScanSolanaTokensUseCase(accounts, verified_index, pair_index)

        result = await use_case.execute(WALLET)

        tokens = {t.mint: t for t in result.tokens}
        assert tokens[USDC].symbol == "USDC"
        assert tokens[USDC].image == "https://img/usdc.png"
        assert tokens[BONK].symbol == "Bonk"
        verified_index.lookup_mints.assert_awaited_once_with([USDC, BONK])
        pair_index.lookup_mints.assert_awaited_once_with([BONK])

    @pytest.mark.asyncio
    async def test_pair_fallback_is_batched(self, verified_index, pair_index) -> None:
        mints = [f"Mint{i:040d}" for i in range(65)]
        accounts = make_accounts_source(
            legacy=[SolanaTokenAccount(mint=m, ui_amount=1.0, decimals=6) for m in mints]
        )
        use_case = ScanSolanaTokensUseCase(accounts, verified_index, pair_index)

        await use_case.execute(WALLET)

        batches = [c.args[0] for c in pair_index.lookup_mints.await_args_list]
        assert [len(b) for b in batches] == [30, 30, 5]
        assert sum(batches, []) == mints

    @pytest.mark.asyncio
    async def test_metadata_failure_keeps_balances(self, verified_index, pair_index) -> None:
        accounts = make_accounts_source(
            legacy=[SolanaTokenAccount(mint=USDC, ui_amount=10.0, decimals=6)]
        )
        verified_index.lookup_mints.side_effect = RuntimeError("index down")
        pair_index.lookup_mints.side_effect = RuntimeError("index down")
        use_case = ScanSolanaTokensUseCase(accounts, verified_index, pair_index)

        result = await use_case.execute(WALLET)

        assert result.tokens[0].amount == 10.0
        assert result.tokens[0].symbol is None
        assert result.error is None

    @pytest.mark.asyncio
    async def test_failed_queries_are_reported(self, verified_index, pair_index) -> None:
        accounts = make_accounts_source(
            balance=None,
            extensions=[SolanaTokenAccount(mint=PYUSD, ui_amount=4.0, decimals=6)],
        )
        accounts.get_token_accounts.side_effect = (
            lambda address, program_id: None if program_id == TOKEN_PROGRAM_ID
            else [SolanaTokenAccount(mint=PYUSD, ui_amount=4.0, decimals=6)]
        )
        use_case = ScanSolanaTokensUseCase(accounts, verified_index, pair_index)

        result = await use_case.execute(WALLET)

        assert result.sol_balance == 0.0
        assert result.total_accounts == 1
        assert [t.mint for t in result.tokens] == [PYUSD]
        assert result.error == "failed to fetch balance, token accounts"

    @pytest.mark.asyncio
    async def test_empty_wallet_skips_metadata(self, verified_index, pair_index) -> None:
        use_case = ScanSolanaTokensUseCase(make_accounts_source(balance=0.0), verified_index, pair_index)

        result = await use_case.execute(WALLET)

        assert result.sol_balance == 0.0
        assert result.tokens == []
        verified_index.lookup_mints.assert_not_awaited()
        pair_index.lookup_mints.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "address", [None, "", "0x" + "ab" * 20, "short", WALLET + "\n"]
    )
    async def test_invalid_address_does_no_io(self, address) -> None:
        accounts = make_accounts_source()
        use_case = ScanSolanaTokensUseCase(accounts)

        with pytest.raises(InvalidAddressError):
            await use_case.execute(address)

        accounts.get_balance.assert_not_awaited()
        accounts.get_token_accounts.assert_not_awaited()
