"""Tests for the three chain strategies and the strategy factory."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.dustsweep.application.exceptions import ChainScanError, TransportError
from app.dustsweep.application.interfaces.provider_client import ProviderResult
from app.dustsweep.domain.chains import DEFAULT_CHAINS, get_chain
from app.dustsweep.domain.entities.chain import ChainDescriptor, KnownToken, ProviderKind
from app.dustsweep.domain.entities.token import TokenMetadata
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress
from app.dustsweep.infrastructure.external.dexscreener_client import IndexedToken
from app.dustsweep.infrastructure.external.token_metadata_resolver import TokenMetadataResolver
from app.dustsweep.infrastructure.external.strategies import (
    CuratedRpcStrategy,
    DiscoveryRpcStrategy,
    ExplorerBulkStrategy,
    ScanContext,
    create_strategies,
    create_strategy,
)

WALLET = EvmAddress("0x" + "ab" * 20)
BLOCKSCOUT_URL = (
    "https://base.blockscout.com/api/v2/addresses/0x" + "ab" * 20 + "/token-balances"
)


def explorer_entry(
    address: str,
    value: str,
    symbol: str = "USDC",
    name: str = "USD Coin",
    decimals: str = "6",
    token_type: str = "ERC-20",
    exchange_rate: str | None = "1.0",
) -> dict:
    return {
        "value": value,
        "token": {
            "address_hash": address,
            "symbol": symbol,
            "name": name,
            "decimals": decimals,
            "type": token_type,
            "exchange_rate": exchange_rate,
            "icon_url": None,
        },
    }


async def passthrough_resolve(chain, address, embedded=None, hint=None) -> TokenMetadata:
    """Resolver stand-in applying the same defaults as the real one."""
    metadata = (embedded or TokenMetadata()).merged_with(hint)
    known = chain.find_known_token(address)
    if known is not None:
        metadata = metadata.merged_with(
            TokenMetadata(symbol=known.symbol, name=known.name, decimals=known.decimals)
        )
    return TokenMetadata(
        symbol=metadata.symbol or "UNK",
        name=metadata.name or metadata.symbol or "Unknown",
        decimals=metadata.decimals if metadata.decimals is not None else 18,
    )


class InFlightCounter:
    """Records the peak number of overlapping awaits of `wrap`."""

    def __init__(self) -> None:
        self.current = 0
        self.peak = 0

    def wrap(self, func):
        async def tracked(*args, **kwargs):
            self.current += 1
            self.peak = max(self.peak, self.current)
            try:
                await asyncio.sleep(0.01)
                return await func(*args, **kwargs)
            finally:
                self.current -= 1

        return tracked


@pytest.fixture
def context() -> ScanContext:
    resolver = AsyncMock()
    resolver.resolve.side_effect = passthrough_resolve
    index = AsyncMock()
    index.top_tokens.return_value = []
    return ScanContext(
        provider=AsyncMock(),
        rpc=AsyncMock(),
        resolver=resolver,
        index=index,
        rpc_batch_size=2,
    )


class TestExplorerBulkStrategy:
    """Tests for the Blockscout bulk strategy."""

    @pytest.mark.asyncio
    async def test_filters_zero_nft_dust_and_spam(self, context: ScanContext) -> None:
        context.provider.call.return_value = ProviderResult.success(
            BLOCKSCOUT_URL,
            [
                explorer_entry("0xAAA", "1500000"),
                explorer_entry("0xBBB", "0"),
                explorer_entry("0xCCC", "1", token_type="ERC-721"),
                explorer_entry("0xDDD", "1", decimals="18"),
                explorer_entry("0xEEE", "1000000", symbol="FREE", name="FreeClaim.xyz"),
            ],
        )
        strategy = ExplorerBulkStrategy(get_chain("base"), context)

        records = await strategy.scan(WALLET)

        assert len(records) == 1
        record = records[0]
        assert record.symbol == "USDC"
        assert record.balance == 1.5
        assert record.contract_address == "0xaaa"
        assert record.chain == "Base"
        context.provider.call.assert_awaited_once_with(BLOCKSCOUT_URL, timeout=10.0)

    @pytest.mark.asyncio
    async def test_unpriced_token_is_kept(self, context: ScanContext) -> None:
        context.provider.call.return_value = ProviderResult.success(
            BLOCKSCOUT_URL,
            [explorer_entry("0xAAA", "5000000000000000000", "FOO", "Foo", "18", exchange_rate="None")],
        )
        records = await ExplorerBulkStrategy(get_chain("base"), context).scan(WALLET)

        assert [r.symbol for r in records] == ["FOO"]
        assert records[0].balance == 5.0

    @pytest.mark.asyncio
    async def test_explorer_failure_raises(self, context: ScanContext) -> None:
        context.provider.call.return_value = ProviderResult.failure(
            BLOCKSCOUT_URL, TransportError(BLOCKSCOUT_URL, "HTTP 502", status_code=502)
        )

        with pytest.raises(ChainScanError):
            await ExplorerBulkStrategy(get_chain("base"), context).scan(WALLET)

    @pytest.mark.asyncio
    async def test_unexpected_payload_raises(self, context: ScanContext) -> None:
        context.provider.call.return_value = ProviderResult.success(BLOCKSCOUT_URL, {"message": "x"})

        with pytest.raises(ChainScanError):
            await ExplorerBulkStrategy(get_chain("base"), context).scan(WALLET)

    @pytest.mark.asyncio
    async def test_dust_entries_skip_metadata_lookups(self, context: ScanContext) -> None:
        context.index.lookup_tokens.return_value = {}
        context.resolver = TokenMetadataResolver(context.rpc, context.index)
        context.provider.call.return_value = ProviderResult.success(
            BLOCKSCOUT_URL,
            [
                explorer_entry(f"0x{i:040x}", "1", symbol=None, name=None, decimals="18")
                for i in range(10)
            ],
        )

        records = await ExplorerBulkStrategy(get_chain("base"), context).scan(WALLET)

        assert records == []
        context.index.lookup_tokens.assert_not_awaited()
        context.rpc.read_decimals.assert_not_awaited()
        context.rpc.read_symbol.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_entry_without_decimals_is_resolved_before_dust_check(
        self, context: ScanContext
    ) -> None:
        context.provider.call.return_value = ProviderResult.success(
            BLOCKSCOUT_URL,
            [explorer_entry("0xAAA", "2000000000000000000", decimals="")],
        )

        records = await ExplorerBulkStrategy(get_chain("base"), context).scan(WALLET)

        # Resolver default of 18 decimals applies
        assert [r.balance for r in records] == [2.0]
        context.resolver.resolve.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_resolution_runs_in_bounded_batches(self, context: ScanContext) -> None:
        counter = InFlightCounter()
        context.resolver.resolve.side_effect = counter.wrap(passthrough_resolve)
        context.provider.call.return_value = ProviderResult.success(
            BLOCKSCOUT_URL,
            [explorer_entry(f"0x{i:040x}", "1000000", symbol=f"T{i}") for i in range(5)],
        )

        records = await ExplorerBulkStrategy(get_chain("base"), context).scan(WALLET)

        assert [r.symbol for r in records] == [f"T{i}" for i in range(5)]
        assert counter.peak == context.rpc_batch_size
        assert context.resolver.resolve.await_count == 5

    def test_requires_explorer_url(self, context: ScanContext) -> None:
        with pytest.raises(ValueError):
            ExplorerBulkStrategy(get_chain("mantle"), context)


class TestCuratedRpcStrategy:
    """Tests for the curated-list RPC strategy."""

    @pytest.mark.asyncio
    async def test_reports_held_tokens_only(self, context: ScanContext) -> None:
        chain = get_chain("merlinchain")
        balances = {
            "0x480e158395cc5b41e5584347c495584ca2caf78d": 250_000_000,  # 2.5 MERL (8 decimals)
            "0xb880fd278198bd590252621d4cd071b1842e9bcd": 0,
            "0x5c46bff4b38dc1eae09c5bac65f31a150b940064": None,
        }
        context.rpc.balance_of.side_effect = lambda urls, token, wallet: balances[token]

        records = await CuratedRpcStrategy(chain, context).scan(WALLET)

        assert len(records) == 1
        assert records[0].symbol == "MERL"
        assert records[0].balance == 2.5
        assert records[0].decimals == 8
        assert context.rpc.balance_of.await_count == 3

    @pytest.mark.asyncio
    async def test_dust_is_dropped(self, context: ScanContext) -> None:
        context.rpc.balance_of.return_value = 1
        records = await CuratedRpcStrategy(get_chain("merlinchain"), context).scan(WALLET)
        assert records == []

    @pytest.mark.asyncio
    async def test_requires_rpc_urls(self, context: ScanContext) -> None:
        chain = ChainDescriptor(name="Nowhere", slug="nowhere", provider_kind=ProviderKind.RPC_KNOWN)
        with pytest.raises(ChainScanError):
            await CuratedRpcStrategy(chain, context).scan(WALLET)


class TestDiscoveryRpcStrategy:
    """Tests for the curated-plus-index discovery strategy."""

    @pytest.fixture
    def chain(self) -> ChainDescriptor:
        return ChainDescriptor(
            name="Mantle",
            slug="mantle",
            provider_kind=ProviderKind.RPC_DISCOVERY,
            rpc_urls=("https://rpc.test",),
            known_tokens=(KnownToken("0x" + "01" * 20, "USDC", 6, "USD Coin"),),
        )

    @pytest.mark.asyncio
    async def test_merges_curated_and_index_tokens(
        self, context: ScanContext, chain: ChainDescriptor
    ) -> None:
        curated = "0x" + "01" * 20
        indexed = "0x" + "02" * 20
        context.index.top_tokens.return_value = [
            IndexedToken(address=curated.upper().replace("0X", "0x"), symbol="USDC", name="USD Coin"),
            IndexedToken(address=indexed, symbol="MOE", name="Moe"),
            IndexedToken(address="0x" + "03" * 20, symbol="ZERO", name="Zero"),
        ]
        balances = {curated: 2_000_000, indexed: 3 * 10**18, "0x" + "03" * 20: 0}
        context.rpc.balance_of.side_effect = lambda urls, token, wallet: balances[token]

        records = await DiscoveryRpcStrategy(chain, context).scan(WALLET)

        assert [(r.symbol, r.balance) for r in records] == [("USDC", 2.0), ("MOE", 3.0)]
        probed = [c.args[1] for c in context.rpc.balance_of.await_args_list]
        assert probed == [curated, indexed, "0x" + "03" * 20]
        context.index.top_tokens.assert_awaited_once_with("mantle", limit=100)

    @pytest.mark.asyncio
    async def test_index_outage_still_checks_curated(
        self, context: ScanContext, chain: ChainDescriptor
    ) -> None:
        context.index.top_tokens.return_value = []
        context.rpc.balance_of.return_value = 5_000_000

        records = await DiscoveryRpcStrategy(chain, context).scan(WALLET)

        assert [r.symbol for r in records] == ["USDC"]

    @pytest.mark.asyncio
    async def test_discovery_limit(self, context: ScanContext, chain: ChainDescriptor) -> None:
        context.discovery_limit = 2
        context.index.top_tokens.return_value = [
            IndexedToken(address=f"0x{i:040x}", symbol=f"T{i}", name=None) for i in range(10, 20)
        ]
        context.rpc.balance_of.return_value = 0

        await DiscoveryRpcStrategy(chain, context).scan(WALLET)

        # One curated token plus the two best index tokens
        assert context.rpc.balance_of.await_count == 3

    @pytest.mark.asyncio
    async def test_balance_checks_are_bounded_by_batch_size(
        self, context: ScanContext, chain: ChainDescriptor
    ) -> None:
        context.index.top_tokens.return_value = [
            IndexedToken(address=f"0x{i:040x}", symbol=f"T{i}", name=None) for i in range(10, 16)
        ]
        counter = InFlightCounter()

        async def balance_of(urls, token, wallet):
            return 0

        context.rpc.balance_of.side_effect = counter.wrap(balance_of)

        records = await DiscoveryRpcStrategy(chain, context).scan(WALLET)

        assert records == []
        assert context.rpc.balance_of.await_count == 7
        assert counter.peak == context.rpc_batch_size
        assert counter.current == 0


class TestStrategyFactory:
    """Tests for create_strategy / create_strategies."""

    def test_one_strategy_per_chain_in_order(self, context: ScanContext) -> None:
        strategies = create_strategies(DEFAULT_CHAINS, context)

        assert [s.chain.slug for s in strategies] == [c.slug for c in DEFAULT_CHAINS]
        assert all(s.provider_kind == s.chain.provider_kind for s in strategies)

    def test_kind_selects_class(self, context: ScanContext) -> None:
        assert isinstance(create_strategy(get_chain("base"), context), ExplorerBulkStrategy)
        assert isinstance(create_strategy(get_chain("merlinchain"), context), CuratedRpcStrategy)
        assert isinstance(create_strategy(get_chain("mantle"), context), DiscoveryRpcStrategy)

    def test_only_filters_by_slug(self, context: ScanContext) -> None:
        strategies = create_strategies(DEFAULT_CHAINS, context, only=["BASE", "mantle"])
        assert [s.chain.slug for s in strategies] == ["base", "mantle"]
