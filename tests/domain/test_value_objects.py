"""Unit tests for wallet address and origin policy value objects."""

import pytest

from app.dustsweep.domain.value_objects.origin_policy import OriginPolicy
from app.dustsweep.domain.value_objects.wallet_address import EvmAddress, SolanaAddress


class TestEvmAddress:
    """Tests for EvmAddress validation."""

    def test_valid_mixed_case(self) -> None:
        address = EvmAddress("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48")
        assert address.value == "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "0x123",
            "a0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
            "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb4g",
            "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb4800",
            "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48\n",
        ],
    )
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            EvmAddress(value)

    def test_immutable(self) -> None:
        address = EvmAddress("0x" + "1" * 40)
        with pytest.raises(AttributeError):
            address.value = "0x" + "2" * 40  # type: ignore[misc]


class TestSolanaAddress:
    """Tests for SolanaAddress validation."""

    def test_valid(self) -> None:
        address = SolanaAddress("9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin")
        assert address.value.startswith("9xQe")

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "short",
            "0OIl" + "1" * 40,
            "1" * 45,
            "0x" + "1" * 40,
            "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin\n",
        ],
    )
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            SolanaAddress(value)


class TestOriginPolicy:
    """Tests for cross-origin resolution."""

    @pytest.fixture
    def policy(self) -> OriginPolicy:
        return OriginPolicy(
            (
                "https://arthurdex.com",
                "https://woofi-dustsweep.vercel.app",
                "http://localhost",
            )
        )

    def test_exact_match(self, policy: OriginPolicy) -> None:
        assert policy.resolve("https://woofi-dustsweep.vercel.app") == "https://woofi-dustsweep.vercel.app"

    def test_prefix_match(self, policy: OriginPolicy) -> None:
        assert policy.resolve("http://localhost:3000") == "http://localhost"

    def test_unknown_origin_falls_back_to_first(self, policy: OriginPolicy) -> None:
        assert policy.resolve("https://evil.example") == "https://arthurdex.com"

    def test_missing_origin_falls_back_to_first(self, policy: OriginPolicy) -> None:
        assert policy.resolve(None) == "https://arthurdex.com"

    def test_empty_allow_list_rejected(self) -> None:
        with pytest.raises(ValueError):
            OriginPolicy(())
