"""Тесты для ReflectionUnits (конверсия единиц, genesis rate, адреса)."""

import pytest

from src.core.domain import (
    DEFAULT_TOTAL_SUPPLY,
    TOKEN_UNIT,
    ZERO_ADDRESS,
    compute_rate,
    genesis_rate,
    genesis_reflection_supply,
    is_zero_address,
    reflection_to_token,
    token_to_reflection,
)
from src.core.math import UINT256_MAX


class TestGenesis:
    """Тесты начального состояния reflection supply."""

    def test_default_supply(self):
        assert TOKEN_UNIT == 10**18
        assert DEFAULT_TOTAL_SUPPLY == 10**24

    def test_reflection_supply_divisible(self):
        r_total = genesis_reflection_supply(DEFAULT_TOTAL_SUPPLY)

        assert r_total <= UINT256_MAX
        assert r_total % DEFAULT_TOTAL_SUPPLY == 0
        assert UINT256_MAX - r_total < DEFAULT_TOTAL_SUPPLY

    def test_genesis_rate_exact(self):
        rate = genesis_rate(DEFAULT_TOTAL_SUPPLY)
        assert rate * DEFAULT_TOTAL_SUPPLY == genesis_reflection_supply(DEFAULT_TOTAL_SUPPLY)

    def test_zero_supply_rejected(self):
        with pytest.raises(ValueError):
            genesis_reflection_supply(0)


class TestConversion:
    """Тесты конвертеров."""

    def test_round_trip_at_same_rate(self):
        rate = genesis_rate(DEFAULT_TOTAL_SUPPLY)
        raw = 123 * TOKEN_UNIT + 7

        assert reflection_to_token(token_to_reflection(raw, rate), rate) == raw

    def test_reflection_to_token_floors(self):
        assert reflection_to_token(99, 10) == 9

    def test_non_positive_rate_rejected(self):
        with pytest.raises(ValueError):
            token_to_reflection(1, 0)
        with pytest.raises(ValueError):
            reflection_to_token(1, 0)


class TestComputeRate:
    """Тесты пересчёта rate."""

    def test_regular(self):
        assert compute_rate(1000, 10, fallback_rate=1) == 100

    def test_fallback_on_empty_supply(self):
        assert compute_rate(1000, 0, fallback_rate=7) == 7
        assert compute_rate(0, 10, fallback_rate=7) == 7

    def test_fallback_on_degenerate_rate(self):
        assert compute_rate(5, 10, fallback_rate=7) == 7


class TestZeroAddress:
    """Тесты распознавания нулевого адреса."""

    @pytest.mark.parametrize("address", [ZERO_ADDRESS, "0x0", "0x", "", None])
    def test_zero(self, address):
        assert is_zero_address(address)

    def test_non_zero(self):
        assert not is_zero_address("0x0000000000000000000000000000000000000001")
