"""Тесты для owner-only администрирования ReflectiveTokenLedger.

Coverage:
- Unauthorized для каждой owner-only операции
- Настройки комиссий и max-transaction cap
- Fee / reward exclusion
- Передача и отказ от владения
"""

import pytest

from src.core.domain import (
    LiquidityThresholdUpdatedEvent,
    OwnershipTransferredEvent,
    SwapAndLiquifyEnabledUpdatedEvent,
    ZERO_ADDRESS,
)
from src.core.errors import InvalidParameter, Unauthorized, ZeroAddress
from tests.conftest import ALICE, BOB, OWNER, tokens


ADMIN_CALLS = [
    ("set_tax_fee_percent", (1,)),
    ("set_liquidity_fee_percent", (1,)),
    ("set_max_tx_percent", (1,)),
    ("set_swap_and_liquify_enabled", (False,)),
    ("set_liquidity_threshold", (1,)),
    ("exclude_from_fee", (BOB,)),
    ("include_in_fee", (OWNER,)),
    ("exclude_from_reward", (BOB,)),
    ("include_in_reward", (BOB,)),
    ("transfer_ownership", (ALICE,)),
    ("renounce_ownership", ()),
]


class TestAuthorization:
    """Owner-only операции отклоняются для не-владельца."""

    @pytest.mark.parametrize("method, args", ADMIN_CALLS)
    def test_non_owner_rejected(self, bare_ledger, method, args):
        snapshot = bare_ledger.snapshot()
        events = bare_ledger.events

        with pytest.raises(Unauthorized) as exc_info:
            getattr(bare_ledger, method)(*args, caller=ALICE)

        assert exc_info.value.operation == method
        assert bare_ledger.snapshot() == snapshot
        assert bare_ledger.events == events

    @pytest.mark.parametrize("method, args", ADMIN_CALLS)
    def test_zero_caller_rejected(self, bare_ledger, method, args):
        with pytest.raises(Unauthorized):
            getattr(bare_ledger, method)(*args, caller=ZERO_ADDRESS)


class TestFeeSettings:
    """Тесты настроек комиссий."""

    def test_set_tax_fee(self, bare_ledger):
        bare_ledger.set_tax_fee_percent(3, caller=OWNER)
        assert bare_ledger.tax_fee_percent == 3

    def test_set_liquidity_fee(self, bare_ledger):
        bare_ledger.set_liquidity_fee_percent(7, caller=OWNER)
        assert bare_ledger.liquidity_fee_percent == 7

    def test_combined_fee_above_100_rejected(self, bare_ledger):
        with pytest.raises(InvalidParameter, match="combined fee"):
            bare_ledger.set_tax_fee_percent(96, caller=OWNER)
        assert bare_ledger.tax_fee_percent == 5

    def test_fee_out_of_range(self, bare_ledger):
        with pytest.raises(InvalidParameter):
            bare_ledger.set_liquidity_fee_percent(-1, caller=OWNER)

    def test_set_max_tx_percent(self, bare_ledger):
        bare_ledger.set_max_tx_percent(1, caller=OWNER)
        assert bare_ledger.max_tx_amount == tokens(10_000)

    def test_set_max_tx_percent_out_of_range(self, bare_ledger):
        with pytest.raises(InvalidParameter):
            bare_ledger.set_max_tx_percent(101, caller=OWNER)
        assert bare_ledger.max_tx_amount == tokens(5_000)

    def test_set_swap_and_liquify_enabled(self, bare_ledger):
        bare_ledger.set_swap_and_liquify_enabled(False, caller=OWNER)

        assert not bare_ledger.swap_and_liquify_enabled
        assert bare_ledger.events[-1] == SwapAndLiquifyEnabledUpdatedEvent(enabled=False)

    def test_set_liquidity_threshold(self, bare_ledger):
        bare_ledger.set_liquidity_threshold(tokens(500), caller=OWNER)

        assert bare_ledger.liquidity_threshold == tokens(500)
        assert bare_ledger.events[-1] == LiquidityThresholdUpdatedEvent(threshold=tokens(500))


class TestExclusions:
    """Тесты fee / reward exclusion."""

    def test_fee_exclusion_toggle(self, bare_ledger):
        bare_ledger.exclude_from_fee(ALICE, caller=OWNER)
        assert bare_ledger.is_excluded_from_fee(ALICE)

        bare_ledger.include_in_fee(ALICE, caller=OWNER)
        assert not bare_ledger.is_excluded_from_fee(ALICE)

    def test_reward_exclusion_toggle(self, bare_ledger):
        bare_ledger.transfer(OWNER, ALICE, tokens(1_000))

        bare_ledger.exclude_from_reward(ALICE, caller=OWNER)
        assert bare_ledger.is_excluded_from_reward(ALICE)
        assert bare_ledger.excluded_raw_supply == tokens(1_000)

        bare_ledger.include_in_reward(ALICE, caller=OWNER)
        assert not bare_ledger.is_excluded_from_reward(ALICE)
        assert bare_ledger.excluded_raw_supply == 0
        assert bare_ledger.balance_of(ALICE) == tokens(1_000)

    def test_double_exclude_rejected(self, bare_ledger):
        bare_ledger.exclude_from_reward(ALICE, caller=OWNER)
        with pytest.raises(InvalidParameter, match="already excluded"):
            bare_ledger.exclude_from_reward(ALICE, caller=OWNER)

    def test_include_not_excluded_rejected(self, bare_ledger):
        with pytest.raises(InvalidParameter, match="already included"):
            bare_ledger.include_in_reward(ALICE, caller=OWNER)

    def test_zero_address_rejected(self, bare_ledger):
        with pytest.raises(ZeroAddress):
            bare_ledger.exclude_from_reward(ZERO_ADDRESS, caller=OWNER)
        with pytest.raises(ZeroAddress):
            bare_ledger.exclude_from_fee(ZERO_ADDRESS, caller=OWNER)


class TestOwnership:
    """Тесты передачи владения."""

    def test_transfer_ownership(self, bare_ledger):
        bare_ledger.transfer_ownership(ALICE, caller=OWNER)

        assert bare_ledger.owner() == ALICE
        assert bare_ledger.events[-1] == OwnershipTransferredEvent(
            previous_owner=OWNER, new_owner=ALICE
        )
        with pytest.raises(Unauthorized):
            bare_ledger.set_tax_fee_percent(1, caller=OWNER)
        bare_ledger.set_tax_fee_percent(1, caller=ALICE)

    def test_transfer_ownership_to_zero_rejected(self, bare_ledger):
        with pytest.raises(ZeroAddress):
            bare_ledger.transfer_ownership(ZERO_ADDRESS, caller=OWNER)
        assert bare_ledger.owner() == OWNER

    def test_renounce_ownership(self, bare_ledger):
        bare_ledger.renounce_ownership(caller=OWNER)

        assert bare_ledger.owner() == ZERO_ADDRESS
        with pytest.raises(Unauthorized):
            bare_ledger.set_tax_fee_percent(1, caller=OWNER)
        with pytest.raises(Unauthorized):
            bare_ledger.set_tax_fee_percent(1, caller=ZERO_ADDRESS)

    def test_new_owner_still_bound_by_own_fee_settings(self, bare_ledger):
        """Новый владелец не fee-excluded автоматически."""
        bare_ledger.transfer_ownership(ALICE, caller=OWNER)
        assert not bare_ledger.is_excluded_from_fee(ALICE)
