"""
Общие фикстуры тестов леджера.

FakePool — детерминированный пул ликвидности с фиксированным курсом:
- swap_tokens_for_paired: paired = tokens * PAIRED_PER_TOKEN_NUM // PAIRED_PER_TOKEN_DEN
- add_liquidity: lp = isqrt(tokens * paired), LP зачисляются recipient
"""

import math
from typing import Dict, List, Optional, Tuple

import pytest

from src.core.domain.units import TOKEN_UNIT
from src.ledger import ReflectiveTokenLedger, TokenConfig, deploy


OWNER = "0x6D3B90747dbf5883bF88fF7Eb5fCC86f408b5409"
ALICE = "0x2546BcD3c84621e976D8185a91A922aE77ECEc30"
BOB = "0xbDA5747bFD65F08deb54cb465eB87D40e51B197E"
CAROL = "0xdD2FD4581271e230360230F9337D5c0430Bf44C0"
DAVE = "0x8626f6940E2eb28930eFb4CeF49B2d1F2C9C1199"
PAIR = "0xbBAf75DF6EaB765b665CEf7d356215524B8aBe75"

PAIRED_PER_TOKEN_NUM = 1
PAIRED_PER_TOKEN_DEN = 1_000


class FakePool:
    """Пул ликвидности для тестов: фиксированный курс, учёт вызовов."""

    def __init__(self, address: str = PAIR):
        self._address = address
        self.lp_balances: Dict[str, int] = {}
        self.swap_calls: List[int] = []
        self.add_liquidity_calls: List[Tuple[int, int, str]] = []

    @property
    def address(self) -> str:
        return self._address

    def balance_of(self, holder: str) -> int:
        return self.lp_balances.get(holder, 0)

    def swap_tokens_for_paired(self, token_amount: int) -> int:
        self.swap_calls.append(token_amount)
        return token_amount * PAIRED_PER_TOKEN_NUM // PAIRED_PER_TOKEN_DEN

    def add_liquidity(self, token_amount: int, paired_amount: int, recipient: str) -> int:
        self.add_liquidity_calls.append((token_amount, paired_amount, recipient))
        lp = math.isqrt(token_amount * paired_amount)
        self.lp_balances[recipient] = self.lp_balances.get(recipient, 0) + lp
        return lp


class ReentrantPool(FakePool):
    """Пул, который во время swap выполняет перевод через тот же леджер."""

    def __init__(self, address: str = PAIR):
        super().__init__(address)
        self.ledger: Optional[ReflectiveTokenLedger] = None
        self.observed_in_swap: List[bool] = []

    def swap_tokens_for_paired(self, token_amount: int) -> int:
        assert self.ledger is not None
        self.observed_in_swap.append(self.ledger.in_swap_and_liquify)
        self.ledger.transfer(self.address, DAVE, token_amount // 10)
        return super().swap_tokens_for_paired(token_amount)


class FailingPool(FakePool):
    """Пул, отклоняющий swap."""

    def swap_tokens_for_paired(self, token_amount: int) -> int:
        self.swap_calls.append(token_amount)
        raise RuntimeError("pool unavailable")


def tokens(amount: int) -> int:
    """Сумма в целых токенах → raw units."""
    return amount * TOKEN_UNIT


def sum_of_balances(ledger: ReflectiveTokenLedger) -> int:
    return sum(ledger.balance_of(address) for address in ledger.holders)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def ledger(pool):
    """Леджер с параметрами по умолчанию и тестовым пулом."""
    return deploy(OWNER, pool=pool)


@pytest.fixture
def bare_ledger():
    """Леджер без пула: swap-and-liquify никогда не срабатывает."""
    return deploy(OWNER)


@pytest.fixture
def low_threshold_ledger(pool):
    """Леджер с порогом swap-and-liquify 500 токенов."""
    return deploy(OWNER, config=TokenConfig(liquidity_threshold=tokens(500)), pool=pool)
