"""Liquidity Trigger — решение о запуске swap-and-liquify

Проверяет (в порядке приоритета):
1. Swap-and-liquify уже выполняется → пропуск (reentrancy lockout)
2. swapAndLiquifyEnabled == False → пропуск
3. Пул не сконфигурирован → пропуск
4. Отправитель — сам пул (покупка из пула) → пропуск
5. Баланс контракта < threshold → пропуск

Вычисляет:
- swap_amount = contract_balance (расходуется весь баланс контракта)
- tokens_to_swap = swap_amount // 2 (продаётся за paired asset)
- tokens_into_liquidity = swap_amount - tokens_to_swap

Решение не изменяет состояние: исполнение выполняет леджер.
Пропуск не является ошибкой.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class LiquidityTriggerDecision:
    """Результат оценки Liquidity Trigger."""

    triggered: bool
    skip_reason: str

    # Входные параметры для диагностики
    contract_balance: int
    threshold: int

    # Разбиение (нулевое при пропуске)
    swap_amount: int
    tokens_to_swap: int
    tokens_into_liquidity: int

    # Детали
    details: str


# =============================================================================
# TRIGGER
# =============================================================================


def split_for_liquidity(amount: int) -> tuple[int, int]:
    """
    Разбиение суммы на продаваемую половину и половину для депозита.

    Returns:
        (half, other_half), half + other_half == amount

    Examples:
        >>> split_for_liquidity(101)
        (50, 51)
    """
    half = amount // 2
    return half, amount - half


class LiquidityTrigger:
    """Liquidity Trigger: оценка условий swap-and-liquify.

    Stateless: флаг выполнения хранит леджер и передаёт в evaluate.
    """

    def evaluate(
        self,
        contract_balance: int,
        threshold: int,
        swap_and_liquify_enabled: bool,
        in_swap_and_liquify: bool,
        sender: str,
        pair_address: Optional[str],
    ) -> LiquidityTriggerDecision:
        """Оценка условий запуска swap-and-liquify.

        Args:
            contract_balance: текущий баланс контракта (raw units)
            threshold: порог баланса контракта
            swap_and_liquify_enabled: флаг swapAndLiquifyEnabled
            in_swap_and_liquify: True если swap-and-liquify уже выполняется
            sender: отправитель текущего перевода
            pair_address: адрес пула (None если пул не сконфигурирован)

        Returns:
            LiquidityTriggerDecision
        """
        if in_swap_and_liquify:
            return self._skip(
                "in_swap_and_liquify", contract_balance, threshold,
                "Liquidity operation already in progress"
            )

        if not swap_and_liquify_enabled:
            return self._skip(
                "swap_and_liquify_disabled", contract_balance, threshold,
                "swapAndLiquifyEnabled is False"
            )

        if pair_address is None:
            return self._skip(
                "no_pool", contract_balance, threshold,
                "No liquidity pool configured"
            )

        if sender == pair_address:
            return self._skip(
                "sender_is_pair", contract_balance, threshold,
                "Transfer originates from the liquidity pool"
            )

        if contract_balance < threshold:
            return self._skip(
                "below_threshold", contract_balance, threshold,
                f"Contract balance {contract_balance} < threshold {threshold}"
            )

        swap_amount = contract_balance
        # обе половины должны быть ненулевыми
        if swap_amount < 2:
            return self._skip(
                "nothing_to_swap", contract_balance, threshold,
                f"Contract balance {contract_balance} is too small to split"
            )

        tokens_to_swap, tokens_into_liquidity = split_for_liquidity(swap_amount)

        return LiquidityTriggerDecision(
            triggered=True,
            skip_reason="",
            contract_balance=contract_balance,
            threshold=threshold,
            swap_amount=swap_amount,
            tokens_to_swap=tokens_to_swap,
            tokens_into_liquidity=tokens_into_liquidity,
            details=(
                f"PASS: swap {tokens_to_swap}, deposit {tokens_into_liquidity} "
                f"(balance={contract_balance}, threshold={threshold})"
            ),
        )

    def _skip(
        self, reason: str, contract_balance: int, threshold: int, details: str
    ) -> LiquidityTriggerDecision:
        """Создание решения о пропуске."""
        return LiquidityTriggerDecision(
            triggered=False,
            skip_reason=reason,
            contract_balance=contract_balance,
            threshold=threshold,
            swap_amount=0,
            tokens_to_swap=0,
            tokens_into_liquidity=0,
            details=details,
        )
