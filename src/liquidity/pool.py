"""
LiquidityPool — Интерфейс внешнего пула ликвидности

Пул — внешний коллаборатор: леджер не реализует математику пула,
а только вызывает его операции из шага swap-and-liquify.

Контракт коллаборатора:
- address: адрес пары в леджере (на него переводятся token-ноги)
- balance_of(holder): LP-баланс держателя
- swap_tokens_for_paired(token_amount): продажа токенов за paired asset,
  возвращает полученное количество paired asset
- add_liquidity(token_amount, paired_amount, recipient): депозит пары,
  возвращает количество выпущенных recipient'у LP-токенов

Токены переводятся на address пары ДО вызова соответствующей операции.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LiquidityPool(Protocol):
    """Протокол внешнего пула ликвидности (token / paired asset)."""

    @property
    def address(self) -> str:
        """Адрес пары в леджере."""
        ...

    def balance_of(self, holder: str) -> int:
        """LP-баланс держателя."""
        ...

    def swap_tokens_for_paired(self, token_amount: int) -> int:
        """Продажа token_amount токенов за paired asset."""
        ...

    def add_liquidity(self, token_amount: int, paired_amount: int, recipient: str) -> int:
        """Депозит пары в пул, LP-токены выпускаются recipient'у."""
        ...
