"""Liquidity — интерфейс внешнего пула и решение о запуске swap-and-liquify.

- LiquidityPool: протокол внешнего пула (token / paired asset)
- LiquidityTrigger: оценка условий swap-and-liquify
"""

from .pool import LiquidityPool
from .trigger import LiquidityTrigger, LiquidityTriggerDecision, split_for_liquidity

__all__ = [
    "LiquidityPool",
    "LiquidityTrigger",
    "LiquidityTriggerDecision",
    "split_for_liquidity",
]
