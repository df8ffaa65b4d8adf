"""Конфигурация леджера.

Значения по умолчанию — конфигурационные defaults, а не гарантированно
корректные production-значения: порог swap-and-liquify и лимиты
восстановлены по наблюдаемому поведению развёрнутого токена.
"""

from dataclasses import dataclass

from src.core.domain.units import DEFAULT_DECIMALS, DEFAULT_TOTAL_SUPPLY, TOKEN_UNIT


@dataclass(frozen=True)
class TokenConfig:
    """Конфигурация токена и механизмов комиссий.

    - total_supply фиксирован при genesis
    - max_tx_amount: 0.5% supply (5,000 токенов)
    - liquidity_threshold: баланс контракта, при котором запускается
      swap-and-liquify (500,000 токенов)
    """

    # Метаданные
    name: str = "SafeMoon"
    symbol: str = "SAFEMOON"
    decimals: int = DEFAULT_DECIMALS

    # Supply (raw units)
    total_supply: int = DEFAULT_TOTAL_SUPPLY

    # Комиссии (%)
    tax_fee_percent: int = 5
    liquidity_fee_percent: int = 5

    # Лимиты (raw units)
    max_tx_amount: int = 5_000 * TOKEN_UNIT

    # Swap-and-liquify
    liquidity_threshold: int = 500_000 * TOKEN_UNIT
    swap_and_liquify_enabled: bool = True

    # Адрес контракта (собирает liquidity fee, получает LP-токены)
    contract_address: str = "0x985603E5bA204D6C58b5b57Cbe647E3951d1427F"
