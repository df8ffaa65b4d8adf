"""
ReflectionUnits — Централизованный модуль конверсии единиц леджера

Единственный допустимый способ преобразований между:
- raw units (token units, 10**decimals за 1 токен)
- reflection units (масштабированные единицы reflection-tracked аккаунтов)

Exchange rate = reflection supply / raw supply reflection-tracked аккаунтов.
Эффективный баланс = reflection balance // rate.

ЗАПРЕЩЕНО смешивать единицы без явного конвертера из этого модуля.
"""

from typing import Final

from src.core.math.integer_safeguards import UINT256_MAX, floor_div, validate_uint256


# =============================================================================
# КОНСТАНТЫ ЕДИНИЦ
# =============================================================================

# Количество десятичных знаков токена по умолчанию
DEFAULT_DECIMALS: Final[int] = 18

# 1 токен в raw units
TOKEN_UNIT: Final[int] = 10**DEFAULT_DECIMALS

# Общий raw supply по умолчанию: 1,000,000 токенов
DEFAULT_TOTAL_SUPPLY: Final[int] = 1_000_000 * TOKEN_UNIT

# Нулевой адрес
ZERO_ADDRESS: Final[str] = "0x" + "0" * 40


# =============================================================================
# GENESIS
# =============================================================================


def genesis_reflection_supply(total_supply: int) -> int:
    """
    Начальный reflection supply.

    r_total = MAX - (MAX % t_total), MAX = 2**256 - 1

    Делится на total_supply без остатка, поэтому genesis rate — точное целое.

    Args:
        total_supply: Общий raw supply (> 0)

    Returns:
        Reflection supply при genesis

    Raises:
        ValueError: Если total_supply <= 0
    """
    validate_uint256(total_supply, "total_supply")
    if total_supply == 0:
        raise ValueError("total_supply must be greater than zero")
    return UINT256_MAX - (UINT256_MAX % total_supply)


def genesis_rate(total_supply: int) -> int:
    """Exchange rate при genesis (reflection units за 1 raw unit)."""
    return genesis_reflection_supply(total_supply) // total_supply


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def token_to_reflection(raw_amount: int, rate: int) -> int:
    """
    Конверсия: raw units → reflection units

    r_amount = raw_amount * rate

    Args:
        raw_amount: Сумма в raw units
        rate: Текущий exchange rate

    Returns:
        Сумма в reflection units
    """
    if rate <= 0:
        raise ValueError(f"rate must be positive, got {rate}")
    return raw_amount * rate


def reflection_to_token(reflection_amount: int, rate: int) -> int:
    """
    Конверсия: reflection units → raw units (floor)

    raw_amount = reflection_amount // rate

    Args:
        reflection_amount: Сумма в reflection units
        rate: Текущий exchange rate

    Returns:
        Эффективная сумма в raw units
    """
    return floor_div(reflection_amount, rate)


def compute_rate(reflection_supply: int, raw_supply: int, fallback_rate: int) -> int:
    """
    Вычисление exchange rate по supply reflection-tracked аккаунтов.

    rate = reflection_supply // raw_supply

    Если reflection-tracked аккаунтов нет (raw_supply == 0) или rate
    вырождается в ноль — возвращается fallback_rate.

    Args:
        reflection_supply: Reflection supply reflection-tracked аккаунтов
        raw_supply: Raw supply reflection-tracked аккаунтов
        fallback_rate: Rate при вырожденном supply (обычно genesis rate)

    Returns:
        Exchange rate (> 0)
    """
    if raw_supply <= 0 or reflection_supply <= 0:
        return fallback_rate

    rate = reflection_supply // raw_supply
    if rate == 0:
        return fallback_rate
    return rate


# =============================================================================
# АДРЕСА
# =============================================================================


def is_zero_address(address: str | None) -> bool:
    """
    Проверка на нулевой адрес.

    Нулевым считается пустой адрес и любая hex-запись нуля
    ("0x0", "0x000...000").
    """
    if not address:
        return True
    text = address.lower()
    if text.startswith("0x"):
        digits = text[2:]
        return digits == "" or set(digits) == {"0"}
    return False
