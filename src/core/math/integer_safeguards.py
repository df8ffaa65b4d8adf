"""
Integer Safeguards — Безопасная uint256-арифметика

Модуль обеспечивает детерминированную целочисленную арифметику леджера:
- Все суммы — неотрицательные int в диапазоне uint256
- Деление — только floor division, без float
- Вычитание с проверкой underflow (аналог SafeMath.sub)
- Проценты — целые числа в диапазоне [0, 100]

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float никогда не участвует в расчётах балансов
2. Результат никогда не становится отрицательным или > UINT256_MAX
3. Деление на ноль никогда не происходит (ValueError)
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальное значение uint256
UINT256_MAX: Final[int] = 2**256 - 1

# Знаменатель процентов (проценты задаются целыми числами 0..100)
PERCENT_DENOMINATOR: Final[int] = 100


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_uint256(value: int, name: str) -> None:
    """
    Валидация, что значение — целое число в диапазоне uint256.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value не int, отрицательное или > UINT256_MAX
    """
    # bool является подклассом int, но суммой не является
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > UINT256_MAX:
        raise ValueError(f"{name} exceeds uint256 range, got {value}")


def validate_positive_amount(value: int, name: str) -> None:
    """
    Валидация, что сумма строго положительная.

    Raises:
        ValueError: Если value не uint256 или равно нулю
    """
    validate_uint256(value, name)
    if value == 0:
        raise ValueError(f"{name} must be greater than zero")


def validate_percent(value: int, name: str) -> None:
    """
    Валидация процента: целое число в [0, 100].

    Args:
        value: Процент
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value вне [0, 100] или не int
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0 or value > PERCENT_DENOMINATOR:
        raise ValueError(
            f"{name} must be within [0, {PERCENT_DENOMINATOR}], got {value}"
        )


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def checked_sub(a: int, b: int, message: str = "subtraction overflow") -> int:
    """
    Вычитание с проверкой underflow.

    Args:
        a: Уменьшаемое
        b: Вычитаемое
        message: Сообщение ошибки

    Returns:
        a - b

    Raises:
        ValueError: Если b > a

    Examples:
        >>> checked_sub(10, 3)
        7
    """
    if b > a:
        raise ValueError(f"{message}: {a} - {b}")
    return a - b


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения uint256.

    Raises:
        ValueError: Если a + b > UINT256_MAX
    """
    result = a + b
    if result > UINT256_MAX:
        raise ValueError(f"addition overflow: {a} + {b}")
    return result


def floor_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с округлением вниз.

    Args:
        numerator: Числитель (>= 0)
        denominator: Знаменатель (> 0)

    Returns:
        numerator // denominator

    Raises:
        ValueError: Если denominator <= 0
    """
    if denominator <= 0:
        raise ValueError(f"division by non-positive denominator: {denominator}")
    return numerator // denominator


def percent_of(amount: int, percent: int) -> int:
    """
    Доля amount в процентах (floor).

    amount * percent // 100

    Examples:
        >>> percent_of(1000, 3)
        30
        >>> percent_of(99, 5)
        4
    """
    validate_percent(percent, "percent")
    return amount * percent // PERCENT_DENOMINATOR
