"""
Fee Calculator — Расчёт комиссий перевода

Формулы:
    reflection_fee  = amount * tax_fee_percent // 100
    liquidity_fee   = amount * liquidity_fee_percent // 100
    transfer_amount = amount - reflection_fee - liquidity_fee

Если отправитель или получатель fee-excluded — комиссии равны нулю,
transfer_amount = amount.

Пересчёт в reflection-единицы выполняется по текущему rate одним
умножением на каждую компоненту; rAmount раскладывается без остатка:
    r_amount = r_transfer + r_fee + r_liquidity
"""

from typing import NamedTuple

from src.core.domain.fee_breakdown import FeeBreakdown
from src.core.math.integer_safeguards import (
    PERCENT_DENOMINATOR,
    percent_of,
    validate_percent,
    validate_uint256,
)


class ReflectionValues(NamedTuple):
    """Компоненты перевода в reflection-единицах."""

    r_amount: int
    r_transfer_amount: int
    r_fee: int
    r_liquidity: int


def validate_fee_percents(tax_fee_percent: int, liquidity_fee_percent: int) -> None:
    """
    Валидация пары процентов комиссий.

    Raises:
        ValueError: Если процент вне [0, 100] или сумма процентов > 100
    """
    validate_percent(tax_fee_percent, "tax_fee_percent")
    validate_percent(liquidity_fee_percent, "liquidity_fee_percent")

    if tax_fee_percent + liquidity_fee_percent > PERCENT_DENOMINATOR:
        raise ValueError(
            f"combined fee {tax_fee_percent + liquidity_fee_percent}% "
            f"exceeds {PERCENT_DENOMINATOR}%"
        )


def calculate_fee_breakdown(
    amount: int,
    tax_fee_percent: int,
    liquidity_fee_percent: int,
    fee_exempt: bool = False,
) -> FeeBreakdown:
    """
    Разбиение суммы перевода на net amount и комиссии.

    Args:
        amount: Сумма перевода (raw units)
        tax_fee_percent: Процент tax fee (reflection), 0..100
        liquidity_fee_percent: Процент liquidity fee, 0..100
        fee_exempt: True если одна из сторон fee-excluded

    Returns:
        FeeBreakdown

    Raises:
        ValueError: Если amount не uint256 или проценты некорректны

    Examples:
        >>> b = calculate_fee_breakdown(1000, 3, 3)
        >>> (b.transfer_amount, b.reflection_fee, b.liquidity_fee)
        (940, 30, 30)
    """
    validate_uint256(amount, "amount")
    validate_fee_percents(tax_fee_percent, liquidity_fee_percent)

    if fee_exempt:
        return FeeBreakdown(
            amount=amount,
            transfer_amount=amount,
            reflection_fee=0,
            liquidity_fee=0,
            fee_exempt=True,
        )

    reflection_fee = percent_of(amount, tax_fee_percent)
    liquidity_fee = percent_of(amount, liquidity_fee_percent)

    return FeeBreakdown(
        amount=amount,
        transfer_amount=amount - reflection_fee - liquidity_fee,
        reflection_fee=reflection_fee,
        liquidity_fee=liquidity_fee,
    )


def to_reflection_values(breakdown: FeeBreakdown, rate: int) -> ReflectionValues:
    """
    Пересчёт разбиения в reflection-единицы по текущему rate.

    Args:
        breakdown: Разбиение в raw units
        rate: Текущий exchange rate (reflection units за 1 raw unit)

    Returns:
        ReflectionValues, где r_amount == r_transfer + r_fee + r_liquidity
    """
    if rate <= 0:
        raise ValueError(f"rate must be positive, got {rate}")

    r_amount = breakdown.amount * rate
    r_fee = breakdown.reflection_fee * rate
    r_liquidity = breakdown.liquidity_fee * rate
    r_transfer_amount = r_amount - r_fee - r_liquidity

    return ReflectionValues(
        r_amount=r_amount,
        r_transfer_amount=r_transfer_amount,
        r_fee=r_fee,
        r_liquidity=r_liquidity,
    )
