"""
FeeBreakdown — Разбиение суммы перевода на комиссии

Immutable Pydantic модель результата Fee Calculator.
Совместима с JSON Schema (contracts/schema/fee_breakdown.json).

ИНВАРИАНТ: transfer_amount + reflection_fee + liquidity_fee == amount
"""

from pydantic import BaseModel, Field, model_validator


class FeeBreakdown(BaseModel):
    """
    Разбиение перевода: сумма к зачислению + tax fee + liquidity fee.

    Immutable модель (frozen=True). Для fee-excluded переводов
    все комиссии равны нулю и transfer_amount == amount.
    """

    amount: int = Field(..., ge=0, description="Исходная сумма перевода (raw units)")
    transfer_amount: int = Field(
        ..., ge=0, description="Сумма к зачислению получателю (net amount)"
    )
    reflection_fee: int = Field(
        ..., ge=0, description="Tax fee, распределяемый через rate (raw units)"
    )
    liquidity_fee: int = Field(
        ..., ge=0, description="Liquidity fee, зачисляемый контракту (raw units)"
    )
    fee_exempt: bool = Field(
        default=False, description="Перевод освобождён от комиссий"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_conservation(self) -> "FeeBreakdown":
        """Проверка сохранения суммы."""
        total = self.transfer_amount + self.reflection_fee + self.liquidity_fee
        if total != self.amount:
            raise ValueError(
                f"fee breakdown does not add up: {self.transfer_amount} + "
                f"{self.reflection_fee} + {self.liquidity_fee} != {self.amount}"
            )
        if self.fee_exempt and (self.reflection_fee or self.liquidity_fee):
            raise ValueError("fee-exempt transfer cannot carry fees")
        return self

    @property
    def total_fee(self) -> int:
        """Суммарная комиссия (tax + liquidity)."""
        return self.reflection_fee + self.liquidity_fee
