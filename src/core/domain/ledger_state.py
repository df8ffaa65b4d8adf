"""
LedgerSnapshot — Модель снапшота состояния леджера

Immutable Pydantic модель, представляющая снапшот состояния леджера.
Полная совместимость с JSON Schema (contracts/schema/ledger_snapshot.json).
"""

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# NESTED MODELS
# =============================================================================


class Supply(BaseModel):
    """
    Состояние supply и exchange rate.

    rate = reflection_supply // (total_supply - excluded_raw_supply),
    пересчитывается только при применении reflection fee.
    """

    total_supply: int = Field(..., gt=0, description="Общий raw supply (фиксирован)")
    reflection_supply: int = Field(
        ..., ge=0, description="Reflection supply reflection-tracked аккаунтов"
    )
    excluded_raw_supply: int = Field(
        ..., ge=0, description="Сумма raw балансов reward-excluded аккаунтов"
    )
    rate: int = Field(..., gt=0, description="Текущий exchange rate")
    total_fees: int = Field(
        ..., ge=0, description="Накопленные reflection fees (raw units)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_excluded_within_total(self) -> "Supply":
        if self.excluded_raw_supply > self.total_supply:
            raise ValueError(
                f"excluded_raw_supply {self.excluded_raw_supply} exceeds "
                f"total_supply {self.total_supply}"
            )
        return self


class FeeSettings(BaseModel):
    """Текущие настройки комиссий и лимитов."""

    tax_fee_percent: int = Field(..., ge=0, le=100, description="Tax fee (%)")
    liquidity_fee_percent: int = Field(
        ..., ge=0, le=100, description="Liquidity fee (%)"
    )
    max_tx_amount: int = Field(..., ge=0, description="Max-transaction cap (raw units)")

    model_config = {"frozen": True}


class LiquidityState(BaseModel):
    """Состояние механизма swap-and-liquify."""

    swap_and_liquify_enabled: bool = Field(..., description="Swap-and-liquify включен")
    in_swap_and_liquify: bool = Field(..., description="Swap-and-liquify выполняется")
    threshold: int = Field(..., ge=0, description="Порог баланса контракта")
    contract_balance: int = Field(
        ..., ge=0, description="Накопленные контрактом fee-токены"
    )
    pair_address: str | None = Field(None, description="Адрес пула (nullable)")

    model_config = {"frozen": True}


# =============================================================================
# LEDGER SNAPSHOT MODEL
# =============================================================================


class LedgerSnapshot(BaseModel):
    """
    Модель снапшота леджера.

    Immutable модель (frozen=True). Содержит:
    - Метаданные токена (name, symbol, decimals, owner)
    - Supply и exchange rate
    - Настройки комиссий
    - Состояние swap-and-liquify
    """

    # Метаданные
    schema_version: str = Field(
        ..., pattern="^1$", description="Версия схемы для tracking совместимости"
    )
    name: str = Field(..., min_length=1, description="Имя токена")
    symbol: str = Field(..., min_length=1, description="Символ токена")
    decimals: int = Field(..., ge=0, le=77, description="Десятичные знаки")
    owner: str = Field(..., description="Текущий владелец (нулевой адрес после renounce)")
    contract_address: str = Field(..., min_length=1, description="Адрес контракта")
    holder_count: int = Field(..., ge=0, description="Количество аккаунтов в леджере")

    # Структурированные данные
    supply: Supply = Field(..., description="Supply и exchange rate")
    fees: FeeSettings = Field(..., description="Настройки комиссий")
    liquidity: LiquidityState = Field(..., description="Состояние swap-and-liquify")

    model_config = {"frozen": True}
