"""
Account — Модель аккаунта леджера

Immutable Pydantic модель аккаунта с tagged variant режима вознаграждений:
- IncludedBalance{reflection_balance} — reflection-tracked аккаунт
- ExcludedBalance{raw_balance}        — reward-excluded аккаунт

Аккаунт всегда находится ровно в одном режиме. Переключение режима —
явное преобразование по текущему rate, сохраняющее эффективный баланс.
Все изменения аккаунта создают новый экземпляр.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from src.core.domain.units import reflection_to_token, token_to_reflection


# =============================================================================
# REWARD MODE VARIANTS
# =============================================================================


class IncludedBalance(BaseModel):
    """Баланс reflection-tracked аккаунта (reflection units)."""

    mode: Literal["included"] = "included"
    reflection_balance: int = Field(
        default=0, ge=0, description="Баланс в reflection units"
    )

    model_config = {"frozen": True}

    def effective(self, rate: int) -> int:
        """Эффективный баланс в raw units по текущему rate."""
        return reflection_to_token(self.reflection_balance, rate)


class ExcludedBalance(BaseModel):
    """Баланс reward-excluded аккаунта (raw units)."""

    mode: Literal["excluded"] = "excluded"
    raw_balance: int = Field(default=0, ge=0, description="Баланс в raw units")

    model_config = {"frozen": True}

    def effective(self, rate: int) -> int:
        """Эффективный баланс: raw balance не зависит от rate."""
        return self.raw_balance


RewardBalance = Annotated[
    Union[IncludedBalance, ExcludedBalance], Field(discriminator="mode")
]


# =============================================================================
# ACCOUNT MODEL
# =============================================================================


class Account(BaseModel):
    """
    Модель аккаунта.

    Immutable модель (frozen=True). Аккаунты создаются лениво при первом
    зачислении и никогда не удаляются (нулевой баланс сохраняется).
    """

    address: str = Field(..., min_length=1, description="Адрес аккаунта")
    balance: RewardBalance = Field(
        default_factory=IncludedBalance, description="Баланс в режиме аккаунта"
    )
    excluded_from_fee: bool = Field(
        default=False, description="Переводы с участием аккаунта без комиссий"
    )

    model_config = {"frozen": True}

    @property
    def excluded_from_reward(self) -> bool:
        """True если аккаунт не участвует в reflection."""
        return isinstance(self.balance, ExcludedBalance)

    def effective_balance(self, rate: int) -> int:
        """
        Эффективный баланс в raw units.

        Args:
            rate: Текущий exchange rate леджера

        Returns:
            reflection_balance // rate для included, raw_balance для excluded
        """
        return self.balance.effective(rate)

    # -------------------------------------------------------------------------
    # Зачисление / списание
    # -------------------------------------------------------------------------

    def credit(self, raw_amount: int, rate: int) -> "Account":
        """
        Зачисление raw_amount в единицах режима аккаунта.

        Returns:
            Новый экземпляр Account
        """
        if isinstance(self.balance, ExcludedBalance):
            new_balance = ExcludedBalance(raw_balance=self.balance.raw_balance + raw_amount)
        else:
            new_balance = IncludedBalance(
                reflection_balance=self.balance.reflection_balance
                + token_to_reflection(raw_amount, rate)
            )
        return self.model_copy(update={"balance": new_balance})

    def debit(self, raw_amount: int, rate: int) -> "Account":
        """
        Списание raw_amount в единицах режима аккаунта.

        Raises:
            ValueError: Если баланс недостаточен
        """
        if isinstance(self.balance, ExcludedBalance):
            remaining = self.balance.raw_balance - raw_amount
            if remaining < 0:
                raise ValueError(
                    f"debit {raw_amount} exceeds raw balance {self.balance.raw_balance}"
                )
            new_balance = ExcludedBalance(raw_balance=remaining)
        else:
            remaining = self.balance.reflection_balance - token_to_reflection(
                raw_amount, rate
            )
            if remaining < 0:
                raise ValueError(
                    f"debit {raw_amount} exceeds effective balance "
                    f"{self.effective_balance(rate)}"
                )
            new_balance = IncludedBalance(reflection_balance=remaining)
        return self.model_copy(update={"balance": new_balance})

    # -------------------------------------------------------------------------
    # Переключение режима
    # -------------------------------------------------------------------------

    def exclude_from_reward(self, rate: int) -> "Account":
        """
        Перевод в режим Excluded{raw_balance} по текущему rate.

        raw_balance = reflection_balance // rate

        Raises:
            ValueError: Если аккаунт уже excluded
        """
        if isinstance(self.balance, ExcludedBalance):
            raise ValueError(f"Account {self.address} is already excluded")
        raw_balance = self.balance.effective(rate)
        return self.model_copy(update={"balance": ExcludedBalance(raw_balance=raw_balance)})

    def include_in_reward(self, rate: int) -> "Account":
        """
        Перевод в режим Included{reflection_balance} по текущему rate.

        reflection_balance = raw_balance * rate

        Raises:
            ValueError: Если аккаунт уже included
        """
        if isinstance(self.balance, IncludedBalance):
            raise ValueError(f"Account {self.address} is already included")
        reflection_balance = token_to_reflection(self.balance.raw_balance, rate)
        return self.model_copy(
            update={"balance": IncludedBalance(reflection_balance=reflection_balance)}
        )

    def with_fee_exclusion(self, excluded: bool) -> "Account":
        """Новый экземпляр с заданным флагом excluded_from_fee."""
        return self.model_copy(update={"excluded_from_fee": excluded})
