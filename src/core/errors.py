"""
Ledger Errors — Таксономия ошибок леджера

Все ошибки синхронные и фатальные для текущего вызова: операция
отклоняется целиком, частичные изменения состояния не сохраняются.

ИЕРАРХИЯ:

LedgerError (base)
├── Unauthorized           - вызов owner-only операции не владельцем
├── InsufficientBalance    - эффективный баланс отправителя < amount
├── InsufficientAllowance  - allowance spender'а < amount
├── ExceedsMaxTx           - amount > max-transaction cap
├── ZeroAddress            - нулевой адрес в роли участника
└── InvalidParameter       - параметр вне допустимого диапазона

Блокировка повторного входа в swap-and-liquify НЕ является ошибкой:
шаг молча пропускается до следующего подходящего перевода.
"""

from typing import Optional


class LedgerError(Exception):
    """
    Базовый класс всех ошибок леджера.

    Позволяет перехватить любую отказанную операцию одним except-блоком.
    """

    def __init__(self, message: str, address: Optional[str] = None):
        """
        Args:
            message: Описание ошибки
            address: Адрес, вызвавший ошибку (если применимо)
        """
        self.message = message
        self.address = address
        super().__init__(message)

    def __str__(self) -> str:
        if self.address:
            return f"[{self.address}] {self.message}"
        return self.message


class Unauthorized(LedgerError):
    """Owner-only операция вызвана не владельцем."""

    def __init__(self, caller: Optional[str], operation: str):
        self.operation = operation
        super().__init__(f"Ownable: caller is not the owner ({operation})", caller)


class InsufficientBalance(LedgerError):
    """Эффективный баланс отправителя меньше суммы перевода."""

    def __init__(self, address: str, balance: int, amount: int):
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Transfer amount {amount} exceeds balance {balance}", address
        )


class InsufficientAllowance(LedgerError):
    """Allowance spender'а меньше суммы transferFrom."""

    def __init__(self, spender: str, allowance: int, amount: int):
        self.allowance = allowance
        self.amount = amount
        super().__init__(
            f"Transfer amount {amount} exceeds allowance {allowance}", spender
        )


class ExceedsMaxTx(LedgerError):
    """Сумма перевода превышает max-transaction cap."""

    def __init__(self, address: str, amount: int, max_tx_amount: int):
        self.amount = amount
        self.max_tx_amount = max_tx_amount
        super().__init__(
            f"Transfer amount {amount} exceeds the maxTxAmount {max_tx_amount}",
            address,
        )


class ZeroAddress(LedgerError):
    """Нулевой адрес использован как участник операции."""

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"{role} is the zero address")


class InvalidParameter(LedgerError):
    """Параметр операции вне допустимого диапазона."""

    pass
