"""Reflective Fee Token Ledger — леджер токена с reflection, комиссиями и авто-ликвидностью.

Transfer pipeline:
    Validate → ComputeFees → DebitSender → ApplyLiquidityFeeToContract →
    CreditRecipient → Rebase(reflection) → MaybeTriggerLiquidity → Emit

- Все ноги перевода конвертируются по rate, зафиксированному на Validate
- Rebase удаляет reflection fee из reflection supply и однократно
  пересчитывает rate; итерации по держателям нет
- MaybeTriggerLiquidity защищён флагом in_swap_and_liquify: вложенные
  переводы во время операции с пулом пропускают шаг без ошибки

Учёт reflection supply:
- reflection_supply — сумма reflection балансов included аккаунтов
  плюс reflection-стоимость токенов "в пути" внутри текущего перевода
- excluded_raw_supply — сумма raw балансов excluded аккаунтов
- rate = reflection_supply // (total_supply - excluded_raw_supply)

Атомарность: каждая публичная операция выполняется под RLock и с checkpoint;
при любом исключении состояние леджера восстанавливается целиком.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from src.core.contracts import validate_model
from src.core.domain.account import Account
from src.core.domain.events import (
    ApprovalEvent,
    LedgerEvent,
    LiquidityThresholdUpdatedEvent,
    OwnershipTransferredEvent,
    SwapAndLiquifyEnabledUpdatedEvent,
    SwapAndLiquifyEvent,
    TransferEvent,
)
from src.core.domain.fee_breakdown import FeeBreakdown
from src.core.domain.ledger_state import (
    FeeSettings,
    LedgerSnapshot,
    LiquidityState,
    Supply,
)
from src.core.domain.units import (
    ZERO_ADDRESS,
    compute_rate,
    genesis_rate,
    genesis_reflection_supply,
    is_zero_address,
    reflection_to_token,
    token_to_reflection,
)
from src.core.errors import (
    ExceedsMaxTx,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidParameter,
    LedgerError,
    Unauthorized,
    ZeroAddress,
)
from src.core.math.fees import (
    calculate_fee_breakdown,
    to_reflection_values,
    validate_fee_percents,
)
from src.core.math.integer_safeguards import (
    checked_add,
    checked_sub,
    validate_percent,
    validate_positive_amount,
    validate_uint256,
)
from src.ledger.config import TokenConfig
from src.liquidity.pool import LiquidityPool
from src.liquidity.trigger import LiquidityTrigger, LiquidityTriggerDecision

logger = logging.getLogger(__name__)

EventCallback = Callable[[LedgerEvent], None]


@dataclass(frozen=True)
class _Checkpoint:
    """Снимок изменяемого состояния для отката операции."""

    accounts: Dict[str, Account]
    allowances: Dict[Tuple[str, str], int]
    owner: str
    reflection_supply: int
    excluded_raw_supply: int
    rate: int
    total_fees: int
    tax_fee_percent: int
    liquidity_fee_percent: int
    max_tx_amount: int
    liquidity_threshold: int
    swap_and_liquify_enabled: bool
    in_swap_and_liquify: bool
    events_len: int


class ReflectiveTokenLedger:
    """Reflective Fee Token Ledger.

    Single-writer state machine: каждая операция применяется атомарно
    и полностью до следующей. Аккаунты иммутабельны, поэтому checkpoint —
    поверхностная копия словарей.
    """

    def __init__(
        self,
        owner: str,
        config: Optional[TokenConfig] = None,
        pool: Optional[LiquidityPool] = None,
    ):
        """
        Args:
            owner: владелец, получает весь supply при genesis
            config: конфигурация токена
            pool: внешний пул ликвидности (None — swap-and-liquify отключён)
        """
        if is_zero_address(owner):
            raise ZeroAddress("owner")

        self.config = config or TokenConfig()
        self._validate_config(self.config)
        if pool is not None and not isinstance(pool, LiquidityPool):
            raise InvalidParameter(f"pool {type(pool).__name__} is not a LiquidityPool")

        self._pool = pool
        self._trigger = LiquidityTrigger()
        self._lock = RLock()
        self._depth = 0

        self._owner = owner
        self._t_total = self.config.total_supply
        self._genesis_rate = genesis_rate(self._t_total)

        self._accounts: Dict[str, Account] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}

        self._r_total = genesis_reflection_supply(self._t_total)
        self._excluded_raw_total = 0
        self._rate = self._genesis_rate
        self._t_fee_total = 0

        self._tax_fee_percent = self.config.tax_fee_percent
        self._liquidity_fee_percent = self.config.liquidity_fee_percent
        self._max_tx_amount = self.config.max_tx_amount
        self._liquidity_threshold = self.config.liquidity_threshold
        self._swap_and_liquify_enabled = self.config.swap_and_liquify_enabled
        self._in_swap_and_liquify = False

        self._events: List[LedgerEvent] = []
        self._dispatched = 0
        self._subscribers: List[EventCallback] = []

        # Genesis: весь supply владельцу, владелец и контракт без комиссий
        contract = self.config.contract_address
        self._store(Account(address=owner).credit(self._t_total, self._rate))
        self._store(self._get_account(owner).with_fee_exclusion(True))
        self._store(self._get_account(contract).with_fee_exclusion(True))
        self._emit(TransferEvent(sender=ZERO_ADDRESS, recipient=owner, value=self._t_total))
        self._dispatched = len(self._events)

        logger.info(
            f"Ledger deployed: {self.config.name} ({self.config.symbol}), "
            f"supply={self._t_total}, owner={owner}, contract={contract}, "
            f"pair={self.pair_address}"
        )

    @staticmethod
    def _validate_config(config: TokenConfig) -> None:
        try:
            validate_positive_amount(config.total_supply, "total_supply")
            validate_fee_percents(config.tax_fee_percent, config.liquidity_fee_percent)
            validate_uint256(config.max_tx_amount, "max_tx_amount")
            validate_uint256(config.liquidity_threshold, "liquidity_threshold")
        except ValueError as e:
            raise InvalidParameter(str(e))
        if is_zero_address(config.contract_address):
            raise ZeroAddress("contract_address")

    # =========================================================================
    # READ-ONLY METADATA
    # =========================================================================

    def name(self) -> str:
        return self.config.name

    def symbol(self) -> str:
        return self.config.symbol

    def decimals(self) -> int:
        return self.config.decimals

    def total_supply(self) -> int:
        return self._t_total

    def owner(self) -> str:
        return self._owner

    @property
    def contract_address(self) -> str:
        return self.config.contract_address

    @property
    def pair_address(self) -> Optional[str]:
        return self._pool.address if self._pool is not None else None

    @property
    def pool(self) -> Optional[LiquidityPool]:
        return self._pool

    @property
    def tax_fee_percent(self) -> int:
        return self._tax_fee_percent

    @property
    def liquidity_fee_percent(self) -> int:
        return self._liquidity_fee_percent

    @property
    def max_tx_amount(self) -> int:
        return self._max_tx_amount

    @property
    def liquidity_threshold(self) -> int:
        return self._liquidity_threshold

    @property
    def swap_and_liquify_enabled(self) -> bool:
        return self._swap_and_liquify_enabled

    @property
    def in_swap_and_liquify(self) -> bool:
        return self._in_swap_and_liquify

    @property
    def rate(self) -> int:
        """Текущий exchange rate (reflection units за 1 raw unit)."""
        return self._rate

    @property
    def reflection_supply(self) -> int:
        return self._r_total

    @property
    def excluded_raw_supply(self) -> int:
        return self._excluded_raw_total

    @property
    def events(self) -> Tuple[LedgerEvent, ...]:
        """Append-only журнал событий."""
        return tuple(self._events)

    @property
    def holders(self) -> Tuple[str, ...]:
        """Адреса всех аккаунтов леджера (включая нулевые балансы)."""
        return tuple(self._accounts)

    # =========================================================================
    # BALANCES
    # =========================================================================

    def balance_of(self, address: str) -> int:
        """Эффективный баланс в raw units с учётом режима аккаунта."""
        account = self._accounts.get(address)
        if account is None:
            return 0
        return account.effective_balance(self._rate)

    def get_account(self, address: str) -> Account:
        """Аккаунт по адресу (новый пустой аккаунт, если не существует)."""
        return self._get_account(address)

    def is_excluded_from_fee(self, address: str) -> bool:
        return self._get_account(address).excluded_from_fee

    def is_excluded_from_reward(self, address: str) -> bool:
        return self._get_account(address).excluded_from_reward

    def total_fees(self) -> int:
        """Накопленные reflection fees (raw units)."""
        return self._t_fee_total

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def reflection_from_token(self, amount: int, deduct_transfer_fee: bool = False) -> int:
        """Reflection-стоимость amount по текущему rate.

        Args:
            amount: сумма в raw units (<= total supply)
            deduct_transfer_fee: вернуть reflection-стоимость net amount

        Raises:
            InvalidParameter: если amount > total supply
        """
        self._require_uint(amount, "amount")
        if amount > self._t_total:
            raise InvalidParameter("Amount must be less than supply")

        breakdown = calculate_fee_breakdown(
            amount, self._tax_fee_percent, self._liquidity_fee_percent
        )
        values = to_reflection_values(breakdown, self._rate)
        if deduct_transfer_fee:
            return values.r_transfer_amount
        return values.r_amount

    def token_from_reflection(self, reflection_amount: int) -> int:
        """Raw-стоимость reflection_amount по текущему rate.

        Raises:
            InvalidParameter: если reflection_amount > reflection supply
        """
        self._require_uint(reflection_amount, "reflection_amount")
        if reflection_amount > self._r_total:
            raise InvalidParameter("Amount must be less than total reflections")
        return reflection_to_token(reflection_amount, self._rate)

    def preview_fees(self, sender: str, recipient: str, amount: int) -> FeeBreakdown:
        """Разбиение перевода по текущим настройкам без изменения состояния."""
        self._require_uint(amount, "amount")
        return calculate_fee_breakdown(
            amount,
            self._tax_fee_percent,
            self._liquidity_fee_percent,
            fee_exempt=self._is_fee_exempt(sender, recipient),
        )

    # =========================================================================
    # OBSERVERS
    # =========================================================================

    def subscribe(self, callback: EventCallback) -> None:
        """Подписка на события; доставка после фиксации операции."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: EventCallback) -> None:
        self._subscribers.remove(callback)

    # =========================================================================
    # TRANSFERS
    # =========================================================================

    def transfer(self, sender: str, recipient: str, amount: int) -> TransferEvent:
        """Перевод amount от sender к recipient.

        Returns:
            TransferEvent{from, to, value=net amount}

        Raises:
            ZeroAddress, InvalidParameter, ExceedsMaxTx, InsufficientBalance
        """
        with self._atomic("transfer"):
            return self._transfer(sender, recipient, amount)

    def transfer_from(
        self, spender: str, sender: str, recipient: str, amount: int
    ) -> TransferEvent:
        """Перевод от имени sender в пределах allowance spender'а.

        Raises:
            InsufficientAllowance: если allowance < amount
        """
        with self._atomic("transfer_from"):
            self._require_uint(amount, "amount")
            current = self.allowance(sender, spender)
            if current < amount:
                raise InsufficientAllowance(spender, current, amount)
            event = self._transfer(sender, recipient, amount)
            self._approve(sender, spender, current - amount)
            return event

    def approve(self, owner: str, spender: str, amount: int) -> ApprovalEvent:
        """Установка allowance spender'а на средства owner."""
        with self._atomic("approve"):
            return self._approve(owner, spender, amount)

    def increase_allowance(self, owner: str, spender: str, added_value: int) -> ApprovalEvent:
        with self._atomic("increase_allowance"):
            self._require_uint(added_value, "added_value")
            try:
                new_value = checked_add(self.allowance(owner, spender), added_value)
            except ValueError as e:
                raise InvalidParameter(str(e), spender)
            return self._approve(owner, spender, new_value)

    def decrease_allowance(
        self, owner: str, spender: str, subtracted_value: int
    ) -> ApprovalEvent:
        with self._atomic("decrease_allowance"):
            self._require_uint(subtracted_value, "subtracted_value")
            try:
                new_value = checked_sub(
                    self.allowance(owner, spender),
                    subtracted_value,
                    "decreased allowance below zero",
                )
            except ValueError as e:
                raise InvalidParameter(str(e), spender)
            return self._approve(owner, spender, new_value)

    def deliver(self, sender: str, amount: int) -> None:
        """Отказ от amount в пользу всех reflection-tracked держателей.

        Raises:
            InvalidParameter: если sender reward-excluded
        """
        with self._atomic("deliver"):
            if is_zero_address(sender):
                raise ZeroAddress("sender")
            self._require_positive(amount, "amount")

            account = self._get_account(sender)
            if account.excluded_from_reward:
                raise InvalidParameter(
                    "Excluded addresses cannot call this function", sender
                )

            balance = account.effective_balance(self._rate)
            if balance < amount:
                raise InsufficientBalance(sender, balance, amount)

            rate = self._rate
            self._debit(sender, amount, rate)
            self._reflect_fee(amount, token_to_reflection(amount, rate), rate)

            logger.debug(f"Delivered {amount} from {sender}, rate={self._rate}")

    # =========================================================================
    # OWNER ADMINISTRATION
    # =========================================================================

    def set_tax_fee_percent(self, tax_fee_percent: int, caller: str) -> None:
        with self._atomic("set_tax_fee_percent"):
            self._only_owner(caller, "set_tax_fee_percent")
            self._validate_fees(tax_fee_percent, self._liquidity_fee_percent)
            self._tax_fee_percent = tax_fee_percent
            logger.info(f"Tax fee set to {tax_fee_percent}%")

    def set_liquidity_fee_percent(self, liquidity_fee_percent: int, caller: str) -> None:
        with self._atomic("set_liquidity_fee_percent"):
            self._only_owner(caller, "set_liquidity_fee_percent")
            self._validate_fees(self._tax_fee_percent, liquidity_fee_percent)
            self._liquidity_fee_percent = liquidity_fee_percent
            logger.info(f"Liquidity fee set to {liquidity_fee_percent}%")

    def set_max_tx_percent(self, max_tx_percent: int, caller: str) -> None:
        """Max-transaction cap = max_tx_percent% от total supply."""
        with self._atomic("set_max_tx_percent"):
            self._only_owner(caller, "set_max_tx_percent")
            try:
                validate_percent(max_tx_percent, "max_tx_percent")
            except ValueError as e:
                raise InvalidParameter(str(e))
            self._max_tx_amount = self._t_total * max_tx_percent // 100
            logger.info(f"Max tx amount set to {self._max_tx_amount} ({max_tx_percent}%)")

    def set_swap_and_liquify_enabled(self, enabled: bool, caller: str) -> None:
        with self._atomic("set_swap_and_liquify_enabled"):
            self._only_owner(caller, "set_swap_and_liquify_enabled")
            self._swap_and_liquify_enabled = bool(enabled)
            self._emit(SwapAndLiquifyEnabledUpdatedEvent(enabled=bool(enabled)))
            logger.info(f"Swap and liquify enabled: {bool(enabled)}")

    def set_liquidity_threshold(self, threshold: int, caller: str) -> None:
        with self._atomic("set_liquidity_threshold"):
            self._only_owner(caller, "set_liquidity_threshold")
            self._require_uint(threshold, "threshold")
            self._liquidity_threshold = threshold
            self._emit(LiquidityThresholdUpdatedEvent(threshold=threshold))
            logger.info(f"Liquidity threshold set to {threshold}")

    def exclude_from_fee(self, address: str, caller: str) -> None:
        self._set_fee_exclusion(address, True, caller, "exclude_from_fee")

    def include_in_fee(self, address: str, caller: str) -> None:
        self._set_fee_exclusion(address, False, caller, "include_in_fee")

    def exclude_from_reward(self, address: str, caller: str) -> None:
        """Перевод аккаунта в режим Excluded{raw_balance} по текущему rate."""
        with self._atomic("exclude_from_reward"):
            self._only_owner(caller, "exclude_from_reward")
            if is_zero_address(address):
                raise ZeroAddress("account")

            account = self._get_account(address)
            if account.excluded_from_reward:
                raise InvalidParameter("Account is already excluded", address)

            reflection_balance = account.balance.reflection_balance
            excluded = account.exclude_from_reward(self._rate)
            self._r_total -= reflection_balance
            self._excluded_raw_total += excluded.balance.raw_balance
            self._store(excluded)
            logger.info(
                f"Excluded {address} from reward, raw_balance={excluded.balance.raw_balance}"
            )

    def include_in_reward(self, address: str, caller: str) -> None:
        """Перевод аккаунта в режим Included{reflection_balance} по текущему rate."""
        with self._atomic("include_in_reward"):
            self._only_owner(caller, "include_in_reward")
            if is_zero_address(address):
                raise ZeroAddress("account")

            account = self._get_account(address)
            if not account.excluded_from_reward:
                raise InvalidParameter("Account is already included", address)

            raw_balance = account.balance.raw_balance
            included = account.include_in_reward(self._rate)
            self._excluded_raw_total -= raw_balance
            self._r_total += included.balance.reflection_balance
            self._store(included)
            logger.info(f"Included {address} in reward, raw_balance={raw_balance}")

    def transfer_ownership(self, new_owner: str, caller: str) -> None:
        with self._atomic("transfer_ownership"):
            self._only_owner(caller, "transfer_ownership")
            if is_zero_address(new_owner):
                raise ZeroAddress("new owner")
            self._set_owner(new_owner)

    def renounce_ownership(self, caller: str) -> None:
        """Отказ от владения: owner-only операции становятся недоступны."""
        with self._atomic("renounce_ownership"):
            self._only_owner(caller, "renounce_ownership")
            self._set_owner(ZERO_ADDRESS)

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def snapshot(self) -> LedgerSnapshot:
        """Снапшот состояния леджера.

        Raises:
            jsonschema.ValidationError: если снапшот нарушает контракт ledger_snapshot
        """
        with self._lock:
            snapshot = LedgerSnapshot(
                schema_version="1",
                name=self.config.name,
                symbol=self.config.symbol,
                decimals=self.config.decimals,
                owner=self._owner,
                contract_address=self.contract_address,
                holder_count=len(self._accounts),
                supply=Supply(
                    total_supply=self._t_total,
                    reflection_supply=self._r_total,
                    excluded_raw_supply=self._excluded_raw_total,
                    rate=self._rate,
                    total_fees=self._t_fee_total,
                ),
                fees=FeeSettings(
                    tax_fee_percent=self._tax_fee_percent,
                    liquidity_fee_percent=self._liquidity_fee_percent,
                    max_tx_amount=self._max_tx_amount,
                ),
                liquidity=LiquidityState(
                    swap_and_liquify_enabled=self._swap_and_liquify_enabled,
                    in_swap_and_liquify=self._in_swap_and_liquify,
                    threshold=self._liquidity_threshold,
                    contract_balance=self.balance_of(self.contract_address),
                    pair_address=self.pair_address,
                ),
            )
            validate_model(snapshot)
            return snapshot

    # =========================================================================
    # TRANSFER PIPELINE
    # =========================================================================

    def _transfer(self, sender: str, recipient: str, amount: int) -> TransferEvent:
        # 1. Validate
        if is_zero_address(sender):
            raise ZeroAddress("sender")
        if is_zero_address(recipient):
            raise ZeroAddress("recipient")
        self._require_positive(amount, "amount")

        if amount > self._max_tx_amount and not self._is_max_tx_exempt(sender):
            raise ExceedsMaxTx(sender, amount, self._max_tx_amount)

        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance(sender, balance, amount)

        rate = self._rate

        # 2. ComputeFees
        breakdown = calculate_fee_breakdown(
            amount,
            self._tax_fee_percent,
            self._liquidity_fee_percent,
            fee_exempt=self._is_fee_exempt(sender, recipient),
        )
        validate_model(breakdown)
        values = to_reflection_values(breakdown, rate)

        # 3. DebitSender
        self._debit(sender, amount, rate)

        # 4. ApplyLiquidityFeeToContract
        if breakdown.liquidity_fee:
            self._credit(self.contract_address, breakdown.liquidity_fee, rate)

        # 5. CreditRecipient
        self._credit(recipient, breakdown.transfer_amount, rate)

        # 6. Rebase
        if breakdown.reflection_fee:
            self._reflect_fee(breakdown.reflection_fee, values.r_fee, rate)

        logger.debug(
            f"Transfer {sender} -> {recipient}: amount={amount}, "
            f"net={breakdown.transfer_amount}, reflection_fee={breakdown.reflection_fee}, "
            f"liquidity_fee={breakdown.liquidity_fee}, rate={self._rate}"
        )

        # 7. MaybeTriggerLiquidity
        decision = self._trigger.evaluate(
            contract_balance=self.balance_of(self.contract_address),
            threshold=self._liquidity_threshold,
            swap_and_liquify_enabled=self._swap_and_liquify_enabled,
            in_swap_and_liquify=self._in_swap_and_liquify,
            sender=sender,
            pair_address=self.pair_address,
        )
        if decision.triggered and self._pool is not None:
            self._swap_and_liquify(self._pool, decision)

        # 8. Emit
        event = TransferEvent(sender=sender, recipient=recipient, value=breakdown.transfer_amount)
        self._emit(event)
        return event

    def _swap_and_liquify(
        self, pool: LiquidityPool, decision: LiquidityTriggerDecision
    ) -> None:
        """Продажа половины баланса контракта и депозит пары в пул.

        Расходуется весь баланс контракта. Token-ноги переводятся на адрес
        пары обычными переводами леджера (без max-tx cap);
        флаг in_swap_and_liquify снимается на любом пути выхода.
        """
        self._in_swap_and_liquify = True
        try:
            contract = self.contract_address

            self._transfer(contract, pool.address, decision.tokens_to_swap)
            paired_received = pool.swap_tokens_for_paired(decision.tokens_to_swap)
            self._require_uint(paired_received, "paired_received")

            self._transfer(contract, pool.address, decision.tokens_into_liquidity)
            lp_minted = pool.add_liquidity(
                decision.tokens_into_liquidity, paired_received, contract
            )
            self._require_uint(lp_minted, "lp_minted")

            self._emit(
                SwapAndLiquifyEvent(
                    tokens_swapped=decision.tokens_to_swap,
                    paired_received=paired_received,
                    tokens_into_liquidity=decision.tokens_into_liquidity,
                    lp_minted=lp_minted,
                )
            )
            logger.info(
                f"Swap and liquify: swapped={decision.tokens_to_swap}, "
                f"paired_received={paired_received}, "
                f"into_liquidity={decision.tokens_into_liquidity}, lp_minted={lp_minted}"
            )
        finally:
            self._in_swap_and_liquify = False

    def _debit(self, address: str, amount: int, rate: int) -> None:
        """Списание amount; токены excluded-аккаунта входят в reflection supply."""
        account = self._get_account(address)
        self._store(account.debit(amount, rate))
        if account.excluded_from_reward:
            self._excluded_raw_total -= amount
            self._r_total += token_to_reflection(amount, rate)

    def _credit(self, address: str, amount: int, rate: int) -> None:
        """Зачисление amount; токены excluded-аккаунта покидают reflection supply."""
        account = self._get_account(address)
        self._store(account.credit(amount, rate))
        if account.excluded_from_reward:
            self._excluded_raw_total += amount
            self._r_total -= token_to_reflection(amount, rate)

    def _reflect_fee(self, t_fee: int, r_fee: int, rate: int) -> None:
        """Удаление reflection fee из reflection supply и пересчёт rate.

        Если reflection-tracked держателей, способных поглотить fee, нет,
        fee зачисляется контракту.
        """
        if self._r_total - r_fee <= 0:
            logger.warning(
                f"No reflection-tracked holders to absorb fee {t_fee}, crediting contract"
            )
            self._credit(self.contract_address, t_fee, rate)
            return

        self._r_total -= r_fee
        self._t_fee_total += t_fee
        self._rate = compute_rate(
            self._r_total, self._t_total - self._excluded_raw_total, self._genesis_rate
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _get_account(self, address: str) -> Account:
        account = self._accounts.get(address)
        if account is None:
            return Account(address=address)
        return account

    def _store(self, account: Account) -> None:
        self._accounts[account.address] = account

    def _is_max_tx_exempt(self, sender: str) -> bool:
        # Владелец и token-ноги swap-and-liquify
        if sender == self._owner:
            return True
        return self._in_swap_and_liquify and sender == self.contract_address

    def _is_fee_exempt(self, sender: str, recipient: str) -> bool:
        return (
            self._get_account(sender).excluded_from_fee
            or self._get_account(recipient).excluded_from_fee
        )

    def _approve(self, owner: str, spender: str, amount: int) -> ApprovalEvent:
        if is_zero_address(owner):
            raise ZeroAddress("approve from")
        if is_zero_address(spender):
            raise ZeroAddress("approve to")
        self._require_uint(amount, "amount")

        self._allowances[(owner, spender)] = amount
        event = ApprovalEvent(owner=owner, spender=spender, value=amount)
        self._emit(event)
        return event

    def _set_fee_exclusion(
        self, address: str, excluded: bool, caller: str, operation: str
    ) -> None:
        with self._atomic(operation):
            self._only_owner(caller, operation)
            if is_zero_address(address):
                raise ZeroAddress("account")
            self._store(self._get_account(address).with_fee_exclusion(excluded))
            logger.info(f"{address} excluded_from_fee={excluded}")

    def _set_owner(self, new_owner: str) -> None:
        previous = self._owner
        self._owner = new_owner
        self._emit(OwnershipTransferredEvent(previous_owner=previous, new_owner=new_owner))
        logger.info(f"Ownership transferred: {previous} -> {new_owner}")

    def _only_owner(self, caller: Optional[str], operation: str) -> None:
        if is_zero_address(caller) or caller != self._owner:
            raise Unauthorized(caller, operation)

    def _validate_fees(self, tax_fee_percent: int, liquidity_fee_percent: int) -> None:
        try:
            validate_fee_percents(tax_fee_percent, liquidity_fee_percent)
        except ValueError as e:
            raise InvalidParameter(str(e))

    @staticmethod
    def _require_uint(value: int, name: str) -> None:
        try:
            validate_uint256(value, name)
        except ValueError as e:
            raise InvalidParameter(str(e))

    @staticmethod
    def _require_positive(value: int, name: str) -> None:
        try:
            validate_positive_amount(value, name)
        except ValueError as e:
            raise InvalidParameter(str(e))

    # =========================================================================
    # EVENTS & ATOMICITY
    # =========================================================================

    def _emit(self, event: LedgerEvent) -> None:
        if isinstance(event, TransferEvent):
            validate_model(event)
        self._events.append(event)

    def _dispatch_pending(self) -> None:
        """Доставка зафиксированных событий подписчикам.

        Операция уже зафиксирована: ошибка подписчика логируется и не
        пробрасывается вызывающему.
        """
        pending = self._events[self._dispatched:]
        self._dispatched = len(self._events)
        for event in pending:
            for callback in list(self._subscribers):
                try:
                    callback(event)
                except Exception:
                    logger.exception(
                        f"Subscriber {callback!r} failed on {type(event).__name__}"
                    )

    def _checkpoint(self) -> _Checkpoint:
        return _Checkpoint(
            accounts=dict(self._accounts),
            allowances=dict(self._allowances),
            owner=self._owner,
            reflection_supply=self._r_total,
            excluded_raw_supply=self._excluded_raw_total,
            rate=self._rate,
            total_fees=self._t_fee_total,
            tax_fee_percent=self._tax_fee_percent,
            liquidity_fee_percent=self._liquidity_fee_percent,
            max_tx_amount=self._max_tx_amount,
            liquidity_threshold=self._liquidity_threshold,
            swap_and_liquify_enabled=self._swap_and_liquify_enabled,
            in_swap_and_liquify=self._in_swap_and_liquify,
            events_len=len(self._events),
        )

    def _restore(self, checkpoint: _Checkpoint) -> None:
        self._accounts = dict(checkpoint.accounts)
        self._allowances = dict(checkpoint.allowances)
        self._owner = checkpoint.owner
        self._r_total = checkpoint.reflection_supply
        self._excluded_raw_total = checkpoint.excluded_raw_supply
        self._rate = checkpoint.rate
        self._t_fee_total = checkpoint.total_fees
        self._tax_fee_percent = checkpoint.tax_fee_percent
        self._liquidity_fee_percent = checkpoint.liquidity_fee_percent
        self._max_tx_amount = checkpoint.max_tx_amount
        self._liquidity_threshold = checkpoint.liquidity_threshold
        self._swap_and_liquify_enabled = checkpoint.swap_and_liquify_enabled
        self._in_swap_and_liquify = checkpoint.in_swap_and_liquify
        del self._events[checkpoint.events_len:]

    @contextmanager
    def _atomic(self, operation: str) -> Iterator[None]:
        """Атомарное выполнение операции: откат к checkpoint при исключении."""
        with self._lock:
            checkpoint = self._checkpoint()
            self._depth += 1
            try:
                yield
            except LedgerError as e:
                self._restore(checkpoint)
                logger.debug(f"{operation} rejected: {e}")
                raise
            except Exception as e:
                self._restore(checkpoint)
                logger.warning(f"{operation} rolled back: {type(e).__name__}: {e}")
                raise
            finally:
                self._depth -= 1

            if self._depth == 0:
                self._dispatch_pending()


def deploy(
    initial_owner: str,
    config: Optional[TokenConfig] = None,
    pool: Optional[LiquidityPool] = None,
) -> ReflectiveTokenLedger:
    """Genesis: создание леджера с полным supply у initial_owner."""
    return ReflectiveTokenLedger(initial_owner, config=config, pool=pool)
