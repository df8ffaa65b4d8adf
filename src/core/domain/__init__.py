"""
Domain models and value objects.

Contains fundamental ledger entities: Account, FeeBreakdown, events,
LedgerSnapshot and the raw/reflection unit converters.
"""

from src.core.domain.account import (
    Account,
    ExcludedBalance,
    IncludedBalance,
    RewardBalance,
)
from src.core.domain.events import (
    ApprovalEvent,
    EventType,
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
    DEFAULT_DECIMALS,
    DEFAULT_TOTAL_SUPPLY,
    TOKEN_UNIT,
    ZERO_ADDRESS,
    compute_rate,
    genesis_rate,
    genesis_reflection_supply,
    is_zero_address,
    reflection_to_token,
    token_to_reflection,
)

__all__ = [
    # Units module
    "DEFAULT_DECIMALS",
    "DEFAULT_TOTAL_SUPPLY",
    "TOKEN_UNIT",
    "ZERO_ADDRESS",
    "compute_rate",
    "genesis_rate",
    "genesis_reflection_supply",
    "is_zero_address",
    "reflection_to_token",
    "token_to_reflection",
    # Account model
    "Account",
    "IncludedBalance",
    "ExcludedBalance",
    "RewardBalance",
    # Fees
    "FeeBreakdown",
    # Events
    "EventType",
    "LedgerEvent",
    "TransferEvent",
    "ApprovalEvent",
    "SwapAndLiquifyEvent",
    "SwapAndLiquifyEnabledUpdatedEvent",
    "LiquidityThresholdUpdatedEvent",
    "OwnershipTransferredEvent",
    # Snapshot
    "LedgerSnapshot",
    "Supply",
    "FeeSettings",
    "LiquidityState",
]
