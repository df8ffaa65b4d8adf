"""
Ledger Events — События леджера для наблюдателей

Immutable Pydantic модели событий. Transfer-событие совместимо с JSON Schema
(contracts/schema/transfer_event.json) при сериализации by_alias=True:
{"event": "Transfer", "from": ..., "to": ..., "value": ...}
"""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Тип события леджера."""

    TRANSFER = "Transfer"
    APPROVAL = "Approval"
    SWAP_AND_LIQUIFY = "SwapAndLiquify"
    SWAP_AND_LIQUIFY_ENABLED_UPDATED = "SwapAndLiquifyEnabledUpdated"
    LIQUIDITY_THRESHOLD_UPDATED = "LiquidityThresholdUpdated"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"


class TransferEvent(BaseModel):
    """
    Событие перевода.

    value — net amount, фактически зачисленный получателю.
    """

    event: Literal[EventType.TRANSFER] = EventType.TRANSFER
    sender: str = Field(..., alias="from", description="Отправитель")
    recipient: str = Field(..., alias="to", description="Получатель")
    value: int = Field(..., ge=0, description="Net amount (raw units)")

    model_config = {"frozen": True, "populate_by_name": True}


class ApprovalEvent(BaseModel):
    """Событие изменения allowance."""

    event: Literal[EventType.APPROVAL] = EventType.APPROVAL
    owner: str
    spender: str
    value: int = Field(..., ge=0)

    model_config = {"frozen": True}


class SwapAndLiquifyEvent(BaseModel):
    """Событие конвертации накопленных комиссий в ликвидность."""

    event: Literal[EventType.SWAP_AND_LIQUIFY] = EventType.SWAP_AND_LIQUIFY
    tokens_swapped: int = Field(..., ge=0, description="Токены, проданные за paired asset")
    paired_received: int = Field(..., ge=0, description="Полученный paired asset")
    tokens_into_liquidity: int = Field(
        ..., ge=0, description="Токены, внесённые в пул вместе с paired asset"
    )
    lp_minted: int = Field(..., ge=0, description="Выпущенные LP-токены")

    model_config = {"frozen": True}


class SwapAndLiquifyEnabledUpdatedEvent(BaseModel):
    """Событие переключения swapAndLiquifyEnabled."""

    event: Literal[EventType.SWAP_AND_LIQUIFY_ENABLED_UPDATED] = (
        EventType.SWAP_AND_LIQUIFY_ENABLED_UPDATED
    )
    enabled: bool

    model_config = {"frozen": True}


class LiquidityThresholdUpdatedEvent(BaseModel):
    """Событие изменения порога swap-and-liquify."""

    event: Literal[EventType.LIQUIDITY_THRESHOLD_UPDATED] = (
        EventType.LIQUIDITY_THRESHOLD_UPDATED
    )
    threshold: int = Field(..., ge=0)

    model_config = {"frozen": True}


class OwnershipTransferredEvent(BaseModel):
    """Событие смены владельца."""

    event: Literal[EventType.OWNERSHIP_TRANSFERRED] = EventType.OWNERSHIP_TRANSFERRED
    previous_owner: str
    new_owner: str

    model_config = {"frozen": True}


LedgerEvent = Union[
    TransferEvent,
    ApprovalEvent,
    SwapAndLiquifyEvent,
    SwapAndLiquifyEnabledUpdatedEvent,
    LiquidityThresholdUpdatedEvent,
    OwnershipTransferredEvent,
]
