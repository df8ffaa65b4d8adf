"""
Contract Validation Module

Модуль для валидации JSON контрактов леджера.
"""

from .validators import (
    MODEL_CONTRACTS,
    SchemaLoader,
    contract_errors,
    contract_name_for,
    validate_contract,
    validate_fee_breakdown,
    validate_ledger_snapshot,
    validate_model,
    validate_transfer_event,
)

__all__ = [
    "MODEL_CONTRACTS",
    "SchemaLoader",
    "contract_errors",
    "contract_name_for",
    "validate_contract",
    "validate_model",
    "validate_ledger_snapshot",
    "validate_transfer_event",
    "validate_fee_breakdown",
]
