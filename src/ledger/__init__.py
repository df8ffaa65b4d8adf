"""
Ledger Module

Reflective Fee Token Ledger: переводы с комиссиями, reflection и
автоматическое пополнение ликвидности.
"""

from .config import TokenConfig
from .token_ledger import ReflectiveTokenLedger, deploy

__all__ = [
    "TokenConfig",
    "ReflectiveTokenLedger",
    "deploy",
]
