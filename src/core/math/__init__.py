"""
Core math modules для леджера

Целочисленные примитивы uint256 и расчёт комиссий.
"""

# Integer Safeguards
from src.core.math.integer_safeguards import (
    PERCENT_DENOMINATOR,
    UINT256_MAX,
    checked_add,
    checked_sub,
    floor_div,
    percent_of,
    validate_percent,
    validate_positive_amount,
    validate_uint256,
)

# Fee Calculator
from src.core.math.fees import (
    ReflectionValues,
    calculate_fee_breakdown,
    to_reflection_values,
    validate_fee_percents,
)

__all__ = [
    # Integer Safeguards
    "PERCENT_DENOMINATOR",
    "UINT256_MAX",
    "checked_add",
    "checked_sub",
    "floor_div",
    "percent_of",
    "validate_percent",
    "validate_positive_amount",
    "validate_uint256",
    # Fee Calculator
    "ReflectionValues",
    "calculate_fee_breakdown",
    "to_reflection_values",
    "validate_fee_percents",
]
