"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    PRICE_DECIMALS,
    ZERO,
    calculate_notional_value,
    clamp,
    percent_change,
    round_price,
    round_to,
    safe_float_comparison,
)

__all__ = [
    # Utility functions
    "round_to",
    "round_price",
    "clamp",
    "percent_change",
    "calculate_notional_value",
    "safe_float_comparison",
    # Constants
    "PRICE_DECIMALS",
    "ZERO",
]
