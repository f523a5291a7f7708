"""
Risk check enumerations.
"""

from enum import StrEnum


class RiskCheckType(StrEnum):
    """
    Kinds of advisory pre-trade risk checks.
    """

    CONCENTRATION = "concentration"
    SECTOR = "sector"
    LEVERAGE = "leverage"
    CRYPTO_LIMIT = "crypto_limit"
    CASH = "cash"
