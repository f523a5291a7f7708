"""
Asset classification enumerations.

This module defines asset types and market sectors for the asset registry.
"""

from enum import StrEnum


class AssetType(StrEnum):
    """
    Tradeable asset categories.
    """

    STOCK = "stock"
    ETF = "etf"
    CRYPTO = "crypto"
    FUTURES = "futures"
    OPTION = "option"


class Sector(StrEnum):
    """
    Market sectors used for exposure reporting.
    """

    TECH = "tech"
    FOOD = "food"
    HEALTH = "health"
    ENERGY = "energy"
    CRYPTO = "crypto"
    INDEX = "index"

    @classmethod
    def from_string(cls, value: str) -> "Sector":
        """
        Convert string to Sector enum, with case-insensitive matching.

        Args:
            value: String representation of sector

        Returns:
            Corresponding Sector enum value

        Raises:
            ValueError: If sector is not supported
        """
        value_lower = value.lower()
        for sector in cls:
            if sector.value == value_lower:
                return sector

        raise ValueError(
            f"Unsupported sector: {value}. "
            f"Supported sectors: {', '.join([s.value for s in cls])}"
        )
