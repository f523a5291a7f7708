"""
Asset reference data.

Assets are created once at game setup and never mutated.
"""

from dataclasses import dataclass

from src.core.enums import AssetType, Sector
from src.core.exceptions.simulation import ValidationError
from src.core.utils.validation import (
    validate_fraction,
    validate_positive,
    validate_risk_rating,
    validate_ticker,
)


@dataclass(frozen=True)
class Asset:
    """A tradeable asset in the game's market.

    Attributes:
        ticker: Unique ticker symbol (e.g. "ZAP")
        name: Display name (e.g. "ZappyTech")
        sector: Market sector
        risk_rating: Risk from 1 (low) to 4 (very high)
        base_price: Starting price in dollars
        volatility: Volatility factor, 0.0 to 1.0
        description: Kid-friendly description
        icon: Icon identifier for the UI
        asset_type: Asset category
    """

    ticker: str
    name: str
    sector: Sector
    risk_rating: int
    base_price: float
    volatility: float
    description: str = ""
    icon: str = ""
    asset_type: AssetType = AssetType.STOCK

    def __post_init__(self) -> None:
        """Validate asset data after initialization."""
        try:
            validate_ticker(self.ticker)
        except TypeError as e:
            raise ValidationError(str(e)) from e
        validate_positive(self.base_price, "base_price")
        validate_fraction(self.volatility, "volatility")
        validate_risk_rating(self.risk_rating)
