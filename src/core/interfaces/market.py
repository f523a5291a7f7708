"""
Market engine interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from src.core.models.asset import Asset
from src.core.models.market import PriceChange, PricePoint, TickResult

PriceChangeListener = Callable[[tuple[PriceChange, ...]], None]


class IMarketEngine(ABC):
    """Abstract interface for the market engine."""

    @abstractmethod
    def get_price(self, ticker: str) -> float | None:
        """Get current price for a ticker."""
        pass

    @abstractmethod
    def get_prices(self) -> dict[str, float]:
        """Get all current prices."""
        pass

    @abstractmethod
    def get_price_history(self, ticker: str) -> list[PricePoint]:
        """Get a ticker's price history, oldest first."""
        pass

    @abstractmethod
    def get_asset(self, ticker: str) -> Asset | None:
        """Get asset reference data."""
        pass

    @abstractmethod
    def get_all_assets(self) -> list[Asset]:
        """Get every registered asset."""
        pass

    @abstractmethod
    def get_turn(self) -> int:
        """Get current turn number."""
        pass

    @abstractmethod
    def tick(self) -> TickResult:
        """Advance the market by one tick."""
        pass

    @abstractmethod
    def apply_event(self, ticker_or_all: str, impact: float, event_id: str) -> None:
        """Queue a one-tick price override."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset market to its initial state."""
        pass

    @abstractmethod
    def on_price_change(self, callback: PriceChangeListener) -> Callable[[], None]:
        """Register a price change listener; returns an unsubscribe function."""
        pass
