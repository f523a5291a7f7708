"""
Portfolio management interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from src.core.models.holdings import Holding, PortfolioState, RiskCheckResult
from src.core.models.trade import ExecutedTrade


class IPortfolioManager(ABC):
    """Abstract interface for portfolio management."""

    @abstractmethod
    def get_cash(self) -> float:
        """Get available cash."""
        pass

    @abstractmethod
    def get_holdings(self, prices: Mapping[str, float]) -> list[Holding]:
        """Get all holdings valued at the given prices."""
        pass

    @abstractmethod
    def get_holding(self, ticker: str, prices: Mapping[str, float]) -> Holding | None:
        """Get one holding, None when no shares are held."""
        pass

    @abstractmethod
    def get_total_value(self, prices: Mapping[str, float]) -> float:
        """Calculate cash plus market value of all holdings."""
        pass

    @abstractmethod
    def get_unrealized_pnl(self, prices: Mapping[str, float]) -> float:
        """Calculate total unrealized PnL."""
        pass

    @abstractmethod
    def get_realized_pnl(self) -> float:
        """Get cumulative realized PnL."""
        pass

    @abstractmethod
    def get_concentration(self, ticker: str, prices: Mapping[str, float]) -> float:
        """Get fraction of total value held in a ticker."""
        pass

    @abstractmethod
    def get_sector_exposure(
        self, prices: Mapping[str, float], asset_sectors: Mapping[str, str]
    ) -> dict[str, float]:
        """Get fraction of total value held per sector."""
        pass

    @abstractmethod
    def apply_trade(self, trade: ExecutedTrade) -> PortfolioState:
        """Apply an executed trade."""
        pass

    @abstractmethod
    def apply_dividend(self, ticker: str, per_share_amount: float) -> PortfolioState:
        """Credit a per-share dividend."""
        pass

    @abstractmethod
    def get_state(self) -> PortfolioState:
        """Get current portfolio state."""
        pass

    @abstractmethod
    def check_concentration_limit(
        self,
        ticker: str,
        additional_value: float,
        prices: Mapping[str, float],
        limit: float = 0.5,
    ) -> RiskCheckResult:
        """Check whether a trade would breach the concentration limit."""
        pass
