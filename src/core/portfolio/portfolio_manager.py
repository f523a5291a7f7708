"""
Main PortfolioManager class - orchestrates all portfolio components.

This module provides the PortfolioManager interface by composing the focused
components: core state, trade application, risk checks and metrics.
"""

from collections.abc import Mapping

import pandas as pd

from src.core.constants import DEFAULT_CONCENTRATION_LIMIT, DEFAULT_STARTING_CASH
from src.core.interfaces.portfolio import IPortfolioManager
from src.core.models.holdings import (
    Holding,
    PortfolioSnapshot,
    PortfolioState,
    RiskCheckResult,
    create_initial_portfolio,
)
from src.core.models.trade import ExecutedTrade

from .portfolio_core import PortfolioCore
from .portfolio_metrics import PortfolioMetrics
from .portfolio_risk import PortfolioRisk
from .portfolio_trading import PortfolioTrading


class PortfolioManager(IPortfolioManager):
    """Main PortfolioManager implementation.

    Orchestrates portfolio operations by composing focused components:
    - PortfolioCore: State management
    - PortfolioTrading: Trade and dividend application
    - PortfolioRisk: Advisory pre-trade checks
    - PortfolioMetrics: Valuation and exposure

    Owns cash and lots exclusively; other engines only see PortfolioState
    snapshots returned by get_state().
    """

    def __init__(self, initial_state: PortfolioState | None = None) -> None:
        """Initialize PortfolioManager with composition pattern.

        Args:
            initial_state: Starting state; a cash-only portfolio of
                DEFAULT_STARTING_CASH when None
        """
        if initial_state is None:
            initial_state = create_initial_portfolio(DEFAULT_STARTING_CASH)

        self._core = PortfolioCore(state=initial_state)
        self._trading = PortfolioTrading(self._core)
        self._metrics = PortfolioMetrics(self._core)
        self._risk = PortfolioRisk(self._core, self._metrics)

    # Queries
    def get_cash(self) -> float:
        """Get available cash."""
        return self._core.cash

    def get_realized_pnl(self) -> float:
        """Get cumulative realized PnL."""
        return self._core.state.realized_pnl

    def get_state(self) -> PortfolioState:
        """Get current portfolio state."""
        return self._core.state

    def get_holdings(self, prices: Mapping[str, float]) -> list[Holding]:
        return self._metrics.get_holdings(prices)

    def get_holding(self, ticker: str, prices: Mapping[str, float]) -> Holding | None:
        return self._metrics.get_holding(ticker, prices)

    def get_holdings_value(self, prices: Mapping[str, float]) -> float:
        return self._metrics.get_holdings_value(prices)

    def get_total_value(self, prices: Mapping[str, float]) -> float:
        return self._metrics.get_total_value(prices)

    def get_unrealized_pnl(self, prices: Mapping[str, float]) -> float:
        return self._metrics.get_unrealized_pnl(prices)

    def get_concentration(self, ticker: str, prices: Mapping[str, float]) -> float:
        return self._metrics.get_concentration(ticker, prices)

    def get_sector_exposure(
        self, prices: Mapping[str, float], asset_sectors: Mapping[str, str]
    ) -> dict[str, float]:
        return self._metrics.get_sector_exposure(prices, asset_sectors)

    def take_snapshot(self, turn: int, prices: Mapping[str, float]) -> PortfolioSnapshot:
        """Record the portfolio's value at the given turn."""
        return self._metrics.take_snapshot(turn, prices)

    def holdings_frame(self, prices: Mapping[str, float]) -> pd.DataFrame:
        """Get holdings as a DataFrame."""
        return self._metrics.holdings_frame(prices)

    # Commands
    def apply_trade(self, trade: ExecutedTrade) -> PortfolioState:
        """Apply an executed trade; the caller must have validated it."""
        return self._trading.apply_trade(trade)

    def apply_dividend(self, ticker: str, per_share_amount: float) -> PortfolioState:
        """Credit a per-share dividend."""
        return self._trading.apply_dividend(ticker, per_share_amount)

    # Risk checks
    def check_concentration_limit(
        self,
        ticker: str,
        additional_value: float,
        prices: Mapping[str, float],
        limit: float = DEFAULT_CONCENTRATION_LIMIT,
    ) -> RiskCheckResult:
        return self._risk.check_concentration_limit(ticker, additional_value, prices, limit)

    def check_cash_reserve(self, cost: float, minimum_cash: float = 0.0) -> RiskCheckResult:
        return self._risk.check_cash_reserve(cost, minimum_cash)


def create_portfolio_manager(starting_cash: float = DEFAULT_STARTING_CASH) -> PortfolioManager:
    """Create a portfolio manager holding only starting cash."""
    return PortfolioManager(create_initial_portfolio(starting_cash))
