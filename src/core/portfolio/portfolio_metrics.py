"""
Portfolio metrics and calculations.

Everything here is derived from the lots and a supplied price map on every
call; nothing is cached, so repeated calls with the same inputs agree.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING

import pandas as pd

from src.core.constants import UNKNOWN_SECTOR
from src.core.models.holdings import Holding, PortfolioSnapshot
from src.core.types.financial import ZERO, percent_change, round_price, safe_float_comparison

from .lot_tracker import get_average_cost, get_shares_for_ticker, get_unique_tickers

if TYPE_CHECKING:
    from .portfolio_core import PortfolioCore


class PortfolioMetrics:
    """Portfolio valuation and exposure calculations."""

    def __init__(self, portfolio_core: "PortfolioCore") -> None:
        """Initialize with portfolio core state.

        Args:
            portfolio_core: The portfolio core state to calculate metrics for
        """
        self.core = portfolio_core

    def _build_holding(self, ticker: str, prices: Mapping[str, float]) -> Holding:
        """Aggregate a ticker's lots; unpriced tickers are valued at cost."""
        lots = self.core.lots
        shares = get_shares_for_ticker(lots, ticker)
        avg_cost = get_average_cost(lots, ticker)
        current_price = prices.get(ticker, avg_cost)

        market_value = round_price(shares * current_price)
        cost_basis = round_price(shares * avg_cost)
        unrealized_pnl = round_price(market_value - cost_basis)
        change = percent_change(cost_basis, market_value)

        return Holding(
            ticker=ticker,
            shares=shares,
            avg_cost=avg_cost,
            market_value=market_value,
            unrealized_pnl=unrealized_pnl,
            percent_change=change,
        )

    def get_holdings(self, prices: Mapping[str, float]) -> list[Holding]:
        """Get every holding valued at the given prices."""
        return [
            self._build_holding(ticker, prices) for ticker in get_unique_tickers(self.core.lots)
        ]

    def get_holding(self, ticker: str, prices: Mapping[str, float]) -> Holding | None:
        """Get one holding, None when no shares are held."""
        if safe_float_comparison(get_shares_for_ticker(self.core.lots, ticker), ZERO):
            return None
        return self._build_holding(ticker, prices)

    def get_holdings_value(self, prices: Mapping[str, float]) -> float:
        """Market value of all holdings."""
        return round_price(sum((h.market_value for h in self.get_holdings(prices)), 0.0))

    def get_total_value(self, prices: Mapping[str, float]) -> float:
        """Cash plus market value of all holdings."""
        holdings_value = sum((h.market_value for h in self.get_holdings(prices)), 0.0)
        return round_price(self.core.cash + holdings_value)

    def get_unrealized_pnl(self, prices: Mapping[str, float]) -> float:
        """Total unrealized PnL across holdings."""
        return round_price(sum((h.unrealized_pnl for h in self.get_holdings(prices)), 0.0))

    def get_concentration(self, ticker: str, prices: Mapping[str, float]) -> float:
        """Fraction of total value held in a ticker."""
        total_value = self.get_total_value(prices)
        if total_value == 0:
            return 0.0

        holding = self.get_holding(ticker, prices)
        if holding is None:
            return 0.0

        return holding.market_value / total_value

    def get_sector_exposure(
        self, prices: Mapping[str, float], asset_sectors: Mapping[str, str]
    ) -> dict[str, float]:
        """Fraction of total value held per sector.

        Args:
            prices: Current prices
            asset_sectors: Ticker to sector name; missing tickers count as "unknown"

        Returns:
            Sector name to fraction of total value; empty when total value is zero
        """
        total_value = self.get_total_value(prices)
        exposure: dict[str, float] = {}
        if total_value == 0:
            return exposure

        for holding in self.get_holdings(prices):
            sector = asset_sectors.get(holding.ticker, UNKNOWN_SECTOR)
            exposure[sector] = exposure.get(sector, 0.0) + holding.market_value / total_value

        return exposure

    def take_snapshot(self, turn: int, prices: Mapping[str, float]) -> PortfolioSnapshot:
        """Value the portfolio for end-of-turn history."""
        return PortfolioSnapshot(
            turn=turn,
            total_value=self.get_total_value(prices),
            cash=self.core.cash,
            holdings_value=self.get_holdings_value(prices),
            realized_pnl=self.core.state.realized_pnl,
            unrealized_pnl=self.get_unrealized_pnl(prices),
        )

    def holdings_frame(self, prices: Mapping[str, float]) -> pd.DataFrame:
        """Holdings as a DataFrame indexed by ticker, with portfolio weights."""
        columns = [
            "ticker",
            "shares",
            "avg_cost",
            "market_value",
            "unrealized_pnl",
            "percent_change",
        ]
        frame = pd.DataFrame(
            [
                {column: getattr(holding, column) for column in columns}
                for holding in self.get_holdings(prices)
            ],
            columns=columns,
        ).set_index("ticker")

        total_value = self.get_total_value(prices)
        frame["weight"] = frame["market_value"] / total_value if total_value else 0.0
        return frame
