"""
Portfolio value types: lots, derived holdings, portfolio state and
risk check results.

All types are frozen. A changed portfolio is always a new PortfolioState
built with dataclasses.replace, so previously returned snapshots stay valid.
"""

import time
from dataclasses import dataclass

from src.core.enums import RiskCheckType
from src.core.exceptions.simulation import PortfolioError


@dataclass(frozen=True)
class Lot:
    """Shares acquired at one price on one turn, for FIFO cost basis."""

    ticker: str
    shares: float
    cost_basis: float  # Price per share at acquisition
    acquired_at: int  # Turn number

    @property
    def total_cost(self) -> float:
        """Total cost of the shares in this lot."""
        return self.shares * self.cost_basis


@dataclass(frozen=True)
class Holding:
    """All of a ticker's lots aggregated at a given price."""

    ticker: str
    shares: float
    avg_cost: float
    market_value: float
    unrealized_pnl: float
    percent_change: float


@dataclass(frozen=True)
class PortfolioState:
    """Complete portfolio state.

    Cash and realized PnL only change through trade or dividend application.
    """

    cash: float
    lots: tuple[Lot, ...] = ()
    realized_pnl: float = 0.0
    total_fees: float = 0.0
    total_dividends: float = 0.0
    trade_count: int = 0
    last_updated: float = 0.0


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Portfolio valuation recorded at the end of a turn."""

    turn: int
    total_value: float
    cash: float
    holdings_value: float
    realized_pnl: float
    unrealized_pnl: float

    def to_dict(self) -> dict:
        """Convert snapshot to dictionary."""
        return {
            "turn": self.turn,
            "total_value": self.total_value,
            "cash": self.cash,
            "holdings_value": self.holdings_value,
            "realized_pnl": self.realized_pnl,
            "unrealized_pnl": self.unrealized_pnl,
        }


@dataclass(frozen=True)
class RiskCheckResult:
    """Outcome of an advisory pre-trade risk check."""

    passed: bool
    type: RiskCheckType
    message: str | None = None
    current_value: float | None = None
    limit: float | None = None


def create_initial_portfolio(starting_cash: float) -> PortfolioState:
    """Create an empty portfolio holding only cash.

    Raises:
        PortfolioError: If starting_cash is negative
    """
    if starting_cash < 0:
        raise PortfolioError(f"Starting cash must be non-negative, got {starting_cash}")
    return PortfolioState(cash=starting_cash, last_updated=time.time())
