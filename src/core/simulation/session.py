"""
Trading session: drives one turn end to end.

A turn is market tick, then order matching at the new prices, then each
executed trade applied to the portfolio once, then an end-of-turn snapshot.
"""

from collections import deque
from dataclasses import dataclass

import pandas as pd
from loguru import logger

from src.core.constants import MAX_PORTFOLIO_SNAPSHOTS
from src.core.exceptions.simulation import ConfigurationError
from src.core.market.market_engine import MarketEngine
from src.core.models.holdings import PortfolioSnapshot
from src.core.models.market import TickResult
from src.core.models.order import ExecutionReport, OrderRequest, OrderSubmitResult
from src.core.orders.order_engine import OrderEngine, create_order_engine
from src.core.portfolio.portfolio_manager import PortfolioManager, create_portfolio_manager
from src.core.utils.decorators import log_operation


@dataclass(frozen=True)
class SessionConfig:
    """Configuration for a trading session.

    Attributes:
        max_snapshots: Portfolio snapshots kept; oldest are dropped first
    """

    max_snapshots: int = MAX_PORTFOLIO_SNAPSHOTS

    def __post_init__(self) -> None:
        if self.max_snapshots <= 0:
            raise ConfigurationError(
                f"max_snapshots must be positive, got {self.max_snapshots}"
            )


@dataclass(frozen=True)
class TurnResult:
    """Everything that happened in one turn."""

    tick: TickResult
    execution: ExecutionReport
    snapshot: PortfolioSnapshot


class TradingSession:
    """Wires market, orders and portfolio together for turn-based play."""

    def __init__(
        self,
        market: MarketEngine,
        orders: OrderEngine,
        portfolio: PortfolioManager,
        config: SessionConfig | None = None,
    ) -> None:
        self.market = market
        self.orders = orders
        self.portfolio = portfolio
        self.config = config if config is not None else SessionConfig()
        self._snapshots: deque[PortfolioSnapshot] = deque(maxlen=self.config.max_snapshots)

    @property
    def fee(self) -> float:
        """Flat fee charged per executed trade."""
        return self.market.config.transaction_fee

    def place_order(self, request: OrderRequest) -> OrderSubmitResult:
        """Validate a request and queue it at the current turn.

        Returns:
            Failed result with validation errors, or the queued order
        """
        validation = self.orders.validate_order(
            request, self.portfolio.get_state(), self.market.get_prices(), self.fee
        )
        for warning in validation.warnings:
            logger.info(f"Order warning for {request.ticker}: {warning}")

        if not validation.valid:
            logger.debug(f"Order rejected for {request.ticker}: {'; '.join(validation.errors)}")
            return OrderSubmitResult(
                success=False,
                error="Order validation failed",
                validation_errors=validation.errors,
            )

        return self.orders.submit_order(request, self.market.get_turn())

    def cancel_order(self, order_id: str) -> bool:
        return self.orders.cancel_order(order_id)

    @log_operation
    def advance_turn(self) -> TurnResult:
        """Run one full turn.

        Returns:
            Tick, execution report and end-of-turn snapshot
        """
        tick = self.market.tick()
        prices = self.market.get_prices()

        execution = self.orders.process_end_of_turn(
            prices, self.portfolio.get_state(), tick.turn, self.fee
        )
        for trade in execution.trades:
            self.portfolio.apply_trade(trade)

        snapshot = self.portfolio.take_snapshot(tick.turn, prices)
        self._snapshots.append(snapshot)

        return TurnResult(tick=tick, execution=execution, snapshot=snapshot)

    def run(self, turns: int) -> list[TurnResult]:
        """Advance several turns in a row."""
        return [self.advance_turn() for _ in range(turns)]

    def get_snapshots(self) -> list[PortfolioSnapshot]:
        return list(self._snapshots)

    def snapshot_frame(self) -> pd.DataFrame:
        """Snapshot history as a DataFrame indexed by turn."""
        columns = [
            "turn",
            "total_value",
            "cash",
            "holdings_value",
            "realized_pnl",
            "unrealized_pnl",
        ]
        return pd.DataFrame(
            [snapshot.to_dict() for snapshot in self._snapshots], columns=columns
        ).set_index("turn")


def create_trading_session(
    market: MarketEngine,
    starting_cash: float | None = None,
    default_expiration_turns: int | None = None,
    config: SessionConfig | None = None,
) -> TradingSession:
    """Create a session around a market with a fresh order engine and portfolio."""
    portfolio = (
        create_portfolio_manager()
        if starting_cash is None
        else create_portfolio_manager(starting_cash)
    )
    return TradingSession(market, create_order_engine(default_expiration_turns), portfolio, config)
